import os

DEBUG_VAR = "TIMED_FUTURES_DEBUG"


class LogWrapper:
    # Debug logs from timers and settlement are far too chatty to leave on,
    # even at DEBUG level, so they're dropped unless TIMED_FUTURES_DEBUG=1.
    #
    # The variable is checked on every call so it can be toggled at runtime.
    def __init__(self, logger):
        self._delegate = logger
        self.exception = logger.exception

    @property
    def debug_enabled(self):
        return os.environ.get(DEBUG_VAR, "0") == "1"

    def debug(self, *args, **kwargs):
        if self.debug_enabled:
            return self._delegate.debug(*args, **kwargs)
        return None
