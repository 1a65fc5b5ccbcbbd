import logging
from functools import wraps
from threading import Lock
from contextlib import contextmanager

from .logwrap import LogWrapper

LOG = LogWrapper(logging.getLogger("timed_futures.timer"))


class ShutdownHelper:
    def __init__(self, what="timers"):
        self._lock = Lock()
        self._what = what
        self.is_shutdown = False

    @contextmanager
    def ensure_alive(self):
        with self._lock:
            if self.is_shutdown:
                raise RuntimeError("cannot schedule new %s after shutdown" % self._what)
            yield

    def __call__(self):
        # Ensure shut down, return True if newly shutdown or
        # False if already shutdown
        with self._lock:
            if self.is_shutdown:
                return False
            self.is_shutdown = True
            return True


def executor_loop(fn):
    # For background loops which submit to an executor: once the
    # interpreter is exiting, submit raises and the loop should just end.
    @wraps(fn)
    def out(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except RuntimeError as error:
            if "cannot schedule new futures after" in str(error):
                LOG.debug("Ignoring error due to interpreter shutdown", exc_info=1)
                return None
            raise

    return out
