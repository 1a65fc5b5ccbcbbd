# -*- coding: utf-8 -*-
import numbers


class FutureTimeoutError(TimeoutError):
    """Raised from a :class:`~timed_futures.TimedFuture` which was not settled
    within its timeout.

    Since this is a subclass of the builtin :class:`TimeoutError` (and hence of
    :class:`concurrent.futures.TimeoutError`), it may be caught by code which
    doesn't know about this library. Code which needs to tell a timed out
    future apart from other timeouts should check for this class specifically.

    Arguments:
        error (str, float or int)
            Either a message, or the timeout (in seconds) which was exceeded;
            in the latter case, a message is generated.

    Attributes:
        timeout (float or int)
            The timeout which was exceeded, or ``None`` if this error
            was constructed from a message.
    """

    def __init__(self, error="Future timed out."):
        if isinstance(error, numbers.Real) and not isinstance(error, bool):
            self.timeout = error
            message = "Future timed out after %s seconds." % (error,)
        else:
            self.timeout = None
            message = error
        super().__init__(message)


class NoFuturesFulfilled(Exception):
    """Raised from the future returned by :func:`~timed_futures.futures.f_any`
    (or :meth:`~timed_futures.TimedFuture.any`) when none of the input
    futures was successful.

    Attributes:
        errors (list)
            The exception of each input future, in the same order as the inputs.
            Empty if there were no input futures.
    """

    def __init__(self, errors=None):
        self.errors = list(errors or [])
        if self.errors:
            message = "No futures were fulfilled (%s failed)." % len(self.errors)
        else:
            message = "No futures were fulfilled (no futures were provided)."
        super().__init__(message)
