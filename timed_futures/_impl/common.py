from concurrent.futures import InvalidStateError
import logging

from .logwrap import LogWrapper

LOG = LogWrapper(logging.getLogger("timed_futures.futures"))

# Used for joins which should, in principle, wait forever; a finite value
# keeps the wait interruptible.
MAX_TIMEOUT = 60 * 60 * 24 * 365 * 100


def is_future(f):
    return "add_done_callback" in dir(f)


# Settlement helpers for plain futures.
#
# A future may be settled from more than one place (an input completing,
# a timer firing, a caller cancelling). Only the first attempt counts;
# the rest are dropped rather than raising InvalidStateError.


def try_set_result(future, result):
    try:
        future.set_result(result)
    except InvalidStateError:
        LOG.debug("Dropping result for already settled %r", future)
        return False
    return True


def try_set_exception(future, exception):
    try:
        future.set_exception(exception)
    except InvalidStateError:
        LOG.debug("Dropping exception for already settled %r", future)
        return False
    return True


def copy_future_outcome(source, target):
    # source must be done
    if source.cancelled():
        target.cancel()
        return

    exception = source.exception()
    if exception is not None:
        try_set_exception(target, exception)
    else:
        try_set_result(target, source.result())
