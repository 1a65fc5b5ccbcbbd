import time
import traceback
import threading
from concurrent.futures import Future


def assert_soon(fn):
    for _ in range(0, 1000):
        try:
            fn()
            break
        except AssertionError:
            time.sleep(0.01)
    else:
        fn()


def call_later(delay, fn, *args):
    timer = threading.Timer(delay, fn, args)
    timer.daemon = True
    timer.start()
    return timer


def resolve_after(delay, value):
    """An operation which resolves with value after delay seconds."""

    def operation(resolve, _reject):
        call_later(delay, resolve, value)

    return operation


def reject_after(delay, error):
    def operation(_resolve, reject):
        call_later(delay, reject, error)

    return operation


def never(_resolve, _reject):
    pass


def future_after(delay, value=None, error=None):
    """A plain future resolved after delay seconds."""
    future = Future()
    if error is not None:
        call_later(delay, future.set_exception, error)
    else:
        call_later(delay, future.set_result, value)
    return future


def assert_in_traceback(future, needle):
    tb = future.exception().__traceback__
    tb_str = "".join(traceback.format_tb(tb))
    assert needle in tb_str
