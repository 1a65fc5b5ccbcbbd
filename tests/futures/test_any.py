from concurrent.futures import Future, CancelledError

from hamcrest import assert_that, equal_to, instance_of

from timed_futures import TimedFuture, FutureTimeoutError, NoFuturesFulfilled
from timed_futures.futures import f_any, f_return, f_return_error

from ..util import future_after


TIMEOUT = 0.1


def test_any_none():
    future = f_any([])
    assert future.done()
    assert_that(future.exception(), instance_of(NoFuturesFulfilled))
    assert future.exception().errors == []


def test_any_first_success():
    future = f_any(
        [
            f_return_error(RuntimeError("oops")),
            future_after(TIMEOUT / 2, "slow"),
            future_after(TIMEOUT / 10, "fast"),
        ]
    )
    assert future.result() == "fast"


def test_any_ignores_pending_failures():
    pending = Future()
    future = f_any([f_return_error(RuntimeError("oops")), pending, f_return("ok")])

    assert future.result() == "ok"
    assert not pending.cancelled()


def test_any_all_failed():
    error1 = RuntimeError("first")
    error2 = ValueError("second")
    cancelled = Future()

    future = f_any([future_after(TIMEOUT / 10, error=error1), f_return_error(error2), cancelled])
    cancelled.cancel()

    error = future.exception()
    assert_that(error, instance_of(NoFuturesFulfilled))

    # In input order, not completion order
    assert error.errors[0] is error1
    assert error.errors[1] is error2
    assert_that(error.errors[2], instance_of(CancelledError))


def test_timed_any():
    future = TimedFuture.any(
        [f_return_error(RuntimeError("oops")), future_after(TIMEOUT / 10, "v")], TIMEOUT
    )
    assert future.result() == "v"


def test_timed_any_times_out():
    future = TimedFuture.any(
        [f_return_error(RuntimeError("oops")), future_after(TIMEOUT * 5, "v")], TIMEOUT
    )
    assert_that(future.exception(), instance_of(FutureTimeoutError))
    assert_that(future.exception().timeout, equal_to(TIMEOUT))


def test_timed_any_none():
    assert_that(TimedFuture.any([], TIMEOUT).exception(), instance_of(NoFuturesFulfilled))
