import time
from concurrent.futures import Future

import pytest
from hamcrest import assert_that, equal_to, instance_of, calling, raises

from timed_futures import TimedFuture, FutureTimeoutError
from timed_futures.futures import f_return, f_return_error

from .util import resolve_after, never, future_after, assert_in_traceback


TIMEOUT = 0.1


def div10(x):
    return 10 / x


def test_then_maps():
    f = TimedFuture.wrap(5).then(div10)
    assert isinstance(f, TimedFuture)
    assert f.result() == 2


def test_then_chains():
    f = TimedFuture.wrap(1).then(lambda x: x + 1).then(lambda x: x * 10)
    assert f.result() == 20


def test_then_passes_through_result():
    f = TimedFuture.wrap("abc").then(None, str)
    assert f.result() == "abc"


def test_then_passes_through_error():
    error = RuntimeError("simulated error")
    f = TimedFuture.wrap(error).then(div10)
    assert f.exception() is error


def test_then_on_failure_recovers():
    f = TimedFuture.wrap(0).then(div10).then(None, lambda ex: "recovered: %s" % ex)
    result = f.result()
    assert "recovered" in result
    assert "division" in result


def test_then_raises():
    f = TimedFuture.wrap(0).then(div10)
    assert_that(calling(f.result), raises(ZeroDivisionError))
    assert_in_traceback(f, "div10")


def test_then_flattens_future():
    f = TimedFuture.wrap(1).then(lambda x: f_return(x + 1))
    assert f.result() == 2

    error = RuntimeError("simulated error")
    f = TimedFuture.wrap(1).then(lambda _: f_return_error(error))
    assert f.exception() is error


def test_then_untimed_waits():
    f = TimedFuture.wrap(1).then(lambda x: future_after(TIMEOUT * 2, x + 1))
    assert f.result() == 2


def test_then_propagates_cancel():
    source = TimedFuture()
    f = source.then(div10)

    source.cancel()
    assert f.cancelled()


def test_then_timed_continuation_times_out():
    # The producer has unlimited time; only the continuation is bounded
    producer = TimedFuture(resolve_after(TIMEOUT / 10, 1))

    f = producer.then(lambda x: future_after(TIMEOUT * 5, x), None, TIMEOUT)

    error = f.exception()
    assert_that(error, instance_of(FutureTimeoutError))
    assert_that(error.timeout, equal_to(TIMEOUT))
    assert producer.result() == 1


def test_then_timed_slow_callback_times_out():
    def slow(x):
        time.sleep(TIMEOUT * 3)
        return x

    f = TimedFuture.wrap(1).then(slow, None, TIMEOUT)

    # The callback itself ran synchronously; by the time it returned
    # the window had already been exceeded
    assert_that(f.exception(), instance_of(FutureTimeoutError))


def test_then_timed_continuation_succeeds():
    f = TimedFuture.wrap(1).then(
        lambda x: future_after(TIMEOUT / 10, x + 1), None, TIMEOUT
    )
    assert f.result() == 2


def test_then_timed_window_starts_at_settlement():
    # Producer takes longer than the continuation's window, which
    # must not count against the continuation
    producer = TimedFuture(resolve_after(TIMEOUT * 2, 1))
    f = producer.then(lambda x: x + 1, None, TIMEOUT)

    assert f.result() == 2


def test_then_timed_independent_of_producer_timeout():
    producer = TimedFuture(resolve_after(TIMEOUT / 10, 1), TIMEOUT)
    f = producer.then(lambda x: future_after(TIMEOUT * 2, x + 1), None, TIMEOUT * 5)

    # The continuation outlives the producer's own timeout
    assert f.result() == 2


def test_then_timed_raises():
    f = TimedFuture.wrap(0).then(div10, None, TIMEOUT)
    assert_that(f.exception(), instance_of(ZeroDivisionError))


def test_then_timed_on_failure():
    error = RuntimeError("simulated error")
    f = TimedFuture.wrap(error).then(div10, lambda ex: "handled", TIMEOUT)
    assert f.result() == "handled"

    f = TimedFuture.wrap(error).then(div10, lambda ex: future_after(1.0), TIMEOUT)
    assert_that(f.exception(), instance_of(FutureTimeoutError))


def test_then_timed_no_on_failure_passes_error():
    error = RuntimeError("simulated error")
    source = TimedFuture(never)
    f = source.then(div10, None, TIMEOUT)

    time.sleep(TIMEOUT * 2)
    source.set_exception(error)

    # No window applied to an error passed through
    assert f.exception() is error


def test_then_producer_timeout_propagates():
    f = TimedFuture(never, TIMEOUT).then(div10, None, 10.0)
    assert_that(f.exception(), instance_of(FutureTimeoutError))
    assert_that(f.exception().timeout, equal_to(TIMEOUT))


def test_then_returned_future_timeout():
    # The returned future may be given its own timeout as well
    f = TimedFuture.wrap(1).then(lambda x: Future()).timeout(TIMEOUT)
    assert_that(f.exception(), instance_of(FutureTimeoutError))


def test_then_bad_timeout():
    f = TimedFuture.wrap(1)
    with pytest.raises(TypeError):
        f.then(div10, None, "soon")


def test_catch():
    f = TimedFuture.wrap(0).then(div10).catch(lambda ex: -1)
    assert f.result() == -1

    f = TimedFuture.wrap(5).then(div10).catch(lambda ex: -1)
    assert f.result() == 2


def test_catch_timed():
    f = TimedFuture.wrap(RuntimeError("oops")).catch(lambda ex: Future(), TIMEOUT)
    assert_that(f.exception(), instance_of(FutureTimeoutError))


def test_then_timed_on_failure_after_producer_timeout():
    # The producer times out, then a blocking on_failure handler overruns
    # the continuation's own window
    def slow_handler(_ex):
        time.sleep(TIMEOUT * 5)
        return "handled"

    producer = TimedFuture(never, TIMEOUT / 2)
    f = producer.then(None, slow_handler, TIMEOUT)

    start = time.monotonic()
    error = f.exception()
    elapsed = time.monotonic() - start

    assert_that(error, instance_of(FutureTimeoutError))
    assert_that(error.timeout, equal_to(TIMEOUT))

    # Settled when the window elapsed, without waiting for the handler
    assert elapsed < TIMEOUT * 4
