# -*- coding: utf-8 -*-
from concurrent.futures import Future, InvalidStateError
from functools import partial
from threading import Lock
import logging

from .common import is_future, copy_future_outcome
from .duration import parse_timeout
from .errors import FutureTimeoutError
from .logwrap import LogWrapper
from .metrics import metrics, track_future
from .timer import SCHEDULER

LOG = LogWrapper(logging.getLogger("timed_futures.futures"))


class Resolver:
    # The pair of entry points handed to an operation.
    #
    # Only the first call to either resolve or reject has any effect,
    # even if resolve was given a future which is still pending.
    def __init__(self, future):
        self._future = future
        self._lock = Lock()
        self._called = False

    def _first_call(self):
        with self._lock:
            if self._called:
                return False
            self._called = True
            return True

    def resolve(self, value=None):
        if self._first_call():
            self._future._resolve(value)

    def reject(self, exception):
        if self._first_call():
            self._future.set_exception(exception)


class TimedFuture(Future):
    """A future which fails if it is not settled within a given timeout.

    The timeout is enforced by a timer owned by the future itself. If the
    timer fires first, the future fails with :class:`FutureTimeoutError`;
    if the future is settled first, the timer is disarmed. In either case,
    whichever comes second is ignored. No additional future is raced against
    the operation, and no timer outlives the future's settlement.

    Timing out only affects the future. Whatever work the operation started
    keeps running; its outcome is simply discarded.

    Arguments:
        operation (callable)
            An optional callable which is invoked immediately with two
            arguments, ``resolve`` and ``reject``:

            - ``resolve(value)`` resolves the future with ``value``.
              If ``value`` is itself a future, this future will be resolved
              with that future's outcome once known.
            - ``reject(exception)`` resolves the future with ``exception``.

            Only the first call to either function has any effect.
            If ``operation`` raises, the future is resolved with the
            raised exception.

            If omitted, the future may be resolved using
            :meth:`~concurrent.futures.Future.set_result` and
            :meth:`~concurrent.futures.Future.set_exception`.

        timeout (float)
            An optional timeout, in seconds. The timer is armed before
            ``operation`` is invoked. See :meth:`timeout`.

    Unlike a plain :class:`~concurrent.futures.Future`, calling
    ``set_result`` or ``set_exception`` on a future which is already
    settled is silently ignored.

    Callbacks added to a future which times out are invoked from a thread
    pool shared by all timers. A slow callback does not delay any other
    timeout, but does occupy one of the pool's threads while it runs.
    """

    TimeoutError = FutureTimeoutError

    def __init__(self, operation=None, timeout=None):
        super().__init__()
        self._timer = None
        self._timer_lock = Lock()

        # The only path by which the timer settles this future.
        # Not reassigned, and not part of the public interface.
        self.__fail = partial(self.__settle, super().set_exception)

        self.add_done_callback(self.__disarm)
        track_future(self, type="timed")

        self.timeout(timeout)

        if operation is not None:
            self._run(operation)

    def _run(self, operation):
        resolver = Resolver(self)
        try:
            operation(resolver.resolve, resolver.reject)
        except Exception as error:
            resolver.reject(error)

    def __settle(self, setter, value):
        try:
            setter(value)
        except InvalidStateError:
            LOG.debug("Ignoring late settlement of %r", self)
            return False
        return True

    def set_result(self, result):
        self.__settle(super().set_result, result)

    def set_exception(self, exception):
        self.__settle(super().set_exception, exception)

    def _resolve(self, value):
        if value is self:
            self.set_exception(TypeError("cannot resolve a future with itself"))
        elif is_future(value):
            value.add_done_callback(partial(copy_future_outcome, target=self))
        else:
            self.set_result(value)

    def timeout(self, timeout):
        """Set, replace or remove the timeout on this future.

        Arguments:
            timeout (float)
                A number of seconds, measured from now, after which this
                future should fail with :class:`FutureTimeoutError` unless
                it has been settled. A :class:`~datetime.timedelta` is also
                accepted.

                Any previously set timeout is replaced.

                If ``None`` (or infinity), any previously set timeout is
                removed, and the future may remain pending indefinitely.

        Returns:
            :class:`TimedFuture`
                This future, for chaining.

        Raises:
            TypeError, ValueError
                If ``timeout`` is not a valid timeout.

        Calling this on a future which is already settled has no effect.
        """
        seconds = parse_timeout(timeout)

        with self._timer_lock:
            if self.done():
                return self

            self.__cancel_timer()

            if seconds is not None:
                self._timer = SCHEDULER.call_later(
                    seconds, partial(self.__on_timeout, seconds)
                )
                metrics.TIMER_ACTIVE.labels(type="timed").inc()

        return self

    def __cancel_timer(self):
        # Called with _timer_lock held
        timer = self._timer
        self._timer = None
        if timer and timer.cancel():
            metrics.TIMER_ACTIVE.labels(type="timed").dec()

    def __disarm(self, _future):
        with self._timer_lock:
            self.__cancel_timer()

    def __on_timeout(self, seconds):
        metrics.TIMER_ACTIVE.labels(type="timed").dec()
        if self.__fail(FutureTimeoutError(seconds)):
            LOG.debug("Timed out after %s seconds: %r", seconds, self)
            metrics.TIMEOUT.labels(type="timed").inc()

    def then(self, on_success=None, on_failure=None, timeout=None):
        """Chain a continuation onto this future.

        Signature: :code:`TimedFuture<A>, fn<A⟶B>, fn<Exception⟶B>, float ⟶ TimedFuture<B>`

        Arguments:
            on_success (callable)
                Invoked with the result of this future, if successful.
                If omitted, the result is passed through unchanged.
            on_failure (callable)
                Invoked with the exception of this future, if unsuccessful.
                If omitted, the exception is passed through unchanged.
            timeout (float)
                An optional timeout, in seconds, for the continuation.

                The timeout window starts when this future is settled, and is
                independent of any timeout on this future. It covers the call
                to ``on_success`` or ``on_failure``, and any future returned
                by that call. If the relevant callback is omitted, no window
                applies.

        Returns:
            :class:`TimedFuture`
                A future resolved with:

                - the value returned by ``on_success`` or ``on_failure``
                  (a value returned by ``on_failure`` resolves the future
                  successfully, whether or not ``timeout`` is given)
                - or, if that value is a future, that future's outcome
                - or the exception raised by ``on_success`` or ``on_failure``
                - or :class:`FutureTimeoutError`, if ``timeout`` elapsed first

                If this future is cancelled, so is the returned future.
        """
        if parse_timeout(timeout) is None:
            timeout = None

        out = TimedFuture()
        self.add_done_callback(
            partial(_continue, out=out, on_success=on_success,
                    on_failure=on_failure, timeout=timeout)
        )
        return out

    def catch(self, on_failure, timeout=None):
        """Like :meth:`then`, with only an ``on_failure`` callback."""
        return self.then(None, on_failure, timeout)

    @classmethod
    def wrap(cls, value, timeout=None):
        """Lift any value into a :class:`TimedFuture`.

        Signature: :code:`A, float ⟶ TimedFuture<A>`

        Arguments:
            value
                Any of the following, checked in this order:

                - a future: the returned future mirrors its outcome
                - a callable: it is invoked with no arguments, and the
                  returned future is resolved with its return value or
                  raised exception
                - an exception: the returned future is resolved with it
                - anything else: the returned future is resolved with it
            timeout (float)
                An optional timeout, in seconds.

        Returns:
            :class:`TimedFuture`
        """
        return cls(partial(_lift, value), timeout)

    @classmethod
    def all(cls, futures, timeout=None):
        """Like :func:`~timed_futures.futures.f_all`, with a timeout.

        Returns:
            :class:`TimedFuture` of :class:`list`
        """
        from .futures.collect import f_all

        return cls.wrap(f_all(futures), timeout)

    @classmethod
    def all_settled(cls, futures, timeout=None):
        """Like :func:`~timed_futures.futures.f_all_settled`, with a timeout.

        Returns:
            :class:`TimedFuture` of :class:`list` of :class:`~timed_futures.futures.Settled`
        """
        from .futures.collect import f_all_settled

        return cls.wrap(f_all_settled(futures), timeout)

    @classmethod
    def any(cls, futures, timeout=None):
        """Like :func:`~timed_futures.futures.f_any`, with a timeout."""
        from .futures.first import f_any

        return cls.wrap(f_any(futures), timeout)

    @classmethod
    def race(cls, futures, timeout=None):
        """Like :func:`~timed_futures.futures.f_race`, with a timeout."""
        from .futures.first import f_race

        return cls.wrap(f_race(futures), timeout)


def _lift(value, resolve, reject):
    if is_future(value):
        resolve(value)
    elif callable(value):
        resolve(value())
    elif isinstance(value, BaseException):
        reject(value)
    else:
        resolve(value)


def _invoke(fn, arg, resolve, _reject):
    resolve(fn(arg))


def _continue(source, out, on_success, on_failure, timeout):
    if source.cancelled():
        out.cancel()
        return

    exception = source.exception()
    if exception is None:
        (fn, arg) = (on_success, source.result())
    else:
        (fn, arg) = (on_failure, exception)

    if fn is None:
        copy_future_outcome(source, out)
        return

    if timeout is not None:
        # Each step gets its own window, opened only now. Mirrored before
        # fn runs, so a blocking fn cannot hold back the timeout.
        inner = TimedFuture(timeout=timeout)
        inner.add_done_callback(partial(copy_future_outcome, target=out))
        inner._run(partial(_invoke, fn, arg))
        return

    try:
        value = fn(arg)
    except Exception as error:
        out.set_exception(error)
        return
    out._resolve(value)
