# -*- coding: utf-8 -*-

from ..timed import TimedFuture


def f_timed(value, timeout=None):
    """Lift any value into a future with a timeout.

    Signature: :code:`A, float ⟶ TimedFuture<A>`

    Arguments:
        value
            A future, callable, exception or other value;
            see :meth:`~timed_futures.TimedFuture.wrap`.
        timeout (float)
            A timeout, in seconds, or ``None``.

    Returns:
        :class:`~timed_futures.TimedFuture`
            A future resolved in the same way as :obj:`value`, or with
            :class:`~timed_futures.FutureTimeoutError` if not resolved
            within :obj:`timeout` seconds.

    Unlike wrapping a future with a deadline by other means, the input
    future is never cancelled; only the returned future times out.
    """
    return TimedFuture.wrap(value, timeout)


def f_timed_all(futures, timeout=None):
    """Like :func:`~timed_futures.futures.f_all`, with a timeout.

    Signature: :code:`iterable<Future<X>>, float ⟶ TimedFuture<list<X>>`
    """
    return TimedFuture.all(futures, timeout)


def f_timed_all_settled(futures, timeout=None):
    """Like :func:`~timed_futures.futures.f_all_settled`, with a timeout.

    Signature: :code:`iterable<Future<X>>, float ⟶ TimedFuture<list<Settled<X>>>`
    """
    return TimedFuture.all_settled(futures, timeout)


def f_timed_any(futures, timeout=None):
    """Like :func:`~timed_futures.futures.f_any`, with a timeout.

    Signature: :code:`iterable<Future<X>>, float ⟶ TimedFuture<X>`
    """
    return TimedFuture.any(futures, timeout)


def f_timed_race(futures, timeout=None):
    """Like :func:`~timed_futures.futures.f_race`, with a timeout.

    Signature: :code:`iterable<Future<X>>, float ⟶ TimedFuture<X>`
    """
    return TimedFuture.race(futures, timeout)
