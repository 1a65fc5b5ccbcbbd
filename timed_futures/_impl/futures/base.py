# -*- coding: utf-8 -*-

from concurrent.futures import Future

from ..metrics import track_future


def f_return(x=None):
    """Return a future which provides the value `x`.

    Signature: :code:`A ⟶ Future<A>`

    Arguments:
        x
            A value to be returned

    Returns:
        :class:`~concurrent.futures.Future` of :obj:`x`
            A future immediately resolved with the value :obj:`x`.
    """
    future = Future()
    track_future(future, type="return")
    future.set_result(x)
    return future


def f_return_error(x):
    """Return a future which raises the exception `x`.

    Arguments:

        x (Exception)
            An exception to be raised.

    Returns:
        :class:`~concurrent.futures.Future` of :obj:`x`
            A future immediately resolved with the exception :obj:`x`.
    """
    f = Future()
    track_future(f, type="return_error")
    f.set_exception(x)
    return f


class WeakCallback:
    # A wrapper for a single-call callback which breaks the reference
    # to the callback at time of call.
    #
    # Combinators register a callback on each input future; the standard
    # Future keeps its callbacks forever, so without this, a long-lived
    # input would keep every combinator's output alive too.
    def __init__(self, delegate):
        self.__delegate = delegate

    def __call__(self, *args, **kwargs):
        delegate = self.__delegate
        del self.__delegate
        return delegate(*args, **kwargs)


weak_callback = WeakCallback
