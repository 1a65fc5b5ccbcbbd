# -*- coding: utf-8 -*-
from concurrent.futures import Future, CancelledError
from threading import Lock
from functools import partial
from collections import namedtuple

from ..common import try_set_exception, try_set_result
from .base import f_return, weak_callback
from .check import ensure_futures
from ..metrics import track_future


FULFILLED = "fulfilled"
REJECTED = "rejected"


class Settled(namedtuple("Settled", ["status", "value", "reason"])):
    """The outcome of one input future to :func:`f_all_settled`.

    Attributes:
        status (str)
            ``"fulfilled"`` or ``"rejected"``
        value
            The future's result, if fulfilled; otherwise ``None``
        reason (Exception)
            The future's exception, if rejected; otherwise ``None``.
            A cancelled future is rejected with
            :class:`~concurrent.futures.CancelledError`.
    """

    __slots__ = ()

    @property
    def fulfilled(self):
        return self.status == FULFILLED

    @classmethod
    def of(cls, f):
        if f.cancelled():
            return cls(REJECTED, None, CancelledError())
        exception = f.exception()
        if exception is not None:
            return cls(REJECTED, None, exception)
        return cls(FULFILLED, f.result(), None)


class Collector:
    # Gathers one value per input future into a list, in input order.
    def __init__(self, fs):
        self.fs = list(fs)
        self.out = Future()
        self.done = False
        self.lock = Lock()
        self.count_remaining = len(self.fs)

        for (idx, future) in enumerate(self.fs):
            future.add_done_callback(weak_callback(partial(self.handle_done, idx)))

    def get_state_update(self, index, f):
        # Returns (finished, outcome_future); called with lock held.
        # outcome_future, if not None, is copied into the output
        raise NotImplementedError()  # pragma: no cover

    def handle_done(self, index, f):
        with self.lock:
            if self.done:
                return
            (finished, outcome) = self.get_state_update(index, f)
            if not finished:
                return
            self.done = True
            values = self.fs
            self.fs = []

        if outcome is None:
            try_set_result(self.out, values)
        elif outcome.cancelled():
            self.out.cancel()
        else:
            try_set_exception(self.out, outcome.exception())


class AllCollector(Collector):
    def get_state_update(self, index, f):
        if f.cancelled() or f.exception() is not None:
            return (True, f)

        self.fs[index] = f.result()
        self.count_remaining -= 1
        return (self.count_remaining == 0, None)


class AllSettledCollector(Collector):
    def get_state_update(self, index, f):
        self.fs[index] = Settled.of(f)
        self.count_remaining -= 1
        return (self.count_remaining == 0, None)


@ensure_futures
def f_all(futures):
    """Create a future holding the results of all input futures, as a list.

    Signature: :code:`iterable<Future<X>> ⟶ Future<list<X>>`

    Arguments:
        futures (iterable of :class:`~concurrent.futures.Future`)
            Any number of futures.

    Returns:
        :class:`~concurrent.futures.Future` of :class:`list`
            A future resolved with either:

            - a list holding the result of each input future, in the same
              order as the inputs
            - or the exception of the earliest input future to fail
            - or cancelled, if any input future is cancelled first

            Input futures are never cancelled.
    """
    if not futures:
        return f_return([])

    return track_future(AllCollector(futures).out, type="all")


@ensure_futures
def f_all_settled(futures):
    """Create a future holding the outcome of all input futures, once all are settled.

    Signature: :code:`iterable<Future<X>> ⟶ Future<list<Settled<X>>>`

    Arguments:
        futures (iterable of :class:`~concurrent.futures.Future`)
            Any number of futures.

    Returns:
        :class:`~concurrent.futures.Future` of :class:`list` of :class:`Settled`
            A future resolved with a list describing the outcome of each
            input future, in the same order as the inputs.

            This future is never resolved with an exception.
    """
    if not futures:
        return f_return([])

    return track_future(AllSettledCollector(futures).out, type="all_settled")
