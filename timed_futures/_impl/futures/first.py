# -*- coding: utf-8 -*-
from concurrent.futures import Future, CancelledError
from threading import Lock
from functools import partial
import logging

from ..common import copy_future_outcome, try_set_exception, try_set_result
from ..errors import NoFuturesFulfilled
from ..logwrap import LogWrapper
from .base import f_return_error, weak_callback
from .check import ensure_futures
from ..metrics import track_future

LOG = LogWrapper(logging.getLogger("timed_futures.futures"))


class FirstOperation:
    # Resolves the output from whichever input future first satisfies
    # the operation; inputs settling afterward are ignored.
    def __init__(self, fs):
        self.fs = list(fs)
        self.done = False
        self.lock = Lock()
        self.out = Future()

        for (idx, future) in enumerate(self.fs):
            future.add_done_callback(weak_callback(partial(self.handle_done, idx)))

    def get_state_update(self, index, f):
        # Returns True if f decides the output; called with lock held
        raise NotImplementedError()  # pragma: no cover

    def handle_done(self, index, f):
        with self.lock:
            if self.done:
                return
            if not self.get_state_update(index, f):
                return
            self.done = True
            self.fs = []

        self.set_output(f)

    def set_output(self, f):
        copy_future_outcome(f, self.out)


class RaceOperation(FirstOperation):
    def get_state_update(self, index, f):
        return True


class AnyOperation(FirstOperation):
    def __init__(self, fs):
        self.errors = [None] * len(fs)
        self.count_remaining = len(fs)
        super().__init__(fs)

    def get_state_update(self, index, f):
        if f.cancelled():
            self.errors[index] = CancelledError()
        elif f.exception() is not None:
            self.errors[index] = f.exception()
        else:
            return True

        self.count_remaining -= 1
        return self.count_remaining == 0

    def set_output(self, f):
        if f.cancelled() or f.exception() is not None:
            LOG.debug("All %s futures failed", len(self.errors))
            try_set_exception(self.out, NoFuturesFulfilled(self.errors))
        else:
            try_set_result(self.out, f.result())


@ensure_futures
def f_any(futures):
    """Create a future holding the result of the earliest successful input future.

    Signature: :code:`iterable<Future<X>> ⟶ Future<X>`

    Arguments:
        futures (iterable of :class:`~concurrent.futures.Future`)
            Any number of futures.

    Returns:
        :class:`~concurrent.futures.Future`
            A future resolved with either:

            - the result of the earliest input future to succeed
            - or :class:`~timed_futures.NoFuturesFulfilled`, once every input
              future has failed or been cancelled, or immediately if there are
              no input futures

            Input futures are never cancelled.
    """
    if not futures:
        return f_return_error(NoFuturesFulfilled())

    return track_future(AnyOperation(futures).out, type="any")


@ensure_futures
def f_race(futures):
    """Create a future resolved in the same way as the earliest input future
    to be settled.

    Signature: :code:`iterable<Future<X>> ⟶ Future<X>`

    Arguments:
        futures (iterable of :class:`~concurrent.futures.Future`)
            Any number of futures.

    Returns:
        :class:`~concurrent.futures.Future`
            A future resolved with the result or exception of the earliest
            input future to be settled, or cancelled if that future was
            cancelled.

            If there are no input futures, the returned future is never
            resolved; a timeout, as in :meth:`~timed_futures.TimedFuture.race`,
            may be used to bound it.

            Input futures are never cancelled.
    """
    return track_future(RaceOperation(futures).out, type="race")
