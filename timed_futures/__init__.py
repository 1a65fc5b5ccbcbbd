"""Futures which time out, without racing a timer future.

This library is intended for use with the
[`concurrent.futures`](https://docs.python.org/3/library/concurrent.futures.html)
module. It provides `TimedFuture`, a `Future` which fails with
`FutureTimeoutError` if it isn't settled within a given time, along with
combinators applying the same timeouts to groups of futures.
"""
from ._impl.timed import TimedFuture
from ._impl.errors import FutureTimeoutError, NoFuturesFulfilled
from . import futures

from .futures import *

__all__ = ["TimedFuture", "FutureTimeoutError", "NoFuturesFulfilled", "futures"]
__all__.extend(futures.__all__)
