"""Functions for composing futures.

All functions here accept and return instances of
:class:`concurrent.futures.Future`, or any object with a compatible interface.
Those prefixed with ``f_timed`` return a :class:`~timed_futures.TimedFuture`.
"""
from .._impl.futures import *
from .._impl.futures import __all__
