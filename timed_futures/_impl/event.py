"""Shutdown-aware events for the timer thread.

Events returned by get_event behave like any threading.Event, except
that they are set() automatically when the interpreter is exiting, so a
thread blocked on one wakes up and can notice is_shutdown().
"""

from threading import Event, RLock
import weakref
import atexit


class ShutdownAwareEvents:
    def __init__(self):
        self.lock = RLock()
        self.registered = False
        self.shutdown = False
        self.events = weakref.WeakSet()

    def on_exiting(self):
        self.shutdown = True

        with self.lock:
            events = list(self.events)

        for evt in events:
            evt.set()

    def get_event(self):
        with self.lock:
            if not self.registered:
                atexit.register(self.on_exiting)
                self.registered = True
            out = Event()
            self.events.add(out)
            return out


GLOBAL_EVENTS = ShutdownAwareEvents()
get_event = GLOBAL_EVENTS.get_event


def is_shutdown():
    return GLOBAL_EVENTS.shutdown
