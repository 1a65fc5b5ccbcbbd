from concurrent.futures import ThreadPoolExecutor
from threading import Thread, Lock
import weakref
import logging

from monotonic import monotonic

from .common import MAX_TIMEOUT
from .event import get_event, is_shutdown
from .helpers import ShutdownHelper, executor_loop
from .logwrap import LogWrapper

LOG = LogWrapper(logging.getLogger("timed_futures.timer"))


class TimerHandle:
    """A callback scheduled to be invoked once, at a deadline, unless cancelled.

    Handles are created by :meth:`TimerScheduler.call_later`. Once a handle has
    been cancelled or has fired, it drops its reference to the callback.
    """

    def __init__(self, deadline, fn):
        self.deadline = deadline
        self._fn = fn
        self._lock = Lock()

    @property
    def active(self):
        """True if this timer has neither fired nor been cancelled."""
        return self._fn is not None

    def cancel(self):
        """Cancel this timer.

        Returns:
            bool
                True if the callback was prevented from running, False if it had
                already fired or been cancelled. Calling this more than once is
                harmless.
        """
        with self._lock:
            if self._fn is None:
                return False
            self._fn = None
            return True

    def _claim(self):
        # Take the callback for invocation; at most one caller ever gets it.
        with self._lock:
            fn = self._fn
            self._fn = None
            return fn

    def __repr__(self):
        return "<TimerHandle deadline=%s active=%s>" % (self.deadline, self.active)


class TimerScheduler:
    """Invokes callbacks after a delay.

    A single daemon thread, started when the first timer is scheduled,
    watches the deadlines of all timers. Due callbacks are not run on that
    thread; they are submitted to a thread pool owned by the scheduler, so a
    slow callback never delays any other timer.
    """

    def __init__(self, name="default", logger=None, max_workers=None):
        """
        Parameters:

            name (str):
                a name for this scheduler, used for the thread name

            logger (~logging.Logger):
                a logger used for messages from this scheduler

            max_workers (int):
                maximum number of threads used to invoke callbacks;
                see :class:`~concurrent.futures.ThreadPoolExecutor`
        """
        self._log = logger if logger else LOG
        self._name = name
        self._shutdown = ShutdownHelper()
        self._timers = []
        self._timers_lock = Lock()
        self._timers_write = get_event()
        self._thread = None
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="TimerCallback-%s" % name
        )

    def call_later(self, delay, fn):
        """Arrange for ``fn()`` to be called after ``delay`` seconds.

        Returns:
            :class:`TimerHandle`
                A handle which may be used to cancel the call.
        """
        handle = TimerHandle(monotonic() + delay, fn)
        with self._shutdown.ensure_alive():
            with self._timers_lock:
                self._timers.append(handle)
                self._ensure_thread()
        self._timers_write.set()
        self._log.debug("Scheduled %s", handle)
        return handle

    def shutdown(self, wait=True):
        """Stop the scheduler. Timers which have not yet fired never fire."""
        if self._shutdown():
            self._log.debug("shutdown")
            self._timers_write.set()
            thread = self._thread
            if wait and thread:
                thread.join(MAX_TIMEOUT)
            self._executor.shutdown(wait, cancel_futures=True)

    @property
    def pending(self):
        """Number of timers which are neither fired nor cancelled."""
        with self._timers_lock:
            return len([t for t in self._timers if t.active])

    def _ensure_thread(self):
        # Called with _timers_lock held
        if self._thread and self._thread.is_alive():
            return

        # The thread only holds a weak reference, so an unused scheduler
        # may still be collected.
        event = self._timers_write
        self_ref = weakref.ref(self, lambda _: event.set())

        self._thread = Thread(
            name="TimerScheduler-%s" % self._name,
            target=self._timer_loop,
            args=(self_ref,),
        )
        self._thread.daemon = True
        self._thread.start()

    def _partition_timers(self):
        pending = []
        due = []
        now = monotonic()
        for timer in self._timers:
            if not timer.active:
                self._log.debug("Discarding inactive timer: %s", timer)
            elif timer.deadline <= now:
                due.append(timer)
            else:
                pending.append(timer)
        return (pending, due)

    def _fire(self, timer):
        fn = timer._claim()
        if not fn:
            return
        self._log.debug("Firing %s", timer)
        try:
            fn()
        except Exception:
            self._log.exception("Exception in timer callback for %s", timer)

    @classmethod
    @executor_loop
    def _timer_loop(cls, scheduler_ref):
        while True:
            (event, wait_time) = cls._timer_loop_iter(scheduler_ref())
            if not event:
                break
            event.wait(wait_time)
            event.clear()

    @classmethod
    def _timer_loop_iter(cls, scheduler):
        if not scheduler:
            LOG.debug("Scheduler was collected")
            return (None, None)

        if scheduler._shutdown.is_shutdown or is_shutdown():
            scheduler._log.debug("Scheduler was shut down")
            return (None, None)

        with scheduler._timers_lock:
            (pending, due) = scheduler._partition_timers()
            scheduler._timers = pending

        scheduler._log.debug("timers: %s due, %s pending", len(due), len(pending))

        for timer in due:
            scheduler._executor.submit(scheduler._fire, timer)

        wait_time = None
        if pending:
            earliest = min([timer.deadline for timer in pending])
            wait_time = max(earliest - monotonic(), 0)

        return (scheduler._timers_write, wait_time)


SCHEDULER = TimerScheduler(name="internal")
