import logging
from functools import partial

from monotonic import monotonic

from .null import NullMetrics

LOG = logging.getLogger("timed_futures.metrics")

try:  # pylint: disable=import-error
    from .prometheus import PrometheusMetrics

    metrics = PrometheusMetrics()
except Exception:
    LOG.debug("disabling prometheus support", exc_info=True)

    metrics = NullMetrics()  # type: ignore


def record_done(f, started_when, time, inprogress, cancelled, failed):
    inprogress.dec()

    run_time = monotonic() - started_when
    time.inc(run_time)

    if f.cancelled():
        cancelled.inc()
    elif f.exception():
        failed.inc()


def track_future(f, **labels):
    labels.setdefault("type", "timed")

    metrics.FUTURE_TOTAL.labels(**labels).inc()

    inprogress = metrics.FUTURE_INPROGRESS.labels(**labels)
    inprogress.inc()

    cb = partial(
        record_done,
        started_when=monotonic(),
        time=metrics.FUTURE_TIME.labels(**labels),
        inprogress=inprogress,
        cancelled=metrics.FUTURE_CANCEL.labels(**labels),
        failed=metrics.FUTURE_ERROR.labels(**labels),
    )

    f.add_done_callback(cb)

    return f
