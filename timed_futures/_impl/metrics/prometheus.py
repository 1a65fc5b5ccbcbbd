from functools import partial

import prometheus_client  # pylint: disable=import-error


Counter = partial(prometheus_client.Counter, namespace="timed_futures")
Gauge = partial(prometheus_client.Gauge, namespace="timed_futures")


class PrometheusMetrics:
    TIMEOUT = Counter(
        "timeout", "Futures failed due to timeout", labelnames=("type",)
    )
    TIMER_ACTIVE = Gauge(
        "timer_active", "Timeout timers currently armed", labelnames=("type",)
    )
    FUTURE_INPROGRESS = Gauge(
        "future_inprogress", "Futures currently in use", labelnames=("type",)
    )
    FUTURE_TOTAL = Counter("future_total", "Total futures used", labelnames=("type",))
    FUTURE_CANCEL = Counter(
        "future_cancel", "Futures cancelled", labelnames=("type",)
    )
    FUTURE_ERROR = Counter(
        "future_error", "Futures resolved with error", labelnames=("type",)
    )
    FUTURE_TIME = Counter(
        "future_time", "Total time from creation to settlement of futures",
        labelnames=("type",),
    )
