class NullBase:
    def labels(self, **_kwargs):
        return self

    def inc(self, _value=1):
        pass


class Counter(NullBase):
    pass


class Gauge(NullBase):
    def dec(self, _value=1):
        pass


class NullMetrics:
    TIMEOUT = Counter()
    TIMER_ACTIVE = Gauge()
    FUTURE_INPROGRESS = Gauge()
    FUTURE_TOTAL = Counter()
    FUTURE_CANCEL = Counter()
    FUTURE_ERROR = Counter()
    FUTURE_TIME = Counter()
