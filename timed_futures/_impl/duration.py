import math
import numbers
from datetime import timedelta


def parse_timeout(timeout):
    """Normalize a ``timeout`` argument.

    Accepted values are:

    - ``None`` or infinity: no timeout
    - a non-negative real number: a timeout in seconds
    - a :class:`~datetime.timedelta`: converted to seconds

    Returns ``None`` if no timer should be armed, otherwise the number of
    seconds to wait. Anything else raises :class:`TypeError` or
    :class:`ValueError`.
    """
    if timeout is None:
        return None

    if isinstance(timeout, timedelta):
        timeout = timeout.total_seconds()

    if isinstance(timeout, bool) or not isinstance(timeout, numbers.Real):
        raise TypeError(
            "timeout must be a number of seconds or None, not %s" % repr(timeout)
        )

    if math.isnan(timeout):
        raise ValueError("timeout must not be NaN")

    if timeout < 0:
        raise ValueError("timeout must not be negative: %s" % repr(timeout))

    if math.isinf(timeout):
        return None

    return timeout
