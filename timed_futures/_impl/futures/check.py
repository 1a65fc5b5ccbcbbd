from functools import wraps

from ..common import is_future


def ensure_futures(f):
    # For functions whose first argument is an iterable of futures.
    # The iterable is consumed into a list before f is called.
    @wraps(f)
    def new_fn(futures, *args, **kwargs):
        try:
            futures = list(futures)
        except TypeError:
            raise TypeError(
                "%s() called with non-iterable value: %s" % (f.__name__, repr(futures))
            ) from None

        for arg in futures:
            if not is_future(arg):
                raise TypeError(
                    "%s() called with non-future value: %s" % (f.__name__, repr(arg))
                )

        return f(futures, *args, **kwargs)

    return new_fn
