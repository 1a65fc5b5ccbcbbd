from .base import f_return, f_return_error
from .collect import f_all, f_all_settled, Settled
from .first import f_any, f_race
from .timed import (
    f_timed,
    f_timed_all,
    f_timed_all_settled,
    f_timed_any,
    f_timed_race,
)

__all__ = [
    "f_return",
    "f_return_error",
    "f_all",
    "f_all_settled",
    "f_any",
    "f_race",
    "f_timed",
    "f_timed_all",
    "f_timed_all_settled",
    "f_timed_any",
    "f_timed_race",
    "Settled",
]
