"""
reldelta.weekday
----------------
Day-of-week selector with an occurrence count, e.g. "the second Friday"
(``FR(2)``) or "the previous Monday" (``MO(-1)``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Dict, Optional, Sequence, Tuple, Union

from loguru import logger

from .core.errors import WeekdayError

WEEKDAY_CODES: Tuple[str, ...] = ("MO", "TU", "WE", "TH", "FR", "SA", "SU")
WEEKDAY_MAP: Dict[str, int] = {code: i for i, code in enumerate(WEEKDAY_CODES)}


def _weekday_number(value: Union[int, str]) -> int:
    if isinstance(value, str):
        if value not in WEEKDAY_MAP:
            raise WeekdayError(f"Invalid weekday string: {value}")
        return WEEKDAY_MAP[value]
    if (
        isinstance(value, bool)
        or not isinstance(value, Real)
        or not math.isfinite(value)
        or value != math.floor(value)
        or not (0 <= value <= 6)
    ):
        raise WeekdayError(
            f"Invalid weekday number: {value}. Weekday number must be an integer between 0 and 6"
        )
    return int(value)


def _occurrence(n: Optional[float]) -> int:
    if n is None:
        return 1
    if isinstance(n, bool) or not isinstance(n, Real) or not math.isfinite(n):
        raise WeekdayError(f"Invalid weekday occurrence: {n!r}")
    return math.trunc(n)


@dataclass(frozen=True, init=False)
class Weekday:
    weekday: int   # 0 = Monday .. 6 = Sunday
    n: int = 1     # occurrence; negative searches backwards

    def __init__(self, weekday: Union[int, str], n: Optional[float] = 1):
        object.__setattr__(self, "weekday", _weekday_number(weekday))
        object.__setattr__(self, "n", _occurrence(n))

    def __call__(self, n: Optional[float] = 1) -> "Weekday":
        """Same day of week with another occurrence count: ``MO(-1)``."""
        if n == self.n:
            return self
        return Weekday(self.weekday, n)

    @property
    def code(self) -> str:
        return WEEKDAY_CODES[self.weekday]

    def __repr__(self) -> str:
        if self.n == 1:
            return self.code
        return f"{self.code}({self.n:+d})"


MO, TU, WE, TH, FR, SA, SU = (Weekday(i) for i in range(7))
WEEKDAYS: Tuple[Weekday, ...] = (MO, TU, WE, TH, FR, SA, SU)


WeekdayInput = Union[Weekday, int, str, Sequence]


def as_weekday(value: WeekdayInput) -> Weekday:
    """
    Coerce any accepted weekday input into one Weekday:
      - a Weekday value (returned as is)
      - a ``(code, n)`` pair, code being an int 0..6 or a two-letter string
      - a bare int code
      - a bare two-letter string
    """
    if isinstance(value, Weekday):
        return value
    if isinstance(value, (str, int, float)):
        return Weekday(value)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        code, n = value
        return Weekday(code, n)
    logger.debug("Rejected weekday input", value=repr(value))
    raise WeekdayError(f"Invalid weekday value: {value!r}")
