from __future__ import annotations
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from ..weekday import Weekday

Number = Union[int, float]

@dataclass(frozen=True)
class RelativeOffset:
    """Additive part of a delta ("add N of this unit")."""
    years: int = 0
    months: int = 0
    days: Number = 0      # may hold a fraction from weeks until normalized()
    hours: Number = 0
    minutes: Number = 0
    seconds: Number = 0
    milliseconds: Number = 0
    leap_days: int = 0

    @property
    def has_time(self) -> bool:
        return bool(self.hours or self.minutes or self.seconds or self.milliseconds)

    def is_zero(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

@dataclass(frozen=True)
class AbsoluteOverride:
    """Overriding part of a delta ("force this field to N"); None means unset."""
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    millisecond: Optional[int] = None
    weekday: Optional["Weekday"] = None

    @property
    def has_time(self) -> bool:
        return any(v is not None for v in (self.hour, self.minute, self.second, self.millisecond))

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

RELATIVE_FIELDS = tuple(f.name for f in fields(RelativeOffset))
ABSOLUTE_FIELDS = tuple(f.name for f in fields(AbsoluteOverride))
