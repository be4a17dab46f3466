"""
reldelta.engines.normalize
--------------------------
Overflow cascade ("fix") over a RelativeOffset. One pass, lowest unit first;
the time chain ends in days and the month chain ends in years, and neither
of those two is ever reduced.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Tuple

from ..core.types import Number, RelativeOffset

# (field, carried into, base) in cascade order
CARRY_CHAIN: Tuple[Tuple[str, str, int], ...] = (
    ("milliseconds", "seconds", 1000),
    ("seconds", "minutes", 60),
    ("minutes", "hours", 60),
    ("hours", "days", 24),
    ("months", "years", 12),
)


def fix_unit(value: Number, carry_to: Number, base: int) -> Tuple[Number, Number]:
    """Reduce |value| below base, pushing whole multiples into carry_to with value's sign."""
    if abs(value) < base:
        return value, carry_to
    sign = -1 if value < 0 else 1
    mag = abs(value)
    div = mag // base
    return (mag % base) * sign, carry_to + div * sign


def fix(offset: RelativeOffset) -> RelativeOffset:
    values = {
        "years": offset.years,
        "months": offset.months,
        "days": offset.days,
        "hours": offset.hours,
        "minutes": offset.minutes,
        "seconds": offset.seconds,
        "milliseconds": offset.milliseconds,
    }
    for name, target, base in CARRY_CHAIN:
        values[name], values[target] = fix_unit(values[name], values[target], base)
    return replace(offset, **values)


def is_normalized(offset: RelativeOffset) -> bool:
    return all(abs(getattr(offset, name)) < base for name, _, base in CARRY_CHAIN)
