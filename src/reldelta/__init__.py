"""reldelta public API.

Keep this surface small: users should mostly interact with names re-exported here.
"""

from loguru import logger

from .api import (
    between,
    apply,
    convert,
    list_units,
    leap_days_between,
    is_leap_year,
    days_in_month,
)
from .core.errors import (
    RelDeltaError,
    UnpairedDatesError,
    FieldValueError,
    NonIntegerError,
    OutOfRangeError,
    YearDayError,
    WeekdayError,
)
from .core.settings import ConversionSettings, DEFAULT_SETTINGS
from .core.types import RelativeOffset, AbsoluteOverride
from .delta import RelativeDelta
from .weekday import Weekday, as_weekday, MO, TU, WE, TH, FR, SA, SU

__version__ = "0.1.0"

# library logging stays silent until an application opts in with logger.enable("reldelta")
logger.disable("reldelta")

__all__ = [
    "RelativeDelta",
    "RelativeOffset",
    "AbsoluteOverride",
    "Weekday",
    "as_weekday",
    "MO",
    "TU",
    "WE",
    "TH",
    "FR",
    "SA",
    "SU",
    "between",
    "apply",
    "convert",
    "list_units",
    "leap_days_between",
    "is_leap_year",
    "days_in_month",
    "ConversionSettings",
    "DEFAULT_SETTINGS",
    "RelDeltaError",
    "UnpairedDatesError",
    "FieldValueError",
    "NonIntegerError",
    "OutOfRangeError",
    "YearDayError",
    "WeekdayError",
]
