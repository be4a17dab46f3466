class RelDeltaError(Exception):
    """Base error."""

class UnpairedDatesError(RelDeltaError, TypeError):
    """Raised when only one of date1/date2 is given."""

class FieldValueError(RelDeltaError, ValueError):
    """A construction field has an unusable value."""

class NonIntegerError(FieldValueError):
    """A field that must be whole was given a fraction."""

class OutOfRangeError(FieldValueError):
    """An absolute field lies outside its inclusive range."""

class YearDayError(FieldValueError):
    """year_day / non_leap_year_day does not fall on any month."""

class WeekdayError(RelDeltaError, ValueError):
    """Unknown weekday code or input shape."""
