"""
Argument validation for calendar operations.
"""


class InvalidArgument(ValueError):
    """Raised when a caller passes an argument outside its valid range."""


def _is_int(value) -> bool:
    # bool is an int subclass but never a valid year or month
    return isinstance(value, int) and not isinstance(value, bool)


def validate_year_month(year: int, month: int) -> None:
    """
    Check a (year, zero-based month) pair.

    Any integer year is accepted (proleptic Gregorian calendar); the month
    must be in 0..11. Values are never wrapped into range.

    Raises:
        InvalidArgument: if year is not an int or month is outside 0..11
    """
    if not _is_int(year):
        raise InvalidArgument(f"Year must be an integer, got {year!r}")
    if not _is_int(month) or not 0 <= month <= 11:
        raise InvalidArgument(f"Month must be an integer in 0..11, got {month!r}")


def validate_limit(limit: int) -> None:
    """Check a result-count limit is a non-negative integer."""
    if not _is_int(limit) or limit < 0:
        raise InvalidArgument(f"Limit must be a non-negative integer, got {limit!r}")
