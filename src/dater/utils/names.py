"""Month and weekday name tables (English, case-insensitive)."""

from typing import Any, Optional

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

# Monday first, matching datetime.weekday()
WEEKDAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

_MONTHS: dict[str, int] = {}
for _number, _name in enumerate(MONTH_NAMES, start=1):
    _MONTHS[_name.lower()] = _number
    _MONTHS[_name[:3].lower()] = _number

_WEEKDAYS: dict[str, int] = {}
for _number, _name in enumerate(WEEKDAY_NAMES, start=1):
    _WEEKDAYS[_name.lower()] = _number
    _WEEKDAYS[_name[:3].lower()] = _number
    _WEEKDAYS[_name[:2].lower()] = _number


def month_number_from_name(name: Any) -> Optional[int]:
    """
    Convert a month name to its number.

    Args:
        name: Month such as 'Jan', 'January', 'JAN' or ' january '

    Returns:
        The number 1-12, or None if not a known month name
    """
    if not isinstance(name, str):
        return None
    return _MONTHS.get(name.strip().lower())


def month_number_string(name: Any) -> Optional[str]:
    """Convert a month name to its zero-padded number ('01' to '12')."""
    number = month_number_from_name(name)
    return None if number is None else f"{number:02d}"


def weekday_number_from_name(name: Any) -> Optional[int]:
    """
    Convert a weekday name to its number.

    Args:
        name: Weekday such as 'Tuesday', 'Tue' or 'Tu' (any case)

    Returns:
        The number 1 (Monday) to 7 (Sunday), or None if unknown
    """
    if not isinstance(name, str):
        return None
    return _WEEKDAYS.get(name.strip().lower())


def weekday_number(value: Any) -> Optional[int]:
    """
    Convert a weekday name or number to its number.

    Numeric input between 0 and 7 is returned as is. Both 0 and 7 denote
    Sunday; 7 is not folded into 0.

    Args:
        value: Weekday name, int or numeric string

    Returns:
        The weekday number, or None if not valid
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        return weekday_number_from_name(value)
    return number if 0 <= number <= 7 else None


def is_month_word(word: str) -> bool:
    """Return True if word is an English month name or abbreviation."""
    return word.strip(".,").lower() in _MONTHS
