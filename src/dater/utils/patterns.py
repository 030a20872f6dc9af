"""Rendering of 'd.m.Y H:i' style date patterns.

Each letter of the pattern stands for one field; a backslash escapes the
next character and anything else is copied verbatim.

    d  day of month, 2 digits         j  day of month
    D  weekday, 3 letters             l  weekday, full name
    N  ISO weekday (1 = Monday)       w  weekday (0 = Sunday)
    S  English ordinal suffix         z  day of year (from 0)
    W  ISO week number, 2 digits      o  ISO week-numbering year
    F  month, full name               M  month, 3 letters
    m  month, 2 digits                n  month
    t  days in month                  L  1 if leap year, else 0
    Y  year, at least 4 digits        y  year, 2 digits
    a  am/pm                          A  AM/PM
    g  12-hour                        G  24-hour
    h  12-hour, 2 digits              H  24-hour, 2 digits
    i  minutes, 2 digits              s  seconds, 2 digits
    u  microseconds, 6 digits         v  milliseconds, 3 digits
    e  timezone identifier            T  timezone abbreviation
    I  1 if daylight saving time      Z  UTC offset in seconds
    O  UTC offset (+0200)             P  UTC offset (+02:00)
    p  like P, but Z for UTC          U  Unix timestamp
    c  ISO 8601 date                  r  RFC 2822 date
"""

import calendar
from datetime import datetime, timedelta
from typing import Callable

from .date_utils import timezone_name
from .names import MONTH_NAMES, WEEKDAY_NAMES


def _offset(dt: datetime) -> timedelta:
    return dt.utcoffset() or timedelta()


def _offset_string(dt: datetime, separator: str) -> str:
    seconds = int(_offset(dt).total_seconds())
    sign = "-" if seconds < 0 else "+"
    hours, minutes = divmod(abs(seconds) // 60, 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _suffix(day: int) -> str:
    if 11 <= day <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _twelve_hour(dt: datetime) -> int:
    return dt.hour % 12 or 12


_FIELDS: dict[str, Callable[[datetime], str]] = {
    "d": lambda dt: f"{dt.day:02d}",
    "D": lambda dt: WEEKDAY_NAMES[dt.weekday()][:3],
    "j": lambda dt: str(dt.day),
    "l": lambda dt: WEEKDAY_NAMES[dt.weekday()],
    "N": lambda dt: str(dt.isoweekday()),
    "S": lambda dt: _suffix(dt.day),
    "w": lambda dt: str(dt.isoweekday() % 7),
    "z": lambda dt: str(dt.timetuple().tm_yday - 1),
    "W": lambda dt: f"{dt.isocalendar()[1]:02d}",
    "o": lambda dt: str(dt.isocalendar()[0]),
    "F": lambda dt: MONTH_NAMES[dt.month - 1],
    "M": lambda dt: MONTH_NAMES[dt.month - 1][:3],
    "m": lambda dt: f"{dt.month:02d}",
    "n": lambda dt: str(dt.month),
    "t": lambda dt: str(calendar.monthrange(dt.year, dt.month)[1]),
    "L": lambda dt: "1" if calendar.isleap(dt.year) else "0",
    "Y": lambda dt: f"{dt.year:04d}",
    "y": lambda dt: f"{dt.year % 100:02d}",
    "a": lambda dt: "am" if dt.hour < 12 else "pm",
    "A": lambda dt: "AM" if dt.hour < 12 else "PM",
    "g": lambda dt: str(_twelve_hour(dt)),
    "G": lambda dt: str(dt.hour),
    "h": lambda dt: f"{_twelve_hour(dt):02d}",
    "H": lambda dt: f"{dt.hour:02d}",
    "i": lambda dt: f"{dt.minute:02d}",
    "s": lambda dt: f"{dt.second:02d}",
    "u": lambda dt: f"{dt.microsecond:06d}",
    "v": lambda dt: f"{dt.microsecond // 1000:03d}",
    "e": lambda dt: timezone_name(dt.tzinfo, dt),
    "T": lambda dt: dt.tzname() or "UTC",
    "I": lambda dt: "1" if dt.dst() else "0",
    "Z": lambda dt: str(int(_offset(dt).total_seconds())),
    "O": lambda dt: _offset_string(dt, ""),
    "P": lambda dt: _offset_string(dt, ":"),
    "p": lambda dt: "Z" if not _offset(dt) else _offset_string(dt, ":"),
    "U": lambda dt: str(int(dt.timestamp())),
}

_FIELDS["c"] = lambda dt: format_datetime(dt, "Y-m-d\\TH:i:sP")
_FIELDS["r"] = lambda dt: format_datetime(dt, "D, d M Y H:i:s O")


def format_datetime(dt: datetime, pattern: str) -> str:
    """
    Render dt with a 'd.m.Y H:i' style pattern.

    Args:
        dt: The datetime to render
        pattern: Pattern such as 'Y-m-d H:i:s'

    Returns:
        The rendered string
    """
    parts = []
    escaped = False
    for char in pattern:
        if escaped:
            parts.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _FIELDS:
            parts.append(_FIELDS[char](dt))
        else:
            parts.append(char)
    return "".join(parts)
