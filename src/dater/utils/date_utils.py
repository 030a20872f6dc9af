"""Date and time utilities: timezone resolution, lenient parsing and calendar math."""

import os
import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Union

import pytz
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from .exceptions import DateParseError, TimezoneError
from .names import is_month_word

FALLBACK_TIMEZONE = "Europe/Berlin"

_TIME = r"(?:[ T](?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,6}))?)?)?"

_DATE_PATTERNS = [
    re.compile(r"(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})" + _TIME),
    re.compile(r"(?P<year>\d{4})/(?P<month>\d{1,2})/(?P<day>\d{1,2})" + _TIME),
    re.compile(r"(?P<day>\d{1,2})\.(?P<month>\d{1,2})\.(?P<year>\d{4})" + _TIME),
    re.compile(r"(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4})" + _TIME),
]

_TIME_ONLY = re.compile(
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,6}))?)?"
)

_TIMESTAMP = re.compile(r"@(?P<signed>-?\d+)|(?P<bare>\d{9,})")

_RELATIVE = re.compile(
    r"(?P<sign>[+-])\s*(?P<amount>\d+)\s*"
    r"(?P<unit>seconds?|secs?|minutes?|mins?|hours?|days?|weeks?|months?|years?)\b",
    re.IGNORECASE,
)

_UNITS = {
    "sec": "seconds",
    "second": "seconds",
    "min": "minutes",
    "minute": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}


def default_timezone_name() -> str:
    """Return the host's default timezone name (``TZ`` or UTC)."""
    return os.environ.get("TZ") or "UTC"


def resolve_timezone(timezone: Union[str, tzinfo]) -> tzinfo:
    """
    Resolve a timezone identifier.

    Args:
        timezone: Name such as 'Europe/Berlin', or a tzinfo returned as is

    Returns:
        Resolved tzinfo

    Raises:
        TimezoneError: If the identifier is unknown
    """
    if isinstance(timezone, tzinfo):
        return timezone
    if not isinstance(timezone, str) or not timezone:
        raise TimezoneError(f"Invalid timezone: {timezone!r}")
    try:
        return pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError as e:
        raise TimezoneError(f"Unknown timezone: {timezone}") from e


def timezone_name(tz: Optional[tzinfo], dt: Optional[datetime] = None) -> str:
    """Return the identifier of a timezone such as 'Europe/Berlin'."""
    if tz is None:
        return "UTC"
    zone = getattr(tz, "zone", None)
    if zone:
        return zone
    return tz.tzname(dt) or "UTC"


def zone_of(dt: datetime) -> tzinfo:
    """Return the zone a datetime belongs to (not just its current offset)."""
    tz = dt.tzinfo
    zone = getattr(tz, "zone", None)
    if zone:
        return pytz.timezone(zone)
    return tz if tz is not None else pytz.utc


def localize(naive: datetime, tz: tzinfo) -> datetime:
    """
    Attach a timezone to a naive datetime.

    Args:
        naive: Wall-clock datetime without tzinfo
        tz: Timezone (pytz zones are localized, others attached)

    Returns:
        Timezone-aware datetime
    """
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def normalize(dt: datetime) -> datetime:
    """Fix the UTC offset of a pytz datetime after arithmetic."""
    tz = dt.tzinfo
    if hasattr(tz, "normalize"):
        return tz.normalize(dt)
    return dt


def ensure_aware(value: Union[datetime, date], tz: tzinfo) -> datetime:
    """
    Turn a date or (naive) datetime into an aware datetime.

    Aware datetimes keep their own zone.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return localize(value, tz)
        return value
    return localize(datetime.combine(value, time()), tz)


def build_datetime(
    year: int,
    month: int,
    day: int,
    at: time,
    tz: tzinfo,
) -> datetime:
    """
    Build an aware datetime, rolling overflowing fields forward.

    Months outside 1-12 move the year, days past the end of the month (or
    below 1) move the month, so 2021-02-30 becomes 2021-03-02.

    Raises:
        DateParseError: If the result is outside the supported range
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        naive = datetime.combine(
            date(year, month, 1) + timedelta(days=day - 1), at
        )
    except (ValueError, OverflowError) as e:
        raise DateParseError(f"Date out of range: {year}-{month}-{day}") from e
    return localize(naive, tz)


def replace_date(dt: datetime, year: int, month: int, day: int) -> datetime:
    """Replace the calendar date of dt, keeping time of day and zone."""
    return build_datetime(year, month, day, dt.time(), zone_of(dt))


def shift_minutes(dt: datetime, minutes: int) -> datetime:
    """Move the absolute instant by a number of minutes."""
    return normalize(dt + timedelta(minutes=minutes))


def shift_days(dt: datetime, days: int) -> datetime:
    """Move the wall-clock date by a number of days, keeping the local time."""
    return localize(dt.replace(tzinfo=None) + timedelta(days=days), zone_of(dt))


def apply_relative(dt: datetime, expression: str) -> datetime:
    """
    Apply relative offsets such as '+1 day -2 hours' to dt.

    Calendar units (days, weeks, months, years) move the wall clock; time
    units move the absolute instant.

    Raises:
        DateParseError: If the expression contains anything else
    """
    offsets, rest = _split_relative(expression)
    if rest:
        raise DateParseError(f"Invalid relative expression: {expression!r}")
    return _apply_offsets(dt, offsets)


def start_of_year(dt: datetime) -> datetime:
    """January 1st, 00:00 of dt's year in dt's zone."""
    return localize(datetime(dt.year, 1, 1), zone_of(dt))


def end_of_year(dt: datetime) -> datetime:
    """December 31st, 23:59 of dt's year in dt's zone."""
    return localize(datetime(dt.year, 12, 31, 23, 59), zone_of(dt))


def from_timestamp(timestamp: Union[int, float], tz: tzinfo) -> datetime:
    """
    Convert a Unix timestamp to an aware datetime in tz.

    Raises:
        DateParseError: If the timestamp is out of range
    """
    try:
        return datetime.fromtimestamp(timestamp, tz)
    except (ValueError, OverflowError, OSError) as e:
        raise DateParseError(f"Invalid timestamp: {timestamp}") from e


def parse_datetime(text: str, tz: tzinfo, now: Optional[datetime] = None) -> datetime:
    """
    Parse a date string leniently.

    Understands keywords ('now', 'today', 'tomorrow', ...), Unix timestamps
    ('@1708708399' or 9+ digits), 'Y-m-d', 'Y/m/d', 'd.m.Y' and 'm/d/Y'
    with an optional time, ISO 8601 and free text naming a month, each
    optionally followed by relative offsets ('+2 days').

    Args:
        text: The string to parse
        tz: Zone for values that do not carry their own offset
        now: Reference instant for keywords and relative values

    Returns:
        Timezone-aware datetime

    Raises:
        DateParseError: If the string cannot be parsed
    """
    if now is None:
        now = datetime.now(tz)
    try:
        offsets, base = _split_relative(text.strip())
        dt = _parse_base(base, tz, now)
    except (ValueError, OverflowError) as e:
        # int() refuses timestamps past the interpreter's digit limit
        raise DateParseError(f"Unparseable date: {text[:40]!r}") from e
    return _apply_offsets(dt, offsets)


def _split_relative(text: str) -> tuple[list[tuple[str, int]], str]:
    offsets = []
    for match in _RELATIVE.finditer(text):
        unit = match.group("unit").lower().rstrip("s")
        try:
            amount = int(match.group("amount"))
        except ValueError as e:
            raise DateParseError(f"Relative offset out of range: {match.group(0)[:40]!r}") from e
        if match.group("sign") == "-":
            amount = -amount
        offsets.append((_UNITS[unit], amount))
    rest = _RELATIVE.sub(" ", text).strip()
    return offsets, rest


def _apply_offsets(dt: datetime, offsets: list[tuple[str, int]]) -> datetime:
    if not offsets:
        return dt
    try:
        calendar = relativedelta()
        clock = timedelta()
        for unit, amount in offsets:
            if unit in ("seconds", "minutes", "hours"):
                clock += timedelta(**{unit: amount})
            else:
                calendar += relativedelta(**{unit: amount})
        shifted = localize(dt.replace(tzinfo=None) + calendar, zone_of(dt))
        return normalize(shifted + clock)
    except (ValueError, OverflowError) as e:
        raise DateParseError(f"Relative offset out of range: {offsets}") from e


def _parse_base(text: str, tz: tzinfo, now: datetime) -> datetime:
    lowered = text.lower()
    if lowered in ("", "now"):
        return now
    midnight = datetime.combine(now.date(), time())
    keywords = {
        "today": midnight,
        "midnight": midnight,
        "noon": midnight.replace(hour=12),
        "tomorrow": midnight + timedelta(days=1),
        "yesterday": midnight - timedelta(days=1),
    }
    if lowered in keywords:
        return localize(keywords[lowered], zone_of(now))

    match = _TIMESTAMP.fullmatch(text)
    if match:
        return from_timestamp(int(match.group("signed") or match.group("bare")), tz)

    for pattern in _DATE_PATTERNS:
        match = pattern.fullmatch(text)
        if match:
            return _from_fields(match, tz)

    match = _TIME_ONLY.fullmatch(text)
    if match:
        at, extra_days = _time_from_fields(match)
        return build_datetime(now.year, now.month, now.day + extra_days, at, tz)

    try:
        return ensure_aware(date_parser.isoparse(text), tz)
    except (ValueError, OverflowError):
        pass

    if any(is_month_word(word) for word in text.split()):
        try:
            return ensure_aware(date_parser.parse(text, default=midnight), tz)
        except (ValueError, OverflowError) as e:
            raise DateParseError(f"Unparseable date: {text!r}") from e

    raise DateParseError(f"Unparseable date: {text!r}")


def _from_fields(match: re.Match, tz: tzinfo) -> datetime:
    month = int(match.group("month"))
    day = int(match.group("day"))
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise DateParseError(f"Invalid date: {match.group(0)!r}")
    at, extra_days = _time_from_fields(match) if match.group("hour") else (time(), 0)
    return build_datetime(int(match.group("year")), month, day + extra_days, at, tz)


def _time_from_fields(match: re.Match) -> tuple[time, int]:
    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    second = int(match.group("second") or 0)
    fraction = match.group("fraction") or ""
    microsecond = int(fraction.ljust(6, "0")) if fraction else 0
    # 24:00 is midnight of the following day
    if hour == 24 and minute == 0 and second == 0 and microsecond == 0:
        return time(), 1
    if hour > 23 or minute > 59 or second > 59:
        raise DateParseError(f"Invalid time: {match.group(0)!r}")
    return time(hour, minute, second, microsecond), 0
