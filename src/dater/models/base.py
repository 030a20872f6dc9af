"""Abstract base class for point-in-time values."""

from abc import ABC, abstractmethod
from datetime import date, datetime, tzinfo
from typing import Any, Optional, Union

from dateutil.relativedelta import relativedelta

from ..utils.date_utils import (
    default_timezone_name,
    ensure_aware,
    from_timestamp,
    parse_datetime,
    resolve_timezone,
    timezone_name,
    zone_of,
)
from ..utils.patterns import format_datetime

DateInput = Union[str, int, float, datetime, date, "DaterInterface", None]


def build_point(
    value: DateInput = "now",
    timezone: Union[str, tzinfo, None] = None,
) -> datetime:
    """
    Build the aware datetime a point-in-time value wraps.

    Args:
        value: Date string, timestamp, datetime, date or point in time (None means now)
        timezone: Zone name or tzinfo (None uses the host default)

    Returns:
        Timezone-aware datetime

    Raises:
        TimezoneError: If the timezone cannot be resolved
        DateParseError: If the string cannot be parsed
    """
    tz = resolve_timezone(timezone if timezone is not None else default_timezone_name())
    if isinstance(value, DaterInterface):
        return value.to_datetime()
    if isinstance(value, (datetime, date)):
        return ensure_aware(value, tz)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return from_timestamp(value, tz)
    return parse_datetime(value or "now", tz)


class DaterInterface(ABC):
    """
    A timezone-aware point in time with calendar arithmetic.

    Implementations wrap an aware datetime. Mutating operations either
    return a new value (Dater) or change the receiver (DaterMutable); both
    return the resulting value so calls can be chained.
    """

    __slots__ = ()

    @abstractmethod
    def to_datetime(self) -> datetime:
        """Return the wrapped aware datetime."""

    @abstractmethod
    def add_minutes(self, minutes: int) -> "DaterInterface":
        """Add minutes to the absolute instant."""

    @abstractmethod
    def sub_minutes(self, minutes: int) -> "DaterInterface":
        """Subtract minutes from the absolute instant."""

    @abstractmethod
    def add_days(self, days: int) -> "DaterInterface":
        """Add calendar days, keeping the local time of day."""

    @abstractmethod
    def sub_days(self, days: int) -> "DaterInterface":
        """Subtract calendar days, keeping the local time of day."""

    @abstractmethod
    def set_date(self, year: int, month: int, day: int) -> "DaterInterface":
        """Replace the calendar date; overflowing fields roll forward."""

    @abstractmethod
    def modify(self, expression: str) -> "DaterInterface":
        """Apply relative offsets such as '+1 week -2 hours'."""

    @abstractmethod
    def to_mutable(self) -> "DaterInterface":
        """Return a mutable snapshot of this value."""

    @abstractmethod
    def to_immutable(self) -> "DaterInterface":
        """Return an immutable snapshot of this value."""

    @property
    def year(self) -> int:
        return self.to_datetime().year

    @property
    def month(self) -> int:
        return self.to_datetime().month

    @property
    def day(self) -> int:
        return self.to_datetime().day

    @property
    def hour(self) -> int:
        return self.to_datetime().hour

    @property
    def minute(self) -> int:
        return self.to_datetime().minute

    @property
    def second(self) -> int:
        return self.to_datetime().second

    @property
    def weekday(self) -> int:
        """ISO weekday, 1 (Monday) to 7 (Sunday)."""
        return self.to_datetime().isoweekday()

    @property
    def timestamp(self) -> int:
        return int(self.to_datetime().timestamp())

    @property
    def timezone(self) -> Optional[tzinfo]:
        return self.to_datetime().tzinfo

    @property
    def timezone_name(self) -> str:
        dt = self.to_datetime()
        return timezone_name(dt.tzinfo, dt)

    def format(self, pattern: str) -> str:
        """Render with a 'd.m.Y H:i' style pattern."""
        return format_datetime(self.to_datetime(), pattern)

    def diff(self, other: Any) -> relativedelta:
        """
        Calendar difference from this value to other.

        Args:
            other: Point in time or aware datetime

        Returns:
            relativedelta of ``other - self`` in this value's zone
        """
        dt = self.to_datetime()
        target = _as_datetime(other)
        if target is None:
            raise TypeError(f"Cannot diff with {type(other).__name__}")
        return relativedelta(target.astimezone(zone_of(dt)), dt)

    def isoformat(self) -> str:
        return self.to_datetime().isoformat()

    def __eq__(self, other: Any) -> bool:
        target = _as_datetime(other)
        if target is None:
            return NotImplemented
        return self.to_datetime() == target

    def __lt__(self, other: Any) -> bool:
        target = _as_datetime(other)
        if target is None:
            return NotImplemented
        return self.to_datetime() < target

    def __le__(self, other: Any) -> bool:
        target = _as_datetime(other)
        if target is None:
            return NotImplemented
        return self.to_datetime() <= target

    def __gt__(self, other: Any) -> bool:
        target = _as_datetime(other)
        if target is None:
            return NotImplemented
        return self.to_datetime() > target

    def __ge__(self, other: Any) -> bool:
        target = _as_datetime(other)
        if target is None:
            return NotImplemented
        return self.to_datetime() >= target

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.isoformat()}', '{self.timezone_name}')"


def _as_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, DaterInterface):
        return value.to_datetime()
    if isinstance(value, datetime):
        return value
    return None
