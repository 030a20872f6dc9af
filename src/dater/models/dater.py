"""Immutable and mutable point-in-time values."""

from datetime import datetime, tzinfo
from typing import Union

from ..utils.date_utils import apply_relative, replace_date, shift_days, shift_minutes
from .base import DateInput, DaterInterface, build_point


class Dater(DaterInterface):
    """
    Immutable point in time.

    Every operation returns a new Dater and leaves the receiver untouched:

        >>> d = Dater("2021-05-23 13:20:34", "Europe/Berlin")
        >>> d.add_minutes(10).format("H:i")
        '13:30'
        >>> d.format("H:i")
        '13:20'
    """

    __slots__ = ("_dt",)

    def __init__(
        self,
        value: DateInput = "now",
        timezone: Union[str, tzinfo, None] = None,
    ):
        """
        Initialize a Dater.

        Args:
            value: Date string, timestamp, datetime, date or point in time
            timezone: Zone name or tzinfo for values without their own zone

        Raises:
            TimezoneError: If the timezone cannot be resolved
            DateParseError: If the value cannot be parsed
        """
        self._dt = build_point(value, timezone)

    @classmethod
    def from_datetime(cls, value: datetime) -> "Dater":
        """Wrap an aware datetime without parsing."""
        new = cls.__new__(cls)
        new._dt = value
        return new

    def to_datetime(self) -> datetime:
        return self._dt

    def add_minutes(self, minutes: int) -> "Dater":
        return self.from_datetime(shift_minutes(self._dt, minutes))

    def sub_minutes(self, minutes: int) -> "Dater":
        return self.from_datetime(shift_minutes(self._dt, -minutes))

    def add_days(self, days: int) -> "Dater":
        return self.from_datetime(shift_days(self._dt, days))

    def sub_days(self, days: int) -> "Dater":
        return self.from_datetime(shift_days(self._dt, -days))

    def set_date(self, year: int, month: int, day: int) -> "Dater":
        return self.from_datetime(replace_date(self._dt, year, month, day))

    def modify(self, expression: str) -> "Dater":
        return self.from_datetime(apply_relative(self._dt, expression))

    def to_mutable(self) -> "DaterMutable":
        return DaterMutable.from_datetime(self._dt)

    def to_immutable(self) -> "Dater":
        return self.from_datetime(self._dt)

    def __hash__(self) -> int:
        return hash(self._dt)


class DaterMutable(DaterInterface):
    """
    Mutable point in time.

    Operations change the receiver and return it for chaining. Instances
    must not be shared between threads without external locking.
    """

    __slots__ = ("_dt",)

    __hash__ = None

    def __init__(
        self,
        value: DateInput = "now",
        timezone: Union[str, tzinfo, None] = None,
    ):
        """
        Initialize a DaterMutable.

        Args:
            value: Date string, timestamp, datetime, date or point in time
            timezone: Zone name or tzinfo for values without their own zone

        Raises:
            TimezoneError: If the timezone cannot be resolved
            DateParseError: If the value cannot be parsed
        """
        self._dt = build_point(value, timezone)

    @classmethod
    def from_datetime(cls, value: datetime) -> "DaterMutable":
        """Wrap an aware datetime without parsing."""
        new = cls.__new__(cls)
        new._dt = value
        return new

    def to_datetime(self) -> datetime:
        return self._dt

    def add_minutes(self, minutes: int) -> "DaterMutable":
        self._dt = shift_minutes(self._dt, minutes)
        return self

    def sub_minutes(self, minutes: int) -> "DaterMutable":
        self._dt = shift_minutes(self._dt, -minutes)
        return self

    def add_days(self, days: int) -> "DaterMutable":
        self._dt = shift_days(self._dt, days)
        return self

    def sub_days(self, days: int) -> "DaterMutable":
        self._dt = shift_days(self._dt, -days)
        return self

    def set_date(self, year: int, month: int, day: int) -> "DaterMutable":
        self._dt = replace_date(self._dt, year, month, day)
        return self

    def modify(self, expression: str) -> "DaterMutable":
        self._dt = apply_relative(self._dt, expression)
        return self

    def to_mutable(self) -> "DaterMutable":
        return self.from_datetime(self._dt)

    def to_immutable(self) -> Dater:
        return Dater.from_datetime(self._dt)
