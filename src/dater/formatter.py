"""Locale-aware date formatting, lenient coercion and calendar math."""

import copy
import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING, Any, Optional, Union

from dateutil.relativedelta import relativedelta

from .formatters.babel_formatter import BabelFormatter
from .formatters.base import LocaleFormatter
from .models.base import DaterInterface
from .models.config import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATE_TIME_FORMAT,
    DEFAULT_LOCALE,
    FormatterConfig,
)
from .models.dater import Dater, DaterMutable
from .utils.date_utils import (
    FALLBACK_TIMEZONE,
    default_timezone_name,
    end_of_year,
    ensure_aware,
    from_timestamp,
    localize,
    parse_datetime,
    replace_date,
    resolve_timezone,
    start_of_year,
)
from .utils.exceptions import DateFormatError, DateParseError, TimezoneError
from .utils.names import month_number_from_name, month_number_string, weekday_number
from .utils.patterns import format_datetime

if TYPE_CHECKING:
    from .config import DaterSettings

logger = logging.getLogger(__name__)

MONTH_PATTERNS = ("M", "MM", "MMM", "MMMM")
WEEKDAY_PATTERNS = ("E", "EE", "EEE", "EEEE", "EEEEE")

# A Sunday; weekday N is rendered from this date plus N days
REFERENCE_SUNDAY = date(1970, 1, 4)


def _whole_number(value: Any) -> Optional[int]:
    """Return value as an int if it is an integral number or numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    return value if isinstance(value, int) else None


class DateFormatter:
    """
    Formats, parses and compares dates for one locale and timezone.

    The formatter is immutable: every ``with_*`` method returns a new
    formatter and leaves the original untouched. No method raises on bad
    input; unparseable values fall back to "now" (or None where asked
    for), unknown timezones fall back to the configured zone and failed
    formatting falls back to the current time.
    """

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        date_format: str = DEFAULT_DATE_FORMAT,
        date_time_format: str = DEFAULT_DATE_TIME_FORMAT,
        timezone: Union[str, tzinfo, None] = None,
        mutable: bool = False,
        locale_formatter: Optional[LocaleFormatter] = None,
    ):
        """
        Initialize a DateFormatter.

        Args:
            locale: Default locale such as 'de_DE' or 'de-DE'
            date_format: Default ICU date pattern such as 'EEEE, dd. MMMM yyyy'
            date_time_format: Default ICU date time pattern
            timezone: Zone name or tzinfo (None uses the host default)
            mutable: If True, to_dater() and now() return DaterMutable
            locale_formatter: Pattern formatter (defaults to BabelFormatter)
        """
        timezone = timezone or default_timezone_name()
        try:
            resolved = resolve_timezone(timezone)
        except TimezoneError:
            logger.warning(f"Unknown timezone '{timezone}', using {FALLBACK_TIMEZONE}")
            resolved = resolve_timezone(FALLBACK_TIMEZONE)

        self._config = FormatterConfig(
            locale=locale,
            date_format=date_format,
            date_time_format=date_time_format,
            timezone=resolved,
            mutable=mutable,
        )
        self._locale_formatter = locale_formatter or BabelFormatter()

    @classmethod
    def from_settings(
        cls,
        settings: Optional["DaterSettings"] = None,
        profile: Optional[str] = None,
        locale_formatter: Optional[LocaleFormatter] = None,
    ) -> "DateFormatter":
        """
        Create a formatter from environment settings and a named profile.

        Args:
            settings: Settings to use (defaults to the module-level settings)
            profile: Profile name from the profiles file (defaults to the
                file's 'default' entry, if any)
            locale_formatter: Pattern formatter (defaults to BabelFormatter)

        Returns:
            Configured DateFormatter

        Raises:
            ConfigurationError: If the profile does not exist
        """
        from .config import FormatterProfiles
        from .config import settings as default_settings

        settings = settings or default_settings
        options: dict[str, Any] = {
            "locale": settings.locale,
            "date_format": settings.date_format,
            "date_time_format": settings.date_time_format,
            "timezone": settings.timezone,
            "mutable": settings.mutable,
        }

        profiles = FormatterProfiles(settings.profiles_file)
        if not profiles.has_config:
            logger.debug(f"No formatter profiles in {settings.profiles_file}")
        name = profile or profiles.default
        if name:
            options.update(profiles.get(name).overrides())
            logger.debug(f"Using formatter profile '{name}'")

        return cls(**options, locale_formatter=locale_formatter)

    @property
    def config(self) -> FormatterConfig:
        return self._config

    def _with(self, **changes: Any) -> "DateFormatter":
        new = copy.copy(self)
        new._config = self._config.model_copy(update=changes)
        return new

    def with_locale(self, locale: str) -> "DateFormatter":
        """Return a formatter using locale ('de_DE' or 'de-DE')."""
        return self._with(locale=locale)

    def get_locale(self, delimiter: str = "_") -> str:
        """
        Get the locale such as 'de_DE'.

        Args:
            delimiter: Separator to use, such as '_' or '-'

        Returns:
            The locale with its separator replaced by delimiter
        """
        return self._config.locale.replace("_", delimiter).replace("-", delimiter)

    def with_date_format(self, pattern: str) -> "DateFormatter":
        """Return a formatter using pattern such as 'EEEE, dd. MMMM yyyy'."""
        return self._with(date_format=pattern)

    def get_date_format(self) -> str:
        return self._config.date_format

    def with_date_time_format(self, pattern: str) -> "DateFormatter":
        """Return a formatter using pattern such as 'EEEE, dd. MMMM yyyy, HH:mm'."""
        return self._with(date_time_format=pattern)

    def get_date_time_format(self) -> str:
        return self._config.date_time_format

    def with_timezone(self, timezone: Union[str, tzinfo]) -> "DateFormatter":
        """Return a formatter using timezone; unknown names keep the current zone."""
        return self._with(timezone=self.get_timezone(timezone))

    def get_timezone(self, timezone: Union[str, tzinfo, None] = None) -> tzinfo:
        """
        Resolve a timezone.

        Args:
            timezone: Zone name such as 'Europe/Berlin', or None for the
                configured zone

        Returns:
            The resolved zone, or the configured zone if it is unknown
        """
        if timezone is None:
            return self._config.timezone
        try:
            return resolve_timezone(timezone)
        except TimezoneError:
            logger.debug(f"Unknown timezone '{timezone}', keeping {self._config.timezone}")
            return self._config.timezone

    def with_mutable(self, mutable: bool = True) -> "DateFormatter":
        """Return a formatter producing mutable (or immutable) points in time."""
        return self._with(mutable=mutable)

    def date(
        self,
        value: Any,
        pattern: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        """
        Format a date for humans.

        Args:
            value: Anything to_datetime() accepts
            pattern: ICU pattern (None uses the default date format)
            locale: Locale such as 'de_DE' (None uses the default locale)

        Returns:
            The formatted date, such as 'Friday, 16. April 2021'
        """
        return self._format_localized(value, pattern or self._config.date_format, locale)

    def date_time(
        self,
        value: Any,
        pattern: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        """
        Format a date and time for humans.

        Args:
            value: Anything to_datetime() accepts
            pattern: ICU pattern (None uses the default date time format)
            locale: Locale such as 'de_DE' (None uses the default locale)

        Returns:
            The formatted date time, such as 'Friday, 16. April 2021, 00:00'
        """
        return self._format_localized(
            value, pattern or self._config.date_time_format, locale
        )

    def to_datetime(
        self,
        value: Any,
        timezone: Optional[str] = None,
        fallback: Optional[str] = "now",
        value_format: Optional[str] = None,
    ) -> Optional[datetime]:
        """
        Convert a value to an aware datetime.

        Points in time and aware datetimes are returned with their own zone
        and are not validated. Numbers are Unix timestamps; other non-string
        values count as 'now'.

        Args:
            value: Date string, timestamp, date, datetime or point in time
            timezone: Zone to parse in (unknown or None uses the default)
            fallback: Parsed instead when value is invalid; None returns None
            value_format: Pattern such as 'Y-m-d' the value must render back
                to exactly, since '2021-02-30' would become '2021-03-02'

        Returns:
            The datetime, or None if invalid and no fallback is given
        """
        if isinstance(value, DaterInterface):
            return value.to_datetime()
        if isinstance(value, datetime) and value.tzinfo is not None:
            return value

        tz = self.get_timezone(timezone)
        if isinstance(value, (datetime, date)):
            return ensure_aware(value, tz)

        parsed = self._parse(value, tz, value_format)
        if parsed is not None:
            return parsed
        if fallback is None:
            return None
        return self._parse_fallback(fallback, tz)

    def to_dater(
        self,
        value: Any,
        timezone: Optional[str] = None,
        fallback: Optional[str] = "now",
        value_format: Optional[str] = None,
    ) -> Optional[DaterInterface]:
        """
        Convert a value to a Dater, or a DaterMutable if configured mutable.

        Takes the same arguments as to_datetime(). Points in time passed in
        are copied into a new value of the configured kind.

        Returns:
            The point in time, or None if invalid and no fallback is given
        """
        dt = self.to_datetime(value, timezone, fallback, value_format)
        if dt is None:
            return None
        return self._wrap(dt)

    def now(self, timezone: Optional[str] = None) -> DaterInterface:
        """Current time in timezone (None uses the default)."""
        return self._wrap(datetime.now(self.get_timezone(timezone)))

    def format(self, value: Any, pattern: str = "d.m.Y H:i") -> str:
        """
        Format a value with a 'd.m.Y H:i' style pattern.

        Invalid values are formatted as the current time.
        """
        return format_datetime(self.to_datetime(value), pattern)

    def in_past(
        self,
        date: Any,
        current_date: Any = "now",
        same_time_is_past: bool = False,
    ) -> bool:
        """
        Check whether date lies before current_date.

        Args:
            date: The date to check
            current_date: Reference date
            same_time_is_past: If True, the exact same instant counts as past

        Returns:
            True if date is in the past
        """
        checked = self.to_datetime(date)
        current = self.to_datetime(current_date)
        if same_time_is_past:
            return checked <= current
        return checked < current

    def in_between(
        self,
        date_from: Any,
        date_to: Any,
        current_date: Any = "now",
        yearly: bool = False,
    ) -> bool:
        """
        Check whether current_date lies within date_from and date_to.

        Both ends are inclusive. With yearly, only month, day and time of
        the range count: it is moved onto current_date's year, and a range
        ending in a later year than it starts (20.12. - 05.01.) matches both
        its end of the year and its start of the year.

        Args:
            date_from: Start of the range
            date_to: End of the range
            current_date: The date to check
            yearly: If the range recurs every year

        Returns:
            True if current_date is in the range
        """
        current = self.to_datetime(current_date)

        if yearly:
            start = self.to_datetime(date_from)
            end = self.to_datetime(date_to)
            crosses_year = end.year - start.year != 0
            date_from = self.to_current_year(start, current)
            date_to = self.to_current_year(end, current)

            if crosses_year:
                return self.in_between(
                    date_from, end_of_year(current), current
                ) or self.in_between(start_of_year(current), date_to, current)

        if not self.in_past(date_from, current, same_time_is_past=True):
            return False
        if self.in_past(date_to, current):
            return False
        return True

    def diff(self, date: Any, current_date: Any = "now") -> relativedelta:
        """
        Difference between current_date and date.

        Returns:
            relativedelta of ``date - current_date``; empty if it cannot be
            computed
        """
        try:
            current = Dater.from_datetime(self.to_datetime(current_date))
            return current.diff(self.to_datetime(date))
        except (TypeError, ValueError, OverflowError) as e:
            logger.warning(f"Cannot compute difference to {date!r}: {e}")
            return relativedelta()

    def to_current_year(self, date: Any, current_date: Any = "now") -> DaterInterface:
        """
        Move date into the year of current_date.

        Month, day and time of day are kept. February 29th moved into a
        year without one becomes March 1st.
        """
        moved = self.to_datetime(date)
        year = self.to_datetime(current_date).year
        return self._wrap(replace_date(moved, year, moved.month, moved.day))

    def to_month(
        self,
        number: Any,
        pattern: str = "MMMM",
        locale: Optional[str] = None,
    ) -> Optional[str]:
        """
        Convert a month number to its localized name.

        Args:
            number: Month number such as 1, '01', 5.0 or '5.0'; fractional
                values such as 5.5 are rejected
            pattern: 'M' = '1', 'MM' = '01', 'MMM' = 'Jan', 'MMMM' = 'January'
            locale: Locale such as 'de_DE' (None uses the default locale)

        Returns:
            The month name, or None if number is not a month
        """
        number = _whole_number(number)
        if number is None or not 1 <= number <= 12:
            return None
        if pattern not in MONTH_PATTERNS:
            pattern = "MMMM"

        value = localize(datetime(2000, number, 1), self._config.timezone)
        name = self._render(value, pattern, locale)
        if name is None:
            return None
        return name.rstrip(".") if pattern == "MMM" else name

    def to_month_number(self, month: Any) -> Optional[int]:
        """Convert a month name such as 'Feb' or 'february' to 1-12."""
        return month_number_from_name(month)

    def to_month_number_string(self, month: Any) -> Optional[str]:
        """Convert a month name such as 'Feb' to '01'-'12'."""
        return month_number_string(month)

    def to_weekday(
        self,
        number: Any,
        pattern: str = "EEEE",
        locale: Optional[str] = None,
    ) -> Optional[str]:
        """
        Convert a weekday number to its localized name.

        Args:
            number: Day of week 0-7 (Sunday is 0 and 7)
            pattern: 'E', 'EE' or 'EEE' = 'Tue', 'EEEE' = 'Tuesday', 'EEEEE' = 'T'
            locale: Locale such as 'de_DE' (None uses the default locale)

        Returns:
            The weekday name, or None if number is not a weekday
        """
        if isinstance(number, bool) or not isinstance(number, int):
            return None
        if not 0 <= number <= 7:
            return None
        if pattern not in WEEKDAY_PATTERNS:
            pattern = "EEEE"

        day = REFERENCE_SUNDAY + timedelta(days=number)
        value = localize(datetime.combine(day, time()), self._config.timezone)
        name = self._render(value, pattern, locale)
        return None if name is None else name.rstrip(".")

    def to_weekday_number(self, weekday: Any) -> Optional[int]:
        """Convert a weekday name ('Tue', 'tuesday', 'TU') or number 0-7 to its number."""
        return weekday_number(weekday)

    def _wrap(self, dt: datetime) -> DaterInterface:
        if self._config.mutable:
            return DaterMutable.from_datetime(dt)
        return Dater.from_datetime(dt)

    def _parse(
        self,
        value: Any,
        tz: tzinfo,
        value_format: Optional[str],
    ) -> Optional[datetime]:
        try:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                text = str(value)
                dt = from_timestamp(value, tz)
            else:
                text = value if isinstance(value, str) else "now"
                dt = parse_datetime(text, tz)
        except DateParseError as e:
            logger.debug(f"Cannot parse {value!r}: {e}")
            return None

        if value_format is not None and format_datetime(dt, value_format) != text:
            logger.debug(f"{text!r} does not match value format '{value_format}'")
            return None
        return dt

    def _parse_fallback(self, fallback: str, tz: tzinfo) -> datetime:
        try:
            return parse_datetime(fallback, tz)
        except DateParseError as e:
            logger.warning(f"Cannot parse fallback {fallback!r}, using now: {e}")
            return datetime.now(tz)

    def _render(
        self,
        value: datetime,
        pattern: str,
        locale: Optional[str],
    ) -> Optional[str]:
        try:
            return self._locale_formatter.format(
                value, pattern, locale or self.get_locale(), self._config.timezone
            )
        except DateFormatError as e:
            logger.debug(f"Cannot render '{pattern}': {e}")
            return None

    def _format_localized(
        self,
        value: Any,
        pattern: str,
        locale: Optional[str],
    ) -> str:
        rendered = self._render(self.to_datetime(value), pattern, locale)
        if rendered is not None:
            return rendered

        now = datetime.now(self._config.timezone)
        rendered = self._render(now, pattern, locale)
        if rendered is not None:
            return rendered

        logger.warning(f"Cannot format with '{pattern}' for locale '{locale}'")
        return now.isoformat()
