"""Abstract base class for locale-aware pattern formatters."""

from abc import ABC, abstractmethod
from datetime import datetime, tzinfo


class LocaleFormatter(ABC):
    """Renders points in time with ICU calendar patterns for a locale."""

    @abstractmethod
    def format(
        self,
        value: datetime,
        pattern: str,
        locale: str,
        timezone: tzinfo,
    ) -> str:
        """
        Render a point in time.

        Args:
            value: Timezone-aware datetime to render
            pattern: ICU calendar pattern such as 'EEEE, dd. MMMM yyyy'
            locale: Locale identifier such as 'de_DE'
            timezone: Zone the value is shown in

        Returns:
            The human-readable string

        Raises:
            DateFormatError: If the pattern or locale cannot be used
        """
