"""Locale-aware pattern formatter backed by Babel's CLDR data."""

import logging
from datetime import datetime, tzinfo

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime

from ..utils.exceptions import DateFormatError
from .base import LocaleFormatter

logger = logging.getLogger(__name__)


class BabelFormatter(LocaleFormatter):
    """Formats with babel.dates.format_datetime."""

    def format(
        self,
        value: datetime,
        pattern: str,
        locale: str,
        timezone: tzinfo,
    ) -> str:
        try:
            babel_locale = Locale.parse(locale.replace("-", "_"))
            return format_datetime(
                value, format=pattern, locale=babel_locale, tzinfo=timezone
            )
        except (UnknownLocaleError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.debug(f"Formatting {value!r} with '{pattern}' ({locale}) failed: {e}")
            raise DateFormatError(
                f"Cannot format with pattern '{pattern}' for locale '{locale}'"
            ) from e
