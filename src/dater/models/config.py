"""Formatter configuration model."""

from datetime import tzinfo

import pytz
from pydantic import BaseModel, Field

from ..utils.date_utils import FALLBACK_TIMEZONE

DEFAULT_LOCALE = "en_US"
DEFAULT_DATE_FORMAT = "EEEE, dd. MMMM yyyy"
DEFAULT_DATE_TIME_FORMAT = "EEEE, dd. MMMM yyyy, HH:mm"


class FormatterConfig(BaseModel):
    """Settings a DateFormatter works with. Frozen; copy to change."""

    locale: str = DEFAULT_LOCALE  # 'de_DE' or 'de-DE', kept as given
    date_format: str = DEFAULT_DATE_FORMAT
    date_time_format: str = DEFAULT_DATE_TIME_FORMAT
    timezone: tzinfo = Field(default_factory=lambda: pytz.timezone(FALLBACK_TIMEZONE))
    mutable: bool = False

    model_config = {"frozen": True, "arbitrary_types_allowed": True}
