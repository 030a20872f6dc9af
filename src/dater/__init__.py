"""Locale-aware date formatting, lenient parsing and calendar math."""

from .formatter import DateFormatter
from .models.base import DaterInterface
from .models.config import FormatterConfig
from .models.dater import Dater, DaterMutable

__version__ = "0.1.0"

__all__ = [
    "DateFormatter",
    "Dater",
    "DaterInterface",
    "DaterMutable",
    "FormatterConfig",
]
