"""Configuration management for the dater library."""

from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.config import DEFAULT_DATE_FORMAT, DEFAULT_DATE_TIME_FORMAT, DEFAULT_LOCALE
from .utils.exceptions import ConfigurationError

load_dotenv()


class DaterSettings(BaseSettings):
    """Formatter defaults and logging, read from the environment."""

    locale: str = Field(default=DEFAULT_LOCALE, validation_alias="DATER_LOCALE")
    date_format: str = Field(
        default=DEFAULT_DATE_FORMAT, validation_alias="DATER_DATE_FORMAT"
    )
    date_time_format: str = Field(
        default=DEFAULT_DATE_TIME_FORMAT, validation_alias="DATER_DATE_TIME_FORMAT"
    )
    # None uses the host default (TZ)
    timezone: Optional[str] = Field(default=None, validation_alias="DATER_TIMEZONE")
    mutable: bool = Field(default=False, validation_alias="DATER_MUTABLE")

    # Named formatter profiles
    profiles_file: Path = Field(
        default=Path("dater_config.yaml"), validation_alias="DATER_PROFILES_FILE"
    )

    # Logging
    log_level: str = Field(default="WARNING", validation_alias="LOG_LEVEL")
    log_file: Optional[Path] = Field(default=None, validation_alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_parse_none_str="",  # Treat empty string as None
    )


class ProfileConfig:
    """Formatter overrides for a single named profile."""

    FIELDS = ("locale", "date_format", "date_time_format", "timezone", "mutable")

    def __init__(self, name: str, data: dict[str, Any]):
        self.name = name
        self.locale: Optional[str] = data.get("locale")
        self.date_format: Optional[str] = data.get("date_format")
        self.date_time_format: Optional[str] = data.get("date_time_format")
        self.timezone: Optional[str] = data.get("timezone")
        self.mutable: Optional[bool] = data.get("mutable")

        unknown = set(data) - set(self.FIELDS)
        if unknown:
            raise ConfigurationError(
                f"Profile '{name}' has unknown keys: {', '.join(sorted(unknown))}"
            )

    def overrides(self) -> dict[str, Any]:
        """Return the options this profile sets."""
        return {
            field: getattr(self, field)
            for field in self.FIELDS
            if getattr(self, field) is not None
        }


class FormatterProfiles:
    """
    Named formatter profiles loaded from YAML.

    Example file::

        default: swiss
        profiles:
          swiss:
            locale: de_CH
            timezone: Europe/Zurich
          us:
            locale: en_US
            date_format: "MMMM d, yyyy"
    """

    def __init__(self, config_path: Path = Path("dater_config.yaml")):
        self.profiles: dict[str, ProfileConfig] = {}
        self.default: Optional[str] = None

        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"{config_path} must contain a mapping")

            for name, profile_data in (data.get("profiles") or {}).items():
                self.profiles[name] = ProfileConfig(name, profile_data or {})

            self.default = data.get("default")

    @property
    def has_config(self) -> bool:
        return len(self.profiles) > 0

    def get(self, name: str) -> ProfileConfig:
        """
        Get a profile by name.

        Raises:
            ConfigurationError: If no such profile exists
        """
        try:
            return self.profiles[name]
        except KeyError:
            raise ConfigurationError(f"Unknown formatter profile: {name}") from None


# Global settings instance
settings = DaterSettings()
