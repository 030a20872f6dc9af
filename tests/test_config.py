"""Tests for environment settings and YAML formatter profiles."""

import logging
from pathlib import Path

import pytest

from dater.config import DaterSettings, FormatterProfiles, ProfileConfig
from dater.formatter import DateFormatter
from dater.models.config import DEFAULT_DATE_FORMAT, DEFAULT_LOCALE
from dater.models.dater import DaterMutable
from dater.utils.date_utils import timezone_name
from dater.utils.exceptions import ConfigurationError

PROFILES = """\
default: swiss
profiles:
  swiss:
    locale: de_CH
    timezone: Europe/Zurich
  us:
    locale: en_US
    date_format: "MMMM d, yyyy"
    mutable: true
"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run in an empty directory with no DATER_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "DATER_LOCALE",
        "DATER_DATE_FORMAT",
        "DATER_DATE_TIME_FORMAT",
        "DATER_TIMEZONE",
        "DATER_MUTABLE",
        "DATER_PROFILES_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


class TestDaterSettings:
    def test_defaults(self, workdir):
        settings = DaterSettings()
        assert settings.locale == DEFAULT_LOCALE
        assert settings.date_format == DEFAULT_DATE_FORMAT
        assert settings.timezone is None
        assert settings.mutable is False
        assert settings.profiles_file == Path("dater_config.yaml")

    def test_reads_environment(self, workdir, monkeypatch):
        monkeypatch.setenv("DATER_LOCALE", "de_DE")
        monkeypatch.setenv("DATER_TIMEZONE", "America/Chicago")
        monkeypatch.setenv("DATER_MUTABLE", "true")
        settings = DaterSettings()
        assert settings.locale == "de_DE"
        assert settings.timezone == "America/Chicago"
        assert settings.mutable is True

    def test_empty_value_is_none(self, workdir, monkeypatch):
        monkeypatch.setenv("DATER_TIMEZONE", "")
        assert DaterSettings().timezone is None

    def test_reads_dotenv_file(self, workdir):
        (workdir / ".env").write_text("DATER_LOCALE=fr_FR\n")
        assert DaterSettings().locale == "fr_FR"


class TestFormatterProfiles:
    def test_missing_file_has_no_profiles(self, workdir):
        profiles = FormatterProfiles(workdir / "missing.yaml")
        assert not profiles.has_config
        assert profiles.default is None

    def test_loads_profiles(self, workdir):
        path = workdir / "dater_config.yaml"
        path.write_text(PROFILES)
        profiles = FormatterProfiles(path)
        assert profiles.has_config
        assert profiles.default == "swiss"
        assert profiles.get("swiss").overrides() == {
            "locale": "de_CH",
            "timezone": "Europe/Zurich",
        }
        assert profiles.get("us").mutable is True

    def test_unknown_profile_raises(self, workdir):
        with pytest.raises(ConfigurationError):
            FormatterProfiles(workdir / "missing.yaml").get("swiss")

    def test_unknown_key_raises(self):
        with pytest.raises(ConfigurationError, match="colour"):
            ProfileConfig("broken", {"locale": "de_DE", "colour": "red"})

    def test_non_mapping_file_raises(self, workdir):
        path = workdir / "dater_config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            FormatterProfiles(path)


class TestFromSettings:
    def test_uses_default_profile(self, workdir):
        (workdir / "dater_config.yaml").write_text(PROFILES)
        formatter = DateFormatter.from_settings(DaterSettings())
        assert formatter.get_locale() == "de_CH"
        assert timezone_name(formatter.get_timezone()) == "Europe/Zurich"

    def test_named_profile(self, workdir):
        (workdir / "dater_config.yaml").write_text(PROFILES)
        formatter = DateFormatter.from_settings(DaterSettings(), profile="us")
        assert formatter.date("2021-04-16") == "April 16, 2021"
        assert isinstance(formatter.now(), DaterMutable)

    def test_profile_overrides_environment(self, workdir, monkeypatch):
        monkeypatch.setenv("DATER_LOCALE", "fr_FR")
        monkeypatch.setenv("DATER_DATE_FORMAT", "dd.MM.yyyy")
        (workdir / "dater_config.yaml").write_text(PROFILES)
        formatter = DateFormatter.from_settings(DaterSettings())
        assert formatter.get_locale() == "de_CH"
        assert formatter.get_date_format() == "dd.MM.yyyy"

    def test_missing_profiles_file_is_logged(self, workdir, caplog):
        with caplog.at_level(logging.DEBUG, logger="dater"):
            DateFormatter.from_settings(DaterSettings())
        assert "No formatter profiles in dater_config.yaml" in caplog.text

    def test_without_profiles_uses_settings(self, workdir, monkeypatch):
        monkeypatch.setenv("DATER_LOCALE", "de_DE")
        monkeypatch.setenv("DATER_TIMEZONE", "Europe/Berlin")
        formatter = DateFormatter.from_settings(DaterSettings())
        assert formatter.date("2021-04-16") == "Freitag, 16. April 2021"

    def test_unknown_profile_raises(self, workdir):
        with pytest.raises(ConfigurationError):
            DateFormatter.from_settings(DaterSettings(), profile="nope")
