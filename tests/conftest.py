"""Shared fixtures for dater tests."""

import logging
from datetime import datetime

import pytest
import pytz

from dater.formatter import DateFormatter


@pytest.fixture
def berlin():
    return pytz.timezone("Europe/Berlin")


@pytest.fixture
def formatter():
    """English formatter pinned to Europe/Berlin so results do not depend on the host."""
    return DateFormatter(timezone="Europe/Berlin")


@pytest.fixture
def fixed_now(berlin):
    return berlin.localize(datetime(2021, 5, 23, 13, 20, 34))


@pytest.fixture(autouse=True)
def reset_dater_logger():
    """Drop handlers the CLI or setup_logging attached during a test."""
    yield
    logger = logging.getLogger("dater")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
