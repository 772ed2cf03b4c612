"""Fixtures for infrastructure.logging tests."""

from unittest.mock import Mock

import pytest
import structlog

from infrastructure.configuration import I18nSettings, Settings
from infrastructure.logging import configure_logging


@pytest.fixture
def mock_settings():
    """Settings double for development logging with an i18n section."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "DEBUG"
    settings.is_production = False
    settings.i18n = I18nSettings(I18N_DEFAULT_TEXT_DOMAIN="app")
    return settings


@pytest.fixture
def unconfigured_structlog():
    """Start from structlog's defaults and restore the muted pipeline afterwards."""
    structlog.reset_defaults()
    yield
    configure_logging()
