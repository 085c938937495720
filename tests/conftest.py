"""Pytest configuration and fixtures."""

import pytest

from tests.fixtures.oracle_fixtures import no_text_oracle, text_oracle  # noqa: F401
from tests.fixtures.raster_fixtures import (  # noqa: F401
    blank_raster,
    button_raster,
    raster_generator,
)
from uiextract.config import DetectionSettings, reset_settings


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep tests independent of the developer's environment and settings."""
    monkeypatch.setenv("UIEXTRACT_ENV", "test")
    monkeypatch.setenv("UIEXTRACT_DISABLE_CONSOLE_LOGGING", "1")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    """Detection settings without OCR."""
    return DetectionSettings(use_text_oracle=False, detection_timeout=10.0)


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path
