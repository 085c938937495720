"""Configuration package.

Usage:
    from uiextract.config import get_settings

    settings = get_settings()
    settings.strategy  # ExtractionStrategy.EDGE
"""

from .settings import (
    DetectionSettings,
    ExtractionStrategy,
    TestSettings,
    ToleranceSettings,
    get_settings,
    get_tolerance_settings,
    reset_settings,
)

__all__ = [
    "DetectionSettings",
    "ExtractionStrategy",
    "TestSettings",
    "ToleranceSettings",
    "get_settings",
    "get_tolerance_settings",
    "reset_settings",
]
