"""Configuration management for uiextract using pydantic-settings.

Settings can be supplied through environment variables (``UIEXTRACT_`` and
``UIEXTRACT_TOLERANCE_`` prefixes) or a ``.env`` file, and are validated on
construction.
"""

import os
from enum import Enum
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionStrategy(str, Enum):
    """Region extraction strategies."""

    EDGE = "edge"  # Sobel edges + flood fill, text-aware classification
    SIMILARITY = "similarity"  # Grid color-similarity scan, geometry-only classification


class DetectionSettings(BaseSettings):
    """Settings for the component detection pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="UIEXTRACT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Extraction
    strategy: ExtractionStrategy = Field(
        ExtractionStrategy.EDGE, description="Region extraction strategy"
    )
    edge_threshold: float = Field(50.0, gt=0, description="Sobel magnitude above which a pixel is an edge")
    min_region_size: int = Field(20, ge=1, description="Minimum region width and height in pixels")
    grid_step: int = Field(10, ge=1, description="Seed spacing for the similarity scan")
    max_region_span: int = Field(200, ge=1, description="Maximum growth per direction in the similarity scan")
    similarity_threshold: float = Field(
        30.0, ge=0, description="Maximum mean channel distance to the seed color"
    )
    min_alpha: int = Field(128, ge=0, le=255, description="Alpha below which a pixel is transparent")

    # Measurement
    palette_size: int = Field(5, ge=3, le=5, description="Colors kept in a component palette")
    use_text_oracle: bool = Field(True, description="Ask the OCR oracle about text presence")
    ocr_timeout: float = Field(2.0, gt=0, description="Per-region OCR timeout in seconds")
    ocr_min_confidence: float = Field(60.0, ge=0, le=100, description="Mean word confidence for text")

    # Classification / output
    min_confidence: float = Field(0.3, ge=0.0, le=1.0, description="Components at or below are dropped")
    estimate_states: bool = Field(True, description="Attach hover/active color estimates")

    # Execution
    detection_timeout: float | None = Field(
        30.0, description="Deadline in seconds for one detection pass (None disables)"
    )
    max_workers: int = Field(4, ge=1, description="Worker threads for batch detection")

    # Logging
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field("INFO", description="Log level")
    log_path: Path | None = Field(None, description="Directory for log files")

    @model_validator(mode="after")
    def _check_timeout(self) -> "DetectionSettings":
        if self.detection_timeout is not None and self.detection_timeout <= 0:
            raise ValueError(f"detection_timeout must be positive, got {self.detection_timeout}")
        return self


class ToleranceSettings(BaseSettings):
    """Default tolerances for validation runs.

    The global tolerance applies to any property without a more specific
    value. Category tolerances are opt-in and unset by default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="UIEXTRACT_TOLERANCE_",
        case_sensitive=False,
        extra="ignore",
    )

    global_tolerance: float = Field(10.0, ge=0, description="Fallback tolerance percentage")
    colors: float | None = Field(None, ge=0, description="Tolerance for color properties")
    spacing: float | None = Field(None, ge=0, description="Tolerance for padding/margin properties")
    typography: float | None = Field(None, ge=0, description="Tolerance for font properties")
    border_radius: float | None = Field(None, ge=0, description="Tolerance for border radius")


class TestSettings(DetectionSettings):
    """Test-specific settings."""

    __test__ = False

    use_text_oracle: bool = False
    detection_timeout: float | None = 10.0
    max_workers: int = 2


# Singleton instances
_settings: DetectionSettings | None = None
_tolerance_settings: ToleranceSettings | None = None


def get_settings(env: str | None = None) -> DetectionSettings:
    """Get the singleton detection settings instance.

    Args:
        env: Environment name ('test' selects TestSettings); defaults to
            the UIEXTRACT_ENV environment variable.

    Returns:
        DetectionSettings instance
    """
    global _settings

    if _settings is None:
        env_name = env or os.getenv("UIEXTRACT_ENV", "default")
        if env_name == "test":
            _settings = TestSettings()
        else:
            _settings = DetectionSettings()

    return _settings


def get_tolerance_settings() -> ToleranceSettings:
    """Get the singleton tolerance settings instance."""
    global _tolerance_settings
    if _tolerance_settings is None:
        _tolerance_settings = ToleranceSettings()
    return _tolerance_settings


def reset_settings() -> None:
    """Reset the settings singletons (mainly for testing)."""
    global _settings, _tolerance_settings
    _settings = None
    _tolerance_settings = None
