"""Stand-in oracles for testing the detection pipeline without Tesseract."""

import numpy as np
import pytest

from uiextract.detection_exceptions import OracleUnavailable
from uiextract.model import Color, RasterBuffer
from uiextract.oracles import ColorQuantizer, TextPresenceOracle


class StaticTextOracle(TextPresenceOracle):
    """Text oracle returning a fixed answer and counting its calls."""

    name = "static"

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.calls = 0

    def has_text(self, pixels: np.ndarray) -> bool:
        self.calls += 1
        return self.answer


class FailingTextOracle(TextPresenceOracle):
    """Text oracle that is never available."""

    name = "failing"

    def has_text(self, pixels: np.ndarray) -> bool:
        raise OracleUnavailable(self.name, "not installed")


class FailingQuantizer(ColorQuantizer):
    name = "failing"

    def top_colors(self, buffer: RasterBuffer, k: int) -> list[Color]:
        raise OracleUnavailable(self.name, "quantization failed")


@pytest.fixture
def text_oracle():
    """Oracle that always reports text."""
    return StaticTextOracle(True)


@pytest.fixture
def no_text_oracle():
    """Oracle that never reports text."""
    return StaticTextOracle(False)
