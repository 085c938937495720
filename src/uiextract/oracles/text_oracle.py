"""
Text-presence oracle backed by Tesseract OCR.

The detection pipeline treats OCR as an opaque service: given the pixels of
one region it answers whether readable text is present. Any Tesseract
failure (missing binary, crash, timeout) is reported as OracleUnavailable so
the caller can fall back to a geometric heuristic.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np
import pytesseract
from PIL import Image

from ..detection_exceptions import OracleUnavailable

logger = logging.getLogger(__name__)

_CHAR_WHITELIST = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"


class TextPresenceOracle(ABC):
    """Answers whether a region's pixels contain text."""

    name = "text_oracle"

    @abstractmethod
    def has_text(self, pixels: np.ndarray) -> bool:
        """Check a region for text.

        Args:
            pixels: ``(height, width, 4)`` RGBA array of the region

        Returns:
            True if text is present

        Raises:
            OracleUnavailable: If the answer cannot be obtained
        """


class TesseractTextOracle(TextPresenceOracle):
    """Detects text with Tesseract word-level OCR.

    Text is present when at least one non-empty word is recognized and the
    mean confidence of recognized words exceeds ``min_confidence``.
    """

    name = "tesseract"

    def __init__(
        self,
        min_confidence: float = 60.0,
        timeout: float = 2.0,
        lang: str = "eng",
    ) -> None:
        """
        Initialize the oracle.

        Args:
            min_confidence: Mean word confidence (0-100) required for text
            timeout: Seconds before Tesseract is abandoned
            lang: Tesseract language code
        """
        self.min_confidence = min_confidence
        self.timeout = timeout
        self.lang = lang

    def has_text(self, pixels: np.ndarray) -> bool:
        image = self._to_rgb_image(pixels)
        config = f"--psm 6 -c tessedit_char_whitelist={_CHAR_WHITELIST}"

        try:
            data = pytesseract.image_to_data(
                image,
                lang=self.lang,
                config=config,
                output_type=pytesseract.Output.DICT,
                timeout=self.timeout,
            )
        except pytesseract.TesseractNotFoundError as e:
            raise OracleUnavailable(self.name, "tesseract binary not found") from e
        except (pytesseract.TesseractError, RuntimeError, OSError) as e:
            raise OracleUnavailable(self.name, str(e)) from e

        confidences = [
            float(conf)
            for text, conf in zip(data.get("text", []), data.get("conf", []), strict=False)
            if str(text).strip() and float(conf) >= 0
        ]
        if not confidences:
            return False

        mean_confidence = sum(confidences) / len(confidences)
        logger.debug(f"OCR found {len(confidences)} words, mean confidence {mean_confidence:.1f}")
        return mean_confidence > self.min_confidence

    @staticmethod
    def _to_rgb_image(pixels: np.ndarray) -> Image.Image:
        """Flatten RGBA pixels onto white so transparent areas read as background."""
        rgba = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
        if rgba.mode != "RGBA":
            return rgba.convert("RGB")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
