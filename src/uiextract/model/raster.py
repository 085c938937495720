"""Read-only RGBA raster buffer."""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..detection_exceptions import InputError

if TYPE_CHECKING:
    from .component import Region


@dataclass(frozen=True)
class RasterBuffer:
    """Immutable view of a pixel-interleaved RGBA image.

    The underlying array has shape ``(height, width, 4)`` and dtype uint8 and
    is flagged non-writeable, so detection stages can share it freely.

    Attributes:
        pixels: RGBA pixel array
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise InputError(f"Expected an HxWx4 RGBA array, got shape {self.pixels.shape}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise InputError(
                "Raster buffer has zero width or height",
                width=int(self.pixels.shape[1]),
                height=int(self.pixels.shape[0]),
            )
        if self.pixels.dtype != np.uint8:
            raise InputError(f"Expected uint8 pixels, got {self.pixels.dtype}")
        if self.pixels.flags.writeable:
            frozen = self.pixels.copy()
            frozen.flags.writeable = False
            object.__setattr__(self, "pixels", frozen)

    @classmethod
    def from_rgba_bytes(cls, width: int, height: int, data: bytes) -> "RasterBuffer":
        """Wrap a flat RGBA byte sequence.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            data: ``width * height * 4`` bytes, row-major RGBA

        Raises:
            InputError: If the dimensions are empty or do not match the data.
        """
        if width <= 0 or height <= 0:
            raise InputError("Raster buffer has zero width or height", width=width, height=height)
        expected = width * height * 4
        if len(data) != expected:
            raise InputError(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}")
        array = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4)
        return cls(array)

    @classmethod
    def from_array(cls, array: np.ndarray[Any, Any]) -> "RasterBuffer":
        """Build a buffer from an RGBA, RGB or grayscale array.

        RGB and grayscale inputs are treated as fully opaque.
        """
        array = np.asarray(array)
        if array.ndim == 2:
            array = np.stack([array, array, array], axis=-1)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise InputError(f"Unsupported array shape {array.shape}")
        array = array.astype(np.uint8, copy=False)
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=-1)
        return cls(np.ascontiguousarray(array))

    @classmethod
    def from_image(cls, image: Image.Image) -> "RasterBuffer":
        """Build a buffer from a PIL image (converted to RGBA)."""
        return cls(np.array(image.convert("RGBA"), dtype=np.uint8))

    @classmethod
    def from_file(cls, path: str | Path) -> "RasterBuffer":
        """Load an image file into a buffer.

        Raises:
            InputError: If the file is missing or not a readable image.
        """
        try:
            with Image.open(path) as image:
                return cls.from_image(image)
        except (FileNotFoundError, UnidentifiedImageError, OSError) as e:
            raise InputError(f"Cannot read image {path}: {e}", path=str(path)) from e

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the RGBA tuple at ``(x, y)``."""
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def crop(self, region: "Region") -> np.ndarray:
        """Return a read-only view of the pixels covered by ``region``."""
        if not region.fits_within(self.width, self.height):
            raise InputError(f"Region {region} exceeds buffer {self.width}x{self.height}")
        return self.pixels[region.y : region.y + region.height, region.x : region.x + region.width]

    def grayscale(self) -> np.ndarray:
        """Channel mean ``(R + G + B) / 3`` as float64, alpha ignored."""
        return self.pixels[:, :, :3].astype(np.float64).sum(axis=2) / 3.0
