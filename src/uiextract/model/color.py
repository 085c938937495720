"""RGB color value type with CSS parsing and brightness helpers."""

import math
import re
from dataclasses import dataclass

_HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_PATTERN = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)$", re.IGNORECASE
)

# Largest possible Euclidean distance between two RGB colors
MAX_RGB_DISTANCE = math.sqrt(3 * 255**2)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Color:
    """An exact RGB triple, 0-255 per channel. Never carries alpha."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    @classmethod
    def from_rgba(cls, pixel) -> "Color":
        """Build a color from an RGB(A) sequence, dropping alpha."""
        return cls(int(pixel[0]), int(pixel[1]), int(pixel[2]))

    @classmethod
    def parse(cls, value: str) -> "Color":
        """Parse ``#rgb``, ``#rrggbb``, ``rgb(r,g,b)`` or ``rgba(r,g,b,a)``.

        Raises:
            ValueError: If the string is not a recognized color.
        """
        text = value.strip()
        hex_match = _HEX_PATTERN.match(text)
        if hex_match:
            digits = hex_match.group(1)
            if len(digits) == 3:
                digits = "".join(c * 2 for c in digits)
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

        rgb_match = _RGB_PATTERN.match(text)
        if rgb_match:
            return cls(*(int(group) for group in rgb_match.groups()))

        raise ValueError(f"Unrecognized color: {value!r}")

    @classmethod
    def try_parse(cls, value: str) -> "Color | None":
        """Parse a color string, returning None when it is not a color."""
        try:
            return cls.parse(value)
        except ValueError:
            return None

    @property
    def brightness(self) -> float:
        """Perceived brightness, ``0.299R + 0.587G + 0.114B``."""
        return 0.299 * self.r + 0.587 * self.g + 0.114 * self.b

    def adjusted(self, factor: float) -> "Color":
        """Scale each channel by ``1 + factor``, clamped to [0, 255]."""
        return Color(
            *(
                _round_half_up(max(0.0, min(255.0, channel + channel * factor)))
                for channel in (self.r, self.g, self.b)
            )
        )

    def distance(self, other: "Color") -> float:
        """Euclidean distance in RGB space."""
        return math.sqrt(
            (self.r - other.r) ** 2 + (self.g - other.g) ** 2 + (self.b - other.b) ** 2
        )

    def to_css(self) -> str:
        return f"rgb({self.r},{self.g},{self.b})"

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b

    def __str__(self) -> str:
        return self.to_css()
