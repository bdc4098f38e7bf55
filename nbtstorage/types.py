"""Composite values stored through the compound facade.

:class:`Color` and :class:`Position` have no wire type of their own. The
compound expands them into a sub-compound or a scalar when writing and
collapses them back when reading.
"""

import re
from enum import Enum
from typing import NamedTuple

from nbtstorage.exceptions import IllegalArgumentException


class ColorFormat(Enum):
    """How a :class:`Color` is laid out inside a compound."""
    COMPOUND = "COMPOUND"
    INT = "INT"
    STRING = "STRING"
    HEX = "HEX"


_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")


def _clamp_channel(value: int) -> int:
    return max(0, min(255, value))


class Color:
    """An RGB color with 8-bit channels.

    Args:
        red: Red channel (0-255).
        green: Green channel (0-255).
        blue: Blue channel (0-255).

    Raises:
        IllegalArgumentException: If a channel is outside 0-255.
    """

    __slots__ = ("_red", "_green", "_blue")

    def __init__(self, red: int, green: int, blue: int):
        for name, channel in (("red", red), ("green", green), ("blue", blue)):
            if not 0 <= channel <= 255:
                raise IllegalArgumentException(f"{name} channel {channel} out of range [0, 255]")
        self._red = red
        self._green = green
        self._blue = blue

    @classmethod
    def clamped(cls, red: int, green: int, blue: int) -> "Color":
        """Create a color, clamping each channel into 0-255."""
        return cls(_clamp_channel(red), _clamp_channel(green), _clamp_channel(blue))

    @classmethod
    def from_rgb(cls, rgb: int) -> "Color":
        """Create a color from a packed ``0xRRGGBB`` integer."""
        return cls((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """Create a color from ``#RRGGBB`` text.

        Raises:
            ValueError: If the text is not a six digit hex color.
        """
        if not _HEX_COLOR.fullmatch(text):
            raise ValueError(f"Not a hex color: {text!r}")
        return cls(int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16))

    @property
    def red(self) -> int:
        return self._red

    @property
    def green(self) -> int:
        return self._green

    @property
    def blue(self) -> int:
        return self._blue

    def as_rgb(self) -> int:
        """Pack the color into a ``0xRRGGBB`` integer."""
        return (self._red << 16) | (self._green << 8) | self._blue

    def to_hex(self) -> str:
        """Render the color as upper-case ``#RRGGBB``."""
        return f"#{self._red:02X}{self._green:02X}{self._blue:02X}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return False
        return self.as_rgb() == other.as_rgb()

    def __hash__(self) -> int:
        return hash(self.as_rgb())

    def __repr__(self) -> str:
        return f"Color({self._red}, {self._green}, {self._blue})"


class Position(NamedTuple):
    """A point in a named world, with facing angles."""

    world: str = "world"
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0
