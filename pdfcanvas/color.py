"""Colour spaces and device colours."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class ColorSpace(enum.IntEnum):
    """A device colour space."""

    DEVICE_GRAY = 0
    DEVICE_RGB = 1
    DEVICE_CMYK = 2
    PATTERN = 3

    @property
    def pdf_name(self) -> str:
        return _COLOR_SPACE_NAMES[self]

    def __str__(self) -> str:
        return self.pdf_name


_COLOR_SPACE_NAMES = {
    ColorSpace.DEVICE_GRAY: "/DeviceGray",
    ColorSpace.DEVICE_RGB: "/DeviceRGB",
    ColorSpace.DEVICE_CMYK: "/DeviceCMYK",
    ColorSpace.PATTERN: "/Pattern",
}


@dataclass(frozen=True)
class GColor:
    """A grayscale colour; the level must be in [0, 1]."""

    gray: float

    color_space = ColorSpace.DEVICE_GRAY

    def components(self) -> list[float]:
        """Return the colour's components."""
        return [float(self.gray)]


@dataclass(frozen=True)
class RGBColor:
    """An RGB colour; each component must be in [0, 1]."""

    r: float
    g: float
    b: float

    color_space = ColorSpace.DEVICE_RGB

    def components(self) -> list[float]:
        """Return the colour's components."""
        return [float(self.r), float(self.g), float(self.b)]


@dataclass(frozen=True)
class CMYKColor:
    """A CMYK colour; each component must be in [0, 1]."""

    c: float
    m: float
    y: float
    k: float

    color_space = ColorSpace.DEVICE_CMYK

    def components(self) -> list[float]:
        """Return the colour's components."""
        return [float(self.c), float(self.m), float(self.y), float(self.k)]


Color = Union[GColor, RGBColor, CMYKColor]

BLACK = GColor(0.0)
GRAY = GColor(0.5)
WHITE = GColor(1.0)

RED = RGBColor(1, 0, 0)
GREEN = RGBColor(0, 1, 0)
BLUE = RGBColor(0, 0, 1)

CYAN = CMYKColor(1, 0, 0, 0)
MAGENTA = CMYKColor(0, 1, 0, 0)
YELLOW = CMYKColor(0, 0, 1, 0)
CMYK_BLACK = CMYKColor(0, 0, 0, 1)