"""Pixel images and rectangular views into them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

__all__ = ["PixelFormat", "Color32", "Image", "View"]


class PixelFormat(Enum):
    """Byte layout of one pixel."""

    B8G8R8A8 = "b8g8r8a8"
    R8G8B8A8 = "r8g8b8a8"

    @property
    def size(self) -> int:
        """Bytes per pixel."""
        return _PIXEL_SIZES[self]


_PIXEL_SIZES = {
    PixelFormat.B8G8R8A8: 4,
    PixelFormat.R8G8B8A8: 4,
}


@dataclass(frozen=True)
class Color32:
    """An RGBA colour with one byte per channel; values wrap to a byte."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            object.__setattr__(self, name, int(getattr(self, name)) & 0xFF)

    def saturating_add(self, other: "Color32") -> "Color32":
        """Channel-wise sum, each channel capped at 255."""
        return Color32(
            min(255, self.r + other.r),
            min(255, self.g + other.g),
            min(255, self.b + other.b),
            min(255, self.a + other.a),
        )


def _align_up(value: int, alignment: int) -> int:
    return -(-value // alignment) * alignment


class Image:
    """A grid of pixels whose lines are padded to a byte alignment."""

    def __init__(
        self,
        width: int,
        height: int,
        format: PixelFormat = PixelFormat.B8G8R8A8,
        line_alignment: int = 64,
    ) -> None:
        if format is not PixelFormat.B8G8R8A8:
            raise ValueError(f"only B8G8R8A8 is supported, got {format.name}")
        if line_alignment <= 0:
            raise ValueError(f"line alignment must be positive, got {line_alignment}")
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        self.format = format
        self.pixel_size = format.size
        self.line_size = _align_up(self.pixel_size * width, line_alignment)
        self.stride = self.line_size // self.pixel_size
        self.size = self.line_size * height
        self.pixels: List[Color32] = [Color32()] * (self.stride * height)

    def view(
        self,
        x: int = 0,
        y: int = 0,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> "View":
        """A view of the rectangle at ``(x, y)``; the whole image by default."""
        return View(
            self,
            x,
            y,
            self.width if width is None else width,
            self.height if height is None else height,
        )


@dataclass
class View:
    """A rectangle of an image addressed from its own top-left corner."""

    image: Image
    x: int
    y: int
    width: int
    height: int

    @property
    def pixel_size(self) -> int:
        return self.image.pixel_size

    @property
    def format(self) -> PixelFormat:
        return self.image.format

    def contains(self, x: int, y: int) -> bool:
        """True when ``(x, y)`` lies inside the view."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _index(self, x: int, y: int) -> int:
        if not self.contains(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside the view")
        index = (self.y + y) * self.image.stride + self.x + x
        if not 0 <= index < len(self.image.pixels):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return index

    def get(self, x: int, y: int) -> Color32:
        return self.image.pixels[self._index(x, y)]

    def set(self, x: int, y: int, color: Color32) -> None:
        self.image.pixels[self._index(x, y)] = color

    def clear(self, color: Color32) -> None:
        """Fill the whole view with ``color``."""
        for y in range(self.height):
            for x in range(self.width):
                self.set(x, y, color)

    def copy_from(self, src: "View") -> None:
        """Copy the overlapping top-left rectangle of ``src`` into this view."""
        width = min(self.width, src.width)
        height = min(self.height, src.height)
        for y in range(height):
            for x in range(width):
                self.set(x, y, src.get(x, y))