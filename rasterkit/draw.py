"""Software drawing of points, lines, rectangles, triangles and glyphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from rasterkit.image import Color32, View

__all__ = [
    "draw_point",
    "draw_line",
    "draw_rectangle",
    "draw_scanline",
    "bresenham_x_buffer",
    "draw_x_buffer",
    "draw_scanline_triangle",
    "TextureBounds",
    "compute_texture_bounds",
    "Glyph",
    "draw_glyph",
    "AccumulatorImage",
    "copy_accumulator_to_view",
    "draw_line_fast",
]

_U32 = 0xFFFFFFFF


def _u32(value: int) -> int:
    return value & _U32


def _plot(view: View, x: int, y: int, color: Color32) -> None:
    if view.contains(x, y):
        view.set(x, y, color)


def _blend(view: View, x: int, y: int, color: Color32) -> None:
    if view.contains(x, y):
        view.set(x, y, view.get(x, y).saturating_add(color))


def draw_point(view: View, xa: int, ya: int, radius: int, color: Color32) -> None:
    """Fill the square of half-size ``radius`` around ``(xa, ya)``.

    Coordinates are unsigned: a square reaching past the left or top edge
    wraps and draws nothing along that axis.
    """
    x0 = min(view.width, _u32(xa - radius))
    y0 = min(view.height, _u32(ya - radius))
    x1 = min(view.width, _u32(xa + radius))
    y1 = min(view.height, _u32(ya + radius))
    for y in range(y0, y1):
        for x in range(x0, x1):
            view.set(x, y, color)


def _line_low(view: View, x0: int, x1: int, y0: int, y1: int, color: Color32) -> None:
    dx = x1 - x0
    dy = y1 - y0
    yi = 1
    if dy < 0:
        dy = -dy
        yi = -1
    y = y0
    p = 2 * dy - dx
    for x in range(x0, x1):
        _blend(view, x, y, color)
        if p > 0:
            y += yi
            p += 2 * (dy - dx)
        else:
            p += 2 * dy


def _line_high(view: View, x0: int, x1: int, y0: int, y1: int, color: Color32) -> None:
    dx = x1 - x0
    dy = y1 - y0
    xi = 1
    if dx < 0:
        dx = -dx
        xi = -1
    x = x0
    p = 2 * dx - dy
    for y in range(y0, y1):
        _blend(view, x, y, color)
        if p > 0:
            x += xi
            p += 2 * (dx - dy)
        else:
            p += 2 * dx


def draw_line(view: View, xa: int, ya: int, xb: int, yb: int, color: Color32) -> None:
    """Add ``color`` along a Bresenham line; the far end point is left out."""
    x0 = min(view.width, _u32(xa))
    x1 = min(view.width, _u32(xb))
    y0 = min(view.height, _u32(ya))
    y1 = min(view.height, _u32(yb))
    if abs(y1 - y0) < abs(x1 - x0):
        if x0 > x1:
            _line_low(view, x1, x0, y1, y0, color)
        else:
            _line_low(view, x0, x1, y0, y1, color)
    else:
        if y0 > y1:
            _line_high(view, x1, x0, y1, y0, color)
        else:
            _line_high(view, x0, x1, y0, y1, color)


def draw_rectangle(view: View, xa: int, ya: int, xb: int, yb: int, color: Color32) -> None:
    """Fill the rectangle between two corners, clipped to the view."""
    x0, x1 = sorted((min(view.width, _u32(xa)), min(view.width, _u32(xb))))
    y0, y1 = sorted((min(view.height, _u32(ya)), min(view.height, _u32(yb))))
    for y in range(y0, y1):
        for x in range(x0, x1):
            view.set(x, y, color)


def draw_scanline(view: View, x0: int, x1: int, y: int, color: Color32) -> None:
    """Set pixels ``x0`` up to but not including ``x1`` on row ``y``."""
    for x in range(x0, x1):
        _plot(view, x, y, color)


def _x_buffer_low(x0: int, y0: int, x1: int, y1: int) -> List[int]:
    dx = x1 - x0
    dy = y1 - y0
    yi = 1
    if dy < 0:
        dy = -dy
        yi = -1
        bi = dy - 1
    else:
        bi = 0
    buffer = [0] * dy
    p = 2 * dy - dx
    for x in range(x0, x1):
        if p > 0:
            if 0 <= bi < dy:
                buffer[bi] = x
            bi += yi
            p += 2 * (dy - dx)
        else:
            p += 2 * dy
    return buffer


def _x_buffer_high(x0: int, y0: int, x1: int, y1: int) -> List[int]:
    dx = x1 - x0
    dy = y1 - y0
    buffer: List[int] = []
    xi = 1
    if dx < 0:
        dx = -dx
        xi = -1
    x = x0
    p = 2 * dx - dy
    for _ in range(y0, y1):
        if p > 0:
            x += xi
            p += 2 * (dx - dy)
        else:
            p += 2 * dx
        buffer.append(x)
    return buffer


def bresenham_x_buffer(view: View, xa: int, ya: int, xb: int, yb: int) -> List[int]:
    """The x coordinate of a line for each row it spans, top row first."""
    x0 = min(view.width, _u32(xa))
    x1 = min(view.width, _u32(xb))
    y0 = min(view.height, _u32(ya))
    y1 = min(view.height, _u32(yb))
    if abs(y1 - y0) < abs(x1 - x0):
        if x0 > x1:
            return _x_buffer_low(x1, y1, x0, y0)
        return _x_buffer_low(x0, y0, x1, y1)
    if y0 > y1:
        return _x_buffer_high(x1, y1, x0, y0)
    return _x_buffer_high(x0, y0, x1, y1)


def draw_x_buffer(view: View, x_buffer: Sequence[int], y0: int, color: Color32) -> None:
    """Set one pixel per row, at ``x_buffer[i]`` on row ``y0 + i``."""
    for i, x in enumerate(x_buffer):
        _plot(view, x, y0 + i, color)


def _fill_rows(
    view: View, rows: range, left: Sequence[int], right: Sequence[int], color: Color32
) -> None:
    for y, xl, xr in zip(rows, left, right):
        draw_scanline(view, xl, xr, y, color)


def _triangle_flat_top(view, xa, ya, xb, yb, xc, yc, color):
    if xb < xa:
        xa, xb = xb, xa
        ya, yb = yb, ya
    buffer_a = bresenham_x_buffer(view, xa, ya, xc, yc)
    buffer_b = bresenham_x_buffer(view, xb, yb, xc, yc)
    _fill_rows(view, range(ya, yc), buffer_a, buffer_b, color)


def _triangle_flat_bottom(view, xa, ya, xb, yb, xc, yc, color):
    if xc < xb:
        xb, xc = xc, xb
        yb, yc = yc, yb
    buffer_a = bresenham_x_buffer(view, xb, yb, xa, ya)
    buffer_b = bresenham_x_buffer(view, xc, yc, xa, ya)
    _fill_rows(view, range(ya, yc), buffer_a, buffer_b, color)


def _triangle_general(view, xa, ya, xb, yb, xc, yc, color):
    buffer_long = bresenham_x_buffer(view, xa, ya, xc, yc)
    if yb - ya >= len(buffer_long):
        return
    x_split = buffer_long[yb - ya]
    draw_line(view, x_split, yb, xb, yb, color)
    if xb == x_split:
        return
    buffer_top = bresenham_x_buffer(view, xa, ya, xb, yb)
    buffer_bottom = bresenham_x_buffer(view, xb, yb, xc, yc)
    long_lower = buffer_long[yb - ya:]
    if xb < x_split:
        _fill_rows(view, range(ya, yb), buffer_top, buffer_long, color)
        _fill_rows(view, range(yb, yc), buffer_bottom, long_lower, color)
    else:
        _fill_rows(view, range(ya, yb), buffer_long, buffer_top, color)
        _fill_rows(view, range(yb, yc), long_lower, buffer_bottom, color)


def draw_scanline_triangle(
    view: View, xa: int, ya: int, xb: int, yb: int, xc: int, yc: int, color: Color32
) -> None:
    """Fill a triangle row by row between its Bresenham edges."""
    if yc < ya:
        ya, yc = yc, ya
        xa, xc = xc, xa
    if yb < ya:
        ya, yb = yb, ya
        xa, xb = xb, xa
    if yc < yb:
        yb, yc = yc, yb
        xb, xc = xc, xb
    if ya == yb:
        _triangle_flat_top(view, xa, ya, xb, yb, xc, yc, color)
    elif yb == yc:
        _triangle_flat_bottom(view, xa, ya, xb, yb, xc, yc, color)
    else:
        _triangle_general(view, xa, ya, xb, yb, xc, yc, color)


@dataclass(frozen=True)
class TextureBounds:
    """The part of a texture, in texture coordinates, that lands on a target."""

    x0: int
    x1: int
    y0: int
    y1: int
    xoff: int = 0
    yoff: int = 0


def _axis_bounds(target: int, size: int, offset: int) -> tuple:
    offset = _u32(offset)
    end = _u32(offset + size)
    start, stop = 0, size
    if offset > target and end > target:
        return 0, 0
    if offset > target:
        start = _u32(-offset)
    if end > target:
        stop = _u32(size - _u32(end - target))
    return start, stop


def compute_texture_bounds(
    target_width: int,
    target_height: int,
    texture_width: int,
    texture_height: int,
    offset_x: int,
    offset_y: int,
) -> TextureBounds:
    """Clip a texture placed at an unsigned offset against a target.

    An offset that wrapped below zero is treated as negative, so the texture
    is clipped on the left or top.
    """
    x0, x1 = _axis_bounds(target_width, texture_width, offset_x)
    y0, y1 = _axis_bounds(target_height, texture_height, offset_y)
    return TextureBounds(x0=x0, x1=x1, y0=y0, y1=y1)


@dataclass
class Glyph:
    """A rendered character: coverage bytes plus placement metrics.

    A glyph without ``data`` is drawn as a solid block.
    """

    data: Optional[bytes] = None
    width: int = 0
    height: int = 0
    code: int = 0
    requested_height: int = 0
    horizontal_advance: int = 0
    vertical_advance: int = 0
    x_bearing: int = 0
    y_bearing: int = 0
    ascender: int = 0
    descender: int = 0


def draw_glyph(view: View, glyph: Glyph, xo: int, yo: int, color: Color32) -> None:
    """Add a glyph, scaled by its coverage, at ``(xo, yo)``."""
    if glyph.data is not None:
        yo = _u32(yo - glyph.y_bearing + glyph.requested_height)
    xo = _u32(xo + glyph.x_bearing)
    tb = compute_texture_bounds(view.width, view.height, glyph.width, glyph.height, xo, yo)
    for y in range(tb.y0, tb.y1):
        py = _u32(y + yo)
        for x in range(tb.x0, tb.x1):
            px = _u32(x + xo)
            if glyph.data is None:
                _blend(view, px, py, color)
                continue
            c = glyph.data[x + y * glyph.width]
            if c:
                _blend(
                    view,
                    px,
                    py,
                    Color32(
                        (c * color.r) >> 8,
                        (c * color.g) >> 8,
                        (c * color.b) >> 8,
                        (c * color.a) >> 8,
                    ),
                )


@dataclass
class AccumulatorImage:
    """A grid of 32-bit counters, at least 64 by 64."""

    width: int
    height: int
    values: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.width = max(64, self.width)
        self.height = max(64, self.height)
        size = self.width * self.height
        if not self.values:
            self.values = [0] * size
        elif len(self.values) != size:
            raise ValueError(f"expected {size} values, got {len(self.values)}")


def copy_accumulator_to_view(view: View, image: AccumulatorImage) -> int:
    """Show the counters as grey levels scaled to the largest one.

    Returns the multiplier applied to every counter.
    """
    largest = max(image.values, default=0)
    mul = _U32 // largest if largest > 1 else 1
    mul = max(1, mul)
    for y in range(min(view.height, image.height)):
        for x in range(min(view.width, image.width)):
            level = _u32(image.values[x + y * image.width] * mul) >> 24
            view.set(x, y, Color32(level, level, level, level))
    return mul


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def draw_line_fast(
    acc: AccumulatorImage, x0: int, y0: int, x1: int, y1: int, value: int
) -> None:
    """Add ``value`` along a fixed-point line; the end point is left out."""
    small = x1 - x0
    large = y1 - y0
    x_major = abs(small) > abs(large)
    if x_major:
        small, large = large, small
    end = large
    inc = -1 if large < 0 else 1
    large = abs(large)
    dec = _trunc_div(small << 16, large) if large else 0
    j = 0
    for i in range(0, end, inc):
        if x_major:
            x, y = x0 + i, y0 + (j >> 16)
        else:
            x, y = x0 + (j >> 16), y0 + i
        index = x + y * acc.width
        if 0 <= x < acc.width and 0 <= index < len(acc.values):
            acc.values[index] = _u32(acc.values[index] + value)
        j += dec