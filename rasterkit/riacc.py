"""Ray-binned accumulator: lines are cut into 256x256 buckets and rasterised later."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, MutableSequence

from rasterkit.containers import next_power_of_two
from rasterkit.image import Color32, View

__all__ = ["BUCKET_SIZE", "efla_line", "RiaccLine", "Riacc"]

BUCKET_SIZE = 256
_U32 = 0xFFFFFFFF


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def efla_line(acc: MutableSequence[int], x: int, y: int, x2: int, y2: int) -> None:
    """Set a fixed-point line in a 256-wide accumulator to full brightness.

    The end point itself is not set. Raises ``IndexError`` for a pixel
    outside the accumulator.
    """
    short_len = y2 - y
    long_len = x2 - x
    y_longer = abs(short_len) > abs(long_len)
    if y_longer:
        short_len, long_len = long_len, short_len
    end = long_len
    inc = -1 if long_len < 0 else 1
    long_len = abs(long_len)
    dec = _trunc_div(short_len << 16, long_len) if long_len else 0
    j = 0
    for i in range(0, end, inc):
        if y_longer:
            px, py = x + (j >> 16), y + i
        else:
            px, py = x + i, y + (j >> 16)
        index = px + py * BUCKET_SIZE
        if not (0 <= px < BUCKET_SIZE and 0 <= index < len(acc)):
            raise IndexError(f"pixel ({px}, {py}) is outside the accumulator")
        acc[index] = _U32
        j += dec


@dataclass(frozen=True)
class RiaccLine:
    """A segment in bucket-local byte coordinates."""

    x0: int = 0
    x1: int = 0
    y0: int = 0
    y1: int = 0

    def __post_init__(self) -> None:
        for name in ("x0", "x1", "y0", "y1"):
            object.__setattr__(self, name, int(getattr(self, name)) & 0xFF)


class Riacc:
    """A power-of-two grid of buckets, each a list of line segments."""

    def __init__(self, width: int, height: int, bucket_capacity: int = 8 * 1024) -> None:
        width = max(BUCKET_SIZE, width)
        height = max(BUCKET_SIZE, height)
        self.buckets_width = next_power_of_two(width) >> 8
        self.buckets_height = next_power_of_two(height) >> 8
        self.width_shift = self.buckets_width.bit_length() - 1
        self.height_shift = self.buckets_height.bit_length() - 1
        self.new_bucket_capacity = bucket_capacity
        self.buckets: List[List[RiaccLine]] = [
            [] for _ in range(self.buckets_width * self.buckets_height)
        ]

    def _in_grid(self, x: int, y: int) -> bool:
        return 0 <= x < self.buckets_width and 0 <= y < self.buckets_height

    def insert_line(self, x: int, y: int, x0: int, x1: int, y0: int, y1: int) -> RiaccLine:
        """Add a segment to bucket ``(x, y)``.

        Raises ``IndexError`` outside the grid and ``OverflowError`` when the
        bucket is full.
        """
        if not self._in_grid(x, y):
            raise IndexError(f"bucket ({x}, {y}) is outside the grid")
        bucket = self.buckets[y * self.buckets_width + x]
        if len(bucket) >= self.new_bucket_capacity:
            raise OverflowError(f"bucket ({x}, {y}) is full")
        line = RiaccLine(x0, x1, y0, y1)
        bucket.append(line)
        return line

    def ray(self, x0: int, x1: int, y0: int, y1: int) -> None:
        """Cut the line from ``(x0, y0)`` to ``(x1, y1)`` along the bucket grid.

        Segments that fall in cells outside the grid are dropped. Raises
        ``ValueError`` for a line of zero length.
        """
        if x0 == x1 and y0 == y1:
            raise ValueError("a ray needs two distinct end points")
        ox = x0 / BUCKET_SIZE
        oy = y0 / BUCKET_SIZE
        fx = self.buckets_width
        fy = self.buckets_height
        dx = (x1 - x0) / BUCKET_SIZE
        dy = (y1 - y0) / BUCKET_SIZE
        tmx = tmy = math.inf
        tdx = tdy = 0.0
        sx = sy = 0
        x = math.floor(ox)
        y = math.floor(oy)

        if dx != 0:
            inv_dx = 1.0 / dx
            if dx > 0:
                sx, bound, tdx, fx = 1, x + 1, inv_dx, (x1 >> 8) + 1
            else:
                sx, bound, tdx, fx = -1, x, -inv_dx, (x1 >> 8) - 1
            tmx = (bound - ox) * inv_dx

        if dy != 0:
            inv_dy = 1.0 / dy
            if dy > 0:
                sy, bound, tdy, fy = 1, y + 1, inv_dy, (y1 >> 8) + 1
            else:
                sy, bound, tdy, fy = -1, y, -inv_dy, (y1 >> 8) - 1
            tmy = (bound - oy) * inv_dy

        current = 0.0
        while True:
            exit_t = min(tmx, tmy)
            x_entry = int((ox + current * dx) * BUCKET_SIZE) & 255
            y_entry = int((oy + current * dy) * BUCKET_SIZE) & 255
            x_exit = int((ox + exit_t * dx) * BUCKET_SIZE) & 255
            y_exit = int((oy + exit_t * dy) * BUCKET_SIZE) & 255
            current = exit_t
            if self._in_grid(x, y):
                self.insert_line(x, y, x_entry, x_exit, y_entry, y_exit)
            if tmx < tmy:
                x += sx
                if x == fx:
                    break
                tmx += tdx
            else:
                y += sy
                if y == fy:
                    break
                tmy += tdy

    def reset(self) -> None:
        """Remove every segment from every bucket."""
        for bucket in self.buckets:
            bucket.clear()

    def resolve_bucket(self, index: int) -> List[int]:
        """Rasterise the segments of one bucket into a 256x256 accumulator."""
        acc = [0] * (BUCKET_SIZE * BUCKET_SIZE)
        for line in self.buckets[index]:
            efla_line(acc, line.x0, line.y0, line.x1, line.y1)
        return acc

    def draw(self, view: View) -> None:
        """Rasterise every bucket and write it, in white, where it meets the view."""
        color = Color32(255, 255, 255, 255)
        for by in range(self.buckets_height):
            for bx in range(self.buckets_width):
                acc = self.resolve_bucket(bx + by * self.buckets_width)
                rows = range(min(BUCKET_SIZE, max(0, view.height - by * BUCKET_SIZE)))
                cols = range(min(BUCKET_SIZE, max(0, view.width - bx * BUCKET_SIZE)))
                for yy in rows:
                    for xx in cols:
                        s = acc[yy * BUCKET_SIZE + xx] >> 24
                        view.set(
                            bx * BUCKET_SIZE + xx,
                            by * BUCKET_SIZE + yy,
                            Color32(
                                (s * color.r) >> 8,
                                (s * color.g) >> 8,
                                (s * color.b) >> 8,
                                (s * color.a) >> 8,
                            ),
                        )