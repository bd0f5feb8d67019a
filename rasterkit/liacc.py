"""Light accumulator: 256x256 sections of 32-bit brightness counters."""

from __future__ import annotations

import random
import time
from typing import List, Optional

from rasterkit.image import Color32, View

__all__ = ["SECTION_SIZE", "LINE_BRIGHTNESS", "Liacc"]

SECTION_SIZE = 256
LINE_BRIGHTNESS = (1 << 18) - 1
_U16 = 0xFFFF
_U32 = 0xFFFFFFFF
_MAX_BRIGHTNESS = _U32 - LINE_BRIGHTNESS


def _align_up(value: int, alignment: int) -> int:
    return -(-value // alignment) * alignment


class Liacc:
    """A grid of square sections, each holding 256x256 counters.

    The requested size is rounded up to whole sections.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("dimensions must not be negative")
        self.requested_width = width
        self.requested_height = height
        self.width = _align_up(width, SECTION_SIZE)
        self.height = _align_up(height, SECTION_SIZE)
        self.section_count_x = self.width // SECTION_SIZE
        self.section_count_y = self.height // SECTION_SIZE
        self.sections: List[List[int]] = [
            [0] * (SECTION_SIZE * SECTION_SIZE)
            for _ in range(self.section_count_x * self.section_count_y)
        ]
        self.color = Color32(255, 190, 100, 255)

    @staticmethod
    def _add(section: List[int], index: int) -> None:
        value = (section[index] + LINE_BRIGHTNESS) & _U32
        section[index] = min(_MAX_BRIGHTNESS, value)

    def _accumulate_line(self, section: List[int], x0: int, y0: int, x1: int, y1: int) -> None:
        """Add one line given in 16-bit fixed point section coordinates."""
        yd = abs(y1 - y0)
        xd = abs(x1 - x0)
        if xd < yd:
            dx = ((x1 >> 8) - (x0 >> 8)) & _U16
            xm = (x0 + (y0 >> 8) * dx) & _U16
            for i in range(SECTION_SIZE):
                x = xm >> 8
                xm = (xm + dx) & _U16
                self._add(section, x + (i << 8))
        else:
            dy = ((y1 >> 8) - (y0 >> 8)) & _U16
            ym = (y0 + (x0 >> 8) * dy) & _U16
            for i in range(SECTION_SIZE):
                y = ym >> 8
                ym = (ym + dy) & _U16
                self._add(section, i + (y << 8))

    def accumulate_random_lines(self, line_count: int = 1024, seed: Optional[int] = None) -> int:
        """Add ``line_count`` random full-width lines to every section.

        Returns the total number of lines drawn. Without a seed the current
        time is used.
        """
        rng = random.Random(time.time_ns() if seed is None else seed)
        for section in self.sections:
            for _ in range(line_count):
                y0 = rng.getrandbits(32) & _U16
                y1 = rng.getrandbits(32) & _U16
                self._accumulate_line(section, 0, y0, _U16, y1)
        return line_count * len(self.sections)

    def draw(self, view: View) -> None:
        """Write every view pixel, scaling ``color`` by the counter's top byte."""
        color = self.color
        for y in range(view.height):
            for x in range(view.width):
                section = self.sections[(x >> 8) + (y >> 8) * self.section_count_x]
                s = section[(x & 255) + ((y & 255) << 8)] >> 24
                view.set(
                    x,
                    y,
                    Color32(
                        (s * color.r) >> 8,
                        (s * color.g) >> 8,
                        (s * color.b) >> 8,
                        (s * color.a) >> 8,
                    ),
                )