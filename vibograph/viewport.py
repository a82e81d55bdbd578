# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Virtualized scrolling support for the commit graph.

Everything here is plain arithmetic on the scroll position, so it is cheap
enough to run on every scroll event regardless of the number of rows.
"""

import dataclasses
import math

from vibograph.settings import SCROLL_BUFFER


def visibleRange(
        scrollTop: float,
        containerHeight: float,
        rowHeight: int,
        rowCount: int,
        buffer: int = SCROLL_BUFFER
) -> tuple[int, int]:
    """
    Return the (first, last) indices of the rows to render, inclusive,
    including `buffer` extra rows above and below the viewport.

    Out-of-range scroll positions are clamped. If there are no rows at all,
    the returned range is empty (last < first).
    """

    if rowHeight <= 0:
        raise ValueError(f"row height must be positive (got {rowHeight})")

    if rowCount <= 0:
        return 0, -1

    scrollTop = max(0, scrollTop)
    containerHeight = max(0, containerHeight)
    buffer = max(0, buffer)

    first = max(0, math.floor(scrollTop / rowHeight) - buffer)
    last = min(rowCount - 1, math.ceil((scrollTop + containerHeight) / rowHeight) + buffer)

    # Scrolled past the end: show the last rows rather than nothing
    first = min(first, last)

    return first, last


def totalHeight(rowHeight: int, rowCount: int) -> int:
    return max(0, rowCount) * rowHeight


def extendedHeight(rowHeight: int, rowCount: int, containerHeight: float) -> float:
    """
    Height of the scrollable area. Short histories are stretched to fill
    the container so that continuation lines can run down to the bottom.
    """
    return max(totalHeight(rowHeight, rowCount), containerHeight)


@dataclasses.dataclass
class ViewportWindow:
    rowHeight: int
    rowCount: int = 0
    buffer: int = SCROLL_BUFFER

    def visibleRange(self, scrollTop: float, containerHeight: float) -> tuple[int, int]:
        return visibleRange(scrollTop, containerHeight, self.rowHeight, self.rowCount, self.buffer)

    def visibleRows(self, scrollTop: float, containerHeight: float) -> range:
        first, last = self.visibleRange(scrollTop, containerHeight)
        return range(first, last + 1)

    @property
    def totalHeight(self) -> int:
        return totalHeight(self.rowHeight, self.rowCount)

    def extendedHeight(self, containerHeight: float) -> float:
        return extendedHeight(self.rowHeight, self.rowCount, containerHeight)

    def rowTop(self, rowIndex: int) -> int:
        return rowIndex * self.rowHeight

    def rowAt(self, y: float) -> int:
        """ Index of the row under the given vertical position, or -1 if there's none. """
        if y < 0 or self.rowHeight <= 0:
            return -1
        row = int(y // self.rowHeight)
        return row if row < self.rowCount else -1
