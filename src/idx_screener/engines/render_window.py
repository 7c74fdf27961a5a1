"""Virtualized render window for long screen views.

Rows have a uniform estimated extent, so every range query and scroll update
is O(1) regardless of the view length.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class WindowRange:
    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def __len__(self) -> int:
        return 0 if self.is_empty else self.end - self.start + 1

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index <= self.end

    def indices(self) -> range:
        return range(self.start, self.end + 1)


EMPTY_RANGE = WindowRange(0, -1)


@dataclass(frozen=True)
class VirtualItem:
    index: int
    start: float
    size: float

    @property
    def end(self) -> float:
        return self.start + self.size


def compute_range(count: int, estimate: float, viewport: float, offset: float, overscan: int) -> WindowRange:
    """Rows intersecting ``[offset, offset + viewport]`` plus ``overscan`` rows each side."""
    if count <= 0 or estimate <= 0:
        return EMPTY_RANGE
    last_index = count - 1
    first_visible = min(last_index, max(0, math.floor(offset / estimate)))
    last_visible = min(last_index, max(first_visible, math.floor((offset + max(viewport, 0.0)) / estimate)))
    margin = max(0, int(overscan))
    return WindowRange(max(0, first_visible - margin), min(last_index, last_visible + margin))


class RenderWindow:
    """Scroll state plus the derived materialization range."""

    def __init__(
        self,
        count: int = 0,
        *,
        estimate: float = 32.0,
        viewport: float = 640.0,
        overscan: int = 20,
        offset: float = 0.0,
    ) -> None:
        if estimate <= 0:
            raise ValueError("row estimate must be positive")
        self.estimate = float(estimate)
        self.viewport = max(0.0, float(viewport))
        self.overscan = max(0, int(overscan))
        self.count = max(0, int(count))
        self.offset = 0.0
        self.scroll_to(offset)

    @property
    def total_size(self) -> float:
        return self.count * self.estimate

    @property
    def max_offset(self) -> float:
        return max(0.0, self.total_size - self.viewport)

    def offset_of(self, index: int) -> float:
        return index * self.estimate

    def scroll_to(self, offset: float) -> float:
        self.offset = min(max(0.0, float(offset)), self.max_offset)
        return self.offset

    def set_viewport(self, viewport: float) -> None:
        self.viewport = max(0.0, float(viewport))
        self.scroll_to(self.offset)

    def set_count(self, count: int) -> None:
        """Re-measure after the view length changed."""
        self.count = max(0, int(count))
        self.scroll_to(self.offset)

    def is_fully_visible(self, index: int) -> bool:
        top = self.offset_of(index)
        return top >= self.offset and top + self.estimate <= self.offset + self.viewport

    def scroll_to_index(self, index: int) -> float:
        """Bring row ``index`` into view, aligning to the nearest edge."""
        if self.count == 0:
            return self.offset
        index = max(0, min(int(index), self.count - 1))
        top = self.offset_of(index)
        bottom = top + self.estimate
        if top < self.offset:
            return self.scroll_to(top)
        if bottom > self.offset + self.viewport:
            return self.scroll_to(bottom - self.viewport)
        return self.offset

    def range(self) -> WindowRange:
        return compute_range(self.count, self.estimate, self.viewport, self.offset, self.overscan)

    def virtual_items(self) -> list[VirtualItem]:
        return [VirtualItem(i, self.offset_of(i), self.estimate) for i in self.range().indices()]
