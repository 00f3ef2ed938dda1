"""
Guillotine free-rectangle bin.

Each bin keeps a list of free rectangles. Placing a rectangle consumes the
top-left corner of one free rectangle and splits the remainder into at most
two new free rectangles:

    +-------+-----------+        +-------+-----------+
    | rect  |  lesser   |        | rect  |           |
    +-------+-----------+   or   +-------+  bigger   |
    |      bigger       |        |lesser |           |
    +-------------------+        +-------+-----------+

The split runs along the side with the larger leftover so that the bigger
piece spans the full width (or height) of the original free rectangle.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class FreeRect:
    """An empty region of a bin."""
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def fits(self, width: int, height: int) -> bool:
        return width <= self.width and height <= self.height


def split_free_rect(free: FreeRect, width: int, height: int) -> List[FreeRect]:
    """
    Split a free rectangle after placing a width x height rectangle at its corner.

    Returns:
        The remaining free rectangles (zero, one or two of them), bigger first
    """
    free_w = free.width - width
    free_h = free.height - height

    if free_w < 0 or free_h < 0:
        raise ValueError(f"{width}x{height} does not fit in {free}")

    if free_w == 0 and free_h == 0:
        return []
    if free_h == 0:
        return [FreeRect(free.x + width, free.y, free_w, free.height)]
    if free_w == 0:
        return [FreeRect(free.x, free.y + height, free.width, free_h)]

    if free_w > free_h:
        bigger = FreeRect(free.x + width, free.y, free_w, free.height)
        lesser = FreeRect(free.x, free.y + height, width, free_h)
    else:
        bigger = FreeRect(free.x, free.y + height, free.width, free_h)
        lesser = FreeRect(free.x + width, free.y, free_w, height)
    return [bigger, lesser]


class GuillotineBin:
    """A square bin with a guillotine free list."""

    def __init__(self, bin_id: int, size: int):
        self.bin_id = bin_id
        self.size = size
        self.free_rects: List[FreeRect] = [FreeRect(0, 0, size, size)]

    def best_fit(self, width: int, height: int) -> Optional[Tuple[int, int]]:
        """
        Find the free rectangle with the smallest leftover area that can contain width x height.

        Returns:
            (leftover_area, free_rect_index), or None if nothing fits. Ties go
            to the earliest free rectangle.
        """
        best = None
        needed = width * height
        for index, free in enumerate(self.free_rects):
            if not free.fits(width, height):
                continue
            leftover = free.area - needed
            if best is None or leftover < best[0]:
                best = (leftover, index)
        return best

    def place(self, index: int, width: int, height: int) -> Tuple[int, int]:
        """Place a rectangle in free_rects[index] and return its (x, y)."""
        free = self.free_rects[index]
        self.free_rects[index:index + 1] = split_free_rect(free, width, height)
        return free.x, free.y

    @property
    def free_area(self) -> int:
        return sum(f.area for f in self.free_rects)

    def __repr__(self):
        return f"GuillotineBin(id={self.bin_id}, size={self.size}, free={len(self.free_rects)})"
