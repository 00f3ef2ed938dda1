"""
Packing engine

Assigns every source rectangle a sheet (bin) and an (x, y) offset.

Growth strategy:
    Start with one bin. If any rectangle cannot be placed, throw the whole
    attempt away, rebuild the bin set with one more bin and pack everything
    again from scratch. The attempt index is the bin count. There is no
    per-rectangle backtracking.

Placement heuristic:
    Rectangles go in by descending area (then descending longest side, then
    id). Each one is put into the free rectangle, across all bins, that leaves
    the smallest leftover area ("smallest box"). Ties go to the lowest bin id.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Optional

from ..catalog import SourceRectangle
from ..exceptions import CapacityExceeded, RectangleTooLarge
from .guillotine import GuillotineBin

logger = logging.getLogger(__name__)

DEFAULT_BIN_SIZE = 2048
DEFAULT_MAX_BINS = 32


@dataclass(frozen=True)
class Placement:
    """Where a rectangle ended up."""
    rect_id: Hashable
    bin_id: int
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def overlaps(self, other: "Placement") -> bool:
        """True if both placements share a bin and their rectangles intersect."""
        if self.bin_id != other.bin_id:
            return False
        return (
            self.x < other.right and other.x < self.right
            and self.y < other.bottom and other.y < self.bottom
        )


@dataclass
class PackingResult:
    """
    A successful packing.

    Attributes:
        placements: One Placement per input rectangle, in input order
        bin_count: Number of bins used (>= 1, empty bins included)
        bin_size: Side length of every bin
        attempts: Number of packing attempts made (equals bin_count)
    """
    placements: List[Placement]
    bin_count: int
    bin_size: int
    attempts: int
    _by_id: Optional[Dict[Hashable, Placement]] = field(default=None, init=False, repr=False, compare=False)

    def by_id(self) -> Dict[Hashable, Placement]:
        if self._by_id is None:
            self._by_id = {p.rect_id: p for p in self.placements}
        return self._by_id

    def placements_in_bin(self, bin_id: int) -> List[Placement]:
        return [p for p in self.placements if p.bin_id == bin_id]


def packing_order(rectangles: Iterable[SourceRectangle]) -> List[SourceRectangle]:
    """Largest area first, then longest side, then id."""
    return sorted(rectangles, key=lambda r: (-r.area, -r.max_side, str(r.id)))


def pack(
    rectangles: Iterable[SourceRectangle],
    bin_size: int = DEFAULT_BIN_SIZE,
    max_bins: int = DEFAULT_MAX_BINS
) -> PackingResult:
    """
    Pack rectangles into the smallest number of bin_size x bin_size bins.

    Args:
        rectangles: Source rectangles (e.g. RectangleCatalog.all())
        bin_size: Side length of every bin
        max_bins: Largest bin count to try before giving up

    Returns:
        PackingResult with a placement for every rectangle

    Raises:
        ValueError: If bin_size or max_bins is not positive
        RectangleTooLarge: If any rectangle is wider or taller than bin_size
        CapacityExceeded: If packing still fails with max_bins bins
    """
    if bin_size <= 0:
        raise ValueError(f"bin_size must be positive, got {bin_size}")
    if max_bins < 1:
        raise ValueError(f"max_bins must be at least 1, got {max_bins}")

    rects = list(rectangles)

    # Checked up front, no bin count can ever hold these
    for rect in rects:
        if rect.width > bin_size or rect.height > bin_size:
            raise RectangleTooLarge(rect.id, rect.width, rect.height, bin_size)

    ordered = packing_order(rects)

    bin_count = 1
    attempts = 0
    while bin_count <= max_bins:
        attempts += 1
        placed = _pack_attempt(ordered, bin_size, bin_count)
        if placed is not None:
            placements = [placed[r.id] for r in rects]
            logger.info(
                f"Packed {len(placements)} rectangles into {bin_count} "
                f"{bin_size}x{bin_size} sheet(s) after {attempts} attempt(s)"
            )
            return PackingResult(
                placements=placements,
                bin_count=bin_count,
                bin_size=bin_size,
                attempts=attempts
            )

        logger.debug(f"Packing into {bin_count} sheet(s) failed, retrying with {bin_count + 1}")
        bin_count += 1

    raise CapacityExceeded(attempts, max_bins, bin_size)


def _pack_attempt(
    ordered: List[SourceRectangle],
    bin_size: int,
    bin_count: int
) -> Optional[Dict[Hashable, Placement]]:
    """One attempt with a fresh set of bin_count bins. None if anything fails to fit."""
    bins = [GuillotineBin(bin_id, bin_size) for bin_id in range(bin_count)]
    placed: Dict[Hashable, Placement] = {}

    for rect in ordered:
        best_bin = None
        best_fit = None
        for target in bins:
            fit = target.best_fit(rect.width, rect.height)
            if fit is None:
                continue
            if best_fit is None or fit[0] < best_fit[0]:
                best_bin, best_fit = target, fit

        if best_bin is None:
            return None

        x, y = best_bin.place(best_fit[1], rect.width, rect.height)
        placed[rect.id] = Placement(
            rect_id=rect.id,
            bin_id=best_bin.bin_id,
            x=x,
            y=y,
            width=rect.width,
            height=rect.height
        )

    return placed
