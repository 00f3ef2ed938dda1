"""
Rectangle catalog

Holds every source rectangle (id, width, height) that is going to be packed.
Iteration order is insertion order so that packing is reproducible across runs.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Dict, Hashable, Iterator, List

from .exceptions import DuplicateId, InvalidDimension

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceRectangle:
    """Dimensions of one decoded source image."""
    id: Hashable
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def max_side(self) -> int:
        return max(self.width, self.height)


class RectangleCatalog:
    """
    Registry of source rectangles, keyed by a stable unique id.

    Example:
        >>> catalog = RectangleCatalog()
        >>> catalog.add("grass.png", 16, 16)
        >>> [r.id for r in catalog.all()]
        ['grass.png']
    """

    def __init__(self):
        self._rects: Dict[Hashable, SourceRectangle] = {}

    def add(self, rect_id: Hashable, width: int, height: int) -> SourceRectangle:
        """
        Register a rectangle.

        Raises:
            InvalidDimension: If width or height is not a positive integer
            DuplicateId: If rect_id is already registered
        """
        if not _is_positive_int(width) or not _is_positive_int(height):
            raise InvalidDimension(rect_id, width, height)
        if rect_id in self._rects:
            raise DuplicateId(rect_id)

        rect = SourceRectangle(id=rect_id, width=int(width), height=int(height))
        self._rects[rect_id] = rect
        logger.debug(f"Catalogued {rect_id} ({width}x{height})")
        return rect

    def all(self) -> List[SourceRectangle]:
        """All registered rectangles, in insertion order."""
        return list(self._rects.values())

    def get(self, rect_id: Hashable) -> SourceRectangle:
        return self._rects[rect_id]

    def __len__(self) -> int:
        return len(self._rects)

    def __contains__(self, rect_id) -> bool:
        return rect_id in self._rects

    def __iter__(self) -> Iterator[SourceRectangle]:
        return iter(self.all())


def _is_positive_int(value) -> bool:
    # bool is an int subclass but never a valid dimension
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value > 0
