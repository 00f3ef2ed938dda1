"""
Rectangle packing.

Places variable-size rectangles into a growable set of fixed-size square bins
using a guillotine free list and a smallest-box fit.
"""
from .engine import (
    DEFAULT_BIN_SIZE,
    DEFAULT_MAX_BINS,
    PackingResult,
    Placement,
    pack,
    packing_order,
)
from .guillotine import FreeRect, GuillotineBin, split_free_rect

__all__ = [
    'DEFAULT_BIN_SIZE',
    'DEFAULT_MAX_BINS',
    'PackingResult',
    'Placement',
    'pack',
    'packing_order',
    'FreeRect',
    'GuillotineBin',
    'split_free_rect',
]
