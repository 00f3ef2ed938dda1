"""
Bin compositor

Materializes placements into one 2-channel (luminance, alpha) pixel buffer per
bin. Source pixels are copied verbatim: no blending, no resampling.

Buffers are numpy uint8 arrays of shape (bin_size, bin_size, 2), zero
initialized (transparent black). Each bin's buffer is only ever written by the
worker compositing that bin, so bins are composited in parallel without locks.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Union

import numpy as np

from .packing.engine import Placement

logger = logging.getLogger(__name__)

CHANNELS = 2

PixelSource = Union[Mapping[Hashable, np.ndarray], Callable[[Hashable], np.ndarray]]


def new_pixel_buffer(bin_size: int) -> np.ndarray:
    """A transparent black bin_size x bin_size luminance+alpha buffer."""
    return np.zeros((bin_size, bin_size, CHANNELS), dtype=np.uint8)


def composite(
    placements: Iterable[Placement],
    bin_size: int,
    pixel_source: PixelSource,
    bin_count: Optional[int] = None,
    max_workers: Optional[int] = None
) -> Dict[int, np.ndarray]:
    """
    Copy every placed source image into its bin's pixel buffer.

    Args:
        placements: Placements from the packing engine (bounds and non-overlap
                    are assumed, not re-checked)
        bin_size: Side length of every bin
        pixel_source: Mapping (or callable) from rect id to a (height, width, 2)
                      uint8 array; PIL "LA" images are accepted as well
        bin_count: Number of bins to allocate. Bins without placements still get
                   an empty buffer so layer ordering is preserved. Defaults to
                   one past the highest bin id used (at least 1).
        max_workers: Thread pool size for per-bin compositing

    Returns:
        Dict of bin_id -> pixel buffer, ordered by bin_id
    """
    placements = list(placements)
    by_bin: Dict[int, List[Placement]] = defaultdict(list)
    for placement in placements:
        by_bin[placement.bin_id].append(placement)

    highest = max(by_bin, default=0)
    if bin_count is None:
        bin_count = highest + 1
    elif highest >= bin_count:
        raise ValueError(f"Placement in bin {highest} but only {bin_count} bin(s) requested")

    buffers = {bin_id: new_pixel_buffer(bin_size) for bin_id in range(bin_count)}

    lookup = pixel_source if callable(pixel_source) else pixel_source.__getitem__

    jobs = [(buffers[bin_id], by_bin[bin_id]) for bin_id in buffers if by_bin.get(bin_id)]
    if len(jobs) > 1 and max_workers != 1:
        with ThreadPoolExecutor(max_workers=max_workers or min(8, len(jobs))) as pool:
            futures = [pool.submit(_composite_bin, buf, items, lookup) for buf, items in jobs]
            for future in futures:
                future.result()
    else:
        for buf, items in jobs:
            _composite_bin(buf, items, lookup)

    logger.info(f"Composited {len(placements)} images into {bin_count} sheet(s)")
    return buffers


def blit(buffer: np.ndarray, pixels, x: int, y: int) -> None:
    """Copy pixels into buffer with their top-left corner at (x, y)."""
    src = np.asarray(pixels, dtype=np.uint8)
    if src.ndim != 3 or src.shape[2] != CHANNELS:
        raise ValueError(f"Expected a (height, width, {CHANNELS}) array, got shape {src.shape}")
    height, width = src.shape[:2]
    buffer[y:y + height, x:x + width] = src


def _composite_bin(buffer: np.ndarray, placements: List[Placement], lookup) -> None:
    for placement in placements:
        logger.debug(f"Copying {placement.rect_id}")
        src = np.asarray(lookup(placement.rect_id), dtype=np.uint8)
        if src.shape[:2] != (placement.height, placement.width):
            raise ValueError(
                f"Pixels for {placement.rect_id} are {src.shape[1]}x{src.shape[0]}, "
                f"placement is {placement.width}x{placement.height}"
            )
        blit(buffer, src, placement.x, placement.y)
