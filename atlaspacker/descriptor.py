"""
Atlas descriptor

Turns placements into the per-source records renderers consume.
"""

from typing import Dict, Hashable, Iterable, Mapping

from .packing.engine import Placement
from .schema.atlas import AtlasEntry


def identity_layers(bin_count: int) -> Dict[int, int]:
    """Bin ordinal N becomes layer N."""
    return {bin_id: bin_id for bin_id in range(bin_count)}


def describe(
    placements: Iterable[Placement],
    bin_id_to_layer: Mapping[int, int]
) -> Dict[Hashable, AtlasEntry]:
    """
    Map each placement to an AtlasEntry.

    Args:
        placements: Placements in the order entries should be emitted
        bin_id_to_layer: Output layer index for every bin id in use

    Returns:
        Dict of rect id -> AtlasEntry, in placement order

    Raises:
        KeyError: If a placement's bin has no layer assigned
    """
    entries = {}
    for p in placements:
        if p.bin_id not in bin_id_to_layer:
            raise KeyError(f"No layer assigned to bin {p.bin_id} (used by {p.rect_id})")
        entries[p.rect_id] = AtlasEntry(
            layer=bin_id_to_layer[p.bin_id],
            x=p.x,
            y=p.y,
            width=p.width,
            height=p.height
        )
    return entries
