"""
AtlasPacker Advanced Example

Drives the packing engine and compositor directly, without any file I/O, and
inspects where each sprite landed.
"""

import numpy as np

from atlaspacker.catalog import RectangleCatalog
from atlaspacker.compositor import composite
from atlaspacker.descriptor import describe, identity_layers
from atlaspacker.exceptions import PackingFailure
from atlaspacker.packing import pack

rng = np.random.default_rng(0)

# Register a handful of glyph-sized rectangles
catalog = RectangleCatalog()
pixels = {}
for i in range(40):
    w, h = int(rng.integers(8, 48)), int(rng.integers(8, 48))
    name = f"glyph_{i:02d}"
    catalog.add(name, w, h)
    pixels[name] = rng.integers(0, 256, size=(h, w, 2), dtype=np.uint8)

try:
    result = pack(catalog.all(), bin_size=128, max_bins=8)
except PackingFailure as e:
    print(f"Packing failed: {e}")
    raise SystemExit(1)

print(f"Used {result.bin_count} sheet(s) after {result.attempts} attempt(s)")

sheets = composite(result.placements, result.bin_size, pixels, bin_count=result.bin_count)
entries = describe(result.placements, identity_layers(result.bin_count))

for bin_id, sheet in sheets.items():
    coverage = (sheet[..., 1] > 0).mean()
    print(f"  sheet {bin_id}: {coverage:.0%} covered")

for name, entry in list(entries.items())[:5]:
    print(f"  {name}: layer {entry.layer} at ({entry.x}, {entry.y}) {entry.width}x{entry.height}")
