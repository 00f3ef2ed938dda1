"""
AtlasPacker Quick Start Example

This example shows the basic usage of AtlasPacker to build a texture array
from a folder of sprites.
"""

from atlaspacker import build_atlas

# toktx is found via --toktx, $TOKTX_PATH or PATH
print("Packing sprites/ into 1024x1024 sheets...")
result = build_atlas(["sprites"], "output", "sprites", sheet_size=1024)

print(f"✅ Packed {len(result.entries)} sprites into {result.bin_count} sheet(s)")
print(f"✅ Texture array: {result.texture_path}")
print(f"✅ Description: {result.description_path}")
