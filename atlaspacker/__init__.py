"""
AtlasPacker - Pack folders of 2-channel images into layered texture atlases

Packs luminance+alpha sprites into fixed-size square sheets, composites the
sheets, merges them into a KTX2 texture array and writes a description file
mapping every sprite to its layer and sub-rectangle.
"""

from atlaspacker.client import AtlasBuilder, AtlasBuildResult, PackedAtlas, build_atlas
from atlaspacker.config import AtlasConfig

__version__ = "0.1.0"
__all__ = ["AtlasBuilder", "AtlasBuildResult", "AtlasConfig", "PackedAtlas", "build_atlas"]
