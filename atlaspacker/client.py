"""
Core AtlasPacker API

Provides the AtlasBuilder class that runs the whole pipeline
(load -> catalog -> pack -> composite -> encode -> describe) and the result
objects it returns.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Hashable, Iterable, List, Optional

import numpy as np
from PIL import Image

from .catalog import RectangleCatalog
from .compositor import composite
from .config import AtlasConfig
from .descriptor import describe, identity_layers
from .encoder import encode_texture_array
from .images import SourceImage, load_images
from .packing.engine import PackingResult, Placement, pack
from .schema.atlas import AtlasDescription, AtlasEntry

logger = logging.getLogger(__name__)


@dataclass
class PackedAtlas:
    """
    In-memory result of packing and compositing.

    Attributes:
        packing: Placements, bin count and attempt count
        sheets: bin_id -> (sheet_size, sheet_size, 2) uint8 pixel buffer
        layers: bin_id -> layer index in the texture array
        entries: source id -> AtlasEntry, in catalog order
    """
    packing: PackingResult
    sheets: Dict[int, np.ndarray]
    layers: Dict[int, int]
    entries: Dict[Hashable, AtlasEntry]

    @property
    def bin_count(self) -> int:
        return self.packing.bin_count

    def description(self, file: str) -> AtlasDescription:
        size = self.packing.bin_size
        return AtlasDescription(frames=list(self.entries.values()), size=(size, size), file=file)


@dataclass
class AtlasBuildResult:
    """
    Files produced by AtlasBuilder.build().

    Attributes:
        atlas: The in-memory packed atlas
        sheet_paths: Per-sheet PNGs, in layer order
        texture_path: The .ktx2 texture array (not written when encoding was skipped)
        description_path: The description file
        description: Contents of the description file
        encoded: Whether toktx ran
    """
    atlas: PackedAtlas
    sheet_paths: List[Path]
    texture_path: Path
    description_path: Path
    description: AtlasDescription
    encoded: bool

    @property
    def entries(self) -> Dict[Hashable, AtlasEntry]:
        return self.atlas.entries

    @property
    def placements(self) -> List[Placement]:
        return self.atlas.packing.placements

    @property
    def bin_count(self) -> int:
        return self.atlas.bin_count

    @property
    def attempts(self) -> int:
        return self.atlas.packing.attempts


class AtlasBuilder:
    """
    Builds a layered texture atlas from folders of images.

    Examples:
        Basic usage:
        >>> config = AtlasConfig(input_folders=["sprites"], output_dir="out", atlas_name="sprites")
        >>> result = AtlasBuilder(config).build()
        >>> print(result.bin_count, result.description_path)

        In-memory packing only:
        >>> atlas = AtlasBuilder(config).pack_images(images)
        >>> atlas.entries[images[0].path]
    """

    def __init__(self, config: AtlasConfig):
        self.config = config

    def build(self) -> AtlasBuildResult:
        """
        Run the full pipeline and write every output file.

        Raises:
            PackingFailure: If the images cannot be packed
            EncoderNotFound: If toktx is needed but missing
            EncodeFailure: If toktx exits non-zero (sheets stay on disk,
                           no description is written)
            OSError: If an output file cannot be written
        """
        config = self.config
        images = load_images(config.input_folders)
        atlas = self.pack_images(images)

        config.output_dir.mkdir(parents=True, exist_ok=True)
        sheet_paths = self.write_sheets(atlas)

        encoded = False
        if config.skip_encode:
            logger.info("Skipping texture array encoding")
        else:
            encode_texture_array(sheet_paths, config.texture_path, toktx=config.encoder_path)
            encoded = True

        description = atlas.description(config.texture_path.name)
        description.save(config.description_path, fmt=config.description_format)
        logger.info(f"Wrote atlas description {config.description_path}")

        return AtlasBuildResult(
            atlas=atlas,
            sheet_paths=sheet_paths,
            texture_path=config.texture_path,
            description_path=config.description_path,
            description=description,
            encoded=encoded
        )

    def pack_images(self, images: Iterable[SourceImage]) -> PackedAtlas:
        """
        Catalog, pack, composite and describe decoded images without touching disk.

        Raises:
            DuplicateId: If two images share a path
            PackingFailure: If the images cannot be packed
        """
        catalog = RectangleCatalog()
        pixels = {}
        for image in images:
            catalog.add(image.path, image.width, image.height)
            pixels[image.path] = image.pixels

        packing = pack(catalog.all(), self.config.sheet_size, self.config.max_bins)
        sheets = composite(
            packing.placements,
            packing.bin_size,
            pixels,
            bin_count=packing.bin_count,
            max_workers=self.config.max_workers
        )
        layers = identity_layers(packing.bin_count)
        entries = describe(packing.placements, layers)

        return PackedAtlas(packing=packing, sheets=sheets, layers=layers, entries=entries)

    def write_sheets(self, atlas: PackedAtlas) -> List[Path]:
        """Save each sheet as a lossless PNG, returning the paths in layer order."""
        paths = []
        for bin_id in sorted(atlas.sheets, key=atlas.layers.__getitem__):
            path = self.config.sheet_path(atlas.layers[bin_id])
            Image.fromarray(atlas.sheets[bin_id]).save(path, format='PNG')
            paths.append(path)
        logger.info(f"Wrote {len(paths)} sheet(s) to {self.config.output_dir}")
        return paths


def build_atlas(
    input_folders: Iterable,
    output_dir,
    atlas_name: str,
    sheet_size: Optional[int] = None,
    **options
) -> AtlasBuildResult:
    """
    Build an atlas in one call.

    Example:
        >>> build_atlas(["sprites"], "out", "sprites", sheet_size=1024, skip_encode=True)
    """
    if sheet_size is not None:
        options['sheet_size'] = sheet_size
    config = AtlasConfig(
        input_folders=list(input_folders),
        output_dir=output_dir,
        atlas_name=atlas_name,
        **options
    )
    return AtlasBuilder(config).build()
