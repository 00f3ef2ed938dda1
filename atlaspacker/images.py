"""
Source image loading.

Lists input folders, decodes every regular file with Pillow and converts it to
luminance+alpha. Files that fail to decode are logged and skipped; one bad
file never aborts an atlas build.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .exceptions import DecodeFailure

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


@dataclass
class SourceImage:
    """A decoded source image."""
    path: Path
    pixels: np.ndarray  # (height, width, 2) uint8, luminance + alpha

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]


def to_luma_alpha(img: Image.Image) -> np.ndarray:
    """Convert a PIL image to a (height, width, 2) uint8 luminance+alpha array."""
    if img.mode in ('I', 'I;16', 'I;16L', 'I;16B', 'I;16N'):
        # 16-bit grayscale, scaled down to 8 bits
        luma = (np.asarray(img).astype(np.int64) >> 8).clip(0, 255).astype(np.uint8)
        alpha = np.full_like(luma, 255)
        return np.dstack((luma, alpha))
    if img.mode == 'P':
        # Resolve palette transparency before dropping to 2 channels
        img = img.convert('RGBA')
    if img.mode != 'LA':
        img = img.convert('LA')
    return np.array(img, dtype=np.uint8).reshape(img.height, img.width, 2)


def decode_image(path: PathLike) -> SourceImage:
    """
    Decode one image file.

    Raises:
        DecodeFailure: If Pillow cannot read or convert the file
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            pixels = to_luma_alpha(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise DecodeFailure(path, str(e)) from e
    return SourceImage(path=path, pixels=pixels)


def list_image_files(folder: PathLike) -> List[Path]:
    """Regular files directly inside folder, sorted by name. Missing folders yield nothing."""
    folder = Path(folder)
    if not folder.is_dir():
        logger.warning(f"Input folder not found, skipping: {folder}")
        return []
    return sorted(p for p in folder.iterdir() if p.is_file())


def load_images(folders: Iterable[PathLike]) -> List[SourceImage]:
    """
    Decode every image in the given folders.

    Folders are read in the order given, files within a folder by name.
    Undecodable files are skipped with a warning.
    """
    images = []
    skipped = 0
    for folder in folders:
        for path in list_image_files(folder):
            try:
                images.append(decode_image(path))
            except DecodeFailure as e:
                logger.warning(str(e))
                skipped += 1

    logger.info(f"Loaded {len(images)} images ({skipped} skipped)")
    return images
