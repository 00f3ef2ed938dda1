"""Atlas build configuration"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .encoder import TOKTX_ENV_VAR
from .packing.engine import DEFAULT_BIN_SIZE, DEFAULT_MAX_BINS


class AtlasConfig(BaseModel):
    """
    Settings for one atlas build.

    Example:
        >>> config = AtlasConfig(
        ...     input_folders=["sprites/ui", "sprites/icons"],
        ...     output_dir="build",
        ...     atlas_name="ui",
        ... )
        >>> config.texture_path
        PosixPath('build/ui.ktx2')
    """
    model_config = ConfigDict(extra='forbid')

    input_folders: List[Path] = Field(..., min_length=1, description="Folders scanned (non-recursively) for source images.")
    output_dir: Path = Field(..., description="Where sheets, the texture array and the description are written.")
    atlas_name: str = Field(..., description="Base name of the .ktx2 and description files.")
    sheet_size: int = Field(default=DEFAULT_BIN_SIZE, gt=0, description="Side length of every square sheet.")
    max_bins: int = Field(default=DEFAULT_MAX_BINS, ge=1, description="Most sheets to try before giving up.")
    encoder_path: Optional[str] = Field(default=None, description=f"toktx executable. None resolves ${TOKTX_ENV_VAR}, then PATH, at encode time.")
    skip_encode: bool = Field(default=False, description="Write sheets and description without running toktx.")
    description_format: Literal['ron', 'json'] = Field(default='ron')
    max_workers: Optional[int] = Field(default=None, ge=1, description="Threads used to composite sheets.")

    @field_validator('atlas_name')
    @classmethod
    def validate_atlas_name(cls, v):
        if not v or not v.strip():
            raise ValueError("atlas_name must not be empty")
        if os.sep in v or (os.altsep and os.altsep in v) or '/' in v:
            raise ValueError(f"atlas_name must be a plain file name, got {v!r}")
        return v

    @property
    def texture_path(self) -> Path:
        return self.output_dir / f"{self.atlas_name}.ktx2"

    @property
    def description_path(self) -> Path:
        return self.output_dir / f"{self.atlas_name}.{self.description_format}"

    def sheet_path(self, layer: int) -> Path:
        return self.output_dir / f"{self.atlas_name}_{layer}.png"
