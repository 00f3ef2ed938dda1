"""
Atlas description schema

The description file is the contract consumed by renderers: it names the
layered texture container, the sheet size, and one frame per source image.

FRAME ORDER:
Frames carry no name. A frame's position in the list is its key; frames are
emitted in the order source images were catalogued.

FORMATS:
- RON (default), matching the Rust Object Notation pretty printer:

    (
        frames: [
            (
                layer: 0,
                x: 0,
                y: 0,
                width: 16,
                height: 16,
            ),
        ],
        size: (2048, 2048),
        file: "atlas.ktx2",
    )

- JSON, same field names, `size` as a two element list.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

INDENT = "    "


class AtlasEntry(BaseModel):
    """Where one source image lives in the layered texture."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    layer: int = Field(..., ge=0, description="Index of the sheet in the texture array.")
    x: int = Field(..., ge=0, description="Left edge in pixels.")
    y: int = Field(..., ge=0, description="Top edge in pixels.")
    width: int = Field(..., gt=0, description="Width in pixels.")
    height: int = Field(..., gt=0, description="Height in pixels.")


class AtlasDescription(BaseModel):
    """Everything a renderer needs to map a sprite to its layer and sub-rectangle."""
    model_config = ConfigDict(extra='forbid')

    frames: List[AtlasEntry] = Field(default_factory=list)
    size: Tuple[int, int] = Field(..., description="Sheet (width, height) in pixels.")
    file: str = Field(..., description="Container file name, relative to the description file.")

    @field_validator('size')
    @classmethod
    def validate_size(cls, v):
        if v[0] <= 0 or v[1] <= 0:
            raise ValueError(f"Sheet size must be positive, got {v}")
        return v

    @field_validator('file')
    @classmethod
    def validate_file(cls, v):
        if not v:
            raise ValueError("Container file name must not be empty")
        return v

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode='json'), indent=2)

    def to_ron(self) -> str:
        lines = ["(", f"{INDENT}frames: ["]
        if self.frames:
            for frame in self.frames:
                lines.append(f"{INDENT * 2}(")
                for name in ('layer', 'x', 'y', 'width', 'height'):
                    lines.append(f"{INDENT * 3}{name}: {getattr(frame, name)},")
                lines.append(f"{INDENT * 2}),")
            lines.append(f"{INDENT}],")
        else:
            lines[-1] += "],"
        lines.append(f"{INDENT}size: ({self.size[0]}, {self.size[1]}),")
        lines.append(f"{INDENT}file: {_ron_string(self.file)},")
        lines.append(")")
        return "\n".join(lines)

    def render(self, fmt: str = "ron") -> str:
        if fmt == "ron":
            return self.to_ron()
        if fmt == "json":
            return self.to_json()
        raise ValueError(f"Unsupported description format: {fmt}. Supported: ron, json")

    def save(self, path: Union[str, os.PathLike], fmt: Optional[str] = None) -> None:
        """
        Write the description file.

        Args:
            path: Output file path
            fmt: 'ron' or 'json'. If None, inferred from the file extension.
        """
        if fmt is None:
            fmt = _infer_format(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.render(fmt))

    @classmethod
    def load_json(cls, path: Union[str, os.PathLike]) -> "AtlasDescription":
        with open(path, 'r', encoding='utf-8') as f:
            return cls.model_validate_json(f.read())


def _ron_string(value: str) -> str:
    # RON string escapes match JSON's for everything we emit
    return json.dumps(value, ensure_ascii=False)


def _infer_format(path) -> str:
    ext = Path(path).suffix.lower().lstrip('.')
    if ext in ('ron', 'json'):
        return ext
    raise ValueError(
        f"Cannot infer description format from extension: {ext}. Supported: .ron, .json"
    )
