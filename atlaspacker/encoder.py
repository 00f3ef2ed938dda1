"""
KTX2 texture array encoder wrapper using toktx

Merges the per-sheet PNGs into one layered texture (one layer per sheet),
2-channel "RG" target, linear transfer function.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .exceptions import EncodeFailure, EncoderNotFound

logger = logging.getLogger(__name__)

TOKTX_ENV_VAR = "TOKTX_PATH"


def find_toktx(explicit: Optional[str] = None) -> str:
    """
    Locate the toktx executable.

    Checks, in order: the explicit path, the TOKTX_PATH environment variable,
    then common install locations (including plain `toktx` on PATH).

    Raises:
        EncoderNotFound: If toktx cannot be found
    """
    if explicit:
        return explicit
    if os.getenv(TOKTX_ENV_VAR):
        return os.getenv(TOKTX_ENV_VAR)

    common_paths = [
        "toktx",  # In PATH
        "/usr/local/bin/toktx",  # Linux / macOS installer
        "/usr/bin/toktx",  # Linux packages
        "C:\\Program Files\\KTX-Software\\bin\\toktx.exe",  # Windows installer
    ]

    for path in common_paths:
        try:
            result = subprocess.run([path, "--version"], capture_output=True)
            if result.returncode == 0:
                return path
        except (FileNotFoundError, PermissionError):
            continue

    raise EncoderNotFound(
        "toktx not found. Install KTX-Software to build texture arrays.\n"
        "Install from: https://github.com/KhronosGroup/KTX-Software/releases\n"
        f"Or set the {TOKTX_ENV_VAR} environment variable."
    )


def build_toktx_command(
    toktx: str,
    output_path: Union[str, os.PathLike],
    sheet_paths: Sequence[Union[str, os.PathLike]]
) -> List[str]:
    """Command line merging sheet_paths (in layer order) into output_path."""
    return [
        toktx,
        "--layers", str(len(sheet_paths)),
        "--target_type", "RG",
        "--assign_oetf", "linear",
        "--t2",
        str(output_path),
        *[str(p) for p in sheet_paths],
    ]


def encode_texture_array(
    sheet_paths: Sequence[Union[str, os.PathLike]],
    output_path: Union[str, os.PathLike],
    toktx: Optional[str] = None
) -> Path:
    """
    Run toktx over the sheets.

    Args:
        sheet_paths: Per-sheet images, ordered by layer
        output_path: .ktx2 file to produce
        toktx: Explicit toktx executable (see find_toktx)

    Returns:
        Path of the written container

    Raises:
        EncoderNotFound: If toktx cannot be found
        EncodeFailure: If toktx exits non-zero (captured output included)
    """
    if not sheet_paths:
        raise ValueError("At least one sheet is required to build a texture array")

    cmd = build_toktx_command(find_toktx(toktx), output_path, sheet_paths)
    logger.info(f"Running {' '.join(cmd[:8])} ... ({len(sheet_paths)} layers)")

    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise EncoderNotFound(f"toktx executable not found: {cmd[0]}") from e

    if result.returncode != 0:
        logger.error(
            "toktx failed: rc=%s\nSTDOUT:\n%s\nSTDERR:\n%s",
            result.returncode, result.stdout, result.stderr
        )
        raise EncodeFailure(result.returncode, result.stdout, result.stderr)

    if result.stdout:
        logger.info(f"toktx stdout:\n{result.stdout}")
    if result.stderr:
        logger.info(f"toktx stderr:\n{result.stderr}")

    logger.info(f"Wrote texture array {output_path}")
    return Path(output_path)
