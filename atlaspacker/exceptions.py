"""Exceptions raised while building a texture atlas"""


class AtlasError(Exception):
    """Base exception for atlas build errors"""
    pass


class CatalogError(AtlasError):
    """Misuse of the rectangle catalog"""
    pass


class InvalidDimension(CatalogError):
    """Rectangle with a zero or negative width/height"""

    def __init__(self, rect_id, width, height):
        self.rect_id = rect_id
        self.width = width
        self.height = height
        super().__init__(
            f"Invalid dimensions for {rect_id}: {width}x{height} (both must be positive)"
        )


class DuplicateId(CatalogError):
    """Rectangle id registered twice"""

    def __init__(self, rect_id):
        self.rect_id = rect_id
        super().__init__(f"Duplicate rectangle id: {rect_id}")


class PackingFailure(AtlasError):
    """Packing did not produce a placement for every rectangle"""
    pass


class RectangleTooLarge(PackingFailure):
    """A single rectangle cannot fit any bin of the configured size"""

    def __init__(self, rect_id, width, height, bin_size):
        self.rect_id = rect_id
        self.width = width
        self.height = height
        self.bin_size = bin_size
        super().__init__(
            f"{rect_id} is {width}x{height}, larger than the {bin_size}x{bin_size} sheet"
        )


class CapacityExceeded(PackingFailure):
    """Packing did not converge within the bin ceiling"""

    def __init__(self, attempts, max_bins, bin_size):
        self.attempts = attempts
        self.max_bins = max_bins
        self.bin_size = bin_size
        super().__init__(
            f"Failed to pack after {attempts} attempts (max {max_bins} sheets of "
            f"{bin_size}x{bin_size}). Increase the sheet size or reduce the input."
        )


class DecodeFailure(AtlasError):
    """A source image could not be decoded (recoverable, file is skipped)"""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = f"Failed to open image {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class EncodeFailure(AtlasError):
    """The external texture-array encoder exited non-zero"""

    def __init__(self, returncode, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"toktx failed (exit code {returncode}).\n"
            f"STDOUT:\n{stdout}\n"
            f"STDERR:\n{stderr}"
        )


class EncoderNotFound(AtlasError, FileNotFoundError):
    """The external texture-array encoder executable is missing"""
    pass
