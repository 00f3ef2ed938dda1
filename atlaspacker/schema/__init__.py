"""Atlas description schema."""
from .atlas import AtlasDescription, AtlasEntry

__all__ = [
    "AtlasDescription",
    "AtlasEntry",
]
