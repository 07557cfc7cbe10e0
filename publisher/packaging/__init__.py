"""Packaging module for single-binary Lambda archives.

Public API:
    pack(executable_path, entry_name) -> PackagedArchive
"""

from publisher.packaging.archive import pack
from publisher.packaging.types import PackagedArchive

__all__ = ["pack", "PackagedArchive"]
