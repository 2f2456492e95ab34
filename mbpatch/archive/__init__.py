"""Ramdisk archive handling.

This module handles:
- The in-memory archive store that patchers mutate
- Loading and saving cpio ramdisks (optionally gzip-compressed)
"""

from mbpatch.archive.io import load_ramdisk, save_ramdisk
from mbpatch.archive.store import ArchiveEntry, RamdiskArchive

__all__ = ["ArchiveEntry", "RamdiskArchive", "load_ramdisk", "save_ramdisk"]
