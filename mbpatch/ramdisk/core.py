"""Core ramdisk rules shared by every flavor."""

from __future__ import annotations

import logging

from mbpatch.archive.store import RamdiskArchive
from mbpatch.config import PatcherPaths
from mbpatch.errors import ArchiveEntryNotFoundError
from mbpatch.ramdisk.assets import inject_asset

logger = logging.getLogger(__name__)

INIT_RC = "init.rc"
MOUNT_SCRIPT = "init.multiboot.mounting.sh"
MOUNT_SCRIPT_MODE = 0o750


class CoreRules:
    """Base normalization of a ramdisk."""

    def __init__(self, paths: PatcherPaths, archive: RamdiskArchive) -> None:
        self.paths = paths
        self.archive = archive

    def patch_ramdisk(self) -> None:
        """Run every core rule in order."""
        self.check_init_rc()
        self.add_mount_script()

    def check_init_rc(self) -> None:
        """Fail if the ramdisk has no usable init.rc."""
        if not self.archive.read(INIT_RC):
            raise ArchiveEntryNotFoundError(INIT_RC)

    def add_mount_script(self) -> None:
        """Add the script that mounts the partitions of the booted ROM."""
        inject_asset(
            self.archive,
            self.paths.script(MOUNT_SCRIPT),
            MOUNT_SCRIPT,
            MOUNT_SCRIPT_MODE,
        )
        logger.debug("Added multi-boot mounting script")


__all__ = ["INIT_RC", "MOUNT_SCRIPT", "CoreRules"]
