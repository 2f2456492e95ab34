"""Ramdisk content sniffing.

The release variant decides which Samsung init quirks apply. It is derived
from a single sentinel entry and never changes during a patch run.
"""

from __future__ import annotations

from mbpatch.archive.store import RamdiskArchive
from mbpatch.types import RamdiskFlavor, ReleaseVariant

# Low-power-mode rc file only shipped by the older release
LPM_RC = "MSM8960_lpm.rc"

DUALBOOT_MOUNT_SCRIPT = "init.dualboot.mounting.sh"
GOOGLE_EDITION_RC = "init.jgedlte.rc"
TOUCHWIZ_RC = "init.carrier.rc"


def detect_release_variant(archive: RamdiskArchive) -> ReleaseVariant:
    """Classify the OS release of a ramdisk. Read-only."""
    if archive.exists(LPM_RC):
        return ReleaseVariant.OLDER
    return ReleaseVariant.NEWER


def guess_flavor(archive: RamdiskArchive) -> RamdiskFlavor:
    """Guess the ramdisk flavor from marker files.

    Checks are ordered from most to least specific; anything unrecognized is
    treated as an AOSP-derived ramdisk.
    """
    if DUALBOOT_MOUNT_SCRIPT.encode() in archive.read("init.target.rc"):
        return RamdiskFlavor.NOOBDEV
    if archive.exists(GOOGLE_EDITION_RC):
        return RamdiskFlavor.GOOGLE_EDITION
    if archive.exists(TOUCHWIZ_RC):
        return RamdiskFlavor.TOUCHWIZ
    return RamdiskFlavor.AOSP


__all__ = [
    "DUALBOOT_MOUNT_SCRIPT",
    "GOOGLE_EDITION_RC",
    "LPM_RC",
    "TOUCHWIZ_RC",
    "detect_release_variant",
    "guess_flavor",
]
