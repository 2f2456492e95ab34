"""Rules for Samsung Galaxy ramdisks (Google Edition and TouchWiz)."""

from __future__ import annotations

import logging
import re

from mbpatch.archive.store import RamdiskArchive
from mbpatch.config import PatcherPaths
from mbpatch.ramdisk.core import INIT_RC
from mbpatch.ramdisk.qcom import INIT_TARGET_RC, RAW_DATA
from mbpatch.ramdisk.text import (
    comment_matching,
    comment_out,
    read_lines,
    rewrite_lines,
)
from mbpatch.ramdisk.variant import LPM_RC
from mbpatch.types import ReleaseVariant

logger = logging.getLogger(__name__)

UEVENTD_RC = "ueventd.rc"
UEVENTD_QCOM_RC = "ueventd.qcom.rc"

_RELOAD_POLICY_RE = re.compile(r"^\s*setprop\s+selinux\.reload_policy\b")
_DIRECT_MOUNT_RE = re.compile(
    r"^\s+(wait|mount\s+\S+)\s+/dev/\S*/by-name/(system|userdata)(\s|$)"
)
_LPM_CACHE_MOUNT_RE = re.compile(r"^\s+mount\s.*/cache.*$")
_BLOCK_DEVICE_RULE_RE = re.compile(r"^/dev/block/")


class GalaxyRules:
    """Rules for Samsung skins, some of which depend on the release."""

    def __init__(
        self, paths: PatcherPaths, archive: RamdiskArchive, release: ReleaseVariant
    ) -> None:
        self.paths = paths
        self.archive = archive
        self.release = release

    def ge_modify_init_rc(self) -> None:
        """Keep the older Google Edition init from reloading SELinux policy.

        The policy would be reloaded from /data, which is not the booted ROM's.
        """
        if self.release != ReleaseVariant.OLDER:
            read_lines(self.archive, INIT_RC)
            return
        rewrite_lines(self.archive, INIT_RC, comment_matching(_RELOAD_POLICY_RE))

    def tw_modify_init_rc(self) -> None:
        def rewrite(line: str) -> str:
            if _RELOAD_POLICY_RE.search(line):
                return comment_out(line)
            return line.replace("/data/media", f"{RAW_DATA}/media")

        rewrite_lines(self.archive, INIT_RC, rewrite)

    def tw_modify_init_target_rc(self) -> None:
        """Comment out direct system/userdata mounts that bypass the fstab."""
        rewrite_lines(self.archive, INIT_TARGET_RC, comment_matching(_DIRECT_MOUNT_RE))

    def getw_modify_lpm_rc(self) -> None:
        """Stop the charging-mode init from mounting cache.

        The newer release has no low-power-mode rc file.
        """
        if self.release != ReleaseVariant.OLDER:
            logger.debug("No %s on this release, skipping", LPM_RC)
            return
        rewrite_lines(self.archive, LPM_RC, comment_matching(_LPM_CACHE_MOUNT_RE))

    def tw_modify_ueventd_rc(self) -> None:
        rewrite_lines(self.archive, UEVENTD_RC, comment_matching(_BLOCK_DEVICE_RULE_RE))

    def tw_modify_ueventd_qcom_rc(self) -> None:
        rewrite_lines(
            self.archive, UEVENTD_QCOM_RC, comment_matching(_BLOCK_DEVICE_RULE_RE)
        )


__all__ = ["UEVENTD_QCOM_RC", "UEVENTD_RC", "GalaxyRules"]
