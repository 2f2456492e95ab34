"""Ramdisk patchers for the Samsung Galaxy S 4 (jflte).

Supported ramdisk flavors:

1. AOSP or AOSP-derived ramdisks
2. Google Edition (Google Play Edition) ramdisks
3. noobdev ramdisks with built-in dual booting
4. TouchWiz ramdisks

Each flavor is a fixed, ordered step list. Order matters: later steps
assume the mutations of earlier ones.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from mbpatch.archive.store import RamdiskArchive
from mbpatch.config import PatcherPaths
from mbpatch.patchers.base import PatchStep, RamdiskPatcher
from mbpatch.ramdisk.assets import EXECUTABLE_MODE, inject_asset, replace_binary
from mbpatch.ramdisk.core import MOUNT_SCRIPT, CoreRules
from mbpatch.ramdisk.galaxy import GalaxyRules
from mbpatch.ramdisk.qcom import (
    INIT_TARGET_RC,
    RAW_CACHE,
    RAW_DATA,
    RAW_SYSTEM,
    FstabArgs,
    QcomRules,
)
from mbpatch.ramdisk.text import read_lines, write_lines
from mbpatch.ramdisk.variant import DUALBOOT_MOUNT_SCRIPT, detect_release_variant
from mbpatch.types import RamdiskFlavor, ReleaseVariant

logger = logging.getLogger(__name__)

AOSP_ID = "jflte/AOSP/AOSP"
GOOGLE_EDITION_ID = "jflte/GoogleEdition/GoogleEdition"
NOOBDEV_ID = "jflte/AOSP/cxl"
TOUCHWIZ_ID = "jflte/TouchWiz/TouchWiz"

PATCHER_IDS: dict[RamdiskFlavor, str] = {
    RamdiskFlavor.AOSP: AOSP_ID,
    RamdiskFlavor.GOOGLE_EDITION: GOOGLE_EDITION_ID,
    RamdiskFlavor.NOOBDEV: NOOBDEV_ID,
    RamdiskFlavor.TOUCHWIZ: TOUCHWIZ_ID,
}

GOOGLE_EDITION_RC_FILES = ("init.jgedlte.rc",)

# Assets
MODEM_MOUNT_SCRIPT = "jflte/mount.modem.sh"
ADDITIONAL_SCRIPT = "init.additional.sh"
GOOGLE_EDITION_INIT = "init-kk44"
TOUCHWIZ_INIT = "jflte/tw44-init"
TOUCHWIZ_ADBD = "jflte/tw44-adbd"


class JflteRamdiskPatcher(RamdiskPatcher):
    """Patcher for one jflte ramdisk flavor.

    The release variant is detected once, before any step runs.
    """

    def __init__(
        self, flavor: RamdiskFlavor, paths: PatcherPaths, archive: RamdiskArchive
    ) -> None:
        super().__init__(paths, archive)
        self.flavor = flavor
        self.release = detect_release_variant(archive)
        logger.debug("Detected %s release for %s", self.release.value, self.id)

    @property
    def id(self) -> str:
        return PATCHER_IDS[self.flavor]

    def steps(self) -> list[PatchStep]:
        return _FLAVOR_STEPS[self.flavor](self)

    def add_modem_mount_script(self) -> None:
        inject_asset(
            self.archive,
            self.paths.script(MODEM_MOUNT_SCRIPT),
            ADDITIONAL_SCRIPT,
            EXECUTABLE_MODE,
        )

    def replace_init(self, asset: str) -> None:
        replace_binary(self.archive, self.paths.init(asset), "init", EXECUTABLE_MODE)

    def replace_adbd(self, asset: str) -> None:
        replace_binary(
            self.archive, self.paths.init(asset), "sbin/adbd", EXECUTABLE_MODE
        )

    def cxl_modify_init_target_rc(self) -> None:
        """Use the multi-boot mounting script in place of noobdev's own."""
        lines = read_lines(self.archive, INIT_TARGET_RC)
        lines = [line.replace(DUALBOOT_MOUNT_SCRIPT, MOUNT_SCRIPT) for line in lines]
        write_lines(self.archive, INIT_TARGET_RC, lines)


def _aosp_steps(p: JflteRamdiskPatcher) -> list[PatchStep]:
    core = CoreRules(p.paths, p.archive)
    qcom = QcomRules(p.paths, p.archive)
    return [
        PatchStep("core.patch_ramdisk", core.patch_ramdisk),
        PatchStep("qcom.modify_init_rc", qcom.modify_init_rc),
        PatchStep("qcom.modify_init_qcom_rc", qcom.modify_init_qcom_rc),
        PatchStep(
            "qcom.modify_fstab",
            partial(qcom.modify_fstab, FstabArgs(remove_modem_mounts=True)),
        ),
        PatchStep("qcom.modify_init_target_rc", qcom.modify_init_target_rc),
        PatchStep("add_modem_mount_script", p.add_modem_mount_script),
    ]


def _google_edition_steps(p: JflteRamdiskPatcher) -> list[PatchStep]:
    core = CoreRules(p.paths, p.archive)
    qcom = QcomRules(p.paths, p.archive)
    galaxy = GalaxyRules(p.paths, p.archive, p.release)
    steps = [
        PatchStep("core.patch_ramdisk", core.patch_ramdisk),
        PatchStep("qcom.modify_init_rc", qcom.modify_init_rc),
        PatchStep("galaxy.ge_modify_init_rc", galaxy.ge_modify_init_rc),
        PatchStep(
            "qcom.modify_init_qcom_rc",
            partial(qcom.modify_init_qcom_rc, GOOGLE_EDITION_RC_FILES),
        ),
        PatchStep("qcom.modify_fstab", qcom.modify_fstab),
        PatchStep("qcom.modify_init_target_rc", qcom.modify_init_target_rc),
        PatchStep("galaxy.getw_modify_lpm_rc", galaxy.getw_modify_lpm_rc),
    ]
    # The stock init of the older release cannot boot a secondary ROM
    if p.release == ReleaseVariant.OLDER:
        steps.append(
            PatchStep("replace_init", partial(p.replace_init, GOOGLE_EDITION_INIT))
        )
    return steps


def _noobdev_steps(p: JflteRamdiskPatcher) -> list[PatchStep]:
    core = CoreRules(p.paths, p.archive)
    qcom = QcomRules(p.paths, p.archive)
    # /raw-cache is always mounted rw so OTA updaters can write /cache/recovery
    fstab_args = FstabArgs(
        force_cache_rw=True,
        keep_mount_points=True,
        system_mount_point=RAW_SYSTEM,
        cache_mount_point=RAW_CACHE,
        data_mount_point=RAW_DATA,
    )
    return [
        PatchStep("core.patch_ramdisk", core.patch_ramdisk),
        PatchStep("qcom.modify_fstab", partial(qcom.modify_fstab, fstab_args)),
        PatchStep("cxl_modify_init_target_rc", p.cxl_modify_init_target_rc),
        PatchStep("add_modem_mount_script", p.add_modem_mount_script),
    ]


def _touchwiz_steps(p: JflteRamdiskPatcher) -> list[PatchStep]:
    core = CoreRules(p.paths, p.archive)
    qcom = QcomRules(p.paths, p.archive)
    galaxy = GalaxyRules(p.paths, p.archive, p.release)
    steps = [
        PatchStep("core.patch_ramdisk", core.patch_ramdisk),
        PatchStep("qcom.modify_init_rc", qcom.modify_init_rc),
        PatchStep("galaxy.tw_modify_init_rc", galaxy.tw_modify_init_rc),
        PatchStep("qcom.modify_init_qcom_rc", qcom.modify_init_qcom_rc),
        PatchStep("qcom.modify_fstab", qcom.modify_fstab),
        PatchStep("qcom.modify_init_target_rc", qcom.modify_init_target_rc),
        PatchStep("galaxy.tw_modify_init_target_rc", galaxy.tw_modify_init_target_rc),
        PatchStep("galaxy.getw_modify_lpm_rc", galaxy.getw_modify_lpm_rc),
        PatchStep("galaxy.tw_modify_ueventd_rc", galaxy.tw_modify_ueventd_rc),
        PatchStep("galaxy.tw_modify_ueventd_qcom_rc", galaxy.tw_modify_ueventd_qcom_rc),
        PatchStep("add_modem_mount_script", p.add_modem_mount_script),
    ]
    # Samsung's init (and adbd) of the older release cannot boot a secondary ROM
    if p.release == ReleaseVariant.OLDER:
        steps.append(PatchStep("replace_init", partial(p.replace_init, TOUCHWIZ_INIT)))
        steps.append(PatchStep("replace_adbd", partial(p.replace_adbd, TOUCHWIZ_ADBD)))
    return steps


_FLAVOR_STEPS: dict[RamdiskFlavor, Callable[[JflteRamdiskPatcher], list[PatchStep]]] = {
    RamdiskFlavor.AOSP: _aosp_steps,
    RamdiskFlavor.GOOGLE_EDITION: _google_edition_steps,
    RamdiskFlavor.NOOBDEV: _noobdev_steps,
    RamdiskFlavor.TOUCHWIZ: _touchwiz_steps,
}


__all__ = [
    "AOSP_ID",
    "GOOGLE_EDITION_ID",
    "NOOBDEV_ID",
    "PATCHER_IDS",
    "TOUCHWIZ_ID",
    "JflteRamdiskPatcher",
]
