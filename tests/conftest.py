"""Shared fixtures: synthetic jflte ramdisks and asset directories."""

from pathlib import Path

import pytest

from mbpatch.archive.store import RamdiskArchive
from mbpatch.config import PatcherPaths

INIT_RC = """\
import /init.environ.rc
import /init.usb.rc
import /init.${ro.hardware}.rc

on init
    mkdir /system
    mkdir /data 0771 system system
    mkdir /cache 0770 system cache

on post-fs-data
    setprop selinux.reload_policy 1
    mkdir /data/media 0770 media_rw media_rw
"""

INIT_QCOM_RC = """\
on init
    export EMULATED_STORAGE_SOURCE /mnt/shell/emulated

on post-fs-data
    mkdir /data/media 0770 media_rw media_rw
"""

INIT_TARGET_RC = """\
on fs
    wait /dev/block/platform/msm_sdcc.1/by-name/cache
    check_fs /dev/block/platform/msm_sdcc.1/by-name/cache ext4
    mount ext4 /dev/block/platform/msm_sdcc.1/by-name/cache /cache nosuid nodev barrier=1
    mount_all fstab.qcom
    setprop ro.crypto.fuse_sdcard true
"""

FSTAB_QCOM = """\
# Android fstab file.
/dev/block/platform/msm_sdcc.1/by-name/system /system ext4 ro,barrier=1 wait
/dev/block/platform/msm_sdcc.1/by-name/userdata /data ext4 nosuid,nodev wait,encryptable=footer
/dev/block/platform/msm_sdcc.1/by-name/cache /cache ext4 ro,nosuid,nodev wait
/dev/block/platform/msm_sdcc.1/by-name/apnhlos /firmware vfat ro,shortname=lower wait
/dev/block/platform/msm_sdcc.1/by-name/mdm /firmware-mdm vfat ro,shortname=lower wait
"""

NOOBDEV_FSTAB_QCOM = """\
/dev/block/platform/msm_sdcc.1/by-name/system /raw-system ext4 ro,barrier=1 wait
/dev/block/platform/msm_sdcc.1/by-name/userdata /raw-data ext4 nosuid,nodev wait
/dev/block/platform/msm_sdcc.1/by-name/cache /raw-cache ext4 ro,nosuid,nodev wait
"""

NOOBDEV_INIT_TARGET_RC = """\
on fs
    mount_all fstab.qcom
    exec /sbin/busybox-static sh /init.dualboot.mounting.sh
    # init.dualboot.mounting.sh binds init.dualboot.mounting.sh paths
    setprop ro.crypto.fuse_sdcard true
"""

INIT_JGEDLTE_RC = """\
on post-fs-data
    mkdir /data/media 0770 media_rw media_rw
"""

LPM_RC = """\
on boot
    mount ext4 /dev/block/platform/msm_sdcc.1/by-name/cache /cache nosuid nodev
    start charger
"""

TW_INIT_TARGET_RC = INIT_TARGET_RC + """\
    wait /dev/block/platform/msm_sdcc.1/by-name/system
    mount ext4 /dev/block/platform/msm_sdcc.1/by-name/userdata /data nosuid nodev
"""

UEVENTD_RC = """\
/dev/null                 0666   root       root
/dev/block/mmcblk0p16     0640   system     system
"""

UEVENTD_QCOM_RC = """\
/dev/kgsl-3d0             0666   system     system
/dev/block/mmcblk0p29     0660   system     radio
"""

INIT_BINARY = b"\x7fELFstock-init"
ADBD_BINARY = b"\x7fELFstock-adbd"


def _archive(files: dict[str, str | bytes]) -> RamdiskArchive:
    archive = RamdiskArchive()
    for name, content in files.items():
        data = content.encode() if isinstance(content, str) else content
        mode = 0o750 if name in ("init", "sbin/adbd") else 0o644
        archive.add_bytes(name, data, mode)
    return archive


def _base_files() -> dict[str, str | bytes]:
    return {
        "init": INIT_BINARY,
        "init.rc": INIT_RC,
        "init.qcom.rc": INIT_QCOM_RC,
        "init.target.rc": INIT_TARGET_RC,
        "fstab.qcom": FSTAB_QCOM,
    }


def make_aosp_archive() -> RamdiskArchive:
    return _archive(_base_files())


def make_google_edition_archive(older: bool = False) -> RamdiskArchive:
    files = _base_files()
    files["init.jgedlte.rc"] = INIT_JGEDLTE_RC
    if older:
        files["MSM8960_lpm.rc"] = LPM_RC
    return _archive(files)


def make_noobdev_archive() -> RamdiskArchive:
    return _archive(
        {
            "init": INIT_BINARY,
            "init.rc": INIT_RC,
            "init.target.rc": NOOBDEV_INIT_TARGET_RC,
            "fstab.qcom": NOOBDEV_FSTAB_QCOM,
        }
    )


def make_touchwiz_archive(older: bool = False) -> RamdiskArchive:
    files = _base_files()
    files["init.target.rc"] = TW_INIT_TARGET_RC
    files["init.carrier.rc"] = "on boot\n"
    files["ueventd.rc"] = UEVENTD_RC
    files["ueventd.qcom.rc"] = UEVENTD_QCOM_RC
    files["sbin/adbd"] = ADBD_BINARY
    if older:
        files["MSM8960_lpm.rc"] = LPM_RC
    return _archive(files)


@pytest.fixture
def patcher_paths(tmp_path: Path) -> PatcherPaths:
    """Asset directories holding every script and binary the patchers need."""
    scripts = tmp_path / "scripts"
    inits = tmp_path / "inits"
    (scripts / "jflte").mkdir(parents=True)
    (inits / "jflte").mkdir(parents=True)

    (scripts / "init.multiboot.mounting.sh").write_text("#!/sbin/sh\n# mount\n")
    (scripts / "jflte" / "mount.modem.sh").write_text("#!/sbin/sh\n# modem\n")
    (inits / "init-kk44").write_bytes(b"\x7fELFge-init")
    (inits / "jflte" / "tw44-init").write_bytes(b"\x7fELFtw-init")
    (inits / "jflte" / "tw44-adbd").write_bytes(b"\x7fELFtw-adbd")

    return PatcherPaths(scripts_dir=scripts, inits_dir=inits)


@pytest.fixture
def empty_paths(tmp_path: Path) -> PatcherPaths:
    """Asset directories without any assets."""
    return PatcherPaths(scripts_dir=tmp_path / "none", inits_dir=tmp_path / "none")
