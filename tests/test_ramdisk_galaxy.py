"""Tests for ramdisk/galaxy.py module."""

import pytest
from conftest import make_google_edition_archive, make_touchwiz_archive

from mbpatch.errors import ArchiveEntryNotFoundError
from mbpatch.ramdisk.galaxy import GalaxyRules
from mbpatch.types import ReleaseVariant


def _rules(paths, archive, release):
    return GalaxyRules(paths, archive, release)


class TestGeModifyInitRc:
    """Tests for GalaxyRules.ge_modify_init_rc."""

    def test_older_comments_reload_policy(self, patcher_paths):
        archive = make_google_edition_archive(older=True)
        _rules(patcher_paths, archive, ReleaseVariant.OLDER).ge_modify_init_rc()
        assert b"#    setprop selinux.reload_policy 1" in archive.read("init.rc")

    def test_newer_unchanged(self, patcher_paths):
        archive = make_google_edition_archive()
        before = archive.read("init.rc")
        _rules(patcher_paths, archive, ReleaseVariant.NEWER).ge_modify_init_rc()
        assert archive.read("init.rc") == before

    def test_newer_still_requires_init_rc(self, patcher_paths):
        archive = make_google_edition_archive()
        archive.remove("init.rc")
        with pytest.raises(ArchiveEntryNotFoundError):
            _rules(patcher_paths, archive, ReleaseVariant.NEWER).ge_modify_init_rc()


class TestLpmRc:
    """Tests for GalaxyRules.getw_modify_lpm_rc."""

    def test_older_comments_cache_mount(self, patcher_paths):
        archive = make_touchwiz_archive(older=True)
        _rules(patcher_paths, archive, ReleaseVariant.OLDER).getw_modify_lpm_rc()
        lines = archive.read("MSM8960_lpm.rc").decode().split("\n")
        assert lines[1].startswith("#    mount ext4 ")
        assert lines[2] == "    start charger"

    def test_newer_is_noop(self, patcher_paths):
        """The newer release has no LPM rc file and nothing to do."""
        archive = make_touchwiz_archive(older=False)
        before = archive.snapshot()
        _rules(patcher_paths, archive, ReleaseVariant.NEWER).getw_modify_lpm_rc()
        assert archive.snapshot() == before


class TestTouchWizRules:
    """Tests for the TouchWiz rc and ueventd rewrites."""

    def test_tw_modify_init_rc(self, patcher_paths):
        archive = make_touchwiz_archive()
        _rules(patcher_paths, archive, ReleaseVariant.NEWER).tw_modify_init_rc()
        text = archive.read("init.rc").decode()
        assert "#    setprop selinux.reload_policy 1" in text
        assert "mkdir /raw-data/media" in text
        assert "mkdir /data/media" not in text

    def test_tw_modify_init_target_rc(self, patcher_paths):
        archive = make_touchwiz_archive()
        _rules(patcher_paths, archive, ReleaseVariant.NEWER).tw_modify_init_target_rc()
        lines = archive.read("init.target.rc").decode().split("\n")
        assert "#    wait /dev/block/platform/msm_sdcc.1/by-name/system" in lines
        # Cache lines are left to the qcom rules
        assert "    wait /dev/block/platform/msm_sdcc.1/by-name/cache" in lines

    def test_ueventd_rules(self, patcher_paths):
        archive = make_touchwiz_archive()
        rules = _rules(patcher_paths, archive, ReleaseVariant.NEWER)
        rules.tw_modify_ueventd_rc()
        rules.tw_modify_ueventd_qcom_rc()

        ueventd = archive.read("ueventd.rc").decode().split("\n")
        assert ueventd[0].startswith("/dev/null")
        assert ueventd[1].startswith("#/dev/block/mmcblk0p16")

        qcom = archive.read("ueventd.qcom.rc").decode().split("\n")
        assert qcom[0].startswith("/dev/kgsl-3d0")
        assert qcom[1].startswith("#/dev/block/mmcblk0p29")

    def test_ueventd_idempotent(self, patcher_paths):
        archive = make_touchwiz_archive()
        rules = _rules(patcher_paths, archive, ReleaseVariant.NEWER)
        rules.tw_modify_ueventd_rc()
        first = archive.read("ueventd.rc")
        rules.tw_modify_ueventd_rc()
        assert archive.read("ueventd.rc") == first

    def test_missing_ueventd(self, patcher_paths):
        archive = make_touchwiz_archive()
        archive.remove("ueventd.rc")
        with pytest.raises(ArchiveEntryNotFoundError) as exc_info:
            _rules(patcher_paths, archive, ReleaseVariant.NEWER).tw_modify_ueventd_rc()
        assert exc_info.value.path == "ueventd.rc"
