"""Tests for configuration module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

from mbpatch.config import (
    BUNDLED_SCRIPTS_DIR,
    PatcherPaths,
    Settings,
    get_settings,
    print_settings_json,
)


class TestSettings:
    """Test Settings class."""

    def test_default_settings(self) -> None:
        """Settings should have sensible defaults."""
        settings = Settings()

        assert settings.scripts_dir == BUNDLED_SCRIPTS_DIR
        assert settings.inits_dir == Path.home() / ".local" / "share" / "mbpatch" / "inits"
        assert settings.log_level == "INFO"
        assert settings.compress_output is True

    def test_settings_from_env(self) -> None:
        """Settings should be loadable from environment variables."""
        with patch.dict(
            os.environ,
            {
                "MBP_INITS_DIR": "/tmp/inits",
                "MBP_LOG_LEVEL": "DEBUG",
                "MBP_COMPRESS_OUTPUT": "false",
            },
        ):
            settings = Settings()
            assert settings.inits_dir == Path("/tmp/inits")
            assert settings.log_level == "DEBUG"
            assert settings.compress_output is False

    def test_patcher_paths(self) -> None:
        """patcher_paths should expose the asset directories."""
        settings = Settings(scripts_dir=Path("/s"), inits_dir=Path("/i"))
        paths = settings.patcher_paths()

        assert paths == PatcherPaths(scripts_dir=Path("/s"), inits_dir=Path("/i"))
        assert paths.script("jflte/mount.modem.sh") == Path("/s/jflte/mount.modem.sh")
        assert paths.init("jflte/tw44-init") == Path("/i/jflte/tw44-init")


class TestGetSettings:
    """Test get_settings function."""

    def test_get_settings_returns_settings(self) -> None:
        """get_settings should return a Settings instance."""
        assert isinstance(get_settings(), Settings)


class TestPrintSettingsJson:
    """Test print_settings_json function."""

    def test_print_settings_json(self) -> None:
        """print_settings_json should return valid JSON."""
        parsed = json.loads(print_settings_json(Settings()))

        assert "scripts_dir" in parsed
        assert "inits_dir" in parsed
        assert "log_level" in parsed
        assert "compress_output" in parsed
