"""Configuration settings for mbpatch.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_SCRIPTS_DIR = Path(__file__).parent / "data" / "scripts"


def _default_inits_dir() -> Path:
    """Return the default directory holding replacement init binaries."""
    return Path.home() / ".local" / "share" / "mbpatch" / "inits"


@dataclass(frozen=True)
class PatcherPaths:
    """Read-only asset directories used by the patchers.

    Attributes:
        scripts_dir: Directory of shell scripts injected into ramdisks.
        inits_dir: Directory of replacement init/adbd binaries.
    """

    scripts_dir: Path
    inits_dir: Path

    def script(self, name: str) -> Path:
        """Resolve a script asset by its relative name."""
        return self.scripts_dir / name

    def init(self, name: str) -> Path:
        """Resolve an init binary asset by its relative name."""
        return self.inits_dir / name


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the MBP_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="MBP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    scripts_dir: Path = Field(
        default=BUNDLED_SCRIPTS_DIR,
        description="Directory of scripts injected into ramdisks",
    )
    inits_dir: Path = Field(
        default_factory=_default_inits_dir,
        description="Directory of replacement init binaries",
    )

    # Operational modes
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    compress_output: bool = Field(
        default=True,
        description="Gzip-compress patched ramdisks",
    )

    def patcher_paths(self) -> PatcherPaths:
        """Return the asset directories as an immutable record."""
        return PatcherPaths(scripts_dir=self.scripts_dir, inits_dir=self.inits_dir)


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = [
    "BUNDLED_SCRIPTS_DIR",
    "PatcherPaths",
    "Settings",
    "get_settings",
    "print_settings_json",
]
