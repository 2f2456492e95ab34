"""Injection of bundled scripts and binaries into a ramdisk."""

from __future__ import annotations

import logging
from pathlib import Path

from mbpatch.archive.store import RamdiskArchive
from mbpatch.errors import AssetNotFoundError

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def inject_asset(archive: RamdiskArchive, source: Path, dest: str, mode: int) -> None:
    """Add a host file to the archive, overwriting any entry at ``dest``.

    Args:
        archive: Archive to modify.
        source: Asset file on the host.
        dest: Entry path inside the ramdisk.
        mode: Permission bits for the new entry.

    Raises:
        AssetNotFoundError: If the source is not a readable file.
    """
    if not source.is_file():
        raise AssetNotFoundError(str(source))
    try:
        archive.add_file(source, dest, mode)
    except OSError as e:
        raise AssetNotFoundError(str(source)) from e
    logger.debug("Injected %s -> %s (mode=%o)", source, dest, mode)


def replace_binary(archive: RamdiskArchive, source: Path, dest: str, mode: int) -> None:
    """Replace an in-archive binary with a bundled alternative.

    The existing entry is only removed once the asset is known to exist.
    """
    if not source.is_file():
        raise AssetNotFoundError(str(source))
    archive.remove(dest)
    inject_asset(archive, source, dest, mode)
    logger.info("Replaced %s with %s", dest, source.name)


__all__ = ["EXECUTABLE_MODE", "inject_asset", "replace_binary"]
