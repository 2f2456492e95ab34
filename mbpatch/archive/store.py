"""In-memory ramdisk archive store.

A ramdisk is modelled as an ordered mapping of entry path to content and
mode. Paths are relative to the ramdisk root (``init.rc``, ``sbin/adbd``)
and unique; adding an existing path replaces it in place.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755


@dataclass(frozen=True)
class ArchiveEntry:
    """A single ramdisk entry.

    Attributes:
        data: File content (link target for symlinks, empty for directories).
        mode: Full st_mode including the file type bits.
    """

    data: bytes
    mode: int

    @property
    def permissions(self) -> int:
        """Permission bits without the file type."""
        return stat.S_IMODE(self.mode)

    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)


def normalize_path(path: str) -> str:
    """Normalize an entry path to the archive's relative form."""
    return path.strip("/")


class RamdiskArchive:
    """Mutable keyed store of ramdisk entries."""

    def __init__(self) -> None:
        self._entries: dict[str, ArchiveEntry] = {}

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        """Return entry paths in archive order."""
        return list(self._entries)

    def entry(self, path: str) -> ArchiveEntry | None:
        return self._entries.get(normalize_path(path))

    def exists(self, path: str) -> bool:
        return normalize_path(path) in self._entries

    def read(self, path: str) -> bytes:
        """Return the content of an entry, or empty bytes if it is missing."""
        entry = self._entries.get(normalize_path(path))
        return entry.data if entry is not None else b""

    def write(self, path: str, data: bytes) -> None:
        """Replace the content of an entry, keeping its mode.

        A missing entry is created as a regular file with the default mode.
        """
        key = normalize_path(path)
        existing = self._entries.get(key)
        if existing is not None:
            mode = existing.mode
        else:
            mode = stat.S_IFREG | DEFAULT_FILE_MODE
        self._entries[key] = ArchiveEntry(data=data, mode=mode)

    def add_bytes(self, path: str, data: bytes, mode: int) -> None:
        """Add a regular file, replacing any entry at the same path."""
        key = normalize_path(path)
        self._entries[key] = ArchiveEntry(
            data=data, mode=stat.S_IFREG | stat.S_IMODE(mode)
        )
        logger.debug("Added %s (%d bytes, mode=%o)", key, len(data), mode)

    def add_file(self, source: str | Path, path: str, mode: int) -> None:
        """Add a regular file read from the host filesystem.

        Raises:
            OSError: If the source cannot be read.
        """
        self.add_bytes(path, Path(source).read_bytes(), mode)

    def add_directory(self, path: str, mode: int = DEFAULT_DIR_MODE) -> None:
        key = normalize_path(path)
        self._entries[key] = ArchiveEntry(
            data=b"", mode=stat.S_IFDIR | stat.S_IMODE(mode)
        )

    def add_symlink(self, path: str, target: str) -> None:
        key = normalize_path(path)
        self._entries[key] = ArchiveEntry(
            data=target.encode("utf-8", "surrogateescape"), mode=stat.S_IFLNK | 0o777
        )

    def remove(self, path: str) -> bool:
        """Remove an entry. Returns False if it did not exist."""
        removed = self._entries.pop(normalize_path(path), None)
        if removed is not None:
            logger.debug("Removed %s", normalize_path(path))
        return removed is not None

    def snapshot(self) -> dict[str, ArchiveEntry]:
        """Return a copy of all entries, keyed by path."""
        return dict(self._entries)

    def copy(self) -> RamdiskArchive:
        clone = RamdiskArchive()
        clone._entries = dict(self._entries)
        return clone

    @classmethod
    def from_directory(cls, root: Path) -> RamdiskArchive:
        """Build an archive from an unpacked ramdisk tree.

        Directories are added before their contents; symlinks are stored
        as links, never followed.
        """
        archive = cls()
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            current = Path(dirpath)
            for name in dirnames + sorted(filenames):
                item = current / name
                rel_path = item.relative_to(root).as_posix()
                st = item.lstat()
                if stat.S_ISLNK(st.st_mode):
                    archive.add_symlink(rel_path, os.readlink(item))
                elif stat.S_ISDIR(st.st_mode):
                    archive.add_directory(rel_path, st.st_mode)
                elif stat.S_ISREG(st.st_mode):
                    archive.add_bytes(rel_path, item.read_bytes(), st.st_mode)
                else:
                    logger.warning("Skipping special file: %s", rel_path)
        return archive

    def to_directory(self, root: Path) -> None:
        """Write every entry below ``root``."""
        root.mkdir(parents=True, exist_ok=True)
        directories: list[tuple[Path, int]] = []
        for name, entry in self._entries.items():
            dest = root / name
            if entry.is_dir():
                dest.mkdir(parents=True, exist_ok=True)
                directories.append((dest, entry.permissions))
                continue
            dest.parent.mkdir(parents=True, exist_ok=True)
            if entry.is_symlink():
                os.symlink(entry.data.decode("utf-8", "surrogateescape"), dest)
            else:
                dest.write_bytes(entry.data)
                dest.chmod(entry.permissions)
        # Apply directory modes last so read-only directories can be filled
        for dest, mode in reversed(directories):
            dest.chmod(mode)


__all__ = [
    "DEFAULT_DIR_MODE",
    "DEFAULT_FILE_MODE",
    "ArchiveEntry",
    "RamdiskArchive",
    "normalize_path",
]
