"""Line-oriented helpers for rewriting text entries in a ramdisk."""

from __future__ import annotations

import re
from collections.abc import Callable

from mbpatch.archive.store import RamdiskArchive
from mbpatch.errors import ArchiveEntryNotFoundError

# Non-UTF-8 bytes survive a decode/encode round trip
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def read_lines(archive: RamdiskArchive, path: str) -> list[str]:
    """Read a required text entry split on newlines.

    Raises:
        ArchiveEntryNotFoundError: If the entry is missing or empty.
    """
    data = archive.read(path)
    if not data:
        raise ArchiveEntryNotFoundError(path)
    return data.decode(_ENCODING, _ERRORS).split("\n")


def write_lines(archive: RamdiskArchive, path: str, lines: list[str]) -> None:
    archive.write(path, "\n".join(lines).encode(_ENCODING, _ERRORS))


def rewrite_lines(
    archive: RamdiskArchive, path: str, rewrite: Callable[[str], str]
) -> None:
    """Apply ``rewrite`` to every line of a required text entry."""
    lines = read_lines(archive, path)
    write_lines(archive, path, [rewrite(line) for line in lines])


def comment_out(line: str) -> str:
    return "#" + line


def comment_matching(pattern: re.Pattern[str]) -> Callable[[str], str]:
    """Return a rewrite that comments out lines matching ``pattern``."""

    def rewrite(line: str) -> str:
        return comment_out(line) if pattern.search(line) else line

    return rewrite


__all__ = [
    "comment_matching",
    "comment_out",
    "read_lines",
    "rewrite_lines",
    "write_lines",
]
