"""Rules for Qualcomm init scripts and the fstab.

Qualcomm ramdisks mount system, cache and data from ``fstab.*`` through
``mount_all`` in ``init.target.rc``. Multi-boot moves those partitions to
``/raw-*`` mount points; the mounting script then bind-mounts the directories
of the booted ROM over ``/system``, ``/cache`` and ``/data``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from mbpatch.archive.store import RamdiskArchive
from mbpatch.config import PatcherPaths
from mbpatch.errors import ArchiveEntryNotFoundError
from mbpatch.ramdisk.core import INIT_RC, MOUNT_SCRIPT
from mbpatch.ramdisk.text import comment_out, read_lines, rewrite_lines, write_lines

logger = logging.getLogger(__name__)

INIT_QCOM_RC = "init.qcom.rc"
INIT_TARGET_RC = "init.target.rc"

RAW_SYSTEM = "/raw-system"
RAW_CACHE = "/raw-cache"
RAW_DATA = "/raw-data"

MODEM_MOUNT_POINTS = frozenset({"/firmware", "/firmware-mdm"})

MOUNT_EXEC = f"exec /sbin/busybox-static sh /{MOUNT_SCRIPT}"

_MKDIR_RE = re.compile(r"^(\s*mkdir\s+)/(system|cache|data)(\s.*)?$")
_CACHE_DEVICE_RES = (
    re.compile(r"^\s+wait\s+/dev/.*/cache.*$"),
    re.compile(r"^\s+check_fs\s+/dev/.*/cache.*$"),
    re.compile(r"^\s+mount\s+ext4\s+/dev/.*/cache.*$"),
)
_MOUNT_ALL_RE = re.compile(r"^(\s+)mount_all\s+fstab\.\S+")
_FIELD_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class FstabArgs:
    """Options for the fstab rewrite.

    Attributes:
        force_cache_rw: Mount the cache partition read-write.
        keep_mount_points: Leave partition mount points unchanged instead of
            moving them to ``/raw-*``.
        system_mount_point: Mount point of the system partition in the input.
        cache_mount_point: Mount point of the cache partition in the input.
        data_mount_point: Mount point of the data partition in the input.
        remove_modem_mounts: Drop the modem firmware mounts; the injected
            helper script mounts them instead.
    """

    force_cache_rw: bool = False
    keep_mount_points: bool = False
    system_mount_point: str = "/system"
    cache_mount_point: str = "/cache"
    data_mount_point: str = "/data"
    remove_modem_mounts: bool = False

    def __post_init__(self) -> None:
        for name in ("system_mount_point", "cache_mount_point", "data_mount_point"):
            value = getattr(self, name)
            if not value.startswith("/"):
                raise ValueError(f"{name} must be absolute, got '{value}'")


def _force_rw(options: str) -> str:
    return ",".join("rw" if opt == "ro" else opt for opt in options.split(","))


def rewrite_fstab_line(line: str, args: FstabArgs) -> str | None:
    """Rewrite one fstab line.

    Only the mount point and options fields are replaced; the whitespace
    between fields is kept as is.

    Returns:
        The rewritten line, or None if the line should be dropped.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return line

    spans = [m.span() for m in _FIELD_RE.finditer(line)]
    if len(spans) < 4:
        return line
    fields = [line[start:end] for start, end in spans]

    mount_point = fields[1]
    if args.remove_modem_mounts and mount_point in MODEM_MOUNT_POINTS:
        return None

    new_fields = list(fields)
    if mount_point == args.system_mount_point:
        raw_mount_point = RAW_SYSTEM
    elif mount_point == args.cache_mount_point:
        raw_mount_point = RAW_CACHE
        if args.force_cache_rw:
            new_fields[3] = _force_rw(fields[3])
    elif mount_point == args.data_mount_point:
        raw_mount_point = RAW_DATA
    else:
        return line

    if not args.keep_mount_points:
        new_fields[1] = raw_mount_point

    if new_fields == fields:
        return line

    parts: list[str] = []
    last = 0
    for (start, end), field in zip(spans, new_fields):
        parts.append(line[last:start])
        parts.append(field)
        last = end
    parts.append(line[last:])
    return "".join(parts)


class QcomRules:
    """Rules for Qualcomm init scripts and fstab files."""

    def __init__(self, paths: PatcherPaths, archive: RamdiskArchive) -> None:
        self.paths = paths
        self.archive = archive

    def modify_init_rc(self) -> None:
        """Create the ``/raw-*`` directories next to the stock mount points."""
        lines = read_lines(self.archive, INIT_RC)
        existing = set(lines)
        new_lines: list[str] = []

        for line in lines:
            new_lines.append(line)
            match = _MKDIR_RE.match(line)
            if match:
                prefix, name, rest = match.group(1), match.group(2), match.group(3)
                raw_line = f"{prefix}/raw-{name}{rest or ''}"
                if raw_line not in existing:
                    new_lines.append(raw_line)
                    existing.add(raw_line)

        write_lines(self.archive, INIT_RC, new_lines)

    def modify_init_qcom_rc(self, extra_files: tuple[str, ...] = ()) -> None:
        """Point emulated storage at the raw data partition.

        Args:
            extra_files: Additional rc files to rewrite after ``init.qcom.rc``.
        """
        for name in (INIT_QCOM_RC, *extra_files):
            rewrite_lines(
                self.archive,
                name,
                lambda line: line.replace("/data/media", f"{RAW_DATA}/media"),
            )
            logger.debug("Rewrote %s", name)

    def fstab_names(self) -> list[str]:
        return [
            name
            for name in self.archive.names()
            if name.startswith("fstab.") and "/" not in name
        ]

    def modify_fstab(self, args: FstabArgs | None = None) -> None:
        """Rewrite every fstab file in the ramdisk root.

        Raises:
            ArchiveEntryNotFoundError: If there is no fstab file.
        """
        if args is None:
            args = FstabArgs()

        names = self.fstab_names()
        if not names:
            raise ArchiveEntryNotFoundError("fstab.*")

        for name in names:
            lines = read_lines(self.archive, name)
            new_lines = [
                rewritten
                for rewritten in (rewrite_fstab_line(line, args) for line in lines)
                if rewritten is not None
            ]
            write_lines(self.archive, name, new_lines)
            logger.debug(
                "Rewrote %s (%d -> %d lines)", name, len(lines), len(new_lines)
            )

    def modify_init_target_rc(self, name: str = INIT_TARGET_RC) -> None:
        """Stop init from mounting cache itself and run the mounting script."""
        lines = read_lines(self.archive, name)
        new_lines: list[str] = []

        for i, line in enumerate(lines):
            if any(pattern.search(line) for pattern in _CACHE_DEVICE_RES):
                new_lines.append(comment_out(line))
                continue

            new_lines.append(line)
            match = _MOUNT_ALL_RE.match(line)
            if match:
                next_line = lines[i + 1] if i + 1 < len(lines) else ""
                if next_line.strip() != MOUNT_EXEC:
                    new_lines.append(f"{match.group(1)}{MOUNT_EXEC}")

        write_lines(self.archive, name, new_lines)


__all__ = [
    "INIT_QCOM_RC",
    "INIT_TARGET_RC",
    "MODEM_MOUNT_POINTS",
    "MOUNT_EXEC",
    "RAW_CACHE",
    "RAW_DATA",
    "RAW_SYSTEM",
    "FstabArgs",
    "QcomRules",
    "rewrite_fstab_line",
]
