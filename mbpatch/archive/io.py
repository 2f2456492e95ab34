"""Loading and saving ramdisk files.

Ramdisks are newc cpio archives, usually gzip-compressed. The cpio layer is
delegated to the system ``cpio`` tool; this module only stages the archive
through a temporary directory.
"""

from __future__ import annotations

import gzip
import logging
import shutil
import subprocess
import tempfile
import zlib
from pathlib import Path

from mbpatch.archive.store import RamdiskArchive
from mbpatch.errors import ArchiveFormatError

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
CPIO_MAGICS = (b"070701", b"070702")


def _require_cpio() -> str:
    cpio = shutil.which("cpio")
    if cpio is None:
        raise ArchiveFormatError("cpio is required to handle ramdisks (install 'cpio')")
    return cpio


def is_gzip(data: bytes) -> bool:
    return data.startswith(GZIP_MAGIC)


def decompress_ramdisk(data: bytes, path: str | None = None) -> bytes:
    """Return the raw cpio bytes of a ramdisk image.

    Raises:
        ArchiveFormatError: If the data is neither gzip nor newc cpio.
    """
    if is_gzip(data):
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as e:
            raise ArchiveFormatError(f"Invalid gzip data: {e}", path=path) from e
    if not data.startswith(CPIO_MAGICS):
        raise ArchiveFormatError("Not a newc cpio archive", path=path)
    return data


def load_ramdisk(path: Path) -> RamdiskArchive:
    """Load a (possibly compressed) ramdisk file into memory.

    Args:
        path: Path to the ramdisk image.

    Returns:
        RamdiskArchive holding every entry of the ramdisk.

    Raises:
        ArchiveFormatError: If the file cannot be read or unpacked.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ArchiveFormatError(f"Failed to read ramdisk: {e}", path=str(path)) from e

    cpio_data = decompress_ramdisk(raw, path=str(path))
    cpio = _require_cpio()

    with tempfile.TemporaryDirectory(prefix="mbpatch-") as tmp:
        root = Path(tmp) / "root"
        root.mkdir()
        result = subprocess.run(
            [cpio, "-idm", "--no-absolute-filenames", "--quiet"],
            cwd=root,
            input=cpio_data,
            capture_output=True,
            check=False,
        )
        if result.returncode != 0:
            stderr = result.stderr.decode(errors="replace").strip()
            raise ArchiveFormatError(
                f"cpio extraction failed (rc={result.returncode}): {stderr}",
                path=str(path),
            )
        archive = RamdiskArchive.from_directory(root)

    logger.info("Loaded %d entries from %s", len(archive), path)
    return archive


def save_ramdisk(archive: RamdiskArchive, path: Path, compress: bool = True) -> None:
    """Pack an archive into a newc cpio ramdisk file.

    Args:
        archive: Archive to write.
        path: Output file path.
        compress: Gzip-compress the output.

    Raises:
        ArchiveFormatError: If packing fails.
    """
    cpio = _require_cpio()

    with tempfile.TemporaryDirectory(prefix="mbpatch-") as tmp:
        root = Path(tmp) / "root"
        archive.to_directory(root)
        file_list = "\n".join(archive.names()) + "\n"
        result = subprocess.run(
            [cpio, "-o", "-H", "newc", "-R", "0:0", "--quiet"],
            cwd=root,
            input=file_list.encode("utf-8", "surrogateescape"),
            capture_output=True,
            check=False,
        )
        if result.returncode != 0:
            stderr = result.stderr.decode(errors="replace").strip()
            raise ArchiveFormatError(
                f"cpio packing failed (rc={result.returncode}): {stderr}",
                path=str(path),
            )

    data = gzip.compress(result.stdout) if compress else result.stdout
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info("Wrote %d entries to %s", len(archive), path)


__all__ = ["decompress_ramdisk", "is_gzip", "load_ramdisk", "save_ramdisk"]
