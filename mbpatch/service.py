"""File-level ramdisk patching.

Loads a ramdisk image, runs the selected patcher over it and writes the
result. Nothing is written when the patcher fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from mbpatch.archive.io import load_ramdisk, save_ramdisk
from mbpatch.config import PatcherPaths
from mbpatch.patchers.registry import create_patcher, patcher_id_for_flavor
from mbpatch.ramdisk.variant import detect_release_variant, guess_flavor
from mbpatch.types import PatchOutcome, ReleaseVariant

logger = logging.getLogger(__name__)


@dataclass
class RamdiskInfo:
    """Detected properties of a ramdisk."""

    patcher_id: str
    release: ReleaseVariant
    entries: int


@dataclass
class PatchRunResult:
    """Result of patching a ramdisk file.

    Attributes:
        patcher_id: Identifier of the patcher that ran.
        release: Detected release variant.
        outcome: Outcome of the patch run.
        output_path: Written ramdisk, None if the run failed.
    """

    patcher_id: str
    release: ReleaseVariant
    outcome: PatchOutcome
    output_path: Path | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "patcher_id": self.patcher_id,
            "release": self.release.value,
            "output_path": str(self.output_path) if self.output_path else None,
            **self.outcome.to_dict(),
        }


def detect_ramdisk(input_path: Path) -> RamdiskInfo:
    """Load a ramdisk and report its guessed patcher and release."""
    archive = load_ramdisk(input_path)
    return RamdiskInfo(
        patcher_id=patcher_id_for_flavor(guess_flavor(archive)),
        release=detect_release_variant(archive),
        entries=len(archive),
    )


def patch_ramdisk_file(
    input_path: Path,
    output_path: Path,
    paths: PatcherPaths,
    patcher_id: str | None = None,
    compress: bool = True,
) -> PatchRunResult:
    """Patch a ramdisk file.

    Args:
        input_path: Ramdisk image to patch.
        output_path: Where to write the patched ramdisk.
        paths: Asset directories.
        patcher_id: Patcher to use; guessed from the content if None.
        compress: Gzip-compress the output.

    Returns:
        PatchRunResult for the run.

    Raises:
        UnknownPatcherError: If ``patcher_id`` is not registered.
        ArchiveFormatError: If the ramdisk cannot be read or written.
    """
    archive = load_ramdisk(input_path)

    if patcher_id is None:
        patcher_id = patcher_id_for_flavor(guess_flavor(archive))
        logger.info("Guessed patcher %s for %s", patcher_id, input_path)

    patcher = create_patcher(patcher_id, paths, archive)
    release = patcher.release
    outcome = patcher.run()

    if not outcome.success:
        return PatchRunResult(patcher_id=patcher_id, release=release, outcome=outcome)

    save_ramdisk(archive, output_path, compress=compress)
    return PatchRunResult(
        patcher_id=patcher_id,
        release=release,
        outcome=outcome,
        output_path=output_path,
    )


__all__ = ["PatchRunResult", "RamdiskInfo", "detect_ramdisk", "patch_ramdisk_file"]
