"""Pipeline orchestration for ramdisk patchers.

A patcher is an ordered list of named steps run against one archive. The
first step that raises a ``PatchError`` stops the run; its error is kept
unchanged. Mutations made by earlier steps are not rolled back, so callers
must discard the archive after a failure.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from mbpatch.archive.store import RamdiskArchive
from mbpatch.config import PatcherPaths
from mbpatch.errors import PatchError
from mbpatch.types import PatchOutcome, ReleaseVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatchStep:
    """A named operation bound to a rule module instance."""

    name: str
    run: Callable[[], None]


def run_steps(steps: list[PatchStep]) -> PatchOutcome:
    """Run steps in order, stopping at the first failure.

    Args:
        steps: Ordered steps to execute.

    Returns:
        PatchOutcome describing the run.
    """
    completed: list[str] = []
    for step in steps:
        logger.debug("Running step: %s", step.name)
        try:
            step.run()
        except PatchError as e:
            logger.error("Step %s failed: %s", step.name, e)
            return PatchOutcome(
                success=False,
                error=e,
                completed_steps=completed,
                failed_step=step.name,
            )
        completed.append(step.name)
    return PatchOutcome(success=True, completed_steps=completed)


class RamdiskPatcher(ABC):
    """Base class for patchers; subclasses supply ``id`` and ``steps()``.

    Subclasses set ``release`` once, when they are constructed.
    """

    release: ReleaseVariant

    def __init__(self, paths: PatcherPaths, archive: RamdiskArchive) -> None:
        self.paths = paths
        self.archive = archive
        self.outcome: PatchOutcome | None = None

    @property
    @abstractmethod
    def id(self) -> str: ...

    @property
    def error(self) -> PatchError | None:
        """Error of the last failed run, if any."""
        return self.outcome.error if self.outcome is not None else None

    @abstractmethod
    def steps(self) -> list[PatchStep]: ...

    def run(self) -> PatchOutcome:
        logger.info("Patching ramdisk with %s", self.id)
        self.outcome = run_steps(self.steps())
        if self.outcome.success:
            logger.info("Patched ramdisk with %s", self.id)
        return self.outcome

    def patch_ramdisk(self) -> bool:
        """Patch the archive in place. Returns False on failure."""
        return self.run().success


__all__ = ["PatchStep", "RamdiskPatcher", "run_steps"]
