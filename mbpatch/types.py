"""Shared type definitions for mbpatch.

This module contains enums and dataclasses shared across subpackages to
avoid circular imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mbpatch.errors import PatchError


class RamdiskFlavor(str, Enum):
    """Supported ramdisk flavors (base ramdisk type + OEM skin)."""

    AOSP = "aosp"
    GOOGLE_EDITION = "google-edition"
    NOOBDEV = "noobdev"
    TOUCHWIZ = "touchwiz"


class ReleaseVariant(str, Enum):
    """OS release whose init subsystem quirks apply."""

    OLDER = "older"
    NEWER = "newer"


class ErrorCode(str, Enum):
    """Stable error classifications surfaced to callers."""

    ARCHIVE_ENTRY_NOT_FOUND = "archive_entry_not_found"
    ASSET_NOT_FOUND = "asset_not_found"
    UNKNOWN_PATCHER = "unknown_patcher"
    ARCHIVE_FORMAT_ERROR = "archive_format_error"


@dataclass
class PatchOutcome:
    """Result of a patch run.

    Attributes:
        success: Whether every step completed.
        error: Error raised by the failing step, unchanged.
        completed_steps: Names of the steps that ran to completion.
        failed_step: Name of the step that failed, if any.
    """

    success: bool
    error: PatchError | None = None
    completed_steps: list[str] = field(default_factory=list)
    failed_step: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, object] = {
            "success": self.success,
            "completed_steps": list(self.completed_steps),
        }
        if self.failed_step is not None:
            result["failed_step"] = self.failed_step
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result


__all__ = [
    "ErrorCode",
    "PatchOutcome",
    "RamdiskFlavor",
    "ReleaseVariant",
]
