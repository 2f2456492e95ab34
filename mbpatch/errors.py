"""Exception taxonomy for patch runs.

Every error carries a stable ``ErrorCode`` and, where one is implicated,
the archive path or asset path that caused it.
"""

from __future__ import annotations

from mbpatch.types import ErrorCode


class PatchError(Exception):
    """Base class for errors raised while patching a ramdisk."""

    def __init__(
        self, message: str, code: ErrorCode, path: str | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.path = path

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        result = {"code": self.code.value, "message": self.message}
        if self.path is not None:
            result["path"] = self.path
        return result


class ArchiveEntryNotFoundError(PatchError):
    """A required archive entry is missing or empty."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Archive entry not found: {path}",
            code=ErrorCode.ARCHIVE_ENTRY_NOT_FOUND,
            path=path,
        )


class AssetNotFoundError(PatchError):
    """A bundled script or init binary could not be read."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Asset file not found: {path}",
            code=ErrorCode.ASSET_NOT_FOUND,
            path=path,
        )


class UnknownPatcherError(PatchError):
    """No patcher is registered under the requested identifier."""

    def __init__(self, patcher_id: str) -> None:
        super().__init__(
            f"Unknown ramdisk patcher: {patcher_id}",
            code=ErrorCode.UNKNOWN_PATCHER,
        )
        self.patcher_id = patcher_id


class ArchiveFormatError(PatchError):
    """A ramdisk file could not be unpacked or packed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message, code=ErrorCode.ARCHIVE_FORMAT_ERROR, path=path)


__all__ = [
    "ArchiveEntryNotFoundError",
    "ArchiveFormatError",
    "AssetNotFoundError",
    "PatchError",
    "UnknownPatcherError",
]
