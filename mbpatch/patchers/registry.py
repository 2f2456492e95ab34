"""Lookup of ramdisk patchers by identifier.

Identifiers have the form ``<device>/<flavor category>/<flavor name>`` and
are kept stable for existing selection logic.
"""

from __future__ import annotations

from mbpatch.archive.store import RamdiskArchive
from mbpatch.config import PatcherPaths
from mbpatch.errors import UnknownPatcherError
from mbpatch.patchers.base import RamdiskPatcher
from mbpatch.patchers.jflte import PATCHER_IDS, JflteRamdiskPatcher
from mbpatch.types import RamdiskFlavor

_FLAVORS_BY_ID: dict[str, RamdiskFlavor] = {
    patcher_id: flavor for flavor, patcher_id in PATCHER_IDS.items()
}


def list_patcher_ids() -> list[str]:
    """Return all registered patcher identifiers, sorted."""
    return sorted(_FLAVORS_BY_ID)


def flavor_for_id(patcher_id: str) -> RamdiskFlavor:
    try:
        return _FLAVORS_BY_ID[patcher_id]
    except KeyError:
        raise UnknownPatcherError(patcher_id) from None


def patcher_id_for_flavor(flavor: RamdiskFlavor) -> str:
    return PATCHER_IDS[flavor]


def create_patcher(
    patcher_id: str, paths: PatcherPaths, archive: RamdiskArchive
) -> RamdiskPatcher:
    """Create the patcher registered under ``patcher_id``.

    Raises:
        UnknownPatcherError: If no patcher has that identifier.
    """
    return JflteRamdiskPatcher(flavor_for_id(patcher_id), paths, archive)


__all__ = [
    "create_patcher",
    "flavor_for_id",
    "list_patcher_ids",
    "patcher_id_for_flavor",
]
