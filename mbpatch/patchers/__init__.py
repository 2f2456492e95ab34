"""Ramdisk patch pipelines.

This module handles:
- Ordered, short-circuiting execution of patch steps
- The per-flavor step lists for each supported device
- Lookup of patchers by their stable identifier
"""

from mbpatch.patchers.base import PatchStep, RamdiskPatcher, run_steps
from mbpatch.patchers.jflte import JflteRamdiskPatcher
from mbpatch.patchers.registry import create_patcher, list_patcher_ids

__all__ = [
    "JflteRamdiskPatcher",
    "PatchStep",
    "RamdiskPatcher",
    "create_patcher",
    "list_patcher_ids",
    "run_steps",
]
