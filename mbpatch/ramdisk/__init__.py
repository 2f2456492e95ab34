"""Ramdisk rule modules.

Each rule module groups the archive mutations for one structural concern:
- core: base normalization shared by every flavor
- qcom: Qualcomm init scripts and fstab
- galaxy: Samsung skins (Google Edition and TouchWiz)
"""

from mbpatch.ramdisk.core import CoreRules
from mbpatch.ramdisk.galaxy import GalaxyRules
from mbpatch.ramdisk.qcom import FstabArgs, QcomRules
from mbpatch.ramdisk.variant import detect_release_variant, guess_flavor

__all__ = [
    "CoreRules",
    "FstabArgs",
    "GalaxyRules",
    "QcomRules",
    "detect_release_variant",
    "guess_flavor",
]
