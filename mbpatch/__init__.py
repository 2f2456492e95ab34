"""Multi-boot ramdisk patcher.

This package patches boot ramdisks (cpio archives carrying an init system)
so that a single device can boot several independent Android installations.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
