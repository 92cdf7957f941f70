"""Hardware and system information gathered from Linux procfs and sysfs."""

__version__ = "1.0.0"
__all__ = [
    "battery",
    "cpu",
    "disk",
    "mainboard",
    "network",
    "os_info",
    "ram",
    "sysfs",
]