"""Disk information read from the block sysfs class and /proc/mounts."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

from hwprobe.sysfs import directory_entries, exists, read_first_line

DEFAULT_BLOCK_PATH = "/sys/class/block"
DEFAULT_MOUNTS_PATH = "/proc/mounts"
UNKNOWN = "<unknown>"
# sysfs reports block device sizes in 512-byte sectors
BLOCK_SIZE = 512

_PARTITION = re.compile(r"(sd[a-z]|nvme\d+n\d+)p?\d+$")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Disk:
    """One whole disk."""

    id: int = -1
    vendor: str = UNKNOWN
    model: str = UNKNOWN
    serial_number: str = UNKNOWN
    size_bytes: int = -1
    free_size_bytes: int = -1
    volumes: list[str] = field(default_factory=list)


def is_partition(path: str | os.PathLike[str]) -> bool:
    """True if the path names a partition such as sda1 or nvme0n1p2."""
    return _PARTITION.search(str(path)) is not None


def _read_stripped(path: str) -> str | None:
    line = read_first_line(path)
    if line is None:
        return None
    line = line.strip()
    return line or None


def mount_point(device: str, mounts_path: str | os.PathLike[str] = DEFAULT_MOUNTS_PATH) -> str:
    """Mount point of ``device`` from a mounts table, or "/" if it is not listed."""
    try:
        with open(mounts_path, encoding="utf-8", errors="replace") as mounts:
            for line in mounts:
                fields = line.split()
                if len(fields) >= 2 and fields[0] == device:
                    return fields[1]
    except OSError:
        pass
    return "/"


def disk_vendor(path: str | os.PathLike[str]) -> str:
    """Vendor of a block device; NVMe vendors are read from the nvme class."""
    path = str(path)
    vendor_path = path
    position = path.find("nvme")
    if position != -1:
        controller = path[position : position + 5]
        cut = position - 6
        prefix = path[:cut] if cut >= 0 else path
        vendor_path = prefix + "nvme/" + controller
    value = _read_stripped(os.path.join(vendor_path, "device", "vendor"))
    return value if value is not None else UNKNOWN


def disk_model(path: str | os.PathLike[str]) -> str:
    """Model of a block device."""
    value = _read_stripped(os.path.join(path, "device", "model"))
    return value if value is not None else UNKNOWN


def disk_serial_number(path: str | os.PathLike[str]) -> str:
    """Serial number of a block device."""
    value = _read_stripped(os.path.join(path, "device", "serial"))
    return value if value is not None else UNKNOWN


def disk_size_bytes(path: str | os.PathLike[str]) -> int:
    """Size of a block device in bytes, or -1."""
    try:
        with open(os.path.join(path, "size"), encoding="utf-8") as stream:
            text = stream.read()
    except OSError:
        return -1
    match = _LEADING_INT.match(text)
    if match is None:
        return -1
    return int(match.group(1)) * BLOCK_SIZE


def disk_free_size_bytes(path: str | os.PathLike[str]) -> int:
    """Space available to unprivileged users on the filesystem at ``path``, or -1."""
    try:
        stat = os.statvfs(path)
    except OSError:
        return -1
    return stat.f_bsize * stat.f_bavail


def get_all_disks(
    base_path: str = DEFAULT_BLOCK_PATH, mounts_path: str = DEFAULT_MOUNTS_PATH
) -> list[Disk]:
    """Whole disks that report a vendor, model or serial number."""
    disks = []
    for entry in directory_entries(base_path):
        path = os.path.join(base_path, entry)
        if not exists(path) or is_partition(path):
            continue
        disk = Disk(
            vendor=disk_vendor(path),
            model=disk_model(path),
            serial_number=disk_serial_number(path),
        )
        # every block device has a size, so identity decides what counts as a disk
        if disk.vendor == UNKNOWN and disk.model == UNKNOWN and disk.serial_number == UNKNOWN:
            continue
        disk.size_bytes = disk_size_bytes(path)
        mount = mount_point("/dev/" + entry, mounts_path)
        disk.free_size_bytes = disk_free_size_bytes(mount)
        disk.volumes.append(mount)
        disks.append(disk)
    return disks