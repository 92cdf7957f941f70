"""Memory totals read from /proc/meminfo, with sysconf as a fallback."""

from __future__ import annotations

import dataclasses
import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_MEMINFO_PATH = "/proc/meminfo"
UNKNOWN = "<unknown>"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_KEYS = {"MemTotal": "total", "MemFree": "free", "MemAvailable": "available"}


@dataclass
class MemInfo:
    """Total, free and available memory in bytes; -1 when unknown."""

    total: int = -1
    free: int = -1
    available: int = -1

    def complete(self) -> bool:
        return -1 not in (self.total, self.free, self.available)


@dataclass
class Module:
    """One memory module."""

    id: int = 0
    vendor: str = UNKNOWN
    name: str = UNKNOWN
    serial_number: str = UNKNOWN
    model: str = UNKNOWN
    total_bytes: int = -1
    frequency_hz: int = -1


def _kib_value(line: str) -> int | None:
    parts = line.split(":")
    if len(parts) != 2:
        return None
    value = parts[1].strip()
    space = value.find(" ")
    if space == -1:
        return None
    match = _LEADING_INT.match(value[:space])
    if match is None:
        raise ValueError(f"no number in meminfo line {line!r}")
    return int(match.group(1)) * 1024


def parse_meminfo(text: str) -> MemInfo:
    """Parse /proc/meminfo text, stopping once all three values are known."""
    info = MemInfo()
    for line in text.splitlines():
        if info.complete():
            break
        for prefix, attribute in _KEYS.items():
            if line.startswith(prefix):
                value = _kib_value(line)
                if value is not None:
                    setattr(info, attribute, value)
                break
    return info


def _with_sysconf(info: MemInfo) -> MemInfo:
    if not sys.platform.startswith("linux"):
        return info
    try:
        pages = os.sysconf("SC_PHYS_PAGES")
        available_pages = os.sysconf("SC_AVPHYS_PAGES")
        page_size = os.sysconf("SC_PAGE_SIZE")
    except (ValueError, OSError):
        return info
    if page_size <= 0:
        return info
    updated = dataclasses.replace(info)
    if pages > 0:
        updated.total = pages * page_size
    if available_pages > 0:
        updated.available = available_pages * page_size
    return updated


def read_meminfo(meminfo_path: str | os.PathLike[str] = DEFAULT_MEMINFO_PATH) -> MemInfo:
    """Memory figures from ``meminfo_path``, filled from sysconf where missing."""
    try:
        text = Path(meminfo_path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return _with_sysconf(MemInfo())
    info = parse_meminfo(text)
    if info.total == -1 or info.available == -1:
        info = _with_sysconf(info)
    return info


class Memory:
    """System memory with its modules."""

    def __init__(self, meminfo_path: str | os.PathLike[str] = DEFAULT_MEMINFO_PATH) -> None:
        self.meminfo_path = meminfo_path
        self.modules: list[Module] = [Module(id=0, total_bytes=read_meminfo(meminfo_path).total)]

    def total_bytes(self) -> int:
        """Sum of the module sizes, or -1 if any is unknown."""
        sizes = [module.total_bytes for module in self.modules]
        if not sizes or -1 in sizes:
            return -1
        return sum(sizes)

    def free_bytes(self) -> int:
        """Free memory in bytes, read afresh."""
        return read_meminfo(self.meminfo_path).free

    def available_bytes(self) -> int:
        """Available memory in bytes, read afresh."""
        return read_meminfo(self.meminfo_path).available