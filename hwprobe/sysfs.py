"""Helpers for reading single values from sysfs and procfs files."""

from __future__ import annotations

import itertools
import os
import re
from dataclasses import dataclass

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

DEFAULT_STAT_PATH = "/proc/stat"


@dataclass(frozen=True)
class Jiffies:
    """CPU time counters from one line of /proc/stat."""

    total: int = 0
    working: int = 0


def exists(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` can be stat'ed."""
    try:
        os.stat(path)
    except OSError:
        return False
    return True


def directory_entries(path: str | os.PathLike[str]) -> list[str]:
    """Names of the entries in a directory, or an empty list if it cannot be read."""
    try:
        return os.listdir(path)
    except OSError:
        return []


def read_first_line(path: str | os.PathLike[str]) -> str | None:
    """First line of a file without its newline, or None if the file cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace") as stream:
            line = stream.readline()
    except OSError:
        return None
    return line.removesuffix("\n")


def read_int(path: str | os.PathLike[str]) -> int:
    """Integer at the start of a file's first line, or -1 if there is none."""
    line = read_first_line(path)
    if line is None:
        return -1
    match = _LEADING_INT.match(line)
    if match is None:
        return -1
    return int(match.group(1))


def read_jiffies(index: int, stat_path: str | os.PathLike[str] = DEFAULT_STAT_PATH) -> Jiffies:
    """Read the counters of line ``index`` of a /proc/stat style file.

    Line 0 holds the totals over all CPUs, line ``n + 1`` those of CPU ``n``.
    An unreadable file gives zero counters; a line with too few fields raises
    ValueError.
    """
    try:
        with open(stat_path, encoding="utf-8") as stream:
            line = next(itertools.islice(stream, index, None), "")
    except OSError:
        return Jiffies()

    fields = line.split()
    if len(fields) < 11:
        raise ValueError(f"malformed stat line {line!r}")
    values = [int(field) for field in fields[1:11]]
    return Jiffies(total=sum(values), working=sum(values[:3]))