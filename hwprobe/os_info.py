"""Operating system name, version, kernel, word size and byte order."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from hwprobe.sysfs import exists

DEFAULT_OS_RELEASE_PATH = "/etc/os-release"
UNKNOWN = "<unknown>"

_LD64_PATH = "/lib64/ld-linux-x86-64.so.2"


@dataclass(frozen=True)
class OS:
    """Description of the running operating system."""

    name: str = UNKNOWN
    version: str = UNKNOWN
    kernel: str = UNKNOWN
    is_64bit: bool = True
    is_32bit: bool = False
    is_big_endian: bool = False
    is_little_endian: bool = True


def _quoted_value(line: str) -> str:
    value = line[line.find("=") + 1 :]
    # drop the quotes around the value
    return value[1:-1]


def parse_os_release(text: str) -> tuple[str, str]:
    """Pretty name and version from os-release text; later entries win."""
    name = version = UNKNOWN
    for line in text.splitlines():
        if line.startswith("PRETTY_NAME"):
            name = _quoted_value(line)
        if line.startswith("VERSION="):
            version = _quoted_value(line)
    return name, version


def read_os(os_release_path: str | os.PathLike[str] = DEFAULT_OS_RELEASE_PATH) -> OS:
    """Describe the running system, naming it from ``os_release_path``."""
    try:
        text = Path(os_release_path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        name, version = "Linux", UNKNOWN
    else:
        name, version = parse_os_release(text)

    try:
        kernel = os.uname().release
    except AttributeError:
        kernel = UNKNOWN

    is_64bit = exists(_LD64_PATH)
    little = sys.byteorder == "little"
    return OS(
        name=name,
        version=version,
        kernel=kernel,
        is_64bit=is_64bit,
        is_32bit=not is_64bit,
        is_big_endian=not little,
        is_little_endian=little,
    )