"""Mainboard information read from DMI sysfs entries."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass

from hwprobe.sysfs import read_first_line

DEFAULT_DMI_ROOTS = ("/sys/devices/virtual/dmi", "/sys/class/dmi")
UNKNOWN = "<unknown>"


@dataclass(frozen=True)
class MainBoard:
    """Vendor, name, version and serial number of the mainboard."""

    vendor: str = UNKNOWN
    name: str = UNKNOWN
    version: str = UNKNOWN
    serial_number: str = UNKNOWN


def dmi_value(name: str, roots: Iterable[str | os.PathLike[str]] = DEFAULT_DMI_ROOTS) -> str:
    """First non-empty ``id/<name>`` value found under the DMI roots."""
    for root in roots:
        value = read_first_line(os.path.join(root, "id", name))
        if value:
            return value
    return UNKNOWN


def read_mainboard(roots: Iterable[str | os.PathLike[str]] = DEFAULT_DMI_ROOTS) -> MainBoard:
    """Read the mainboard description from the DMI roots."""
    roots = tuple(roots)
    return MainBoard(
        vendor=dmi_value("board_vendor", roots),
        name=dmi_value("board_name", roots),
        version=dmi_value("board_version", roots),
        serial_number=dmi_value("board_serial", roots),
    )