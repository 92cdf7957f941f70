"""Battery information read from the power_supply sysfs class."""

from __future__ import annotations

import math
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from hwprobe.sysfs import exists, read_first_line, read_int

DEFAULT_BASE_PATH = "/sys/class/power_supply"
UNKNOWN = "<unknown>"

_T = TypeVar("_T")


@dataclass
class Battery:
    """One battery, ``BAT<id>`` below the power_supply directory.

    Vendor, model, serial number, technology and full energy are read once
    and kept as soon as a non-empty value has been seen.
    """

    id: int = -1
    base_path: str = field(default=DEFAULT_BASE_PATH, repr=False, compare=False)
    _cache: dict[str, object] = field(default_factory=dict, init=False, repr=False, compare=False)

    def _path(self, name: str) -> str:
        return os.path.join(self.base_path, f"BAT{self.id}", name)

    def _read_text(self, name: str) -> str:
        if self.id < 0:
            return UNKNOWN
        line = read_first_line(self._path(name))
        return UNKNOWN if line is None else line

    def _read_energy(self, name: str) -> int:
        if self.id < 0:
            return 0
        return max(read_int(self._path(name)), 0)

    def _cached(self, key: str, loader: Callable[[], _T]) -> _T:
        value = self._cache.get(key)
        if not value:
            value = loader()
            self._cache[key] = value
        return value  # type: ignore[return-value]

    def vendor(self) -> str:
        """Manufacturer name."""
        return self._cached("vendor", lambda: self._read_text("manufacturer"))

    def model(self) -> str:
        """Model name."""
        return self._cached("model", lambda: self._read_text("model_name"))

    def serial_number(self) -> str:
        """Serial number."""
        return self._cached("serial_number", lambda: self._read_text("serial_number"))

    def technology(self) -> str:
        """Cell technology, such as Li-ion."""
        return self._cached("technology", lambda: self._read_text("technology"))

    def energy_full(self) -> int:
        """Energy when fully charged, or 0 if unknown."""
        return self._cached("energy_full", lambda: self._read_energy("energy_full"))

    def energy_now(self) -> int:
        """Energy stored right now, or 0 if unknown."""
        return self._read_energy("energy_now")

    def charging(self) -> bool:
        """True if the battery reports that it is charging."""
        if self.id < 0:
            return False
        return read_first_line(self._path("status")) == "Charging"

    def discharging(self) -> bool:
        """True if the battery is not charging."""
        return not self.charging()

    def capacity(self) -> float:
        """Charge level as the ratio of current to full energy."""
        now = self.energy_now()
        full = self.energy_full()
        if full == 0:
            return math.nan if now == 0 else math.inf
        return now / full


def get_all_batteries(base_path: str = DEFAULT_BASE_PATH) -> list[Battery]:
    """Batteries BAT0, BAT1, ... up to the first one that does not exist."""
    batteries = []
    battery_id = 0
    while exists(os.path.join(base_path, f"BAT{battery_id}")):
        batteries.append(Battery(battery_id, base_path))
        battery_id += 1
    return batteries