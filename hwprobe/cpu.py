"""CPU description read from /proc/cpuinfo and cpufreq sysfs entries."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from pathlib import Path

from hwprobe.sysfs import DEFAULT_STAT_PATH, Jiffies, read_int, read_jiffies

DEFAULT_CPU_ROOT = "/sys/devices/system/cpu"
DEFAULT_CPUINFO_PATH = "/proc/cpuinfo"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"no integer in {text!r}")
    return int(match.group(1))


def _to_mhz(khz: int) -> int:
    # truncate toward zero
    return int(khz / 1000) if khz < 0 else khz // 1000


def _cpufreq_mhz(core_id: int, name: str, cpu_root: str) -> int:
    value = read_int(f"{cpu_root}/cpu{core_id}/cpufreq/{name}")
    return _to_mhz(value) if value > -1 else -1


def max_clock_speed_mhz(core_id: int, cpu_root: str = DEFAULT_CPU_ROOT) -> int:
    """Maximum scaling frequency of a core in MHz, or -1."""
    return _cpufreq_mhz(core_id, "scaling_max_freq", cpu_root)


def regular_clock_speed_mhz(core_id: int, cpu_root: str = DEFAULT_CPU_ROOT) -> int:
    """Base frequency of a core in MHz, or -1."""
    return _cpufreq_mhz(core_id, "base_frequency", cpu_root)


def min_clock_speed_mhz(core_id: int, cpu_root: str = DEFAULT_CPU_ROOT) -> int:
    """Minimum scaling frequency of a core in MHz, or -1."""
    return _cpufreq_mhz(core_id, "scaling_min_freq", cpu_root)


def _ratio(work: int, total: int, upper: float) -> float:
    if total == 0:
        return -1.0
    value = work / total
    if value < 0 or value > upper:
        return -1.0
    return value


@dataclass
class CPU:
    """One CPU socket."""

    id: int = -1
    vendor: str = "<unknown>"
    model_name: str = "<unknown>"
    l1_cache_size_bytes: int = -1
    l2_cache_size_bytes: int = -1
    l3_cache_size_bytes: int = -1
    num_physical_cores: int = -1
    num_logical_cores: int = -1
    max_clock_speed_mhz: int = -1
    regular_clock_speed_mhz: int = -1
    flags: list[str] = field(default_factory=list)
    cpu_root: str = field(default=DEFAULT_CPU_ROOT, repr=False, compare=False)
    stat_path: str = field(default=DEFAULT_STAT_PATH, repr=False, compare=False)
    warmup_seconds: float = field(default=1.0, repr=False, compare=False)
    _warmed_up: bool = field(default=False, init=False, repr=False, compare=False)
    _last_total: Jiffies = field(default_factory=Jiffies, init=False, repr=False, compare=False)
    _last_threads: list[Jiffies] = field(default_factory=list, init=False, repr=False, compare=False)

    def _warm_up(self) -> None:
        # Utilisation is a delta, so the first reading waits to have something to compare.
        if not self._warmed_up:
            time.sleep(self.warmup_seconds)
            self._warmed_up = True

    def current_clock_speed_mhz(self) -> list[int]:
        """Current frequency of every core in MHz, in core order."""
        speeds = []
        core_id = 0
        while True:
            value = read_int(f"{self.cpu_root}/cpu{core_id}/cpufreq/scaling_cur_freq")
            if value == -1:
                return speeds
            speeds.append(_to_mhz(value))
            core_id += 1

    def current_utilisation(self) -> float:
        """Share of busy time since the previous call, 0..1, or -1.0."""
        self._warm_up()
        current = read_jiffies(0, self.stat_path)
        previous, self._last_total = self._last_total, current
        return _ratio(current.working - previous.working, current.total - previous.total, 1.0)

    def thread_utilisation(self, thread_index: int) -> float:
        """Share of busy time of one logical core since its previous reading, or -1.0."""
        self._warm_up()
        if not self._last_threads:
            self._last_threads = [Jiffies()] * max(self.num_logical_cores, 0)
        if not 0 <= thread_index < len(self._last_threads):
            raise IndexError(f"thread index {thread_index} out of range")
        current = read_jiffies(thread_index + 1, self.stat_path)
        previous = self._last_threads[thread_index]
        self._last_threads[thread_index] = current
        return _ratio(current.working - previous.working, current.total - previous.total, 100.0)

    def threads_utilisation(self) -> list[float]:
        """Utilisation of every logical core."""
        return [self.thread_utilisation(index) for index in range(max(self.num_logical_cores, 0))]


def parse_cpuinfo(text: str, cpu_root: str = DEFAULT_CPU_ROOT) -> list[CPU]:
    """Build one CPU per physical socket from /proc/cpuinfo text."""
    cpus = []
    physical_id = -1
    for block in text.split("\n\n"):
        cpu = CPU(cpu_root=cpu_root)
        add = False
        for line in block.split("\n"):
            pairs = line.split(":")
            if len(pairs) < 2:
                continue
            name, value = pairs[0].strip(), pairs[1].strip()
            if name == "vendor_id":
                cpu.vendor = value
            elif name == "model name":
                cpu.model_name = value
            elif name == "cache size":
                cpu.l3_cache_size_bytes = _leading_int(value.split(" ")[0]) * 1024
            elif name == "siblings":
                cpu.num_logical_cores = _leading_int(value)
            elif name == "cpu cores":
                cpu.num_physical_cores = _leading_int(value)
            elif name == "flags":
                cpu.flags = value.split(" ")
            elif name == "physical id":
                socket = _leading_int(value)
                if socket == physical_id:
                    continue
                cpu.id = socket
                add = True
        if add:
            cpu.max_clock_speed_mhz = max_clock_speed_mhz(cpu.id, cpu_root)
            cpu.regular_clock_speed_mhz = regular_clock_speed_mhz(cpu.id, cpu_root)
            physical_id += 1
            cpus.append(cpu)
    return cpus


def get_all_cpus(cpuinfo_path: str = DEFAULT_CPUINFO_PATH, cpu_root: str = DEFAULT_CPU_ROOT) -> list[CPU]:
    """All CPU sockets of this machine; empty if cpuinfo cannot be read."""
    try:
        text = Path(cpuinfo_path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return []
    return parse_cpuinfo(text, cpu_root)