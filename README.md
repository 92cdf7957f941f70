# hwprobe

hwprobe is a library that reads hardware and system information on Linux
from `/proc` and `/sys`. It covers CPUs, the operating system, RAM, the
mainboard, batteries, disks and network interfaces. It has no third-party
dependencies.

## Installation

```
pip install .
```

## Use

```python
from hwprobe.cpu import get_all_cpus
from hwprobe.ram import Memory
from hwprobe.os_info import read_os
from hwprobe.disk import get_all_disks
from hwprobe.battery import get_all_batteries
from hwprobe.network import get_all_networks
from hwprobe.mainboard import read_mainboard

for cpu in get_all_cpus():
    print(cpu.vendor, cpu.model_name, cpu.num_logical_cores)
    print(cpu.current_clock_speed_mhz())

memory = Memory()
print(memory.total_bytes(), memory.free_bytes(), memory.available_bytes())

print(read_os())

for disk in get_all_disks():
    print(disk.model, disk.size_bytes, disk.free_size_bytes, disk.volumes)

for battery in get_all_batteries():
    print(battery.vendor(), battery.capacity(), battery.charging())

for network in get_all_networks():
    print(network.description, network.mac, network.ip4, network.ip6)

print(read_mainboard())
```

If a value cannot be read, it is given as `"<unknown>"` or `-1`. Battery
energy values that cannot be read are `0`. When a battery's full energy is
`0`, `Battery.capacity()` returns `nan` or `inf`.

`CPU.current_utilisation()`, `CPU.thread_utilisation(index)` and
`CPU.threads_utilisation()` measure busy time since the previous call. The
first call on a `CPU` therefore sleeps for `warmup_seconds` (one second by
default) before it reads `/proc/stat`.

## Reading from other files

The lookup functions take the paths they read from as arguments. Examples
are `get_all_cpus(cpuinfo_path, cpu_root)`, `read_meminfo(meminfo_path)`,
`get_all_disks(base_path, mounts_path)`, `get_all_batteries(base_path)`,
`read_mainboard(roots)` and `read_os(os_release_path)`. You can point them at
a copy of a system's files, for example one captured from another machine.
The text parsers `parse_cpuinfo`, `parse_meminfo` and `parse_os_release`
work on strings directly.

Lower-level helpers for single sysfs and procfs values are in
`hwprobe.sysfs`: `exists`, `directory_entries`, `read_first_line`,
`read_int` and `read_jiffies`.

## What it does not do

- It has no command-line program. It is a library only.
- It does not report on GPUs.
- It does not turn PCI vendor and device ids into names.
- Memory is reported as one module with the system total. Individual DIMMs
  are not described.