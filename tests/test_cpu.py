import pytest

from hwprobe.cpu import (
    CPU,
    get_all_cpus,
    max_clock_speed_mhz,
    min_clock_speed_mhz,
    parse_cpuinfo,
    regular_clock_speed_mhz,
)

BLOCK = (
    "processor\t: {proc}\n"
    "vendor_id\t: GenuineExample\n"
    "model name\t: Example CPU @ 2.00GHz\n"
    "physical id\t: {phys}\n"
    "siblings\t: 4\n"
    "cpu cores\t: 2\n"
    "cache size\t: 8192 KB\n"
    "flags\t\t: fpu vme sse\n"
)


def _cpuinfo(*physical_ids):
    return "\n".join(BLOCK.format(proc=i, phys=p) for i, p in enumerate(physical_ids))


def _write_freq(root, core, name, value):
    path = root / f"cpu{core}" / "cpufreq" / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{value}\n")


def _cpu(tmp_path, cores=2):
    return CPU(num_logical_cores=cores, stat_path=str(tmp_path / "stat"), warmup_seconds=0)


def _write_stat(tmp_path, *lines):
    (tmp_path / "stat").write_text("\n".join(lines) + "\n")


def test_parse_single_socket(tmp_path):
    cpus = parse_cpuinfo(_cpuinfo(0, 0, 0, 0), str(tmp_path))
    assert len(cpus) == 1
    cpu = cpus[0]
    assert cpu.id == 0
    assert cpu.vendor == "GenuineExample"
    assert cpu.model_name == "Example CPU @ 2.00GHz"
    assert cpu.num_logical_cores == 4
    assert cpu.num_physical_cores == 2
    assert cpu.flags == ["fpu", "vme", "sse"]
    assert cpu.l3_cache_size_bytes == 8192 * 1024


def test_parse_two_sockets(tmp_path):
    cpus = parse_cpuinfo(_cpuinfo(0, 0, 1, 1), str(tmp_path))
    assert [cpu.id for cpu in cpus] == [0, 1]


def test_block_without_physical_id_is_not_added(tmp_path):
    assert parse_cpuinfo("processor\t: 0\nvendor_id\t: X\n", str(tmp_path)) == []


def test_parse_reads_clock_speeds(tmp_path):
    _write_freq(tmp_path, 0, "scaling_max_freq", 3000000)
    _write_freq(tmp_path, 0, "base_frequency", 3000000)
    cpu = parse_cpuinfo(_cpuinfo(0), str(tmp_path))[0]
    assert cpu.max_clock_speed_mhz == 3000
    assert cpu.regular_clock_speed_mhz == cpu.max_clock_speed_mhz


def test_parse_missing_clock_speeds(tmp_path):
    cpu = parse_cpuinfo(_cpuinfo(0), str(tmp_path))[0]
    assert cpu.max_clock_speed_mhz == -1
    assert cpu.regular_clock_speed_mhz == -1


def test_bad_cache_size_raises(tmp_path):
    with pytest.raises(ValueError):
        parse_cpuinfo("cache size\t: unknown\nphysical id\t: 0\n", str(tmp_path))


def test_clock_speed_functions_agree(tmp_path):
    for name in ("scaling_max_freq", "base_frequency", "scaling_min_freq"):
        _write_freq(tmp_path, 1, name, 1800000)
    root = str(tmp_path)
    assert min_clock_speed_mhz(1, root) == max_clock_speed_mhz(1, root)
    assert regular_clock_speed_mhz(1, root) == max_clock_speed_mhz(1, root)


def test_clock_speed_missing_core(tmp_path):
    assert min_clock_speed_mhz(5, str(tmp_path)) == -1


def test_current_clock_speed_stops_at_missing_core(tmp_path):
    for core, value in ((0, 1500000), (1, 2500000)):
        _write_freq(tmp_path, core, "scaling_cur_freq", value)
        _write_freq(tmp_path, core, "scaling_max_freq", value)
    _write_freq(tmp_path, 3, "scaling_cur_freq", 900000)
    cpu = CPU(cpu_root=str(tmp_path))
    assert cpu.current_clock_speed_mhz() == [max_clock_speed_mhz(i, str(tmp_path)) for i in range(2)]


def test_get_all_cpus_missing_file(tmp_path):
    assert get_all_cpus(str(tmp_path / "cpuinfo"), str(tmp_path)) == []


def test_get_all_cpus_reads_file(tmp_path):
    path = tmp_path / "cpuinfo"
    path.write_text(_cpuinfo(0, 0))
    assert get_all_cpus(str(path), str(tmp_path)) == parse_cpuinfo(_cpuinfo(0, 0), str(tmp_path))


def test_current_utilisation_first_reading_in_range(tmp_path):
    _write_stat(tmp_path, "cpu  5 0 5 90 0 0 0 0 0 0")
    value = _cpu(tmp_path).current_utilisation()
    assert 0.0 <= value <= 1.0


def test_current_utilisation_unchanged_counters(tmp_path):
    _write_stat(tmp_path, "cpu  5 0 5 90 0 0 0 0 0 0")
    cpu = _cpu(tmp_path)
    cpu.current_utilisation()
    assert cpu.current_utilisation() == -1.0


def test_current_utilisation_idle_and_busy(tmp_path):
    _write_stat(tmp_path, "cpu  5 0 5 90 0 0 0 0 0 0")
    cpu = _cpu(tmp_path)
    cpu.current_utilisation()
    _write_stat(tmp_path, "cpu  5 0 5 100 0 0 0 0 0 0")
    assert cpu.current_utilisation() == 0.0
    _write_stat(tmp_path, "cpu  15 0 5 100 0 0 0 0 0 0")
    assert cpu.current_utilisation() == 1.0


def test_threads_utilisation_per_core(tmp_path):
    _write_stat(
        tmp_path,
        "cpu  10 0 10 180 0 0 0 0 0 0",
        "cpu0 5 0 5 90 0 0 0 0 0 0",
        "cpu1 5 0 5 90 0 0 0 0 0 0",
    )
    values = _cpu(tmp_path).threads_utilisation()
    assert len(values) == 2
    assert all(0.0 <= value <= 1.0 for value in values)


def test_thread_utilisation_out_of_range(tmp_path):
    _write_stat(tmp_path, "cpu  1 1 1 1 1 1 1 1 1 1", "cpu0 1 1 1 1 1 1 1 1 1 1")
    with pytest.raises(IndexError):
        _cpu(tmp_path, cores=1).thread_utilisation(1)


def test_thread_utilisation_unchanged(tmp_path):
    _write_stat(tmp_path, "cpu  1 1 1 1 1 1 1 1 1 1", "cpu0 1 1 1 1 1 1 1 1 1 1")
    cpu = _cpu(tmp_path, cores=1)
    cpu.thread_utilisation(0)
    assert cpu.thread_utilisation(0) == -1.0