[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hwprobe"
version = "1.0.0"
description = "Gather hardware and system information on Linux from sysfs and procfs"
requires-python = ">=3.10"
dependencies = []
keywords = ["hardware", "sysfs", "procfs", "cpu", "memory", "disk", "battery", "network", "system-information"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hwprobe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
