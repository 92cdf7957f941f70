"""Network interface information from sysfs, procfs and socket queries."""

from __future__ import annotations

import ipaddress
import os
import socket
import struct
from dataclasses import dataclass

from hwprobe.sysfs import directory_entries, read_first_line

try:
    import fcntl
except ImportError:  # not available on every platform
    fcntl = None  # type: ignore[assignment]

DEFAULT_NET_ROOT = "/sys/class/net"
DEFAULT_INET6_PATH = "/proc/net/if_inet6"
UNKNOWN = "<unknown>"

_SIOCGIFADDR = 0x8915
_IFNAMSIZ = 16


@dataclass
class Network:
    """One network interface."""

    index: str = UNKNOWN
    description: str = UNKNOWN
    mac: str = UNKNOWN
    ip4: str = UNKNOWN
    ip6: str = UNKNOWN


def interface_index(name: str) -> str:
    """Kernel index of the interface as text, or "<unknown>"."""
    try:
        index = socket.if_nametoindex(name)
    except (OSError, ValueError):
        return UNKNOWN
    return str(index) if index > 0 else UNKNOWN


def mac_address(name: str, net_root: str | os.PathLike[str] = DEFAULT_NET_ROOT) -> str:
    """Hardware address of the interface, or "<unknown>"."""
    line = read_first_line(os.path.join(net_root, name, "address"))
    return line or UNKNOWN


def ipv4_address(name: str) -> str:
    """IPv4 address assigned to the interface, or "<unknown>"."""
    if fcntl is None:
        return UNKNOWN
    try:
        request = struct.pack("256s", name.encode()[: _IFNAMSIZ - 1])
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            reply = fcntl.ioctl(sock.fileno(), _SIOCGIFADDR, request)
    except (OSError, ValueError):
        return UNKNOWN
    return socket.inet_ntoa(reply[20:24])


def ipv6_address(name: str, inet6_path: str | os.PathLike[str] = DEFAULT_INET6_PATH) -> str:
    """First link-local (fe80) IPv6 address of the interface, or "<unknown>"."""
    try:
        with open(inet6_path, encoding="utf-8", errors="replace") as stream:
            for line in stream:
                fields = line.split()
                if len(fields) < 6 or fields[5] != name:
                    continue
                try:
                    address = str(ipaddress.IPv6Address(int(fields[0], 16)))
                except ValueError:
                    continue
                if address.startswith("fe80"):
                    return address
    except OSError:
        pass
    return UNKNOWN


def get_all_networks(net_root: str = DEFAULT_NET_ROOT) -> list[Network]:
    """Every interface listed below ``net_root``, ordered by name."""
    return [
        Network(
            index=interface_index(name),
            description=name,
            mac=mac_address(name, net_root),
            ip4=ipv4_address(name),
            ip6=ipv6_address(name),
        )
        for name in sorted(directory_entries(net_root))
    ]