"""
PeerPoint - Test Fixtures

Fakes for name resolution and interface enumeration so tests never
depend on DNS or the host's real network configuration.

Copyright (c) 2024-2025 ReGen Designs LLC
"""

import socket
from collections import namedtuple
from typing import Dict, List

import psutil
import pytest

# Shape of the entries psutil.net_if_addrs() returns
FakeAddr = namedtuple("FakeAddr", ["family", "address", "netmask", "broadcast", "ptp"])


def inet4(address: str) -> FakeAddr:
    return FakeAddr(socket.AF_INET, address, "255.255.255.0", None, None)


def inet6(address: str) -> FakeAddr:
    return FakeAddr(socket.AF_INET6, address, "ffff:ffff:ffff:ffff::", None, None)


def link(mac: str = "02:42:ac:11:00:02") -> FakeAddr:
    return FakeAddr(psutil.AF_LINK, mac, None, "ff:ff:ff:ff:ff:ff", None)


KNOWN_HOSTS = {
    "peer.example": "10.1.2.3",
    "v6peer.example": "2001:db8::1",
}


class FakeResolver:
    """Stand-in for socket.getaddrinfo that records lookups."""

    def __init__(self, hosts: Dict[str, str]):
        self.hosts = hosts
        self.lookups: List[str] = []

    def __call__(self, host, port, family=0, type=0, proto=0, flags=0):
        self.lookups.append(host)
        if host not in self.hosts:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        address = self.hosts[host]
        if ":" in address:
            return [(socket.AF_INET6, socket.SOCK_DGRAM, 17, "", (address, 0, 0, 0))]
        return [(socket.AF_INET, socket.SOCK_DGRAM, 17, "", (address, 0))]


@pytest.fixture
def resolver(monkeypatch):
    """Replace socket.getaddrinfo with a fake holding KNOWN_HOSTS."""
    fake = FakeResolver(dict(KNOWN_HOSTS))
    monkeypatch.setattr(socket, "getaddrinfo", fake)
    return fake


@pytest.fixture
def fake_interfaces(monkeypatch):
    """
    Install a fake psutil.net_if_addrs().

    Returns a setter; call it with a dict of interface name -> entries.
    """
    def install(table):
        monkeypatch.setattr(psutil, "net_if_addrs", lambda: dict(table))

    return install


@pytest.fixture
def broken_interfaces(monkeypatch):
    """Make psutil.net_if_addrs() fail like an OS-level error."""
    def fail():
        raise OSError(13, "Permission denied")

    monkeypatch.setattr(psutil, "net_if_addrs", fail)
