"""
PeerPoint - Local Interfaces

Snapshot of the host's network interfaces and their IP addresses,
read through psutil. Nothing is cached: every call reads the current
configuration.

Copyright (c) 2024-2025 ReGen Designs LLC
"""

import ipaddress
import logging
import socket
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

import psutil

from peerpoint.network.inet import IPAddress
from peerpoint.utils.errors import InterfaceEnumerationError

logger = logging.getLogger(__name__)

_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


@dataclass(frozen=True)
class NetworkInterface:
    """
    A local network interface.

    Attributes:
        name: Interface name as reported by the OS (e.g. "eth0")
        addresses: IP addresses in the order the OS reports them
    """

    name: str
    addresses: Tuple[IPAddress, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(
            self,
            "addresses",
            tuple(ipaddress.ip_address(a) for a in self.addresses),
        )

    @property
    def ipv4_addresses(self) -> List[ipaddress.IPv4Address]:
        return [a for a in self.addresses if a.version == 4]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "addresses": [str(a) for a in self.addresses],
        }


def _ip_addresses(name: str, entries: Iterable) -> Tuple[IPAddress, ...]:
    addresses = []
    for entry in entries:
        # MAC addresses show up as AF_PACKET / AF_LINK entries
        if entry.family not in _IP_FAMILIES:
            continue
        try:
            addresses.append(ipaddress.ip_address(entry.address))
        except ValueError:
            logger.debug(f"Skipping unparseable address {entry.address!r} on {name}")
    return tuple(addresses)


def enumerate_interfaces() -> List[NetworkInterface]:
    """
    Enumerate local network interfaces.

    Returns:
        Interfaces in system-provided order. Interfaces without any IP
        address are included with an empty address tuple.

    Raises:
        InterfaceEnumerationError: If the platform call fails
    """
    try:
        raw = psutil.net_if_addrs()
    except (OSError, psutil.Error) as e:
        logger.warning(f"Interface enumeration failed: {e}")
        raise InterfaceEnumerationError(
            "interface enumeration failed", {"reason": str(e)}
        ) from e

    interfaces = [
        NetworkInterface(name, _ip_addresses(name, entries))
        for name, entries in raw.items()
    ]
    logger.debug(f"Enumerated {len(interfaces)} network interfaces")
    return interfaces
