"""
PeerPoint - Internet Endpoints

The `inet` endpoint family: an IP address (IPv4 or IPv6, stored as raw
bytes) plus a port. Descriptor payload is `<address>/<port>`.

Copyright (c) 2024-2025 ReGen Designs LLC
"""

import asyncio
import ipaddress
import logging
import re
import socket
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Tuple, Union

from peerpoint.network.endpoint import Endpoint, EndpointDescriptor, register_family
from peerpoint.utils.errors import (
    AddressResolutionError,
    EndpointFormatError,
    InvalidPortError,
)

logger = logging.getLogger(__name__)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

INET_FAMILY = "inet"
MAX_PORT = 65535
ADDRESS_LENGTHS = (4, 16)

_PORT_PATTERN = re.compile(r"[0-9]+")


def parse_port(text: str) -> int:
    """
    Parse the port part of an inet descriptor.

    Only plain ASCII digits are accepted: no sign, whitespace or
    underscores.

    Raises:
        InvalidPortError: If the text is not a decimal in 0-65535
    """
    if not _PORT_PATTERN.fullmatch(text):
        raise InvalidPortError(text)

    port = int(text)
    if port > MAX_PORT:
        raise InvalidPortError(text, {"max": MAX_PORT})
    return port


def _literal_address(host: str) -> Optional[IPAddress]:
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        return None


def _first_address(host: str, infos: List[tuple]) -> bytes:
    for family, _, _, _, sockaddr in infos:
        if family in (socket.AF_INET, socket.AF_INET6):
            return ipaddress.ip_address(sockaddr[0]).packed
    raise AddressResolutionError(host, "no IP addresses returned")


def resolve_host(host: str) -> bytes:
    """
    Resolve a host string to raw address bytes.

    Numeric addresses are converted directly. Anything else goes through
    getaddrinfo, which blocks the calling thread; the first result wins.

    Raises:
        AddressResolutionError: If the host cannot be resolved
    """
    if not host:
        raise AddressResolutionError(host, "empty address")

    literal = _literal_address(host)
    if literal is not None:
        return literal.packed

    try:
        infos = socket.getaddrinfo(host, None, type=socket.SOCK_DGRAM)
    except (OSError, UnicodeError) as e:
        logger.debug(f"Resolution of {host!r} failed: {e}")
        raise AddressResolutionError(host, str(e)) from e

    return _first_address(host, infos)


async def resolve_host_async(host: str) -> bytes:
    """Same as resolve_host(), using the running loop's resolver."""
    if not host:
        raise AddressResolutionError(host, "empty address")

    literal = _literal_address(host)
    if literal is not None:
        return literal.packed

    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, None, type=socket.SOCK_DGRAM)
    except (OSError, UnicodeError) as e:
        logger.debug(f"Resolution of {host!r} failed: {e}")
        raise AddressResolutionError(host, str(e)) from e

    return _first_address(host, infos)


@dataclass(frozen=True)
class InetDescriptor(EndpointDescriptor):
    """
    Split `inet` descriptor: host text and parsed port.

    Attributes:
        host: Address portion as written (numeric or a name)
        port: Port number
    """

    family: ClassVar[str] = INET_FAMILY

    host: str
    port: int

    @property
    def is_numeric(self) -> bool:
        """True if the host is an IP literal and resolving will not block."""
        return _literal_address(self.host) is not None

    def resolve(self) -> "InetEndpoint":
        return InetEndpoint(resolve_host(self.host), self.port)

    async def resolve_async(self) -> "InetEndpoint":
        return InetEndpoint(await resolve_host_async(self.host), self.port)

    def __str__(self) -> str:
        return f"{self.family}:{self.host}/{self.port}"


@register_family
@dataclass(frozen=True)
class InetEndpoint(Endpoint):
    """
    IP address and port.

    Attributes:
        address: Raw address bytes, 4 for IPv4 or 16 for IPv6
        port: Port number, 0 meaning unspecified

    Example:
        endpoint = InetEndpoint.from_ip("10.0.0.5", 4000)
        endpoint.to_descriptor()  # "inet:10.0.0.5/4000"
    """

    family: ClassVar[str] = INET_FAMILY

    address: bytes
    port: int = 0

    def __post_init__(self):
        if isinstance(self.address, bytearray):
            object.__setattr__(self, "address", bytes(self.address))

        if not isinstance(self.address, bytes) or len(self.address) not in ADDRESS_LENGTHS:
            raise EndpointFormatError(
                "inet address must be 4 or 16 raw bytes",
                {"address": repr(self.address)},
            )

        port = self.port
        if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= MAX_PORT:
            raise InvalidPortError(port)

    @classmethod
    def from_ip(cls, ip: Union[str, bytes, IPAddress], port: int = 0) -> "InetEndpoint":
        """
        Create an endpoint from an IP in text, packed or ipaddress form.

        Raises:
            EndpointFormatError: If ip is not an IP address
        """
        if isinstance(ip, (bytes, bytearray)):
            return cls(bytes(ip), port)

        try:
            parsed = ipaddress.ip_address(ip)
        except ValueError as e:
            raise EndpointFormatError(f"not an IP address: {ip!r}") from e
        return cls(parsed.packed, port)

    @classmethod
    def from_payload(cls, payload: str) -> InetDescriptor:
        host, sep, port = payload.partition("/")
        if not sep:
            raise EndpointFormatError(
                "malformed inet endpoint", {"payload": payload}
            )
        return InetDescriptor(host, parse_port(port))

    @property
    def ip(self) -> IPAddress:
        """Address as an ipaddress object."""
        return ipaddress.ip_address(self.address)

    @property
    def host(self) -> str:
        """Address in its compressed text form."""
        return str(self.ip)

    @property
    def is_ipv4(self) -> bool:
        return len(self.address) == 4

    def payload(self) -> str:
        return f"{self.host}/{self.port}"

    def to_socket_address(self) -> Tuple[str, int]:
        """Get the (host, port) tuple accepted by socket.connect/sendto."""
        return (self.host, self.port)
