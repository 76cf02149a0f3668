"""
PeerPoint - Endpoint Resolver

Stateless operations turning descriptors, socket addresses and local
interface configuration into Endpoint values.

Copyright (c) 2024-2025 ReGen Designs LLC
"""

import ipaddress
import logging
import socket
from typing import Any, Callable, Iterable, Optional

from peerpoint.network.endpoint import Endpoint, EndpointDescriptor, get_family
from peerpoint.network.inet import InetEndpoint
from peerpoint.network.interfaces import NetworkInterface, enumerate_interfaces
from peerpoint.utils.errors import EndpointFormatError, UnsupportedFamilyError

logger = logging.getLogger(__name__)

# Address length in bytes for each socket family an InetEndpoint can hold
_SOCKET_FAMILIES = {
    socket.AF_INET: 4,
    socket.AF_INET6: 16,
}

InterfaceProvider = Callable[[], Iterable[NetworkInterface]]


def parse_descriptor(text: str) -> EndpointDescriptor:
    """
    Split a descriptor and validate its payload without resolving it.

    Args:
        text: Descriptor such as "inet:10.0.0.5/4000"

    Returns:
        Unresolved descriptor for the family named by the tag

    Raises:
        EndpointFormatError: Unknown family tag or malformed payload
        InvalidPortError: Port is not a 16-bit decimal
    """
    if not isinstance(text, str):
        raise EndpointFormatError(
            "unrecognized endpoint format", {"descriptor": repr(text)}
        )

    tag, sep, payload = text.partition(":")
    family = get_family(tag) if sep else None
    if family is None:
        raise EndpointFormatError(
            "unrecognized endpoint format", {"descriptor": text}
        )

    return family.from_payload(payload)


def parse_endpoint(text: str) -> Endpoint:
    """
    Parse a descriptor into an Endpoint.

    Names are resolved with a blocking lookup. Callers on a latency
    sensitive path should use resolve_endpoint_async() or call
    parse_descriptor() and resolve on a worker thread.

    Raises:
        EndpointFormatError: Unknown family tag or malformed payload
        InvalidPortError: Port is not a 16-bit decimal
        AddressResolutionError: Address cannot be resolved
    """
    return parse_descriptor(text).resolve()


async def resolve_endpoint_async(text: str) -> Endpoint:
    """Parse a descriptor, resolving names through the event loop."""
    return await parse_descriptor(text).resolve_async()


def socket_address_to_endpoint(sockaddr: Any, family: Optional[int] = None) -> InetEndpoint:
    """
    Convert a Python socket address into an Endpoint.

    Args:
        sockaddr: Value as returned by getpeername()/recvfrom(), i.e.
            (host, port) for AF_INET or (host, port, flowinfo, scope_id)
            for AF_INET6
        family: Socket family the address came from, if known

    Raises:
        UnsupportedFamilyError: Not an IP address + port pair
    """
    if family is not None and family not in _SOCKET_FAMILIES:
        raise UnsupportedFamilyError(details={"family": family})

    if not isinstance(sockaddr, tuple) or len(sockaddr) not in (2, 4):
        raise UnsupportedFamilyError(details={"sockaddr": repr(sockaddr)})

    host, port = sockaddr[0], sockaddr[1]
    if not isinstance(host, str) or isinstance(port, bool) or not isinstance(port, int):
        raise UnsupportedFamilyError(details={"sockaddr": repr(sockaddr)})

    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        raise UnsupportedFamilyError(details={"sockaddr": repr(sockaddr)}) from None

    if len(sockaddr) == 4 and ip.version != 6:
        raise UnsupportedFamilyError(details={"sockaddr": repr(sockaddr)})
    if family is not None and len(ip.packed) != _SOCKET_FAMILIES[family]:
        raise UnsupportedFamilyError(
            details={"sockaddr": repr(sockaddr), "family": family}
        )

    return InetEndpoint(ip.packed, port)


def get_preferred_local_endpoint(
    interfaces: Optional[Iterable[NetworkInterface]] = None,
) -> Optional[InetEndpoint]:
    """
    Pick the local address to advertise to peers.

    Walks interfaces and their addresses in system order and returns the
    first address that is neither loopback nor link-local and is IPv4.
    This is first-match, not best-match: with several usable interfaces
    the one the OS lists first wins.

    Args:
        interfaces: Interface set to search; defaults to a fresh
            enumerate_interfaces() snapshot

    Returns:
        InetEndpoint with port 0, or None if nothing qualifies

    Raises:
        InterfaceEnumerationError: If enumerating the host interfaces fails
    """
    if interfaces is None:
        interfaces = enumerate_interfaces()

    for interface in interfaces:
        for ip in interface.addresses:
            if ip.is_loopback or ip.is_link_local:
                continue

            # TODO: drop once peers can be told about IPv6 endpoints
            if len(ip.packed) != 4:
                continue

            endpoint = InetEndpoint(ip.packed, 0)
            logger.debug(f"Preferred local endpoint {endpoint} on {interface.name}")
            return endpoint

    logger.debug("No suitable local endpoint found")
    return None


class Network:
    """
    Network operations used by the transport layer.

    Bundles the resolver functions behind one object so transports can
    be handed an alternate interface source (for tests or sandboxes).
    Holds no mutable state.

    Example:
        network = Network()
        peer = network.parse_endpoint("inet:10.0.0.5/4000")
        local = network.get_preferred_local_endpoint()
    """

    def __init__(self, interface_provider: Optional[InterfaceProvider] = None):
        """
        Initialize network.

        Args:
            interface_provider: Callable returning the interfaces to search;
                defaults to enumerate_interfaces
        """
        self._interface_provider = interface_provider

    def parse_endpoint(self, text: str) -> Endpoint:
        return parse_endpoint(text)

    async def resolve_endpoint(self, text: str) -> Endpoint:
        return await resolve_endpoint_async(text)

    def socket_address_to_endpoint(self, sockaddr: Any, family: Optional[int] = None) -> InetEndpoint:
        return socket_address_to_endpoint(sockaddr, family)

    def get_preferred_local_endpoint(self) -> Optional[InetEndpoint]:
        provider = self._interface_provider or enumerate_interfaces
        return get_preferred_local_endpoint(provider())
