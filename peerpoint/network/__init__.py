"""
PeerPoint - Network Module

Endpoint model and resolver:
- Endpoint: family-tagged network destination (currently `inet`)
- parse_endpoint: descriptor text -> Endpoint
- socket_address_to_endpoint: socket address -> Endpoint
- get_preferred_local_endpoint: local address to advertise to peers

Copyright (c) 2024-2025 ReGen Designs LLC
"""

from peerpoint.network.endpoint import (
    Endpoint,
    EndpointDescriptor,
    register_family,
    get_family,
    registered_families,
)
from peerpoint.network.inet import InetEndpoint, InetDescriptor
from peerpoint.network.interfaces import NetworkInterface, enumerate_interfaces
from peerpoint.network.resolver import (
    Network,
    parse_descriptor,
    parse_endpoint,
    resolve_endpoint_async,
    socket_address_to_endpoint,
    get_preferred_local_endpoint,
)

__all__ = [
    "Endpoint",
    "EndpointDescriptor",
    "InetEndpoint",
    "InetDescriptor",
    "NetworkInterface",
    "Network",
    "register_family",
    "get_family",
    "registered_families",
    "enumerate_interfaces",
    "parse_descriptor",
    "parse_endpoint",
    "resolve_endpoint_async",
    "socket_address_to_endpoint",
    "get_preferred_local_endpoint",
]
