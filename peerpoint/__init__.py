"""
PeerPoint - Endpoint Resolution for Peer-to-Peer Messaging

Parses endpoint descriptors, converts socket addresses into endpoints,
and picks the local address a node advertises to its peers.

Copyright (c) 2024-2025 ReGen Designs LLC
Licensed under MIT License with Attribution

Quick Start:
    import peerpoint

    endpoint = peerpoint.parse_endpoint("inet:192.168.1.10/42424")
    endpoint.host, endpoint.port      # ("192.168.1.10", 42424)

    local = peerpoint.get_preferred_local_endpoint()
    if local is None:
        ...  # no usable address yet, retry later
"""

from peerpoint.__version__ import (
    __title__,
    __description__,
    __version__,
    __author__,
    __license__,
    __copyright__,
    VERSION,
)

from peerpoint.network import (
    Endpoint,
    InetEndpoint,
    Network,
    parse_endpoint,
    resolve_endpoint_async,
    socket_address_to_endpoint,
    get_preferred_local_endpoint,
)
from peerpoint.config import load_config, PeerPointConfig
from peerpoint.utils.errors import (
    PeerPointError,
    EndpointError,
    EndpointFormatError,
    AddressResolutionError,
    InvalidPortError,
    UnsupportedFamilyError,
    InterfaceEnumerationError,
)

__all__ = [
    # Version info
    "__title__",
    "__description__",
    "__version__",
    "__author__",
    "__license__",
    "__copyright__",
    "VERSION",
    # Endpoints
    "Endpoint",
    "InetEndpoint",
    "Network",
    "parse_endpoint",
    "resolve_endpoint_async",
    "socket_address_to_endpoint",
    "get_preferred_local_endpoint",
    # Config
    "load_config",
    "PeerPointConfig",
    # Errors
    "PeerPointError",
    "EndpointError",
    "EndpointFormatError",
    "AddressResolutionError",
    "InvalidPortError",
    "UnsupportedFamilyError",
    "InterfaceEnumerationError",
]
