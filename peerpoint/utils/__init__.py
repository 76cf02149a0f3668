"""
PeerPoint - Utilities Module

Error types and logging helpers.
"""

from peerpoint.utils.errors import (
    PeerPointError,
    ConfigurationError,
    EndpointError,
    EndpointFormatError,
    AddressResolutionError,
    InvalidPortError,
    UnsupportedFamilyError,
    InterfaceEnumerationError,
)
from peerpoint.utils.logging import setup_logging, get_logger

__all__ = [
    "PeerPointError",
    "ConfigurationError",
    "EndpointError",
    "EndpointFormatError",
    "AddressResolutionError",
    "InvalidPortError",
    "UnsupportedFamilyError",
    "InterfaceEnumerationError",
    "setup_logging",
    "get_logger",
]
