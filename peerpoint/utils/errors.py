"""
PeerPoint - Custom Exceptions

Custom exception classes for PeerPoint.

Copyright (c) 2024-2025 ReGen Designs LLC
"""


class PeerPointError(Exception):
    """Base exception for PeerPoint errors."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or "PEERPOINT_ERROR"
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(PeerPointError):
    """Error in configuration."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, "CONFIG_ERROR", details)


class EndpointError(PeerPointError):
    """Endpoint-related error."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message, code or "ENDPOINT_ERROR", details)


class EndpointFormatError(EndpointError):
    """Descriptor does not match any recognized family/payload grammar."""

    def __init__(self, message: str = "unrecognized endpoint format", details: dict = None):
        super().__init__(message, "ENDPOINT_FORMAT_ERROR", details)


class AddressResolutionError(EndpointError):
    """Address portion of a descriptor could not be resolved."""

    def __init__(self, host: str, reason: str = None):
        details = {"host": host}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"unresolvable address: {host!r}",
            "ADDRESS_RESOLUTION_ERROR",
            details,
        )
        self.host = host


class InvalidPortError(EndpointError):
    """Port is not a valid 16-bit decimal integer."""

    def __init__(self, port, details: dict = None):
        details = details or {}
        details["port"] = port
        super().__init__(f"invalid port: {port!r}", "INVALID_PORT", details)
        self.port = port


class UnsupportedFamilyError(EndpointError):
    """Socket address belongs to a family that has no endpoint variant."""

    def __init__(self, message: str = "unsupported socket address type", details: dict = None):
        super().__init__(message, "UNSUPPORTED_FAMILY", details)


class InterfaceEnumerationError(PeerPointError):
    """Platform failed to enumerate network interfaces."""

    def __init__(self, message: str = "interface enumeration failed", details: dict = None):
        super().__init__(message, "INTERFACE_ENUMERATION_ERROR", details)
