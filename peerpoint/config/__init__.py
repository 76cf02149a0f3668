"""
PeerPoint - Configuration Module

Configuration loading and management.

Copyright (c) 2024-2025 ReGen Designs LLC
"""

from peerpoint.config.loader import (
    load_config,
    save_config,
    PeerPointConfig,
    NetworkConfig,
    LoggingConfig,
    ADVERTISE_AUTO,
)

__all__ = [
    "load_config",
    "save_config",
    "PeerPointConfig",
    "NetworkConfig",
    "LoggingConfig",
    "ADVERTISE_AUTO",
]
