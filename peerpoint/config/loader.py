"""
PeerPoint - Configuration Loader

Configuration loading from YAML files.

Copyright (c) 2024-2025 ReGen Designs LLC
"""

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

import yaml

from peerpoint.network.endpoint import Endpoint, EndpointDescriptor
from peerpoint.network.inet import MAX_PORT
from peerpoint.network.resolver import Network, parse_descriptor
from peerpoint.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILES = ["peerpoint.yaml", "peerpoint-config.yaml", "config.yaml"]

ADVERTISE_AUTO = "auto"


@dataclass
class NetworkConfig:
    """Network configuration."""
    # Descriptor to advertise, or "auto" for the preferred local endpoint
    advertise: str = ADVERTISE_AUTO
    port: int = 42424
    seeds: List[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    console: bool = True


@dataclass
class PeerPointConfig:
    """Complete PeerPoint configuration."""
    network: NetworkConfig = field(default_factory=NetworkConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def seed_descriptors(self) -> List[EndpointDescriptor]:
        """
        Parse seed descriptors without resolving them.

        Raises:
            EndpointError: If any seed is malformed
        """
        return [parse_descriptor(seed) for seed in self.network.seeds]

    def advertised_endpoint(self, network: Optional[Network] = None) -> Optional[Endpoint]:
        """
        Get the endpoint this node should advertise.

        With "auto" the preferred local endpoint is used with the
        configured port; None is returned when no local address
        qualifies. Any other value is parsed as a descriptor.

        Raises:
            EndpointError: If advertise is not a valid descriptor
            InterfaceEnumerationError: If local interfaces cannot be read
        """
        network = network or Network()
        if self.network.advertise != ADVERTISE_AUTO:
            return network.parse_endpoint(self.network.advertise)

        local = network.get_preferred_local_endpoint()
        if local is None:
            return None
        return replace(local, port=self.network.port)


def load_config(path: Optional[str] = None) -> PeerPointConfig:
    """
    Load configuration from YAML file.

    Args:
        path: Config file path. If omitted the default file names are
            tried in the working directory and defaults are used when
            none exists.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if path is None:
        for p in DEFAULT_CONFIG_FILES:
            if os.path.exists(p):
                path = p
                break
        else:
            return PeerPointConfig()

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config {path}: {e}", {"path": path}) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", {"path": path}) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {path} must be a mapping", {"path": path})

    config = _parse_config(data)
    logger.info(f"Loaded config from {path}")
    return config


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping")
    return section


def _parse_config(data: Dict[str, Any]) -> PeerPointConfig:
    """Parse config dictionary."""
    config = PeerPointConfig()

    net = _section(data, "network")
    config.network.advertise = str(net.get("advertise", ADVERTISE_AUTO))
    config.network.port = net.get("port", config.network.port)
    if isinstance(config.network.port, bool) or not isinstance(config.network.port, int) \
            or not 0 <= config.network.port <= MAX_PORT:
        raise ConfigurationError(
            f"Invalid network.port: {config.network.port!r}",
            {"port": config.network.port},
        )

    seeds = net.get("seeds") or []
    if not isinstance(seeds, list):
        raise ConfigurationError("network.seeds must be a list of descriptors")
    config.network.seeds = [str(s) for s in seeds]

    log = _section(data, "logging")
    config.logging.level = str(log.get("level", "INFO")).upper()
    config.logging.file = log.get("file")
    config.logging.console = bool(log.get("console", True))

    return config


def save_config(config: PeerPointConfig, path: str) -> None:
    """
    Save configuration to YAML file.

    Raises:
        ConfigurationError: If the file cannot be written
    """
    data = {
        "network": {
            "advertise": config.network.advertise,
            "port": config.network.port,
            "seeds": list(config.network.seeds),
        },
        "logging": {
            "level": config.logging.level,
            "file": config.logging.file,
            "console": config.logging.console,
        },
    }
    try:
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False)
    except OSError as e:
        raise ConfigurationError(f"Cannot write config {path}: {e}", {"path": path}) from e
