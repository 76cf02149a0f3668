"""
PeerPoint Version Information

Endpoint resolution for peer-to-peer messaging by ReGen Designs LLC
"""

__title__ = "peerpoint"
__description__ = "Endpoint parsing and local address selection for peer-to-peer messaging"
__version__ = "0.1.0"
__author__ = "ReGen Designs LLC"
__author_email__ = "contact@regendesigns.com"
__license__ = "MIT"
__copyright__ = "Copyright 2024-2025 ReGen Designs LLC"

# Version tuple for programmatic access
VERSION = tuple(map(int, __version__.split(".")))
