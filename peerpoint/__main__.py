"""
PeerPoint - Main entry point

Allows running PeerPoint as a module:
    python -m peerpoint parse inet:10.0.0.5/4000
    python -m peerpoint local

Copyright (c) 2024-2025 ReGen Designs LLC
"""

from peerpoint.cli import main

if __name__ == "__main__":
    main()
