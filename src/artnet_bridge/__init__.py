"""
Art-Net Bridge: Art-Net to Enttec DMX USB Pro relay

Listens for ArtDMX packets on the local network and forwards a single
universe to a DMX USB Pro style serial interface, one frame per packet.
"""

__version__ = "0.1.0"

from artnet_bridge.core.config import Settings
from artnet_bridge.core.status import BridgeStatus, TargetUniverse

__all__ = [
    "BridgeStatus",
    "Settings",
    "TargetUniverse",
    "__version__",
]
