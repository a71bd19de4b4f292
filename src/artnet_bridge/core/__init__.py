"""Core system components for the Art-Net bridge."""

from artnet_bridge.core.config import Settings, parse_target_universe
from artnet_bridge.core.exceptions import (
    BridgeError,
    ConfigError,
    DMXConnectionError,
    DMXError,
    DMXTransmissionError,
    ListenerBindError,
)
from artnet_bridge.core.status import BridgeStatus, TargetUniverse

__all__ = [
    "Settings",
    "parse_target_universe",
    "BridgeError",
    "ConfigError",
    "DMXError",
    "DMXConnectionError",
    "DMXTransmissionError",
    "ListenerBindError",
    "BridgeStatus",
    "TargetUniverse",
]
