"""
Configuration and status surface shared with the front end.

The front end writes the target universe and reads two status strings;
the relay thread reads the target and updates the Art-Net status. Both
objects guard their state with a lock so neither side sees a torn value.
"""

from __future__ import annotations

import threading
from typing import Any

from artnet_bridge.core.config import parse_target_universe

DEVICE_NOT_CONNECTED = "Device not connected"
ARTNET_NOT_RECEIVED = "Art-Net not received"


class TargetUniverse:
    """Thread-safe holder for the universe the relay forwards."""

    def __init__(self, initial: Any = 0) -> None:
        self._lock = threading.Lock()
        self._value = parse_target_universe(initial)

    def get(self) -> int:
        with self._lock:
            return self._value

    def set(self, value: Any) -> int:
        """Publish a new target; invalid input resolves to 0."""
        universe = parse_target_universe(value)
        with self._lock:
            self._value = universe
        return universe

    def set_text(self, text: str) -> int:
        """Publish a target typed as decimal text."""
        return self.set(text)

    @property
    def value(self) -> int:
        return self.get()


class BridgeStatus:
    """Read-only status strings for display."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._device_status = DEVICE_NOT_CONNECTED
        self._artnet_status = ARTNET_NOT_RECEIVED

    @property
    def device_status(self) -> str:
        with self._lock:
            return self._device_status

    @property
    def artnet_status(self) -> str:
        with self._lock:
            return self._artnet_status

    def record_probe(self, port: str, connected: bool) -> None:
        text = f"Device connected: {port}" if connected else DEVICE_NOT_CONNECTED
        with self._lock:
            self._device_status = text

    def record_artnet(self, source: str, universe: int, channels: int) -> None:
        text = f"Art-Net received: {source}, Universe: {universe}, Channels: {channels}"
        with self._lock:
            self._artnet_status = text

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return {
                "device_status": self._device_status,
                "artnet_status": self._artnet_status,
            }
