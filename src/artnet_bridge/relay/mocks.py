"""
Mock Output for Testing.

Stands in for the serial transmitter so the relay can run without a
DMX USB Pro attached.
"""

from __future__ import annotations

import threading

import structlog

from artnet_bridge.core.exceptions import DMXConnectionError

logger = structlog.get_logger()


class MockSerialTransmitter:
    """Records frames instead of writing them to a device."""

    strategy = "per_frame"

    def __init__(self, port: str = "mock", fail: bool = False) -> None:
        self.port = port
        self.fail = fail
        self.frames: list[bytes] = []
        self._lock = threading.Lock()

    def send(self, frame: bytes) -> None:
        if self.fail:
            raise DMXConnectionError(self.port, "mock device unavailable")
        with self._lock:
            self.frames.append(bytes(frame))
        logger.debug("Mock frame recorded", size=len(frame))

    def probe(self) -> bool:
        return not self.fail

    @property
    def call_count(self) -> int:
        with self._lock:
            return len(self.frames)
