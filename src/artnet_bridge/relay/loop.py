"""
Relay Loop: Art-Net in, DMX USB Pro out.

Composes listener, decoder, universe filter, frame encoder and serial
transmitter into one sequential loop with cooperative cancellation.

States:
    LISTENING -> DECODING -> FILTERING -> ENCODING -> TRANSMITTING -> LISTENING
    LISTENING -> TERMINATED once the cancellation token is set

Undecodable and non-target packets drop straight back to LISTENING.
Nothing raised on the relay path escapes run(); a bind failure ends the
loop, every other failure is logged and counted.
"""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol

import structlog

from artnet_bridge.core.exceptions import DMXError, ListenerBindError
from artnet_bridge.core.status import BridgeStatus, TargetUniverse
from artnet_bridge.dmx.artnet import decode_artdmx
from artnet_bridge.dmx.universe import matches_universe
from artnet_bridge.dmx.usbpro import encode_usbpro_frame
from artnet_bridge.relay.listener import Datagram

logger = structlog.get_logger()

EventHook = Callable[..., None]


class RelayState(str, Enum):
    LISTENING = "listening"
    DECODING = "decoding"
    FILTERING = "filtering"
    ENCODING = "encoding"
    TRANSMITTING = "transmitting"
    TERMINATED = "terminated"


class DatagramSource(Protocol):
    def open(self) -> None: ...

    def receive(self, timeout: float) -> Optional[Datagram]: ...

    def close(self) -> None: ...


class FrameSink(Protocol):
    def send(self, frame: bytes) -> None: ...


@dataclass
class RelayStats:
    datagrams: int = 0
    timeouts: int = 0
    decode_failures: int = 0
    universe_mismatches: int = 0
    frames_sent: int = 0
    send_errors: int = 0


class RelayLoop:
    """Single-threaded Art-Net to serial relay."""

    def __init__(
        self,
        listener: DatagramSource,
        transmitter: FrameSink,
        target: TargetUniverse,
        cancel: threading.Event,
        poll_interval_s: float = 0.1,
        status: Optional[BridgeStatus] = None,
        on_event: Optional[EventHook] = None,
    ):
        self.listener = listener
        self.transmitter = transmitter
        self.target = target
        self.cancel = cancel
        self.poll_interval_s = poll_interval_s
        self.status = status
        self.on_event = on_event

        self.state = RelayState.LISTENING
        self.stats = RelayStats()

    def run(self) -> None:
        """Receive and forward until cancelled or the socket cannot be bound."""
        try:
            self.listener.open()
        except ListenerBindError as e:
            logger.error("Art-Net reception error", error=e.message)
            self._emit("listener_failed", error=e.message)
            self.state = RelayState.TERMINATED
            return

        try:
            while not self.cancel.is_set():
                self.state = RelayState.LISTENING
                try:
                    datagram = self.listener.receive(self.poll_interval_s)
                except OSError as e:
                    logger.warning("Art-Net receive error", error=str(e))
                    datagram = None
                if self.cancel.is_set():
                    break
                if datagram is None:
                    self.stats.timeouts += 1
                    continue
                self.handle_datagram(datagram)
            logger.info("Stopping Art-Net reception")
        finally:
            self.listener.close()
            self.state = RelayState.TERMINATED

    def handle_datagram(self, datagram: Datagram) -> bool:
        """Run one datagram through decode/filter/encode/transmit.

        Returns True when a frame was written to the device.
        """
        self.stats.datagrams += 1

        self.state = RelayState.DECODING
        payload = decode_artdmx(datagram.data)
        if payload is None:
            self.stats.decode_failures += 1
            logger.debug("Dropped non-ArtDMX datagram", source=datagram.source, size=len(datagram.data))
            self._emit("decode_failed", source=datagram.source, size=len(datagram.data))
            return False

        self.state = RelayState.FILTERING
        target = self.target.get()
        if not matches_universe(payload.net, payload.sub_universe, target):
            self.stats.universe_mismatches += 1
            self._emit("universe_mismatch", universe=payload.universe, target=target)
            return False

        channels = payload.channel_data
        logger.debug(
            "Art-Net received",
            source=datagram.source,
            universe=payload.universe,
            channels=len(channels),
        )
        if self.status is not None:
            self.status.record_artnet(datagram.source, payload.universe, len(channels))

        self.state = RelayState.ENCODING
        frame = encode_usbpro_frame(channels)

        self.state = RelayState.TRANSMITTING
        try:
            self.transmitter.send(frame)
        except DMXError as e:
            self.stats.send_errors += 1
            logger.error("DMX USB Pro transmission error", error=e.message)
            self._emit("send_failed", error=e.message)
            return False

        self.stats.frames_sent += 1
        self._emit("frame_sent", universe=payload.universe, size=len(frame))
        return True

    def get_stats(self) -> dict[str, Any]:
        """Get relay statistics."""
        stats: dict[str, Any] = asdict(self.stats)
        stats["state"] = self.state.value
        stats["target_universe"] = self.target.get()
        return stats

    def _emit(self, event: str, **fields: Any) -> None:
        if self.on_event is not None:
            self.on_event(event, **fields)


def start_relay_thread(loop: RelayLoop) -> threading.Thread:
    """Run the relay loop on a named daemon thread."""
    thread = threading.Thread(
        target=loop.run,
        name="ArtNet-Relay",
        daemon=True,
    )
    thread.start()
    return thread
