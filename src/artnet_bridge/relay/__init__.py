"""
Relay components for the Art-Net bridge.

The listener feeds datagrams to the relay loop, which decodes, filters,
encodes and hands frames to the serial transmitter.
"""

from artnet_bridge.relay.listener import ArtNetListener, Datagram
from artnet_bridge.relay.loop import RelayLoop, RelayState, RelayStats, start_relay_thread
from artnet_bridge.relay.shutdown import ShutdownWatcher
from artnet_bridge.relay.transmitter import SerialTransmitter, probe_device

__all__ = [
    "ArtNetListener",
    "Datagram",
    "RelayLoop",
    "RelayState",
    "RelayStats",
    "start_relay_thread",
    "ShutdownWatcher",
    "SerialTransmitter",
    "probe_device",
]
