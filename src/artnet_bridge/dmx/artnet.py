"""Art-Net packet helpers, decoder and test sender."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass

from artnet_bridge.dmx.universe import (
    DMX_CHANNEL_COUNT,
    NET_MAX,
    universe_id,
    split_universe,
)

ARTNET_PORT = 6454
ARTNET_HEADER = b"Art-Net\x00"
ARTNET_OPCODE_DMX = 0x5000
ARTNET_PROTOCOL_VERSION = 14
ARTDMX_HEADER_SIZE = 18


@dataclass(frozen=True)
class ArtDmxPayload:
    """One decoded ArtDMX packet."""

    net: int
    sub_universe: int
    sequence: int
    physical: int
    length: int
    data: bytes

    @property
    def universe(self) -> int:
        return universe_id(self.net, self.sub_universe)

    @property
    def channel_data(self) -> bytes:
        """The declared channel slots, without the DMX start code."""
        return self.data[: self.length]


def decode_artdmx(packet: bytes) -> ArtDmxPayload | None:
    """
    Decode an ArtDMX datagram.

    Returns None for anything that is not a well-formed ArtDMX packet:
    wrong ID, other OpCodes, a short header, a Net above 127 or a
    declared length above 512 slots. Slots declared but missing from
    the datagram read as zero.
    """
    if len(packet) < ARTDMX_HEADER_SIZE or packet[:8] != ARTNET_HEADER:
        return None

    (opcode,) = struct.unpack_from("<H", packet, 8)
    if opcode != ARTNET_OPCODE_DMX:
        return None

    sequence = packet[12]
    physical = packet[13]
    sub_universe = packet[14]
    net = packet[15]
    if net > NET_MAX:
        return None
    # Length is big-endian, unlike the OpCode.
    (length,) = struct.unpack_from(">H", packet, 16)
    if length > DMX_CHANNEL_COUNT:
        return None

    data = bytes(packet[ARTDMX_HEADER_SIZE : ARTDMX_HEADER_SIZE + DMX_CHANNEL_COUNT])
    if len(data) < length:
        data = data.ljust(length, b"\x00")

    return ArtDmxPayload(
        net=net,
        sub_universe=sub_universe,
        sequence=sequence,
        physical=physical,
        length=length,
        data=data,
    )


def build_artdmx_packet(
    universe: int,
    dmx_data: bytes,
    sequence: int = 0,
    physical: int = 0,
) -> bytes:
    """
    Build an ArtDMX packet.

    Expects up to 512 channels of slot data without DMX start code. The
    slot count is padded to an even length as Art-Net requires.
    """
    if len(dmx_data) > DMX_CHANNEL_COUNT:
        raise ValueError(f"ArtDMX payload too large: {len(dmx_data)} bytes")

    payload = bytes(dmx_data)
    if len(payload) % 2:
        payload += b"\x00"
    net, sub_universe = split_universe(universe)

    packet = bytearray()
    packet.extend(ARTNET_HEADER)
    packet.extend(struct.pack("<H", ARTNET_OPCODE_DMX))
    packet.extend(struct.pack(">H", ARTNET_PROTOCOL_VERSION))
    packet.extend(bytes([sequence & 0xFF, physical & 0xFF]))
    packet.extend(bytes([sub_universe, net]))
    packet.extend(struct.pack(">H", len(payload)))
    packet.extend(payload)
    return bytes(packet)


def send_artdmx(
    host: str,
    universe: int,
    dmx_data: bytes,
    port: int = ARTNET_PORT,
    sequence: int = 0,
) -> None:
    """Send one ArtDMX packet to host:port over a throwaway UDP socket."""
    packet = build_artdmx_packet(universe=universe, dmx_data=dmx_data, sequence=sequence)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(packet, (host, port))
