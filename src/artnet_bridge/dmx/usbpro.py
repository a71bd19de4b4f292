"""
Enttec DMX USB Pro application-layer framing.

Every message to the widget is wrapped as:
    0x7E, label, length LSB, length MSB, payload..., 0xE7
The "Send DMX Packet" request (label 6) carries the DMX start code
followed by up to 512 channel slots.
"""

from __future__ import annotations

from artnet_bridge.dmx.universe import DMX_CHANNEL_COUNT, DMX_START_CODE

USBPRO_START_DELIMITER = 0x7E
USBPRO_END_DELIMITER = 0xE7
USBPRO_LABEL_SEND_DMX = 0x06
USBPRO_FRAME_OVERHEAD = 6  # delimiters, label, length word, start code


def encode_usbpro_frame(channel_data: bytes) -> bytes:
    """Wrap DMX channel slots in a USB Pro "Send DMX Packet" frame."""
    # Slots past 512 are dropped without error; a packet with more channels
    # would need a different framing anyway.
    slots = bytes(channel_data[:DMX_CHANNEL_COUNT])
    length = len(slots) + 1  # +1 for the start code

    frame = bytearray()
    frame.append(USBPRO_START_DELIMITER)
    frame.append(USBPRO_LABEL_SEND_DMX)
    frame.append(length & 0xFF)
    frame.append((length >> 8) & 0xFF)
    frame.append(DMX_START_CODE)
    frame.extend(slots)
    frame.append(USBPRO_END_DELIMITER)
    return bytes(frame)
