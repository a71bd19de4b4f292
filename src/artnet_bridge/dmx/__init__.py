"""DMX transport helpers."""

from artnet_bridge.dmx.artnet import (
    ArtDmxPayload,
    build_artdmx_packet,
    decode_artdmx,
    send_artdmx,
)
from artnet_bridge.dmx.universe import (
    DMX_CHANNEL_COUNT,
    DMX_START_CODE,
    UNIVERSE_MAX,
    UNIVERSE_MIN,
    matches_universe,
    universe_id,
)
from artnet_bridge.dmx.usbpro import encode_usbpro_frame

__all__ = [
    "ArtDmxPayload",
    "build_artdmx_packet",
    "decode_artdmx",
    "send_artdmx",
    "DMX_CHANNEL_COUNT",
    "DMX_START_CODE",
    "UNIVERSE_MIN",
    "UNIVERSE_MAX",
    "matches_universe",
    "universe_id",
    "encode_usbpro_frame",
]
