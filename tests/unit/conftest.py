from __future__ import annotations

import struct

import pytest


def make_artdmx(
    net: int = 0,
    sub_universe: int = 0,
    data: bytes = b"",
    length: int | None = None,
    opcode: int = 0x5000,
    sequence: int = 0,
) -> bytes:
    """Build an ArtDMX datagram byte for byte, without any length padding."""
    declared = len(data) if length is None else length
    return (
        b"Art-Net\x00"
        + struct.pack("<H", opcode)
        + struct.pack(">H", 14)
        + bytes([sequence, 0, sub_universe, net])
        + struct.pack(">H", declared)
        + data
    )


@pytest.fixture
def artdmx():
    return make_artdmx
