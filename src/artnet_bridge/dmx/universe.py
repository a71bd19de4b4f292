"""Canonical DMX universe sizing and Art-Net universe addressing helpers."""

from __future__ import annotations

DMX_START_CODE = 0x00
DMX_CHANNEL_COUNT = 512

UNIVERSE_MIN = 0
UNIVERSE_MAX = 0x7FFF
NET_MAX = 0x7F
SUB_UNIVERSE_MAX = 0xFF


def universe_id(net: int, sub_universe: int) -> int:
    """Return the 15-bit universe number for an Art-Net Net/SubUni pair."""
    return sub_universe + net * 256


def matches_universe(net: int, sub_universe: int, target: int) -> bool:
    """Return True when a packet's Net/SubUni addresses the target universe."""
    return universe_id(net, sub_universe) == target


def split_universe(universe: int) -> tuple[int, int]:
    """Split a 15-bit universe number into (net, sub_universe)."""
    universe &= UNIVERSE_MAX
    return universe >> 8, universe & SUB_UNIVERSE_MAX
