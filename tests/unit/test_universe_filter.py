from __future__ import annotations

import pytest

from artnet_bridge.dmx.universe import matches_universe, split_universe, universe_id


@pytest.mark.parametrize(
    ("net", "sub_universe", "target", "expected"),
    [
        (1, 2, 258, True),
        (1, 2, 257, False),
        (0, 0, 0, True),
        (0, 5, 5, True),
        (0, 5, 0, False),
        (127, 255, 32767, True),
    ],
)
def test_matches_universe(net: int, sub_universe: int, target: int, expected: bool) -> None:
    assert matches_universe(net, sub_universe, target) is expected


def test_universe_id_combines_net_and_sub_universe() -> None:
    assert universe_id(0, 0) == 0
    assert universe_id(1, 0) == 256
    assert universe_id(127, 255) == 32767


def test_split_universe_inverts_universe_id() -> None:
    assert split_universe(258) == (1, 2)
    assert universe_id(*split_universe(12345)) == 12345
