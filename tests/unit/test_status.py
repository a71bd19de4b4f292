from __future__ import annotations

import threading

from artnet_bridge.core.status import (
    ARTNET_NOT_RECEIVED,
    DEVICE_NOT_CONNECTED,
    BridgeStatus,
    TargetUniverse,
)


def test_target_universe_set_text_coerces_invalid_input() -> None:
    target = TargetUniverse("5")
    assert target.get() == 5

    assert target.set_text("abc") == 0
    assert target.get() == 0

    assert target.set_text("258") == 258
    assert target.value == 258


def test_target_universe_concurrent_writers_publish_valid_values() -> None:
    target = TargetUniverse()
    seen: set[int] = set()
    stop = threading.Event()

    def reader() -> None:
        while not stop.is_set():
            seen.add(target.get())

    def writer(value: str) -> None:
        for _ in range(500):
            target.set_text(value)

    threads = [threading.Thread(target=writer, args=(v,)) for v in ("1", "32767", "oops")]
    read_thread = threading.Thread(target=reader)
    read_thread.start()
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    stop.set()
    read_thread.join()

    assert seen <= {0, 1, 32767}


def test_bridge_status_defaults() -> None:
    status = BridgeStatus()
    assert status.device_status == DEVICE_NOT_CONNECTED
    assert status.artnet_status == ARTNET_NOT_RECEIVED


def test_bridge_status_records_probe_and_artnet() -> None:
    status = BridgeStatus()

    status.record_probe("/dev/ttyUSB0", True)
    status.record_artnet("10.0.0.2:6454", 3, 512)

    assert status.device_status == "Device connected: /dev/ttyUSB0"
    assert status.artnet_status == "Art-Net received: 10.0.0.2:6454, Universe: 3, Channels: 512"

    status.record_probe("/dev/ttyUSB0", False)
    assert status.snapshot()["device_status"] == DEVICE_NOT_CONNECTED


def test_target_universe_survives_overlong_text() -> None:
    target = TargetUniverse("12")

    assert target.set_text("9" * 5000) == 0
    assert target.get() == 0
