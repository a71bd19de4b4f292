from __future__ import annotations

import threading

import pytest
import serial

from artnet_bridge.core.config import SerialConfig
from artnet_bridge.core.exceptions import DMXConnectionError, DMXTransmissionError
from artnet_bridge.core.status import TargetUniverse
from artnet_bridge.dmx.usbpro import encode_usbpro_frame
from artnet_bridge.relay import transmitter as transmitter_module
from artnet_bridge.relay.listener import Datagram
from artnet_bridge.relay.loop import RelayLoop
from artnet_bridge.relay.transmitter import SerialTransmitter, probe_device

MISSING_DEVICE = "/dev/artnet-bridge-missing-device"


class FakeSerial:
    instances: list["FakeSerial"] = []
    fail_next_write = False
    fail_close = False

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.written = b""
        self.closed = False
        FakeSerial.instances.append(self)

    def write(self, data: bytes) -> int:
        if FakeSerial.fail_next_write:
            raise serial.SerialTimeoutException("write timeout")
        self.written += data
        return len(data)

    def close(self) -> None:
        self.closed = True
        if FakeSerial.fail_close:
            raise serial.SerialException("device reports readiness to read but returned no data")

    def __enter__(self) -> "FakeSerial":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@pytest.fixture
def fake_serial(monkeypatch: pytest.MonkeyPatch):
    FakeSerial.instances = []
    FakeSerial.fail_next_write = False
    FakeSerial.fail_close = False
    monkeypatch.setattr(transmitter_module.serial, "Serial", FakeSerial)
    return FakeSerial


def test_send_opens_writes_and_closes(fake_serial) -> None:
    frame = encode_usbpro_frame(b"\x01\x02")
    transmitter = SerialTransmitter(SerialConfig(port="/dev/ttyUSB9"))

    transmitter.send(frame)

    (device,) = fake_serial.instances
    assert device.kwargs["port"] == "/dev/ttyUSB9"
    assert device.kwargs["baudrate"] == 57600
    assert device.kwargs["bytesize"] == serial.EIGHTBITS
    assert device.kwargs["parity"] == serial.PARITY_NONE
    assert device.written == frame
    assert device.closed is True


def test_each_send_uses_a_fresh_device_handle(fake_serial) -> None:
    transmitter = SerialTransmitter(SerialConfig())

    transmitter.send(b"\x7e\x06\x01\x00\x00\xe7")
    transmitter.send(b"\x7e\x06\x01\x00\x00\xe7")

    assert len(fake_serial.instances) == 2
    assert all(device.closed for device in fake_serial.instances)


def test_write_failure_still_closes_device(fake_serial) -> None:
    fake_serial.fail_next_write = True
    transmitter = SerialTransmitter(SerialConfig())

    with pytest.raises(DMXTransmissionError):
        transmitter.send(b"\x7e\x06\x01\x00\x00\xe7")

    assert fake_serial.instances[0].closed is True


def test_missing_device_raises_connection_error() -> None:
    transmitter = SerialTransmitter(SerialConfig(port=MISSING_DEVICE))

    with pytest.raises(DMXConnectionError) as excinfo:
        transmitter.send(encode_usbpro_frame(b""))

    assert excinfo.value.interface == MISSING_DEVICE
    assert excinfo.value.recoverable is True


def test_probe_reports_missing_device() -> None:
    assert probe_device(MISSING_DEVICE, 57600) is False


def test_probe_reports_present_device(fake_serial) -> None:
    assert SerialTransmitter(SerialConfig(port="/dev/ttyUSB0")).probe() is True
    assert fake_serial.instances[0].closed is True


def test_close_failure_raises_transmission_error(fake_serial) -> None:
    fake_serial.fail_close = True
    transmitter = SerialTransmitter(SerialConfig())

    with pytest.raises(DMXTransmissionError):
        transmitter.send(encode_usbpro_frame(b"\x01"))

    assert fake_serial.instances[0].written == encode_usbpro_frame(b"\x01")


def test_close_failure_is_counted_and_loop_survives(fake_serial, artdmx) -> None:
    fake_serial.fail_close = True
    loop = RelayLoop(
        listener=None,
        transmitter=SerialTransmitter(SerialConfig()),
        target=TargetUniverse(0),
        cancel=threading.Event(),
    )

    sent = loop.handle_datagram(Datagram(artdmx(data=b"\x01\x02"), ("10.0.0.5", 6454)))

    assert sent is False
    assert loop.stats.send_errors == 1

    fake_serial.fail_close = False
    assert loop.handle_datagram(Datagram(artdmx(data=b"\x01\x02"), ("10.0.0.5", 6454))) is True
    assert loop.stats.frames_sent == 1


def test_probe_treats_close_failure_as_not_connected(fake_serial) -> None:
    fake_serial.fail_close = True
    assert probe_device("/dev/ttyUSB0", 57600) is False
