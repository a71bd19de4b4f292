"""
Serial Transmitter: per-frame writes to an Enttec DMX USB Pro.

The device is opened for every frame and closed again on every exit
path, so a wedged or unplugged widget never holds up the next attempt.
"""

from __future__ import annotations

import serial
import structlog

from artnet_bridge.core.config import SerialConfig
from artnet_bridge.core.exceptions import DMXConnectionError, DMXTransmissionError

logger = structlog.get_logger()

PER_FRAME_STRATEGY = "per_frame"


def _open_port(port: str, baudrate: int) -> serial.Serial:
    try:
        return serial.Serial(
            port=port,
            baudrate=baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
        )
    except (serial.SerialException, OSError, ValueError) as e:
        raise DMXConnectionError(port, str(e)) from e


class SerialTransmitter:
    """
    Writes encoded frames to a serial DMX interface.

    No retries and no buffering: each call to send() is an independent,
    best-effort attempt.
    """

    strategy = PER_FRAME_STRATEGY

    def __init__(self, config: SerialConfig):
        self.config = config
        self.port = config.port
        self.baudrate = config.baudrate

    def send(self, frame: bytes) -> None:
        """Open the device, write the whole frame, close the device."""
        device = _open_port(self.port, self.baudrate)
        # close() failures count as transmission errors too.
        try:
            with device:
                written = device.write(frame)
        except (serial.SerialException, OSError) as e:
            raise DMXTransmissionError(str(e)) from e

        if written is not None and written != len(frame):
            raise DMXTransmissionError(f"short write: {written} of {len(frame)} bytes")

    def probe(self) -> bool:
        """Return True when the device can be opened."""
        return probe_device(self.port, self.baudrate)


def probe_device(port: str, baudrate: int) -> bool:
    """One-shot check that the serial device is present and can be opened."""
    try:
        device = _open_port(port, baudrate)
    except DMXConnectionError as e:
        logger.info("DMX device not connected", port=port, reason=e.reason)
        return False

    try:
        device.close()
    except (serial.SerialException, OSError) as e:
        logger.info("DMX device not connected", port=port, reason=str(e))
        return False

    logger.info("DMX device connected", port=port)
    return True
