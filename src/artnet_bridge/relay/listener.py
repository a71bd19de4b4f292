"""
Art-Net Listener: bounded-wait UDP receive for the relay loop.

Owns the UDP socket. Each receive waits at most one poll interval so the
caller can check for cancellation between datagrams.
"""

from __future__ import annotations

import select
import socket
from typing import NamedTuple, Optional

import structlog

from artnet_bridge.core.config import ListenerConfig
from artnet_bridge.core.exceptions import ListenerBindError

logger = structlog.get_logger()


class Datagram(NamedTuple):
    data: bytes
    address: tuple[str, int]

    @property
    def source(self) -> str:
        host, port = self.address[:2]
        return f"{host}:{port}"


class ArtNetListener:
    """UDP endpoint for inbound Art-Net traffic."""

    def __init__(self, config: ListenerConfig):
        self.config = config
        self._socket: Optional[socket.socket] = None

    @property
    def is_open(self) -> bool:
        return self._socket is not None

    @property
    def address(self) -> tuple[str, int]:
        """Bound (host, port); useful when configured with port 0."""
        if self._socket is None:
            raise RuntimeError("ArtNetListener is not open")
        host, port = self._socket.getsockname()[:2]
        return host, port

    def open(self) -> None:
        """Bind the UDP socket."""
        if self._socket is not None:
            return

        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((self.config.host, self.config.port))
        except OSError as e:
            sock.close()
            raise ListenerBindError(self.config.host, self.config.port, str(e)) from e

        sock.setblocking(False)
        self._socket = sock
        logger.info("Art-Net listener bound", host=self.config.host, port=self.config.port)

    def receive(self, timeout: float) -> Optional[Datagram]:
        """
        Wait up to `timeout` seconds for one datagram.

        Returns None when nothing arrived in time.
        """
        if self._socket is None:
            raise RuntimeError("ArtNetListener is not open")

        readable, _, _ = select.select([self._socket], [], [], timeout)
        if not readable:
            return None

        try:
            data, address = self._socket.recvfrom(self.config.buffer_size)
        except (BlockingIOError, InterruptedError):
            return None
        return Datagram(data, address)

    def close(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None
            logger.info("UDP port closed")

    def __enter__(self) -> "ArtNetListener":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
