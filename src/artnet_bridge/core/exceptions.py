"""
Custom Exceptions for the Art-Net bridge.

Provides a hierarchy of exceptions for the listener, serial output and
configuration layers, so the relay loop can isolate failures per component.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base exception for all Art-Net bridge errors."""

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable


# =============================================================================
# DMX Errors
# =============================================================================


class DMXError(BridgeError):
    """Base exception for DMX output errors."""
    pass


class DMXConnectionError(DMXError):
    """Failed to open the DMX interface."""

    def __init__(self, interface: str, reason: str):
        super().__init__(
            f"Failed to connect to DMX interface '{interface}': {reason}",
            recoverable=True,
        )
        self.interface = interface
        self.reason = reason


class DMXTransmissionError(DMXError):
    """Error while writing a frame to the DMX interface."""

    def __init__(self, reason: str):
        super().__init__(f"DMX transmission error: {reason}", recoverable=True)
        self.reason = reason


# =============================================================================
# Art-Net Errors
# =============================================================================


class ArtNetError(BridgeError):
    """Base exception for Art-Net input errors."""
    pass


class ListenerBindError(ArtNetError):
    """The Art-Net UDP socket could not be bound."""

    def __init__(self, host: str, port: int, reason: str):
        super().__init__(
            f"Failed to bind Art-Net listener on {host}:{port}: {reason}",
            recoverable=False,
        )
        self.host = host
        self.port = port
        self.reason = reason


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(BridgeError):
    """Invalid or unreadable configuration."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Configuration error in '{source}': {reason}", recoverable=False)
        self.source = source
