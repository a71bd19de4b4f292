"""
Shutdown handling.

Interrupt, terminate and a front-end close request all set the same
one-shot cancellation token. The relay loop notices it after its
current receive returns.
"""

from __future__ import annotations

import signal
import threading
from types import FrameType
from typing import Callable, Optional

import structlog

logger = structlog.get_logger()

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownWatcher:
    """Owns the cancellation token and the signal handlers that set it."""

    def __init__(self, cancel: Optional[threading.Event] = None):
        self.cancel = cancel if cancel is not None else threading.Event()
        self._previous: dict[int, Callable | int | None] = {}
        self._reason: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def install(self) -> None:
        """Route SIGINT/SIGTERM to request_shutdown(). Main thread only."""
        for signum in SHUTDOWN_SIGNALS:
            self._previous[signum] = signal.getsignal(signum)
            signal.signal(signum, self._handle_signal)

    def uninstall(self) -> None:
        for signum, handler in self._previous.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous.clear()

    def request_shutdown(self, reason: str = "ui_close") -> None:
        """Set the token. Later requests are ignored."""
        with self._lock:
            if self.cancel.is_set():
                return
            self._reason = reason
            logger.info("Shutting down application...", reason=reason)
            self.cancel.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self.cancel.wait(timeout)

    def _handle_signal(self, signum: int, frame: Optional[FrameType]) -> None:
        self.request_shutdown(signal.Signals(signum).name)

    def __enter__(self) -> "ShutdownWatcher":
        self.install()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.uninstall()
