"""Diagnostics sinks notified by the event emitter."""

from __future__ import annotations

import logging
from typing import Protocol

default_logger = logging.getLogger(__name__)


class Diagnostics(Protocol):
    """Receives capacity warnings and listener faults from an EventEmitter.

    Calls are fire-and-forget. The emitter discards anything a sink raises.
    """

    def warning(self, message: str) -> None:  # pragma: no cover - Protocol
        ...

    def error(self, message: str, error: BaseException) -> None:  # pragma: no cover - Protocol
        ...


class LoggingDiagnostics:
    """Diagnostics sink writing through the standard logging module."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger if logger is not None else default_logger

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str, error: BaseException) -> None:
        # exc_info takes the exception instance so the listener's traceback is kept
        self.logger.error(message, exc_info=error)
