from strict_emitter.lib.diagnostics import Diagnostics, LoggingDiagnostics
from strict_emitter.lib.events import EventEmitter, EventListener, MaxListenersExceededError
from strict_emitter.lib.logger import configure_logger
from strict_emitter.lib.settings import EmitterSettings
from strict_emitter.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    Diagnostics.__name__,
    EmitterSettings.__name__,
    EventEmitter.__name__,
    EventListener.__name__,
    LoggingDiagnostics.__name__,
    MaxListenersExceededError.__name__,
    configure_logger.__name__,
]
