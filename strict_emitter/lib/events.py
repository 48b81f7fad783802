"""Strictly typed, in-process event emitter."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, TypeVar

from strict_emitter.lib.diagnostics import Diagnostics, LoggingDiagnostics
from strict_emitter.lib.settings import EmitterSettings

EventT = TypeVar("EventT", bound=Hashable)

logger = logging.getLogger(__name__)

DEFAULT_MAX_LISTENERS = 10


class MaxListenersExceededError(ValueError):
    """Raised in strict mode when a registration would exceed the maximum."""


@dataclass(frozen=True, eq=False)
class EventListener:
    """A single registration: the callable plus whether it survives dispatch.

    Records compare by identity, so registering the same callable twice
    yields two independent entries.
    """

    listener: Callable[..., Any]
    persistent: bool


class EventEmitter(Generic[EventT]):
    """Registry of listeners per event with synchronous, fault-isolated dispatch.

    Listeners are called in registration order (``prepend`` places them at
    the head). A listener that raises is reported to the diagnostics sink and
    never stops the remaining listeners or reaches the caller of ``emit``.

    The listener count threshold is advisory: reaching it logs a warning.
    Pass ``strict=True`` to refuse registrations beyond it instead.
    """

    def __init__(
        self,
        max_listeners: int | None = None,
        diagnostics: Diagnostics | None = None,
        strict: bool = False,
    ) -> None:
        if max_listeners is None:
            max_listeners = DEFAULT_MAX_LISTENERS
        if int(max_listeners) < 1:
            raise ValueError(f"max_listeners must be a positive integer, got {max_listeners}")

        self._max_listeners = int(max_listeners)
        self._strict = strict
        self._diagnostics = diagnostics if diagnostics is not None else LoggingDiagnostics()
        self._handlers: dict[EventT, list[EventListener]] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_settings(
        cls, settings: EmitterSettings, diagnostics: Diagnostics | None = None
    ) -> EventEmitter:
        """Create an emitter configured from an EmitterSettings instance.

        Raises ValueError if the settings file holds a malformed value.
        """
        return cls(
            max_listeners=settings.max_listeners,
            diagnostics=diagnostics,
            strict=settings.strict_max_listeners,
        )

    @property
    def max_listeners(self) -> int:
        return self._max_listeners

    @property
    def strict(self) -> bool:
        return self._strict

    def on(self, event: EventT, listener: Callable[..., Any], prepend: bool = False) -> EventEmitter:
        """Register a listener called on every emit of ``event``. Returns self for chaining."""
        self._add(event, EventListener(listener, persistent=True), prepend)
        return self

    def once(self, event: EventT, listener: Callable[..., Any], prepend: bool = False) -> EventEmitter:
        """Register a listener removed after the next emit of ``event``. Returns self.

        The record is removed once the whole dispatch pass finishes, so if the
        listener emits ``event`` again itself, the nested emit calls it again.
        Call ``off(event, listener)`` first when re-emitting from inside it.
        """
        self._add(event, EventListener(listener, persistent=False), prepend)
        return self

    def off(
        self, event: EventT | None = None, listener: Callable[..., Any] | None = None
    ) -> EventEmitter:
        """Remove listeners.

        - no arguments: remove everything
        - ``event`` only: remove every listener of that event
        - ``event`` and ``listener``: remove the earliest matching registration
        - ``listener`` only: remove the earliest matching registration per event

        Missing events or listeners are ignored. Returns self for chaining.
        """
        with self._lock:
            if event is None:
                targets = list(self._handlers)
            elif event in self._handlers:
                targets = [event]
            else:
                return self

            for name in targets:
                if listener is None:
                    del self._handlers[name]
                else:
                    self._remove_first(name, listener)
        return self

    def emit(self, event: EventT, *args: Any, **kwargs: Any) -> bool:
        """Call every listener of ``event`` in order with the given arguments.

        Returns True if the event had listeners when dispatch started,
        False otherwise.
        """
        with self._lock:
            snapshot = tuple(self._handlers.get(event, ()))
        if not snapshot:
            return False

        for handler in snapshot:
            error = self._call(handler, args, kwargs)
            if error is not None:
                self._report_error(
                    f"Listener {handler.listener!r} for event {event!r} raised: {error!r}", error
                )

        with self._lock:
            for handler in snapshot:
                if not handler.persistent:
                    self._discard(event, handler)
        return True

    def listeners(self, event: EventT) -> list[Callable[..., Any]]:
        """Return a copy of the listeners registered for ``event``."""
        with self._lock:
            return [handler.listener for handler in self._handlers.get(event, ())]

    def events(self) -> set[EventT]:
        """Return the events that currently have at least one listener."""
        with self._lock:
            return set(self._handlers)

    def _add(self, event: EventT, handler: EventListener, prepend: bool) -> None:
        with self._lock:
            handlers = self._handlers.get(event, [])
            if self._strict and len(handlers) >= self._max_listeners:
                raise MaxListenersExceededError(
                    f"exceeded maximum ({self._max_listeners}) number of listeners for {event!r}"
                )

            if prepend:
                handlers.insert(0, handler)
            else:
                handlers.append(handler)
            self._handlers[event] = handlers
            count = len(handlers)

        if count >= self._max_listeners:
            self._report_warning(
                f"{count} listeners registered for event {event!r}, "
                f"reaching the configured maximum ({self._max_listeners}). "
                "This may indicate a listener leak."
            )

    def _remove_first(self, event: EventT, listener: Callable[..., Any]) -> None:
        handlers = self._handlers[event]
        for index, handler in enumerate(handlers):
            if handler.listener == listener:
                del handlers[index]
                break
        if not handlers:
            del self._handlers[event]

    def _discard(self, event: EventT, handler: EventListener) -> None:
        # The record may already be gone if a listener called off() during dispatch
        handlers = self._handlers.get(event)
        if handlers is None:
            return
        for index, candidate in enumerate(handlers):
            if candidate is handler:
                del handlers[index]
                break
        if not handlers:
            del self._handlers[event]

    @staticmethod
    def _call(handler: EventListener, args: tuple, kwargs: dict) -> Exception | None:
        try:
            handler.listener(*args, **kwargs)
        except Exception as e:
            return e
        return None

    # A failing diagnostics sink must never break registration or dispatch
    def _report_warning(self, message: str) -> None:
        try:
            self._diagnostics.warning(message)
        except Exception as e:
            logger.debug(f"Diagnostics sink failed to record warning: {e}")

    def _report_error(self, message: str, error: Exception) -> None:
        try:
            self._diagnostics.error(message, error)
        except Exception as e:
            logger.debug(f"Diagnostics sink failed to record error: {e}")
