from __future__ import annotations

import threading
from typing import Any, Callable


class Subscription:
    """Handle returned by a subscribe call; releasing it detaches the handler.

    Usable as a context manager so the release also happens on error
    paths.  Releasing more than once is a no-op.
    """

    def __init__(self, release: Callable[[], None]) -> None:
        self._release: Callable[[], None] | None = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def release(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


class EventBus:
    """Lightweight publish/subscribe bus for playback and load events.

    Thread-safe: the sounddevice callback thread publishes while the GUI
    thread subscribes and unsubscribes.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[..., Any]]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: str,
                  handler: Callable[..., Any]) -> Subscription:
        """Register a handler for an event type."""
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
        return Subscription(lambda: self.unsubscribe(event_type, handler))

    def unsubscribe(self, event_type: str, handler: Callable[..., Any]) -> None:
        """Remove a handler."""
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

    def emit(self, event_type: str, **data: Any) -> None:
        """Fire all handlers for an event type."""
        with self._lock:
            handlers = list(self._handlers.get(event_type, []))
        for handler in handlers:
            handler(**data)

    def handler_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._handlers.get(event_type, []))
