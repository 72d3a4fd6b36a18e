"""Internal event bus for inter-component communication."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Handler = Callable[..., None]


class EventBus:
    """Synchronous publish/subscribe event bus.

    Events are identified by dot-separated string names, e.g.:
        snippets.reloaded
        snippets.parse_error
        snippet.triggered

    Handlers run in subscription order inside ``emit``; a failing handler is
    logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> None:
        """Subscribe a handler to an event."""
        self._handlers[event].append(handler)
        logger.debug("Registered handler %s for event '%s'", _name(handler), event)

    def off(self, event: str, handler: Handler) -> None:
        """Unsubscribe a handler from an event."""
        try:
            self._handlers[event].remove(handler)
        except ValueError:
            pass

    def emit(self, event: str, **kwargs: Any) -> None:
        """Emit an event, calling all registered handlers."""
        handlers = self._handlers.get(event, [])
        if not handlers:
            return

        logger.debug("Emitting event '%s' to %d handler(s)", event, len(handlers))
        for handler in list(handlers):
            try:
                handler(**kwargs)
            except Exception:
                logger.exception("Error in handler %s for event '%s'", _name(handler), event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()


def _name(handler: Handler) -> str:
    return getattr(handler, "__name__", repr(handler))


# Global event bus singleton
event_bus = EventBus()
