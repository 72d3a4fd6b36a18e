"""Shared route dependencies."""

from __future__ import annotations

from jelly_snippets.app import JellySnippets

_instance: JellySnippets | None = None


def set_snippet_app(instance: JellySnippets) -> None:
    """Serve requests from an already set-up application."""
    global _instance
    _instance = instance


def get_snippet_app() -> JellySnippets:
    """Return the running application, creating it from the config file if needed."""
    global _instance
    if _instance is None:
        _instance = JellySnippets()
        _instance.setup()
    return _instance
