"""Shared test fixtures."""

from __future__ import annotations

import pytest

from jelly_snippets.app import JellySnippets
from jelly_snippets.config import AppConfig
from jelly_snippets.events import EventBus


@pytest.fixture
def event_bus() -> EventBus:
    """Fresh event bus for each test."""
    bus = EventBus()
    yield bus
    bus.clear()


@pytest.fixture
def config() -> AppConfig:
    """Default config for testing."""
    return AppConfig()


@pytest.fixture
def snippet_app(config: AppConfig, event_bus: EventBus) -> JellySnippets:
    """Application set up with the default snippets and a private event bus."""
    app = JellySnippets(config=config, bus=event_bus)
    app.setup()
    return app
