"""Tests for the application orchestrator."""

from __future__ import annotations

from jelly_snippets.app import JellySnippets
from jelly_snippets.config import AppConfig
from jelly_snippets.dispatcher import KeyEvent
from jelly_snippets.editor import TextDocument, press_key
from jelly_snippets.events import EventBus


class TestJellySnippets:
    def test_setup_loads_default_snippets(self, snippet_app: JellySnippets) -> None:
        assert list(snippet_app.table.snippets) == ["asd", "-", ":", "::"]
        assert snippet_app.table.generation == 1

    def test_explicit_trigger(self, snippet_app: JellySnippets) -> None:
        doc = TextDocument("a::")
        snippet = snippet_app.trigger(doc)

        # ":" is defined before "::", so it wins.
        assert snippet is not None
        assert snippet.lhs == ":"
        assert doc.text == "a:-"

    def test_explicit_trigger_without_match(self, snippet_app: JellySnippets) -> None:
        doc = TextDocument("plain")
        assert snippet_app.trigger(doc) is None
        assert doc.text == "plain"

    def test_handle_key(self, snippet_app: JellySnippets) -> None:
        doc = TextDocument("see asd")
        result = press_key(doc, snippet_app.dispatcher, KeyEvent("space"))
        assert result.triggered
        assert doc.text == "see snipped ya "

    def test_reload_events(self, config: AppConfig, event_bus: EventBus) -> None:
        config.snippets.source = "ok |+| fine -==- broken"
        events: list[str] = []
        event_bus.on("snippets.reloaded", lambda **kw: events.append("reloaded"))
        event_bus.on("snippets.parse_error", lambda **kw: events.append(kw["diagnostic"].record))

        app = JellySnippets(config=config, bus=event_bus)
        app.setup()

        assert events == ["broken", "reloaded"]

    def test_reload_twice_gives_same_table(self, snippet_app: JellySnippets) -> None:
        first = snippet_app.reload()
        second = snippet_app.reload()
        assert dict(first.snippets) == dict(second.snippets)

    def test_update_config_rebuilds_on_source_change(self, snippet_app: JellySnippets) -> None:
        config = AppConfig()
        config.snippets.source = "new |+| table"
        snippet_app.update_config(config)

        assert list(snippet_app.table.snippets) == ["new"]
        assert snippet_app.table.generation == 2

    def test_update_config_keeps_table_when_unchanged(self, snippet_app: JellySnippets) -> None:
        config = AppConfig()
        config.triggers.space = "disabled"
        snippet_app.update_config(config)

        assert snippet_app.table.generation == 1
        doc = TextDocument("asd")
        assert not press_key(doc, snippet_app.dispatcher, KeyEvent("space")).handled

    def test_trigger_emits_event(self, snippet_app: JellySnippets, event_bus: EventBus) -> None:
        keys: list[str] = []
        event_bus.on("snippet.triggered", lambda **kw: keys.append(kw["key"]))

        snippet_app.trigger(TextDocument("asd"))
        assert keys == ["command"]
