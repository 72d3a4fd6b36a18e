"""Tests for the event bus."""

from __future__ import annotations

from jelly_snippets.events import EventBus


class TestEventBus:
    def test_emit_calls_handler(self) -> None:
        bus = EventBus()
        received: list[dict] = []

        def handler(**kwargs: object) -> None:
            received.append(dict(kwargs))

        bus.on("snippet.triggered", handler)
        bus.emit("snippet.triggered", lhs="::", key="tab")

        assert received == [{"lhs": "::", "key": "tab"}]

    def test_handlers_run_in_order(self) -> None:
        bus = EventBus()
        calls: list[str] = []

        bus.on("test", lambda **kw: calls.append("a"))
        bus.on("test", lambda **kw: calls.append("b"))
        bus.emit("test")

        assert calls == ["a", "b"]

    def test_off_removes_handler(self) -> None:
        bus = EventBus()
        calls: list[str] = []

        def handler(**kw: object) -> None:
            calls.append("called")

        bus.on("test", handler)
        bus.off("test", handler)
        bus.off("test", handler)  # second removal is a no-op
        bus.emit("test")

        assert calls == []

    def test_no_handlers_no_error(self) -> None:
        EventBus().emit("nonexistent.event")

    def test_handler_error_doesnt_crash(self) -> None:
        bus = EventBus()
        calls: list[str] = []

        def bad_handler(**kw: object) -> None:
            raise ValueError("boom")

        bus.on("test", bad_handler)
        bus.on("test", lambda **kw: calls.append("ok"))
        bus.emit("test")

        assert calls == ["ok"]

    def test_clear(self) -> None:
        bus = EventBus()
        calls: list[str] = []

        bus.on("test", lambda **kw: calls.append("x"))
        bus.clear()
        bus.emit("test")

        assert calls == []
