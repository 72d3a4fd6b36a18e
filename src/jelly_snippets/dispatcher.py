"""Automatic snippet triggering on Space, Tab, and Enter.

Each key has its own channel. Tab and Enter arrive after the host has already
indented or broken the line, so their channels compensate for that default
action around the expansion.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from jelly_snippets.constants import (
    TRIGGER_DISABLED,
    TRIGGER_ENABLED,
    TRIGGER_ENABLED_WITH_WHITESPACE,
)
from jelly_snippets.snippets.engine import try_trigger
from jelly_snippets.snippets.model import Snippet, SnippetType, classify

if TYPE_CHECKING:
    from jelly_snippets.config import TriggerConfig
    from jelly_snippets.editor import EditorOps
    from jelly_snippets.events import EventBus
    from jelly_snippets.snippets.registry import SnippetRegistry, SnippetTable

logger = logging.getLogger(__name__)

KEY_SPACE = "space"
KEY_TAB = "tab"
KEY_ENTER = "enter"


class TriggerMode(Enum):
    """Configuration state of one trigger channel."""

    DISABLED = TRIGGER_DISABLED
    ENABLED = TRIGGER_ENABLED
    ENABLED_WITH_WHITESPACE = TRIGGER_ENABLED_WITH_WHITESPACE

    @classmethod
    def parse(cls, value: str | bool) -> TriggerMode:
        """Parse a config value. Booleans map to disabled/enabled."""
        if isinstance(value, bool):
            return cls.ENABLED if value else cls.DISABLED
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown trigger mode %r, treating as disabled", value)
            return cls.DISABLED


class ChannelState(Enum):
    AWAITING = auto()
    COMPENSATING = auto()
    DONE = auto()


@dataclass(frozen=True)
class KeyEvent:
    key: str
    shift: bool = False


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one key event.

    ``handled`` is true when a channel ran; ``snippet`` is set when it expanded
    something.
    """

    handled: bool = False
    snippet: Snippet | None = None

    @property
    def triggered(self) -> bool:
        return self.snippet is not None

    @property
    def snippet_type(self) -> SnippetType | None:
        return classify(self.snippet) if self.snippet is not None else None


class TriggerChannel(abc.ABC):
    """State machine for one trigger key."""

    key: str = ""

    def __init__(self, mode: TriggerMode = TriggerMode.DISABLED) -> None:
        self.mode = mode
        self.state = ChannelState.AWAITING

    @property
    def enabled(self) -> bool:
        return self.mode is not TriggerMode.DISABLED

    @property
    def with_whitespace(self) -> bool:
        return self.mode is TriggerMode.ENABLED_WITH_WHITESPACE

    def handle(self, editor: EditorOps, table: SnippetTable, multiline_lhs: bool) -> Snippet | None:
        self.state = ChannelState.AWAITING
        try:
            return self._run(editor, table, multiline_lhs)
        finally:
            self.state = ChannelState.DONE

    @abc.abstractmethod
    def _run(self, editor: EditorOps, table: SnippetTable, multiline_lhs: bool) -> Snippet | None:
        ...


class SpaceChannel(TriggerChannel):
    """Runs before the host types the space; nothing to compensate."""

    key = KEY_SPACE

    def _run(self, editor: EditorOps, table: SnippetTable, multiline_lhs: bool) -> Snippet | None:
        return try_trigger(editor, editor.get_cursor(), table.snippets, multiline_lhs)


class TabChannel(TriggerChannel):
    """Undoes the host's indent, expands, then restores the indent if due.

    A Tab that expands nothing leaves the document as if no channel existed.
    """

    key = KEY_TAB

    def _run(self, editor: EditorOps, table: SnippetTable, multiline_lhs: bool) -> Snippet | None:
        self.state = ChannelState.COMPENSATING
        editor.unindent()

        snippet = try_trigger(editor, editor.get_cursor(), table.snippets, multiline_lhs)
        if snippet is None:
            editor.indent()
        elif self.with_whitespace and classify(snippet) is SnippetType.SLSR:
            editor.indent()
        return snippet


class EnterChannel(TriggerChannel):
    """Expands the trigger at the end of the line above the cursor.

    On a match the line break (and any indentation) the host inserted is
    removed; with whitespace enabled a bare line break is inserted at the
    cursor afterwards.
    """

    key = KEY_ENTER

    def _run(self, editor: EditorOps, table: SnippetTable, multiline_lhs: bool) -> Snippet | None:
        host_cursor = editor.get_cursor()
        line, _ = editor.offset_to_pos(host_cursor)
        if line == 0:
            return None

        trigger_at = editor.line_end_offset(line - 1)
        snippet = try_trigger(editor, trigger_at, table.snippets, multiline_lhs)
        if snippet is None:
            editor.set_cursor(host_cursor)
            return None

        self.state = ChannelState.COMPENSATING
        delta = len(snippet.rhs.data) - len(snippet.lhs)
        inserted_end = trigger_at + delta
        cursor = editor.get_cursor()
        editor.replace_range(inserted_end, host_cursor + delta, "")
        editor.set_cursor(cursor)

        if self.with_whitespace:
            editor.replace_range(cursor, cursor, "\n")
            editor.set_cursor(cursor + 1)
        return snippet


class Dispatcher:
    """Routes key events to trigger channels.

    Events with Shift held are ignored. ``dispatch`` never raises.
    """

    def __init__(
        self,
        registry: SnippetRegistry,
        triggers: TriggerConfig | None = None,
        multiline_lhs: bool = True,
        event_bus: EventBus | None = None,
    ) -> None:
        self._registry = registry
        self._event_bus = event_bus
        self.multiline_lhs = multiline_lhs
        self._channels: dict[str, TriggerChannel] = {
            KEY_SPACE: SpaceChannel(),
            KEY_TAB: TabChannel(),
            KEY_ENTER: EnterChannel(),
        }
        if triggers is not None:
            self.configure(triggers)

    def configure(self, triggers: TriggerConfig) -> None:
        """Apply per-key trigger modes from configuration."""
        self._channels[KEY_SPACE].mode = TriggerMode.parse(triggers.space)
        self._channels[KEY_TAB].mode = TriggerMode.parse(triggers.tab)
        self._channels[KEY_ENTER].mode = TriggerMode.parse(triggers.enter)

    def channel(self, key: str) -> TriggerChannel | None:
        return self._channels.get(key)

    def dispatch(self, editor: EditorOps, event: KeyEvent) -> DispatchResult:
        if event.shift:
            return DispatchResult()

        channel = self._channels.get(event.key)
        if channel is None or not channel.enabled:
            return DispatchResult()

        table = self._registry.table
        try:
            snippet = channel.handle(editor, table, self.multiline_lhs)
        except Exception:
            logger.exception("Snippet trigger on %s failed", event.key)
            return DispatchResult()

        if snippet is not None and self._event_bus is not None:
            self._event_bus.emit(
                "snippet.triggered",
                snippet=snippet,
                snippet_type=classify(snippet),
                key=event.key,
            )
        return DispatchResult(handled=True, snippet=snippet)
