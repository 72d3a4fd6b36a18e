"""Main application orchestrator: wires all components together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jelly_snippets.config import AppConfig
from jelly_snippets.dispatcher import Dispatcher, DispatchResult, KeyEvent
from jelly_snippets.events import EventBus, event_bus
from jelly_snippets.snippets.engine import try_trigger
from jelly_snippets.snippets.model import Snippet, classify
from jelly_snippets.snippets.registry import SnippetRegistry, SnippetTable

if TYPE_CHECKING:
    from jelly_snippets.editor import EditorOps

logger = logging.getLogger(__name__)


class JellySnippets:
    """Owns the snippet table and answers trigger requests from a host editor.

    Pipeline: config → parse → compiled table → (key event → dispatcher) → engine → editor
    """

    def __init__(self, config: AppConfig | None = None, bus: EventBus | None = None) -> None:
        self._config = config or AppConfig.load()
        self._event_bus: EventBus = bus or event_bus
        self._registry = SnippetRegistry()
        self._dispatcher = Dispatcher(
            self._registry,
            self._config.triggers,
            multiline_lhs=self._config.snippets.multiline_lhs,
            event_bus=self._event_bus,
        )
        self._table_key: tuple[str, str, str] | None = None

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def table(self) -> SnippetTable:
        return self._registry.table

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def setup(self) -> None:
        """Compile the snippet table for the first time."""
        logger.info("Setting up Jelly Snippets...")
        self.reload()

    def reload(self) -> SnippetTable:
        """Re-derive the snippet table from the current configuration."""
        self._table_key = self._config.snippets.table_key()
        table = self._registry.reload(self._config.snippets)
        for diagnostic in table.diagnostics:
            self._event_bus.emit("snippets.parse_error", diagnostic=diagnostic)
        self._event_bus.emit("snippets.reloaded", table=table)
        return table

    def update_config(self, config: AppConfig) -> None:
        """Adopt new configuration, rebuilding the table only if its inputs changed."""
        self._config = config
        self._dispatcher.configure(config.triggers)
        self._dispatcher.multiline_lhs = config.snippets.multiline_lhs
        if config.snippets.table_key() != self._table_key:
            self.reload()

    def trigger(self, editor: EditorOps) -> Snippet | None:
        """Explicit "trigger snippet" command at the editor's cursor."""
        snippet = try_trigger(
            editor,
            editor.get_cursor(),
            self._registry.table.snippets,
            self._config.snippets.multiline_lhs,
        )
        if snippet is None:
            logger.debug("No snippet ends at the cursor")
            return None

        self._event_bus.emit(
            "snippet.triggered", snippet=snippet, snippet_type=classify(snippet), key="command"
        )
        return snippet

    def handle_key(self, editor: EditorOps, event: KeyEvent) -> DispatchResult:
        """Automatic trigger for a key event the host has delivered."""
        return self._dispatcher.dispatch(editor, event)
