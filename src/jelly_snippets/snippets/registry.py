"""Process-wide compiled snippet table with atomic reload."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from jelly_snippets.snippets.model import LHS, RHS, Snippet
from jelly_snippets.snippets.parser import ParseDiagnostic, parse_snippets

if TYPE_CHECKING:
    from jelly_snippets.config import SnippetsConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnippetTable:
    """Immutable snapshot of the compiled snippets.

    ``generation`` increases by one on every reload.
    """

    snippets: Mapping[LHS, RHS] = field(default_factory=lambda: MappingProxyType({}))
    generation: int = 0
    diagnostics: tuple[ParseDiagnostic, ...] = ()

    def __len__(self) -> int:
        return len(self.snippets)

    def get(self, lhs: LHS) -> Snippet | None:
        rhs = self.snippets.get(lhs)
        return Snippet(lhs, rhs) if rhs is not None else None


class SnippetRegistry:
    """Owns the current :class:`SnippetTable`.

    Only :meth:`reload` replaces the table, and it does so with a single
    reference assignment after the new table is fully built, so a reader
    holding ``registry.table`` never sees a half-populated one.
    """

    def __init__(self) -> None:
        self._table = SnippetTable()

    @property
    def table(self) -> SnippetTable:
        return self._table

    def reload(self, config: SnippetsConfig) -> SnippetTable:
        """Rebuild the table from configuration and swap it in."""
        result = parse_snippets(
            config.read_source(), config.snippet_divider, config.part_divider
        )
        table = SnippetTable(
            snippets=MappingProxyType(dict(result.snippets)),
            generation=self._table.generation + 1,
            diagnostics=tuple(result.diagnostics),
        )
        self._table = table
        logger.info(
            "Loaded %d snippet(s) (generation %d)", len(table), table.generation
        )
        return table
