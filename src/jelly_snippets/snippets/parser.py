"""Snippet source parsing: configuration text → ordered LHS/RHS table."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from jelly_snippets.constants import NEWLINE_DIVIDER_SENTINEL
from jelly_snippets.snippets.model import LHS, RHS
from jelly_snippets.snippets.symbols import compile_rhs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseDiagnostic:
    """A snippet record that could not be registered."""

    index: int  # position of the record in the source
    record: str
    reason: str


@dataclass
class ParseResult:
    """Best-effort output of :func:`parse_snippets`."""

    snippets: dict[LHS, RHS] = field(default_factory=dict)
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)


def effective_divider(snippet_divider: str) -> str:
    """Resolve the newline sentinel to an actual line break."""
    if snippet_divider == NEWLINE_DIVIDER_SENTINEL:
        return "\n"
    return snippet_divider


def parse_snippets(source: str, snippet_divider: str, part_divider: str) -> ParseResult:
    """Parse a snippet source string.

    The source is split into records on ``snippet_divider`` and each trimmed
    record is split into trigger and expansion on ``part_divider``. Anything
    after the first part divider belongs to the expansion, so the divider may
    appear inside expansion text. A later record with the same trigger
    replaces an earlier one.

    Malformed records never raise: they are logged and reported in
    ``ParseResult.diagnostics``.
    """
    result = ParseResult()

    for index, raw_record in enumerate(source.split(effective_divider(snippet_divider))):
        record = raw_record.strip()
        if not record:
            continue

        lhs, *rest = record.split(part_divider)
        if not rest:
            _reject(result, index, record, "missing part divider %r" % part_divider)
            continue
        if not lhs:
            _reject(result, index, record, "empty trigger")
            continue

        if lhs in result.snippets:
            logger.debug("Snippet %r redefined by record %d", lhs, index)
        result.snippets[lhs] = compile_rhs(part_divider.join(rest))

    logger.debug(
        "Parsed %d snippet(s), %d malformed record(s)",
        len(result.snippets),
        len(result.diagnostics),
    )
    return result


def _reject(result: ParseResult, index: int, record: str, reason: str) -> None:
    logger.warning("Failed to register snippet record %d (%s): %r", index, reason, record)
    result.diagnostics.append(ParseDiagnostic(index=index, record=record, reason=reason))
