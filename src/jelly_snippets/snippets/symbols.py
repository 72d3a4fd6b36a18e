"""Escape-symbol substitution for snippet right-hand sides.

Raw right-hand sides may contain three escape symbols:

    %\\n   replaced by a line break
    %\\t   replaced by a tab
    %\\e   zero-width marker: where the cursor rests after expansion

The compiler is a single left-to-right scan. At each position the symbols are
tried in table order; the first whose token starts there is consumed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from jelly_snippets.constants import SYMBOL_CURSOR_END, SYMBOL_NEWLINE, SYMBOL_TAB
from jelly_snippets.snippets.model import RHS, RHSInfo

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    """What an escape symbol does when the scanner consumes it."""

    DATA = "data"  # emits its replacement text
    POSITION = "position"  # emits nothing, marks the cursor position


@dataclass(frozen=True)
class EscapeSymbol:
    token: str
    kind: SymbolKind
    replacement: str = ""


SYMBOLS: tuple[EscapeSymbol, ...] = (
    EscapeSymbol(SYMBOL_NEWLINE, SymbolKind.DATA, "\n"),
    EscapeSymbol(SYMBOL_TAB, SymbolKind.DATA, "\t"),
    EscapeSymbol(SYMBOL_CURSOR_END, SymbolKind.POSITION),
)


def _symbol_at(raw: str, pos: int) -> EscapeSymbol | None:
    for symbol in SYMBOLS:
        if raw.startswith(symbol.token, pos):
            return symbol
    return None


def compile_rhs(raw: str) -> RHS:
    """Substitute escape symbols in ``raw`` and compute cursor metadata.

    If the cursor-end marker appears more than once, the last one wins.
    Without a marker the cursor rests at the end of the inserted text.
    """
    out: list[str] = []
    emitted = 0
    end_found_idx: int | None = None
    markers = 0
    pos = 0

    while pos < len(raw):
        symbol = _symbol_at(raw, pos)
        if symbol is None:
            out.append(raw[pos])
            emitted += 1
            pos += 1
            continue

        if symbol.kind is SymbolKind.DATA:
            out.append(symbol.replacement)
            emitted += len(symbol.replacement)
        else:
            end_found_idx = emitted
            markers += 1
        pos += len(symbol.token)

    data = "".join(out)
    if markers > 1:
        logger.debug(
            "Right-hand side %r has %d cursor-end markers, using the last one", raw, markers
        )

    cursor_end = 0 if end_found_idx is None else len(data) - end_found_idx
    return RHS(data=data, info=RHSInfo(has_newline="\n" in data, cursor_end=cursor_end))
