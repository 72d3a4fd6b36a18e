"""Anchored snippet matching and expansion.

A trigger text matches only when it ends exactly at the cursor: for a
candidate of length N the engine reads the N characters before the cursor and
compares them literally. Candidates are tried in table order and the first
match wins.

Searching the whole line for trigger occurrences and then keeping those that
end at the cursor is not supported; it lets a shorter trigger earlier in the
line shadow the one just typed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from jelly_snippets.snippets.model import LHS, RHS, Snippet

if TYPE_CHECKING:
    from jelly_snippets.editor import EditorOps

logger = logging.getLogger(__name__)


def find_match(
    editor: EditorOps,
    cursor: int,
    snippets: Mapping[LHS, RHS],
    multiline_lhs: bool = True,
) -> tuple[int, Snippet] | None:
    """Return ``(start_offset, snippet)`` for the first trigger ending at ``cursor``.

    Read-only. With ``multiline_lhs`` disabled the look-back stops at the
    start of the cursor's line.
    """
    if multiline_lhs:
        floor = 0
    else:
        line, _ = editor.offset_to_pos(cursor)
        floor = editor.pos_to_offset(line, 0)

    for lhs, rhs in snippets.items():
        start = cursor - len(lhs)
        if start < floor:
            continue
        if editor.get_range(start, cursor) == lhs:
            return start, Snippet(lhs, rhs)
    return None


def try_trigger(
    editor: EditorOps,
    cursor: int,
    snippets: Mapping[LHS, RHS],
    multiline_lhs: bool = True,
) -> Snippet | None:
    """Expand the trigger ending at ``cursor``, if any.

    Replaces the trigger text with the expansion and places the cursor
    ``cursor_end`` characters before the end of the inserted text. Returns the
    matched snippet, or ``None`` without touching the document.
    """
    match = find_match(editor, cursor, snippets, multiline_lhs)
    if match is None:
        return None

    start, snippet = match
    data = snippet.rhs.data
    editor.replace_range(start, cursor, data)
    editor.set_cursor(start + len(data) - snippet.rhs.info.cursor_end)
    logger.debug("Expanded %r at offset %d", snippet.lhs, start)
    return snippet
