"""Editor operations the snippet engine needs from its host."""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING

from jelly_snippets.constants import DEFAULT_INDENT_UNIT
from jelly_snippets.dispatcher import KEY_ENTER, KEY_SPACE, KEY_TAB

if TYPE_CHECKING:
    from jelly_snippets.dispatcher import Dispatcher, DispatchResult, KeyEvent

logger = logging.getLogger(__name__)


class EditorOps(abc.ABC):
    """Abstract host document.

    Offsets are absolute positions in the document's linear character stream.
    Positions are ``(line, column)`` pairs, both zero-based.
    """

    @abc.abstractmethod
    def get_cursor(self) -> int:
        """Return the cursor offset."""
        ...

    @abc.abstractmethod
    def set_cursor(self, offset: int) -> None:
        """Move the cursor to an offset."""
        ...

    @abc.abstractmethod
    def offset_to_pos(self, offset: int) -> tuple[int, int]:
        ...

    @abc.abstractmethod
    def pos_to_offset(self, line: int, column: int) -> int:
        ...

    @abc.abstractmethod
    def get_range(self, start: int, end: int) -> str:
        """Return the exact text between two offsets."""
        ...

    @abc.abstractmethod
    def replace_range(self, start: int, end: int, text: str) -> None:
        """Replace the text between two offsets. ``start == end`` inserts."""
        ...

    @abc.abstractmethod
    def line_length(self, line: int) -> int:
        ...

    @abc.abstractmethod
    def indent(self) -> None:
        """Perform the host's indent action at the cursor."""
        ...

    @abc.abstractmethod
    def unindent(self) -> None:
        """Undo one indent action performed at the cursor."""
        ...

    def line_end_offset(self, line: int) -> int:
        """Offset of the end of ``line`` (before its line break)."""
        return self.pos_to_offset(line, self.line_length(line))


class TextDocument(EditorOps):
    """In-memory document backed by a string.

    Used as the host for the command line, the web API, and tests. ``indent``
    inserts ``indent_unit`` at the cursor and ``unindent`` removes one
    ``indent_unit`` immediately before the cursor.
    """

    def __init__(
        self, text: str = "", cursor: int | None = None, indent_unit: str = DEFAULT_INDENT_UNIT
    ) -> None:
        self._text = text
        self._cursor = len(text) if cursor is None else self._clamp(cursor)
        self._indent_unit = indent_unit

    @property
    def text(self) -> str:
        return self._text

    @property
    def indent_unit(self) -> str:
        return self._indent_unit

    def _clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self._text)))

    def _lines(self) -> list[str]:
        return self._text.split("\n")

    def get_cursor(self) -> int:
        return self._cursor

    def set_cursor(self, offset: int) -> None:
        self._cursor = self._clamp(offset)

    def offset_to_pos(self, offset: int) -> tuple[int, int]:
        offset = self._clamp(offset)
        before = self._text[:offset]
        line = before.count("\n")
        return line, offset - (before.rfind("\n") + 1)

    def pos_to_offset(self, line: int, column: int) -> int:
        lines = self._lines()
        line = max(0, min(line, len(lines) - 1))
        column = max(0, min(column, len(lines[line])))
        return sum(len(text) + 1 for text in lines[:line]) + column

    def get_range(self, start: int, end: int) -> str:
        return self._text[self._clamp(start) : self._clamp(end)]

    def replace_range(self, start: int, end: int, text: str) -> None:
        start, end = self._clamp(start), self._clamp(end)
        if end < start:
            start, end = end, start
        self._text = self._text[:start] + text + self._text[end:]
        # Keep the cursor attached to the text it was next to.
        if self._cursor >= end:
            self._cursor += len(text) - (end - start)
        elif self._cursor > start:
            self._cursor = start + len(text)

    def line_length(self, line: int) -> int:
        lines = self._lines()
        if not 0 <= line < len(lines):
            return 0
        return len(lines[line])

    def line_count(self) -> int:
        return len(self._lines())

    def indent(self) -> None:
        self.replace_range(self._cursor, self._cursor, self._indent_unit)

    def unindent(self) -> None:
        start = self._cursor - len(self._indent_unit)
        if start >= 0 and self._text[start : self._cursor] == self._indent_unit:
            self.replace_range(start, self._cursor, "")

    def leading_whitespace(self, line: int) -> str:
        text = self._lines()[line] if 0 <= line < self.line_count() else ""
        return text[: len(text) - len(text.lstrip(" \t"))]


def press_key(document: TextDocument, dispatcher: Dispatcher, event: KeyEvent) -> DispatchResult:
    """Simulate a key press in ``document`` with the host's default behavior.

    Space is dispatched before the space is typed. Tab and Enter are
    dispatched after the host has indented or broken the line (copying the
    current line's indentation onto the new line).
    """
    if event.key == KEY_SPACE:
        result = dispatcher.dispatch(document, event)
        cursor = document.get_cursor()
        document.replace_range(cursor, cursor, " ")
        return result

    if event.key == KEY_TAB:
        document.indent()
    elif event.key == KEY_ENTER:
        line, _ = document.offset_to_pos(document.get_cursor())
        cursor = document.get_cursor()
        document.replace_range(cursor, cursor, "\n" + document.leading_whitespace(line))
    else:
        logger.debug("No default action for key %r", event.key)

    return dispatcher.dispatch(document, event)
