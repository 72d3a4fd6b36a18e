"""Tests for anchored snippet matching."""

from __future__ import annotations

from unittest.mock import MagicMock

from jelly_snippets.editor import TextDocument
from jelly_snippets.snippets.engine import find_match, try_trigger
from jelly_snippets.snippets.model import RHS, RHSInfo
from jelly_snippets.snippets.symbols import compile_rhs


def _table(**pairs: str) -> dict[str, RHS]:
    return {lhs: compile_rhs(raw) for lhs, raw in pairs.items()}


class TestTryTrigger:
    def test_replaces_trigger_at_cursor(self) -> None:
        doc = TextDocument("a::", cursor=3)
        snippet = try_trigger(doc, 3, {"::": compile_rhs("hi")})

        assert snippet is not None
        assert snippet.lhs == "::"
        assert doc.text == "ahi"
        assert doc.get_cursor() == 3

    def test_insufficient_lookback_does_not_match(self) -> None:
        doc = TextDocument("a::", cursor=2)
        assert try_trigger(doc, 2, {"::": compile_rhs("hi")}) is None
        assert doc.text == "a::"

    def test_match_must_end_at_cursor(self) -> None:
        doc = TextDocument("asd and more", cursor=12)
        assert try_trigger(doc, 12, _table(asd="snipped ya")) is None
        assert doc.text == "asd and more"

    def test_match_before_trailing_text(self) -> None:
        doc = TextDocument("x asd tail", cursor=5)
        try_trigger(doc, 5, _table(asd="snipped ya"))
        assert doc.text == "x snipped ya tail"
        assert doc.get_cursor() == 12

    def test_first_candidate_in_table_order_wins(self) -> None:
        doc = TextDocument("a::")
        table = {":": compile_rhs("-"), "::": compile_rhs("hi")}
        snippet = try_trigger(doc, 3, table)

        assert snippet is not None
        assert snippet.lhs == ":"
        assert doc.text == "a:-"

    def test_longer_candidate_first(self) -> None:
        doc = TextDocument("a::")
        table = {"::": compile_rhs("hi"), ":": compile_rhs("-")}
        try_trigger(doc, 3, table)
        assert doc.text == "ahi"

    def test_cursor_end_moves_cursor_left(self) -> None:
        doc = TextDocument("call fn")
        try_trigger(doc, 7, {"fn": compile_rhs("f(%\\e)")})
        assert doc.text == "call f()"
        assert doc.get_cursor() == 7

    def test_cursor_end_across_lines(self) -> None:
        doc = TextDocument("x\nblk")
        try_trigger(doc, 5, {"blk": compile_rhs("{%\\n%\\t%\\e%\\n}")})
        assert doc.text == "x\n{\n\t\n}"
        # Cursor rests after the tab on the middle line.
        assert doc.offset_to_pos(doc.get_cursor()) == (2, 1)

    def test_multiline_trigger(self) -> None:
        doc = TextDocument("one\ntwo")
        snippet = try_trigger(doc, 7, {"e\ntwo": compile_rhs("!")})
        assert snippet is not None
        assert doc.text == "on!"

    def test_multiline_lookback_disabled_stops_at_line_start(self) -> None:
        doc = TextDocument("one\ntwo")
        assert try_trigger(doc, 7, {"e\ntwo": compile_rhs("!")}, multiline_lhs=False) is None
        assert try_trigger(doc, 7, {"two": compile_rhs("2")}, multiline_lhs=False) is not None
        assert doc.text == "one\n2"

    def test_empty_table(self) -> None:
        doc = TextDocument("anything")
        assert try_trigger(doc, 8, {}) is None

    def test_no_match_never_calls_replace_range(self) -> None:
        editor = MagicMock()
        editor.get_range.return_value = "zz"
        editor.offset_to_pos.return_value = (0, 2)
        editor.pos_to_offset.return_value = 0

        assert try_trigger(editor, 2, {"ab": RHS("x", RHSInfo())}) is None
        editor.replace_range.assert_not_called()
        editor.set_cursor.assert_not_called()


class TestFindMatch:
    def test_returns_start_offset(self) -> None:
        doc = TextDocument("hello sig")
        match = find_match(doc, 9, _table(sig="Regards"))
        assert match is not None
        start, snippet = match
        assert start == 6
        assert snippet.rhs.data == "Regards"

    def test_is_read_only(self) -> None:
        doc = TextDocument("hello sig")
        find_match(doc, 9, _table(sig="Regards"))
        assert doc.text == "hello sig"
