"""Tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from jelly_snippets.__main__ import main


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(
        '[snippets]\n'
        'snippet_divider = "\\\\n"\n'
        'source = """\n'
        'sig |+| Regards%\\\\e!\n'
        'broken line\n'
        '"""\n'
    )
    return path


class TestCli:
    def test_list_snippets(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--config", str(config_file), "--list-snippets"]) == 0

        out = capsys.readouterr().out
        assert "'sig'" in out
        assert "'Regards!'" in out
        assert "(cursor -1)" in out
        assert "1 snippet(s), 1 malformed record(s)" in out

    def test_expand_file(
        self, config_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        text_file = tmp_path / "note.txt"
        text_file.write_text("thanks sig")

        assert main(["--config", str(config_file), "--expand", str(text_file)]) == 0
        assert capsys.readouterr().out == "thanks Regards!"

    def test_expand_without_match(
        self, config_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        text_file = tmp_path / "note.txt"
        text_file.write_text("nothing here")

        assert main(["--config", str(config_file), "--expand", str(text_file), "--key", "tab"]) == 1
        assert capsys.readouterr().out == "nothing here\t"

    def test_expand_missing_file(self, config_file: Path, tmp_path: Path) -> None:
        assert main(["--config", str(config_file), "--expand", str(tmp_path / "nope")]) == 2
