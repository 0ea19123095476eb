# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the MacroLex CLI entry point."""

import io
import json
import logging
import re
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from yachalk import ColorMode, chalk

from macrolex.cli.main import main

# ###############
# Test Helpers
# ###############


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Remove the handler configure_logging() attaches during main()."""
    yield
    logger = logging.getLogger("macrolex")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    """Run main() with the given arguments and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["macrolex", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def _template(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "template.txt"
    path.write_text(content, encoding="utf-8")
    return path


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- tokenize tests --------


def test_tokenize_prints_tokens(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize prints one line per token and exits with 0 for valid input."""
    monkeypatch.chdir(tmp_path)
    path = _template(tmp_path, "Hi {{user}}")
    assert _run(monkeypatch, "tokenize", str(path)) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert "Plaintext" in lines[0]
    assert "'Hi '" in lines[0]
    assert "MacroIdentifier" in lines[2]
    assert "'user'" in lines[2]


def test_tokenize_reports_errors_with_exit_code_1(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize exits with 1 and prints errors on stderr when lexing fails."""
    monkeypatch.chdir(tmp_path)
    path = _template(tmp_path, "{{name")
    assert _run(monkeypatch, "tokenize", str(path)) == 1
    err = capsys.readouterr().err
    assert "Error at 1:7" in err
    assert "unterminated construct" in err


def test_tokenize_json_output(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize --json prints the full snapshot."""
    monkeypatch.chdir(tmp_path)
    path = _template(tmp_path, "{{name:a}}")
    assert _run(monkeypatch, "tokenize", "--json", str(path)) == 0
    data = json.loads(capsys.readouterr().out)
    assert [token["type"] for token in data["tokens"]] == [
        "MacroStart",
        "MacroIdentifier",
        "Colon",
        "Identifier",
        "MacroEnd",
    ]
    assert data["errors"] == []
    assert data["depth"] == 1


def test_tokenize_reads_stdin(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize without a file argument reads standard input."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "stdin", io.StringIO("plain text"))
    assert _run(monkeypatch, "tokenize", "--json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["tokens"][0]["image"] == "plain text"


def test_tokenize_missing_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """tokenize exits with 2 when the input file cannot be read."""
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "tokenize", str(tmp_path / "missing.txt")) == 2


def test_tokenize_with_config_option(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """--config selects the recovery policy and position tracking."""
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "lexer.yaml"
    config.write_text("recovery: abort\ntrack-positions: false\n", encoding="utf-8")
    path = _template(tmp_path, "{{1 2}} tail")
    assert _run(monkeypatch, "tokenize", "--json", "--config", str(config), str(path)) == 1
    data = json.loads(capsys.readouterr().out)
    assert [token["type"] for token in data["tokens"]] == ["MacroStart"]
    assert len(data["errors"]) == 1
    assert data["errors"][0]["line"] is None


def test_tokenize_uses_config_in_current_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """A .macrolex.yaml in the working directory is picked up automatically."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".macrolex.yaml").write_text("track-positions: false\n", encoding="utf-8")
    path = _template(tmp_path, "{{x}}")
    assert _run(monkeypatch, "tokenize", "--json", str(path)) == 0
    data = json.loads(capsys.readouterr().out)
    assert all(token["line"] is None for token in data["tokens"])


def test_tokenize_invalid_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize exits with 2 when the config file is invalid."""
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "lexer.yaml"
    config.write_text("recovery: sometimes\n", encoding="utf-8")
    path = _template(tmp_path, "{{x}}")
    assert _run(monkeypatch, "tokenize", "--config", str(config), str(path)) == 2
    assert "Error:" in capsys.readouterr().err


# -------- modes tests --------


def test_modes_lists_modes_and_kinds(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """modes prints every mode with its token kinds."""
    assert _run(monkeypatch, "modes") == 0
    out = capsys.readouterr().out
    assert "plaintext_mode (default)" in out
    assert "macro_args_mode" in out
    assert "MacroStart" in out
    assert "enters macro_def_mode" in out
    assert "replaces with macro_args_mode" in out
    assert "Warning" not in out


def test_verbose_flag_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    """--verbose goes before the subcommand and enables debug logging."""
    assert _run(monkeypatch, "--verbose", "modes") == 0


# -------- colour output tests --------

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


@pytest.fixture
def _colour() -> Iterator[None]:
    """Force ANSI colours on, whatever the terminal supports."""
    mode = chalk.get_color_mode()
    chalk.set_color_mode(ColorMode.Basic16)
    yield
    chalk.set_color_mode(mode)


@pytest.mark.usefixtures("_colour")
def test_modes_columns_align_with_colour(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """Kind names are padded before colouring, so transitions line up."""
    assert _run(monkeypatch, "modes") == 0
    out = capsys.readouterr().out
    assert "\x1b[" in out
    lines = [_ANSI_ESCAPE.sub("", line) for line in out.splitlines()]
    assert {line.index("->") for line in lines if "->" in line} == {27}


@pytest.mark.usefixtures("_colour")
def test_tokenize_columns_align_with_colour(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Token images start in the same column for every kind name."""
    monkeypatch.chdir(tmp_path)
    path = _template(tmp_path, "Hi {{user:x}}")
    assert _run(monkeypatch, "tokenize", str(path)) == 0
    lines = [_ANSI_ESCAPE.sub("", line) for line in capsys.readouterr().out.splitlines()]
    assert len(lines) == 6
    assert all(line[35] == "'" for line in lines)
