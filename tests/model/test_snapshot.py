# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the serializable lexer snapshots."""

import json

from macrolex.lexer.engine import LexicalError, LexResult, Token
from macrolex.model.snapshot import ErrorSnapshot, LexSnapshot, TokenSnapshot, snapshot_result

# ###############
# Conversion
# ###############


def test_snapshot_copies_token_fields() -> None:
    result = LexResult(tokens=(Token("MacroStart", "{{", 4, 2, 1),), errors=())
    snapshot = snapshot_result(result)
    assert snapshot.tokens == [TokenSnapshot(type="MacroStart", image="{{", offset=4, length=2, line=2, column=1)]


def test_snapshot_copies_error_fields() -> None:
    error = LexicalError("no viable token in mode macro_def_mode", 2, 3, 1, 3)
    snapshot = snapshot_result(LexResult(tokens=(), errors=(error,), depth=2))
    assert snapshot.errors == [
        ErrorSnapshot(message="no viable token in mode macro_def_mode", offset=2, length=3, line=1, column=3)
    ]
    assert snapshot.depth == 2


def test_positions_may_be_missing() -> None:
    snapshot = snapshot_result(LexResult(tokens=(Token("Plaintext", "abc", 0),), errors=()))
    assert snapshot.tokens[0].line is None
    assert snapshot.tokens[0].column is None


def test_types_and_images() -> None:
    result = LexResult(
        tokens=(Token("MacroStart", "{{", 0), Token("MacroIdentifier", "x", 2), Token("MacroEnd", "}}", 3)),
        errors=(),
    )
    snapshot = snapshot_result(result)
    assert snapshot.types == ["MacroStart", "MacroIdentifier", "MacroEnd"]
    assert snapshot.images == ["{{", "x", "}}"]


# ###############
# Serialization
# ###############


def test_json_dump_round_trips() -> None:
    result = LexResult(
        tokens=(Token("Plaintext", "hi ", 0, 1, 1),),
        errors=(LexicalError("unterminated construct", 3, 0, 1, 4),),
        depth=2,
    )
    dumped = snapshot_result(result).model_dump_json()
    data = json.loads(dumped)
    assert data["tokens"][0]["type"] == "Plaintext"
    assert data["errors"][0]["message"] == "unterminated construct"
    assert LexSnapshot.model_validate_json(dumped) == snapshot_result(result)


def test_empty_snapshot_defaults() -> None:
    snapshot = LexSnapshot()
    assert snapshot.tokens == []
    assert snapshot.errors == []
    assert snapshot.depth == 1
