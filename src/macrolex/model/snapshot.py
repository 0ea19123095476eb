# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serializable snapshots of tokenize results for tests and tooling."""

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from macrolex.lexer.engine import LexicalError, LexResult, Token

# ###############
# Public Interface
# ###############


class TokenSnapshot(BaseModel):
    """One emitted token with its position metadata."""

    model_config = ConfigDict(frozen=True)

    type: str
    image: str
    offset: int
    length: int
    line: int | None = None
    column: int | None = None


class ErrorSnapshot(BaseModel):
    """One lexical error as reported by the lexer."""

    model_config = ConfigDict(frozen=True)

    message: str
    offset: int
    length: int = 0
    line: int | None = None
    column: int | None = None


class LexSnapshot(BaseModel):
    """Complete result of a tokenize call.

    Two tokenize calls on the same input produce equal snapshots, so the
    ``model_dump_json()`` output can be compared byte for byte.
    """

    model_config = ConfigDict(frozen=True)

    tokens: list[TokenSnapshot] = _Field(default_factory=list)
    errors: list[ErrorSnapshot] = _Field(default_factory=list)
    depth: int = 1

    @property
    def types(self) -> list[str]:
        """Return the kind names of all tokens in order."""
        return [token.type for token in self.tokens]

    @property
    def images(self) -> list[str]:
        """Return the lexemes of all tokens in order."""
        return [token.image for token in self.tokens]


def snapshot_token(token: Token) -> TokenSnapshot:
    return TokenSnapshot(
        type=token.kind,
        image=token.image,
        offset=token.offset,
        length=token.length,
        line=token.line,
        column=token.column,
    )


def snapshot_error(error: LexicalError) -> ErrorSnapshot:
    return ErrorSnapshot(
        message=error.message,
        offset=error.offset,
        length=error.length,
        line=error.line,
        column=error.column,
    )


def snapshot_result(result: LexResult) -> LexSnapshot:
    """Convert a LexResult into its snapshot model."""
    return LexSnapshot(
        tokens=[snapshot_token(token) for token in result.tokens],
        errors=[snapshot_error(error) for error in result.errors],
        depth=result.depth,
    )
