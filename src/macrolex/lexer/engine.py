# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Mode stack machine that turns text into tokens.

At every offset the kinds of the mode on top of the stack are tried in
declaration order and the first match is committed. Matches may push a mode,
pop the current one, or both (which replaces the top of the stack).
Lexical problems are collected in the result instead of being raised.
"""

import dataclasses
from dataclasses import dataclass

from macrolex.config import DEFAULT_CONFIG, LexerConfig
from macrolex.lexer.catalog import TokenKind
from macrolex.lexer.modes import Mode, ModeTable
from macrolex.log import get_logger
from macrolex.validation.checks import validate

logger = get_logger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Token:
    """An emitted token.

    Attributes:
        kind: Name of the token kind that matched.
        image: The matched text (the lexeme).
        offset: 0-based offset of the first character in the input.
        line: 1-based line of the first character, if positions are tracked.
        column: 1-based column of the first character, if positions are tracked.
    """

    kind: str
    image: str
    offset: int
    line: int | None = None
    column: int | None = None

    @property
    def length(self) -> int:
        return len(self.image)

    @property
    def end_offset(self) -> int:
        """Offset one past the last character of the token."""
        return self.offset + len(self.image)


@dataclass(frozen=True)
class LexicalError:
    """A non-fatal problem found while tokenizing.

    Attributes:
        message: Human-readable description.
        offset: 0-based offset where the problem starts.
        length: Number of input characters the problem covers.
        line: 1-based line, if positions are tracked.
        column: 1-based column, if positions are tracked.
    """

    message: str
    offset: int
    length: int = 0
    line: int | None = None
    column: int | None = None


@dataclass(frozen=True)
class LexResult:
    """Best-effort output of a tokenize call.

    Attributes:
        tokens: Emitted tokens in input order.
        errors: Lexical errors in the order they were found.
        depth: Mode stack depth when scanning stopped; 1 means every construct was closed.
    """

    tokens: tuple[Token, ...]
    errors: tuple[LexicalError, ...]
    depth: int = 1

    @property
    def has_errors(self) -> bool:
        """Return True if any lexical errors were reported."""
        return len(self.errors) > 0


class LexerInvariantError(Exception):
    """Raised when a scan step makes no progress.

    A step that does not consume input and brings a mode back to the top of
    the stack at the same offset, at a depth no lower than before, would
    repeat forever. This always points at a broken catalog, never at
    malformed input.
    """


class ModeStackLexer:
    """Tokenizer driven by a validated ModeTable.

    The table is validated once on construction. Instances hold no per-call
    state, so one lexer can serve concurrent calls from several threads.

    Args:
        table: Modes and their ordered candidate kinds.
        config: Runtime options; defaults to ``LexerConfig()``.

    Raises:
        DefinitionError: If the table fails validation.
    """

    def __init__(self, table: ModeTable, config: LexerConfig | None = None) -> None:
        validate(table)
        self._table = table
        self._config = config or DEFAULT_CONFIG

    @property
    def table(self) -> ModeTable:
        return self._table

    @property
    def config(self) -> LexerConfig:
        return self._config

    def tokenize(self, text: str) -> LexResult:
        """Split ``text`` into tokens.

        Args:
            text: The complete input.

        Returns:
            The tokens collected and every lexical error found. The call
            always returns, also for malformed input.

        Raises:
            LexerInvariantError: If the table lets the scanner loop without progress.
        """
        result = _Scanner(self._table, self._config, text).run()
        logger.debug(
            "Tokenized %d characters into %d tokens with %d errors",
            len(text),
            len(result.tokens),
            len(result.errors),
        )
        return result


# ################
# Implementation
# ################


@dataclass(frozen=True)
class _Frame:
    """One entry of the mode stack: the mode and where it was entered."""

    mode: str
    offset: int


class _Scanner:
    """Per-call scanning state."""

    def __init__(self, table: ModeTable, config: LexerConfig, text: str) -> None:
        self._table = table
        self._text = text
        self._recovery = config.recovery
        self._track = config.track_positions
        self._pos = 0
        self._line = 1
        self._column = 1
        self._stack: list[_Frame] = [_Frame(table.default_mode, 0)]
        self._tokens: list[Token] = []
        self._errors: list[LexicalError] = []
        # Top mode -> lowest stack depth seen at the current offset through zero-width steps.
        self._visits: dict[str, int] = {}

    def run(self) -> LexResult:
        """Scan until the input is consumed or scanning has to stop."""
        length = len(self._text)
        while self._pos < length:
            mode = self._table[self._stack[-1].mode]
            kind, size = self._match(mode)
            if kind is None:
                if not self._recover(mode):
                    break
            elif not self._commit(mode, kind, size):
                break

        if self._pos >= length and len(self._stack) > 1:
            opened = self._stack[1]
            self._error(
                f"unterminated construct: {opened.mode} opened at offset {opened.offset} "
                f"is still open at end of input (depth {len(self._stack)})",
                length=0,
            )
        return LexResult(tokens=tuple(self._tokens), errors=tuple(self._errors), depth=len(self._stack))

    # ------------------------------------------------------------------
    # Matching and committing
    # ------------------------------------------------------------------

    def _match(self, mode: Mode) -> tuple[TokenKind | None, int]:
        """Return the first kind of ``mode`` matching at the offset, with its length."""
        for kind in mode.kinds:
            size = kind.pattern.match(self._text, self._pos)
            if size is not None:
                return kind, size
        return None, 0

    def _commit(self, mode: Mode, kind: TokenKind, size: int) -> bool:
        """Apply a match. Returns False if scanning has to stop."""
        if kind.pop_mode and len(self._stack) == 1:
            self._error(f"stack underflow: {kind.name} tried to leave the base mode {mode.name}", length=size)
            return False

        depth = len(self._stack)
        start = self._pos
        image = self._text[start : start + size]
        if kind.emits:
            line, column = self._position()
            self._tokens.append(Token(kind.name, image, start, line, column))
        self._advance(image, kind.line_breaks)

        if kind.pop_mode:
            self._stack.pop()
        if kind.push_mode is not None:
            self._stack.append(_Frame(kind.push_mode, start))

        if size:
            self._visits.clear()
        else:
            self._check_progress(kind, mode.name, depth)
        return True

    def _check_progress(self, kind: TokenKind, mode_name: str, mode_depth: int) -> None:
        """Fail if a zero-width step brings back a mode at no lower depth than before.

        The next match depends only on the top mode and the offset, so a mode
        seen again here without the stack having shrunk below its earlier
        depth repeats the same steps forever.
        """
        if not self._visits:
            self._visits[mode_name] = mode_depth
        top = self._stack[-1].mode
        depth = len(self._stack)
        seen = self._visits.get(top)
        if seen is not None and depth >= seen:
            raise LexerInvariantError(
                f"No progress at offset {self._pos}: zero-width token {kind.name} "
                f"returns to mode {top} at depth {depth}, already visited here at depth {seen}"
            )
        self._visits[top] = depth

    def _recover(self, mode: Mode) -> bool:
        """Handle an offset where nothing matches. Returns False if scanning has to stop."""
        message = f"no viable token in mode {mode.name}"
        if self._recovery == "abort":
            self._error(message, length=1)
            return False

        last = self._errors[-1] if self._errors else None
        if last is not None and last.message == message and last.offset + last.length == self._pos:
            self._errors[-1] = dataclasses.replace(last, length=last.length + 1)
        else:
            self._error(message, length=1)
        self._advance(self._text[self._pos], True)
        self._visits.clear()
        return True

    # ------------------------------------------------------------------
    # Position tracking helpers
    # ------------------------------------------------------------------

    def _position(self) -> tuple[int | None, int | None]:
        if not self._track:
            return None, None
        return self._line, self._column

    def _advance(self, image: str, line_breaks: bool) -> None:
        """Move past ``image``, updating line and column when tracked."""
        self._pos += len(image)
        if not self._track:
            return
        if line_breaks and "\n" in image:
            self._line += image.count("\n")
            self._column = len(image) - image.rfind("\n")
        else:
            self._column += len(image)

    def _error(self, message: str, length: int) -> None:
        line, column = self._position()
        self._errors.append(LexicalError(message, self._pos, length, line, column))
