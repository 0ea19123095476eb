# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Ready-to-use lexer for the ``{{macro}}`` template language."""

from __future__ import annotations

from typing import ClassVar

from macrolex.config import LexerConfig
from macrolex.lexer.engine import LexResult, ModeStackLexer
from macrolex.macros.definitions import build_macro_mode_table
from macrolex.model.snapshot import LexSnapshot, snapshot_result

# ###############
# Public Interface
# ###############


class MacroLexer(ModeStackLexer):
    """Mode stack lexer preloaded with the macro language definitions.

    Most callers use the shared instance from ``MacroLexer.instance()``,
    which is built and validated once at import. Separate instances are only
    needed for a non-default LexerConfig.
    """

    _instance: ClassVar[MacroLexer | None] = None

    def __init__(self, config: LexerConfig | None = None) -> None:
        super().__init__(build_macro_mode_table(), config)

    @classmethod
    def instance(cls) -> MacroLexer:
        """Return the process-wide lexer with the default configuration."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def test(self, text: str) -> LexSnapshot:
        """Tokenize ``text`` and return a serializable snapshot of the result."""
        return snapshot_result(self.tokenize(text))


def tokenize(text: str) -> LexResult:
    """Tokenize ``text`` with the shared MacroLexer."""
    return MacroLexer.instance().tokenize(text)


# ################
# Implementation
# ################

MacroLexer.instance()
