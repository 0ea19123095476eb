# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generic building blocks of the mode stack lexer.

The engine lives in ``macrolex.lexer.engine``; it validates tables on
construction and is therefore imported separately from these definitions.
"""

from macrolex.lexer.catalog import DefinitionError, TokenCatalog, TokenKind
from macrolex.lexer.modes import Mode, ModeTable, build_mode_table
from macrolex.lexer.patterns import Pattern, always, predicate, regex

__all__ = [
    "DefinitionError",
    "Mode",
    "ModeTable",
    "Pattern",
    "TokenCatalog",
    "TokenKind",
    "always",
    "build_mode_table",
    "predicate",
    "regex",
]
