# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``{{macro}}`` template language: token kinds, modes and lexer."""

from macrolex.macros.definitions import (
    MACRO_ARGS_MODE,
    MACRO_DEF_MODE,
    MACRO_IDENTIFIER_END_MODE,
    PLAINTEXT_MODE,
    build_macro_catalog,
    build_macro_mode_table,
)
from macrolex.macros.lexer import MacroLexer, tokenize

__all__ = [
    "MACRO_ARGS_MODE",
    "MACRO_DEF_MODE",
    "MACRO_IDENTIFIER_END_MODE",
    "PLAINTEXT_MODE",
    "MacroLexer",
    "build_macro_catalog",
    "build_macro_mode_table",
    "tokenize",
]
