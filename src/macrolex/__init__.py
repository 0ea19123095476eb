# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""MacroLex: a mode stack lexer for ``{{macro}}`` templates in plain text.

Example:
    >>> from macrolex import tokenize
    >>> [token.kind for token in tokenize("Hi {{user}}").tokens]
    ['Plaintext', 'MacroStart', 'MacroIdentifier', 'MacroEnd']
"""

from macrolex.lexer.catalog import DefinitionError, TokenCatalog, TokenKind
from macrolex.lexer.engine import LexerInvariantError, LexicalError, LexResult, ModeStackLexer, Token
from macrolex.macros import MacroLexer, tokenize

__all__ = [
    "DefinitionError",
    "LexResult",
    "LexerInvariantError",
    "LexicalError",
    "MacroLexer",
    "ModeStackLexer",
    "Token",
    "TokenCatalog",
    "TokenKind",
    "tokenize",
]
