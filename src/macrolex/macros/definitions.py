# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token kinds and modes of the ``{{macro}}`` template language.

Plain text is emitted as-is until ``{{`` opens a macro. Inside a macro, flags
and exactly one macro identifier may appear; the identifier must be followed
by whitespace, a colon separator, an output modifier ``|`` or the closing
``}}``. Arguments are scanned until nothing argument-like matches, at which
point the argument mode is left without consuming input.
"""

import re

from macrolex.lexer.catalog import TokenCatalog
from macrolex.lexer.modes import ModeTable, build_mode_table
from macrolex.lexer.patterns import always, regex

# ###############
# Public Interface
# ###############

PLAINTEXT_MODE = "plaintext_mode"
MACRO_DEF_MODE = "macro_def_mode"
MACRO_IDENTIFIER_END_MODE = "macro_identifier_end"
MACRO_ARGS_MODE = "macro_args_mode"


def build_macro_catalog() -> TokenCatalog:
    """Define every token kind of the macro language in a fresh catalog."""
    catalog = TokenCatalog()

    # Everything up to the next opening braces, or to the end of the input.
    catalog.define("Plaintext", regex(r"(.+?)(?=\{\{)|(.+)", re.DOTALL), line_breaks=True)

    catalog.define("MacroStart", r"\{\{", push_mode=MACRO_DEF_MODE)
    catalog.define("MacroFlag", r"[!?#~/.$]")
    # Identifiers are ASCII only. Unlike the argument Identifier, the macro name
    # moves on to the boundary check.
    catalog.define("MacroIdentifier", regex(r"[a-zA-Z][\w-]*", re.ASCII), push_mode=MACRO_IDENTIFIER_END_MODE)
    catalog.define(
        "MacroEndOfIdentifier",
        regex(r"(?:\s+|(?=:{1,2})|(?=[|}]))"),
        push_mode=MACRO_ARGS_MODE,
        pop_mode=True,
        line_breaks=True,
        emits=False,
    )
    catalog.define("MacroBeforeEnd", r"(?=\}\})", pop_mode=True, emits=False)
    catalog.define("MacroEnd", r"\}\}", pop_mode=True)

    catalog.define("DoubleColon", r"::")
    catalog.define("Colon", r":")
    catalog.define("Equals", r"=")
    catalog.define("Quote", r'"')

    catalog.define("Identifier", regex(r"[a-zA-Z][\w-]*", re.ASCII))
    catalog.define("WhiteSpace", r"\s+", line_breaks=True, emits=False)

    # Single characters, so that known tokens can match again right after.
    catalog.define("Unknown", r"[^{}]", line_breaks=True)

    # Leaves modes without a terminating token. Must stay last in its mode.
    catalog.define("ModePopper", always(), pop_mode=True, emits=False)
    return catalog


def build_macro_mode_table(catalog: TokenCatalog | None = None) -> ModeTable:
    """Build the mode table of the macro language.

    Args:
        catalog: Catalog from ``build_macro_catalog``; a new one is built if omitted.

    Returns:
        The unvalidated ModeTable with ``plaintext_mode`` as default.
    """
    if catalog is None:
        catalog = build_macro_catalog()

    modes = {
        PLAINTEXT_MODE: [
            "MacroStart",
            "Plaintext",
        ],
        MACRO_DEF_MODE: [
            "MacroEnd",
            "MacroFlag",
            # Whitespace between flags or before the identifier
            "WhiteSpace",
            "MacroIdentifier",
        ],
        MACRO_IDENTIFIER_END_MODE: [
            "MacroBeforeEnd",
            "MacroEndOfIdentifier",
        ],
        MACRO_ARGS_MODE: [
            # Nested macros
            "MacroStart",
            "DoubleColon",
            "Colon",
            "Equals",
            "Quote",
            "Identifier",
            "WhiteSpace",
            "Unknown",
            "ModePopper",
        ],
    }
    return build_mode_table(catalog, modes, default_mode=PLAINTEXT_MODE)
