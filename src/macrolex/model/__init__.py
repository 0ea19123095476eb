# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serializable models of lexer output."""

from macrolex.model.snapshot import ErrorSnapshot, LexSnapshot, TokenSnapshot, snapshot_result

__all__ = [
    "ErrorSnapshot",
    "LexSnapshot",
    "TokenSnapshot",
    "snapshot_result",
]
