# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token kind definitions and the registry that owns them.

Every lexical unit is defined exactly once through a TokenCatalog. The
catalog is the single source of truth for which mode, if any, a kind enters:
a kind's push target cannot differ between the modes that reference it.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

from macrolex.lexer.patterns import Pattern, as_pattern

# ###############
# Public Interface
# ###############


class DefinitionError(Exception):
    """Raised when token kinds or modes are defined inconsistently.

    Definition errors are detected while the catalog and mode table are
    built, never while tokenizing input.
    """


@dataclass(frozen=True)
class TokenKind:
    """A named lexical pattern plus its mode-transition behavior.

    Attributes:
        name: Unique name within the owning catalog.
        pattern: Anchored matcher tried at the current offset.
        push_mode: Mode entered after a match, if any.
        pop_mode: True if the current mode is left after a match.
        line_breaks: True if a match may contain newlines.
        emits: False for kinds that are consumed but never appear in the output.
    """

    name: str
    pattern: Pattern
    push_mode: str | None = None
    pop_mode: bool = False
    line_breaks: bool = False
    emits: bool = True

    @property
    def transitions(self) -> bool:
        """Return True if a match of this kind changes the mode stack."""
        return self.pop_mode or self.push_mode is not None

    def __repr__(self) -> str:
        return f"TokenKind({self.name})"


class TokenCatalog:
    """Registry of token kinds, built once and frozen before use.

    Example:
        >>> catalog = TokenCatalog()
        >>> start = catalog.define("Start", r"\\{\\{", push_mode="macro")
        >>> catalog["Start"] is start
        True
    """

    def __init__(self) -> None:
        self._kinds: dict[str, TokenKind] = {}
        self._frozen = False

    def define(
        self,
        name: str,
        pattern: Pattern | str | re.Pattern[str],
        *,
        push_mode: str | None = None,
        pop_mode: bool = False,
        line_breaks: bool = False,
        emits: bool = True,
    ) -> TokenKind:
        """Register a token kind, or return the existing identical one.

        Args:
            name: Unique kind name.
            pattern: A Pattern, regex source text, or compiled regex.
            push_mode: Mode to enter after a match.
            pop_mode: Leave the current mode after a match.
            line_breaks: The pattern may match across lines.
            emits: Include matches in the token output.

        Returns:
            The registered TokenKind.

        Raises:
            DefinitionError: If the catalog is frozen, or if ``name`` is already
                defined with a different push target or other attributes.
        """
        if self._frozen:
            raise DefinitionError(f"Cannot define token {name}: the catalog is frozen")
        if not name:
            raise DefinitionError("Token names must not be empty")

        kind = TokenKind(
            name=name,
            pattern=as_pattern(pattern),
            push_mode=push_mode,
            pop_mode=pop_mode,
            line_breaks=line_breaks,
            emits=emits,
        )
        existing = self._kinds.get(name)
        if existing is None:
            self._kinds[name] = kind
            return kind
        if existing.push_mode != kind.push_mode:
            raise DefinitionError(
                f"Token {name} already is set to enter mode {existing.push_mode!r}. "
                f"Token definitions are global, so {name} cannot also lead to {kind.push_mode!r}."
            )
        if existing != kind:
            raise DefinitionError(f"Token {name} is already defined with a different pattern or flags")
        return existing

    def get(self, name: str) -> TokenKind:
        """Return the kind registered under ``name``.

        Raises:
            DefinitionError: If no such kind was defined.
        """
        try:
            return self._kinds[name]
        except KeyError:
            raise DefinitionError(f"Reference to undefined token kind: {name}") from None

    def freeze(self) -> None:
        """End the build phase; later calls to define() fail."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def kinds(self) -> tuple[TokenKind, ...]:
        """Return all kinds in definition order."""
        return tuple(self._kinds.values())

    def owns(self, kind: TokenKind) -> bool:
        """Return True if ``kind`` is the very object registered under its name."""
        return self._kinds.get(kind.name) is kind

    def __getitem__(self, name: str) -> TokenKind:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[TokenKind]:
        return iter(self.kinds())

    def __len__(self) -> int:
        return len(self._kinds)
