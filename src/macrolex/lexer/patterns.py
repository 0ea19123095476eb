# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Anchored matchers used by token kinds.

A pattern is a function from ``(text, offset)`` to the length of the match
starting exactly at ``offset``, or ``None`` when it does not match. Lengths
of zero are legal and are how lookahead-only and fallback kinds work.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############

MatchFunction = Callable[[str, int], int | None]


@dataclass(frozen=True)
class Pattern:
    """An immutable, anchored matcher.

    Attributes:
        source: Human-readable description (the regex text for regex patterns).
        match: Returns the match length at the offset, or None.
        unconditional: True only for patterns that match everywhere with zero width.
    """

    source: str
    match: MatchFunction = field(compare=False, repr=False)
    unconditional: bool = False


def regex(expression: str | re.Pattern[str], flags: int = 0) -> Pattern:
    """Build a pattern from a regular expression.

    Matching uses ``re.Pattern.match`` at the current offset, so the
    expression is implicitly anchored there; lookahead such as ``(?=\\}\\})``
    can still inspect the text after the offset.

    Args:
        expression: Regex source text or an already compiled pattern.
        flags: ``re`` flags, only allowed with a source string.

    Returns:
        The compiled Pattern.
    """
    if isinstance(expression, re.Pattern):
        if flags:
            raise ValueError("flags cannot be combined with a compiled expression")
        compiled = expression
    else:
        compiled = re.compile(expression, flags)

    def _match(text: str, offset: int) -> int | None:
        found = compiled.match(text, offset)
        if found is None:
            return None
        return found.end() - offset

    source = compiled.pattern
    if compiled.flags & re.DOTALL:
        source = f"(?s){source}"
    if compiled.flags & re.ASCII:
        source = f"(?a){source}"
    return Pattern(source=source, match=_match)


def predicate(test: Callable[[str, int], bool], name: str | None = None) -> Pattern:
    """Build a zero-width pattern from a boolean test.

    Args:
        test: Called with ``(text, offset)``; True means "matches here".
        name: Description used in messages; defaults to the function name.

    Returns:
        A Pattern whose matches always have length zero.
    """

    def _match(text: str, offset: int) -> int | None:
        return 0 if test(text, offset) else None

    return Pattern(source=f"<{name or getattr(test, '__name__', 'predicate')}>", match=_match)


def always() -> Pattern:
    """Return the unconditional zero-width pattern used by fallback kinds."""
    return _ALWAYS


def as_pattern(value: Pattern | str | re.Pattern[str]) -> Pattern:
    """Coerce a Pattern, regex source string, or compiled regex into a Pattern."""
    if isinstance(value, Pattern):
        return value
    if isinstance(value, (str, re.Pattern)):
        return regex(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a token pattern")


# ################
# Implementation
# ################


def _match_empty(text: str, offset: int) -> int | None:
    return 0


_ALWAYS = Pattern(source="<always>", match=_match_empty, unconditional=True)
