# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read-only association of lexer modes to their ordered candidate kinds."""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from macrolex.lexer.catalog import DefinitionError, TokenCatalog, TokenKind

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Mode:
    """A named lexical context.

    Attributes:
        name: Unique mode name.
        kinds: Candidate kinds in priority order. The first kind that matches
            at an offset wins, regardless of match length.
    """

    name: str
    kinds: tuple[TokenKind, ...]

    def __iter__(self) -> Iterator[TokenKind]:
        return iter(self.kinds)

    def __len__(self) -> int:
        return len(self.kinds)


class ModeTable:
    """Immutable mapping of mode name to Mode, with a default mode.

    Instances are shared read-only between tokenize calls and threads.
    """

    def __init__(self, catalog: TokenCatalog, modes: Sequence[Mode], default_mode: str) -> None:
        names = [mode.name for mode in modes]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise DefinitionError(f"Duplicate mode names: {', '.join(duplicates)}")
        self._catalog = catalog
        self._modes: Mapping[str, Mode] = MappingProxyType({mode.name: mode for mode in modes})
        self._default_mode = default_mode

    @property
    def catalog(self) -> TokenCatalog:
        return self._catalog

    @property
    def default_mode(self) -> str:
        return self._default_mode

    @property
    def modes(self) -> Mapping[str, Mode]:
        return self._modes

    def __getitem__(self, name: str) -> Mode:
        return self._modes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._modes

    def __iter__(self) -> Iterator[Mode]:
        return iter(self._modes.values())

    def __len__(self) -> int:
        return len(self._modes)


def build_mode_table(
    catalog: TokenCatalog,
    modes: Mapping[str, Sequence[TokenKind | str]],
    default_mode: str,
) -> ModeTable:
    """Resolve mode definitions against a catalog and freeze both.

    Candidates may be given as TokenKind objects or as kind names. Declaration
    order within each list is preserved and is the matching priority.

    Args:
        catalog: The catalog all referenced kinds must belong to.
        modes: Mode name to ordered candidate list, in declaration order.
        default_mode: The mode at the bottom of every mode stack.

    Returns:
        The immutable ModeTable. Run ``macrolex.validation.validate`` on it
        before first use.

    Raises:
        DefinitionError: If a candidate names an undefined kind.
    """
    resolved = [Mode(name=name, kinds=tuple(_resolve(catalog, name, ref) for ref in refs)) for name, refs in modes.items()]
    catalog.freeze()
    return ModeTable(catalog, resolved, default_mode)


# ################
# Implementation
# ################


def _resolve(catalog: TokenCatalog, mode_name: str, ref: TokenKind | str) -> TokenKind:
    """Turn a candidate reference into a TokenKind."""
    if isinstance(ref, TokenKind):
        return ref
    if isinstance(ref, str):
        try:
            return catalog.get(ref)
        except DefinitionError as exc:
            raise DefinitionError(f"Mode {mode_name}: {exc}") from None
    raise DefinitionError(f"Mode {mode_name}: candidates must be token kinds or kind names, got {ref!r}")
