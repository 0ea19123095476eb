# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Definition-time consistency checks for mode tables.

These checks run once, before a table is first used for tokenizing, and
reject tables that cannot behave as declared.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from macrolex.lexer.catalog import DefinitionError, TokenKind
from macrolex.lexer.modes import Mode, ModeTable
from macrolex.log import get_logger

logger = get_logger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A suspicious but usable definition.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A definition that makes the mode table unusable.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of checking a mode table.

    Attributes:
        warnings: Non-fatal issues found.
        errors: Fatal issues; the table must not be used.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def check_mode_table(table: ModeTable) -> ValidationResult:
    """Run all structural checks on a mode table.

    Checks performed:

    1. **Default mode** (error): the default mode must be defined.

    2. **Empty modes** (error): every mode needs at least one candidate.

    3. **Push targets** (error): every mode a kind pushes must be defined.

    4. **Catalog membership** (error): every candidate must be the kind the
       catalog holds under its name, so that a name has exactly one push
       target everywhere it is used.

    5. **Duplicates** (error): a kind listed twice in one mode can never
       match at its second position.

    6. **Unreachable candidates** (error): nothing may follow an
       unconditional fallback, since the fallback always matches first.

    7. **Stuck fallbacks** (error): an unconditional kind that neither pushes
       nor pops would match forever without progress.

    8. **Unreachable modes** (warning): modes that cannot be entered from the
       default mode.

    9. **Unused kinds** (warning): catalog kinds no mode refers to.

    Args:
        table: The table to check.

    Returns:
        A ValidationResult with all warnings and errors found.
    """
    result = ValidationResult()

    if table.default_mode not in table:
        result.errors.append(ValidationError(f"Default mode '{table.default_mode}' is not defined"))

    for mode in table:
        _check_mode(table, mode, result)

    _check_reachable_modes(table, result)
    _check_unused_kinds(table, result)
    return result


def validate(table: ModeTable) -> None:
    """Check a mode table and fail fast on errors.

    Warnings are logged; errors are raised together.

    Raises:
        DefinitionError: If any check reports an error.
    """
    result = check_mode_table(table)
    for warning in result.warnings:
        logger.warning("%s", warning.message)
    if result.has_errors:
        details = "\n".join(f"  - {error.message}" for error in result.errors)
        raise DefinitionError(f"Invalid mode table ({len(result.errors)} errors):\n{details}")
    logger.debug("Mode table with %d modes and %d token kinds is valid", len(table), len(table.catalog))


# ################
# Implementation
# ################


def _check_mode(table: ModeTable, mode: Mode, result: ValidationResult) -> None:
    """Run the per-mode checks (2-7)."""
    if not mode.kinds:
        result.errors.append(ValidationError(f"Mode '{mode.name}' has no token kinds"))
        return

    seen: set[str] = set()
    fallback: TokenKind | None = None
    for kind in mode.kinds:
        if fallback is not None:
            result.errors.append(
                ValidationError(
                    f"Mode '{mode.name}': {kind.name} is unreachable because the "
                    f"unconditional fallback {fallback.name} is listed before it"
                )
            )
        if kind.name in seen:
            result.errors.append(ValidationError(f"Mode '{mode.name}' lists {kind.name} more than once"))
        seen.add(kind.name)

        if kind.name not in table.catalog:
            result.errors.append(
                ValidationError(f"Mode '{mode.name}' refers to undefined token kind {kind.name}")
            )
        elif not table.catalog.owns(kind):
            result.errors.append(
                ValidationError(
                    f"Mode '{mode.name}' uses a {kind.name} that differs from the catalog definition"
                )
            )

        if kind.push_mode is not None and kind.push_mode not in table:
            result.errors.append(
                ValidationError(f"Token {kind.name} enters undefined mode '{kind.push_mode}'")
            )

        if kind.pattern.unconditional:
            if not kind.transitions:
                result.errors.append(
                    ValidationError(
                        f"Mode '{mode.name}': unconditional token {kind.name} neither enters nor "
                        "leaves a mode and would never make progress"
                    )
                )
            if fallback is None:
                fallback = kind


def _check_reachable_modes(table: ModeTable, result: ValidationResult) -> None:
    """Warn about modes no chain of pushes from the default mode can enter (check 8)."""
    if table.default_mode not in table:
        return
    reachable = {table.default_mode}
    pending = [table.default_mode]
    while pending:
        mode = table[pending.pop()]
        for kind in mode.kinds:
            target = kind.push_mode
            if target is not None and target in table and target not in reachable:
                reachable.add(target)
                pending.append(target)

    for mode in table:
        if mode.name not in reachable:
            result.warnings.append(ValidationWarning(f"Mode '{mode.name}' can never be entered"))


def _check_unused_kinds(table: ModeTable, result: ValidationResult) -> None:
    """Warn about catalog kinds that no mode lists (check 9)."""
    used = {kind.name for mode in table for kind in mode.kinds}
    for kind in table.catalog:
        if kind.name not in used:
            result.warnings.append(ValidationWarning(f"Token kind {kind.name} is not used by any mode"))
