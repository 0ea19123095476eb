# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Definition-time checks for mode tables."""

from macrolex.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_mode_table,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "check_mode_table",
    "validate",
]
