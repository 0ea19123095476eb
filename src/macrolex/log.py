# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Namespaced logging helpers for MacroLex.

Example:
    >>> from macrolex.log import get_logger
    >>> logger = get_logger("lexer.engine")
    >>> logger.name
    'macrolex.lexer.engine'
"""

from __future__ import annotations

import logging

# ###############
# Public Interface
# ###############

ROOT_LOGGER_NAME = "macrolex"


def get_logger(name: str) -> logging.Logger:
    """Return a standard library logger below the ``macrolex`` namespace.

    Args:
        name: Logger name, typically ``__name__``.

    Returns:
        A ``logging.Logger`` whose name starts with ``macrolex.``.
    """
    if not (name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}.")):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the ``macrolex`` logger.

    Calling this more than once does not add duplicate handlers.

    Args:
        verbose: Log at DEBUG level when True, WARNING otherwise.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
