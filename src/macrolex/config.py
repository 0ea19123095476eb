# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer configuration model and YAML loader."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".macrolex.yaml"

RecoveryPolicy = Literal["skip", "abort"]


class ConfigError(Exception):
    """Raised when a lexer configuration file cannot be read or is invalid."""


class LexerConfig(BaseModel):
    """Runtime options of the mode stack lexer.

    Attributes:
        recovery: What to do when no token kind matches. ``skip`` drops one
            character and continues; ``abort`` stops and returns the tokens
            collected so far.
        track_positions: Attach 1-based line and column numbers to tokens
            and errors.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    recovery: RecoveryPolicy = "skip"
    track_positions: bool = Field(alias="track-positions", default=True)


DEFAULT_CONFIG = LexerConfig()


def load_lexer_config(path: Path) -> LexerConfig:
    """Load and validate a lexer configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A validated LexerConfig.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML, or
            does not match the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Lexer config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read lexer config file '{path}': {exc}") from exc

    return parse_lexer_config(raw, source_label=str(path))


def parse_lexer_config(text: str, source_label: str = "<string>") -> LexerConfig:
    """Parse YAML text into a LexerConfig.

    Args:
        text: Raw YAML content.
        source_label: Label used in error messages (e.g. the file path).

    Raises:
        ConfigError: If the YAML is invalid or does not match the schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: lexer config must be a YAML mapping")

    try:
        return LexerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid lexer config {source_label}: {exc}") from exc
