# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the MacroLex command-line interface."""

import argparse
import sys
from pathlib import Path

from yachalk import chalk

from macrolex.config import CONFIG_FILE_NAME, DEFAULT_CONFIG, ConfigError, LexerConfig, load_lexer_config
from macrolex.lexer.engine import LexResult
from macrolex.log import configure_logging
from macrolex.macros import MacroLexer
from macrolex.model.snapshot import snapshot_result
from macrolex.validation.checks import check_mode_table

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the MacroLex CLI."""
    parser = argparse.ArgumentParser(
        prog="macrolex",
        description="MacroLex: tokenize {{macro}} templates",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # tokenize subcommand
    tokenize_parser = subparsers.add_parser(
        "tokenize",
        help="Print the tokens of a template",
        description="Tokenize a template file and print one token per line.",
    )
    tokenize_parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="Template file to tokenize, or '-' for standard input (default: '-')",
    )
    tokenize_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as a JSON snapshot",
    )
    tokenize_parser.add_argument(
        "--config",
        default=None,
        help=f"Lexer configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )

    # modes subcommand
    subparsers.add_parser(
        "modes",
        help="Print the lexer modes and their token kinds",
        description="Print every mode with its token kinds in priority order.",
    )

    args = parser.parse_args()
    configure_logging(args.verbose)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "tokenize":
        return _cmd_tokenize(args)
    if args.command == "modes":
        return _cmd_modes(args)
    return 0


def _cmd_tokenize(args: argparse.Namespace) -> int:
    """Handle the tokenize subcommand."""
    try:
        config = _load_config(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.file == "-":
        text = sys.stdin.read()
    else:
        path = Path(args.file)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
            return 2

    lexer = MacroLexer.instance() if config == DEFAULT_CONFIG else MacroLexer(config)
    result = lexer.tokenize(text)

    if args.json:
        print(snapshot_result(result).model_dump_json(indent=2))
    else:
        _print_result(result)
    return 1 if result.has_errors else 0


def _cmd_modes(args: argparse.Namespace) -> int:
    """Handle the modes subcommand."""
    table = MacroLexer.instance().table
    for mode in table:
        marker = " (default)" if mode.name == table.default_mode else ""
        print(chalk.blue(f"{mode.name}{marker}"))
        for kind in mode.kinds:
            print(f"  {chalk.cyan(f'{kind.name:<24}')} {_describe_transition(kind.push_mode, kind.pop_mode)}")

    result = check_mode_table(table)
    for warning in result.warnings:
        print(chalk.yellow(f"Warning: {warning.message}"))
    return 0


def _load_config(option: str | None) -> LexerConfig:
    """Load the config named on the command line, or the one in the current directory."""
    if option is not None:
        return load_lexer_config(Path(option))
    default_path = Path.cwd() / CONFIG_FILE_NAME
    if default_path.exists():
        return load_lexer_config(default_path)
    return DEFAULT_CONFIG


def _print_result(result: LexResult) -> None:
    """Print tokens on stdout and errors on stderr."""
    for token in result.tokens:
        position = f"{token.line}:{token.column}" if token.line is not None else str(token.offset)
        print(f"{position:>8}  {chalk.cyan(f'{token.kind:<24}')} {token.image!r}")
    for error in result.errors:
        position = f"{error.line}:{error.column}" if error.line is not None else str(error.offset)
        print(chalk.red(f"Error at {position}: {error.message}"), file=sys.stderr)


def _describe_transition(push_mode: str | None, pop_mode: bool) -> str:
    if push_mode is not None and pop_mode:
        return f"-> replaces with {push_mode}"
    if push_mode is not None:
        return f"-> enters {push_mode}"
    if pop_mode:
        return "-> leaves mode"
    return ""
