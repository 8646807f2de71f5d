"""CLI application entry point and command routing for lecoffre.

This module is the **sole error boundary** for the entire application.
It catches :class:`~lecoffre.exceptions.LecoffreError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here. Argument handling is delegated to the
  core command framework, the work itself to the command handlers.
* Global flags (``--help``, ``--version``) are declared and parsed with
  the same framework as every command.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import sys
from collections.abc import Mapping, Sequence

from pydantic import ValidationError

from lecoffre.cli import exit_codes
from lecoffre.cli.console import console, get_rich_console, output
from lecoffre.config import Settings, get_settings
from lecoffre.core import schema
from lecoffre.core.binder import parse_command
from lecoffre.core.help_format import format_command_help, format_errors, format_global_help
from lecoffre.core.models import CommandSpec, define_option
from lecoffre.core.registry import CommandRegistry
from lecoffre.core.tokens import parse_tokens
from lecoffre.exceptions import (
    CommandValidationError,
    ConfigurationError,
    LecoffreError,
    UnknownCommandError,
)
from lecoffre.version import __version__

TOOL_NAME = "lecoffre"

logger = logging.getLogger(__name__)

GLOBAL_OPTIONS = {
    "help": define_option(
        name="help",
        schema=schema.boolean().default(False),
        description="Show help for the tool or a command",
        aliases=["h"],
    ),
    "version": define_option(
        name="version",
        schema=schema.boolean().default(False),
        description="Print the version and exit",
        aliases=["V"],
    ),
}


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as exc:
        problems = "; ".join(
            f"LECOFFRE_{'.'.join(str(part) for part in error['loc']).upper()}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc


def _configure_logging(level: str) -> None:
    """Route the ``lecoffre`` logger tree to stderr at *level*."""
    package_logger = logging.getLogger(TOOL_NAME)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)

    handler: logging.Handler
    try:
        from rich.logging import RichHandler

        handler = RichHandler(console=get_rich_console(), show_path=False)
    except (ModuleNotFoundError, LecoffreError):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _command_tokens(tokens: Sequence[str], command_name: str) -> list[str]:
    """Tokens following the command name."""
    return list(tokens[tokens.index(command_name) + 1:])


def _run_command(command_name: str, command: CommandSpec, tokens: Sequence[str]) -> int:
    try:
        bound = parse_command(tokens, command)
    except CommandValidationError as exc:
        logger.debug("Rejected %d field(s) for %r", len(exc.failures), command_name)
        console.help(format_errors(exc.errors) + "\n")
        console.help(format_command_help(TOOL_NAME, command_name, command))
        return exit_codes.GENERAL_ERROR

    logger.debug("Dispatching %r with options=%r arguments=%r", command_name, bound.options, bound.arguments)
    result = command.handler(bound.options, *bound.arguments)
    if inspect.iscoroutine(result):
        asyncio.run(result)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    registry: Mapping[str, CommandSpec] | None = None,
) -> int:
    """Run the lecoffre CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    registry:
        Commands to dispatch on.  Defaults to the built-in commands.

    Returns
    -------
    int
        OS process exit code.
    """
    tokens = list(sys.argv[1:] if argv is None else argv)
    if registry is None:
        from lecoffre.cli.commands import build_registry

        registry = build_registry()
    elif not isinstance(registry, CommandRegistry):
        registry = CommandRegistry(registry)

    _configure_logging(_load_settings().log_level)

    initial = parse_tokens(tokens, GLOBAL_OPTIONS.values(), undeclared_take_values=False)
    if initial.flags.get("version") is True:
        output.plain(f"{TOOL_NAME} {__version__}")
        return exit_codes.SUCCESS

    if not initial.positionals:
        output.help(format_global_help(TOOL_NAME, registry))
        return exit_codes.SUCCESS

    command_name = initial.positionals[0]
    try:
        command = registry.resolve(command_name)
    except UnknownCommandError:
        console.plain(f'Unknown command "{command_name}" for "{TOOL_NAME}"\n')
        console.help(format_global_help(TOOL_NAME, registry))
        return exit_codes.GENERAL_ERROR

    if initial.flags.get("help") is True:
        output.help(format_command_help(TOOL_NAME, command_name, command))
        return exit_codes.SUCCESS

    return _run_command(command_name, command, _command_tokens(tokens, command_name))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except LecoffreError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
