"""Plain-text help, usage and error rendering.

Everything shown here is derived from the declarations through
:mod:`lecoffre.core.schema_utils`; no annotation is ever spelled out by
hand.  Output is unstyled text so it can be compared exactly; the CLI
layer decides where it goes.

Layout conventions
------------------
* Section headers are upper-case and preceded by a blank line.
* Rows are indented two spaces, the left column of each block is
  padded to that block's longest entry, then a two-space gutter.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from lecoffre.core.models import ArgumentSpec, CommandSpec, OptionSpec
from lecoffre.core.schema import MISSING, Schema
from lecoffre.core.schema_utils import default_value, is_boolean_flag, is_required


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _rows(rows: Sequence[tuple[str, str]]) -> str:
    width = max(len(left) for left, _ in rows)
    return "\n".join(f"{left.ljust(width)}  {right}" for left, right in rows)


# ---------------------------------------------------------------------------
# Annotations
# ---------------------------------------------------------------------------

def _argument_description(description: str, schema: Schema) -> str:
    """Default wins over ``(optional)``; required arguments stay bare."""
    default = default_value(schema)
    if default is not MISSING:
        return f"{description} (default: {_render_value(default)})"
    return description if is_required(schema) else f"{description} (optional)"


def _option_description(description: str, schema: Schema) -> str:
    """``(required)`` wins over everything, then ``(default: …)``."""
    if is_required(schema):
        return f"{description} (required)"
    default = default_value(schema)
    if default is MISSING:
        return description
    return f"{description} (default: {_render_value(default)})"


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def _usage_line(tool_name: str, command_name: str, command: CommandSpec) -> str:
    parts = [tool_name, command_name]
    parts.extend(f"<{argument.placeholder}>" for argument in command.arguments)
    parts.append("[options]")
    return "  " + " ".join(parts)


def _argument_list(arguments: Sequence[ArgumentSpec]) -> str | None:
    if not arguments:
        return None
    return _rows([
        (f"  {argument.placeholder}", _argument_description(argument.description, argument.schema))
        for argument in arguments
    ])


def _alias_prefix(option: OptionSpec) -> str:
    if not option.aliases:
        return ""
    return ", ".join(f"-{alias}" for alias in option.aliases) + ", "


def _option_list(options: Mapping[str, OptionSpec]) -> str | None:
    entries = list(options.values())
    if not entries:
        return None

    prefixes = [_alias_prefix(option) for option in entries]
    prefix_width = max(len(prefix) for prefix in prefixes)

    rows = []
    for option, prefix in zip(entries, prefixes):
        if is_boolean_flag(option.schema):
            flag = f"--{option.name}"
        else:
            flag = f"--{option.name} <{option.placeholder or option.name}>"
        rows.append((
            f"  {prefix.rjust(prefix_width)}{flag}",
            _option_description(option.description, option.schema),
        ))
    return _rows(rows)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def format_global_help(tool_name: str, commands: Mapping[str, CommandSpec]) -> str:
    """Usage line plus a COMMANDS block in registry order."""
    sections = ["USAGE", f"  {tool_name} <command> [options]"]
    if commands:
        sections.extend(["", "COMMANDS", _rows([
            (f"  {name}", command.description) for name, command in commands.items()
        ])])
    return "\n".join(sections)


def format_command_help(tool_name: str, command_name: str, command: CommandSpec) -> str:
    """Usage line, then ARGUMENTS and OPTIONS blocks when non-empty."""
    sections = ["USAGE", _usage_line(tool_name, command_name, command)]

    argument_list = _argument_list(command.arguments)
    if argument_list is not None:
        sections.extend(["", "ARGUMENTS", argument_list])

    option_list = _option_list(command.options)
    if option_list is not None:
        sections.extend(["", "OPTIONS", option_list])

    return "\n".join(sections)


def format_errors(errors: Sequence[str]) -> str:
    """ERRORS header followed by one indented line per message."""
    return "\n".join(["ERRORS", *(f"  {error}" for error in errors)])
