"""Core layer — the declarative command framework.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions are fully typed and deterministic.
"""

from lecoffre.core.binder import parse_command
from lecoffre.core.help_format import format_command_help, format_errors, format_global_help
from lecoffre.core.models import (
    ArgumentSpec,
    BoundCall,
    CommandSpec,
    OptionSpec,
    ValidationFailure,
    define_argument,
    define_command,
    define_option,
)
from lecoffre.core.protocols import Storage
from lecoffre.core.registry import CommandRegistry
from lecoffre.core.schema import MISSING, Schema
from lecoffre.core.schema_utils import default_value, is_boolean_flag, is_required
from lecoffre.core.tokens import ParsedTokens, parse_tokens

__all__: list[str] = [
    "MISSING",
    "ArgumentSpec",
    "BoundCall",
    "CommandRegistry",
    "CommandSpec",
    "OptionSpec",
    "ParsedTokens",
    "Schema",
    "Storage",
    "ValidationFailure",
    "default_value",
    "define_argument",
    "define_command",
    "define_option",
    "format_command_help",
    "format_errors",
    "format_global_help",
    "is_boolean_flag",
    "is_required",
    "parse_command",
    "parse_tokens",
]
