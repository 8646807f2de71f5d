"""Validate parsed tokens against a :class:`CommandSpec` and bind them.

Every option and every argument is validated exactly once per parse,
even after earlier failures.  Failures are collected and raised
together as one :class:`~lecoffre.exceptions.CommandValidationError`;
options' failures come first, each group in declaration order.

Exceptions other than :class:`~lecoffre.exceptions.SchemaError`
raised inside a schema are programming defects and propagate as-is.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from lecoffre.core.models import BoundCall, CommandSpec, ValidationFailure
from lecoffre.core.schema import MISSING
from lecoffre.core.tokens import parse_tokens
from lecoffre.exceptions import CommandValidationError, SchemaError

logger = logging.getLogger(__name__)


def parse_command(tokens: Sequence[str], command: CommandSpec) -> BoundCall:
    """Parse and validate *tokens* for *command*.

    Raises
    ------
    CommandValidationError
        When at least one option or argument was rejected.  No partial
        :class:`BoundCall` is produced in that case.
    """
    parsed = parse_tokens(tokens, command.options.values())
    failures: list[ValidationFailure] = []

    options: dict[str, Any] = {}
    for key, option in command.options.items():
        raw = parsed.flags.get(option.name, MISSING)
        try:
            options[key] = option.schema.validate(raw)
        except SchemaError as exc:
            failures.extend(
                ValidationFailure("option", f"--{option.name}", issue) for issue in exc.issues
            )

    arguments: list[Any] = []
    for index, argument in enumerate(command.arguments):
        raw = parsed.positionals[index] if index < len(parsed.positionals) else MISSING
        try:
            arguments.append(argument.schema.validate(raw))
        except SchemaError as exc:
            failures.extend(
                ValidationFailure("argument", f"<{argument.placeholder}>", issue)
                for issue in exc.issues
            )

    extra = parsed.positionals[len(command.arguments):]
    if extra:
        logger.debug("Ignoring %d extra positional(s): %r", len(extra), extra)

    if failures:
        raise CommandValidationError(failures)

    return BoundCall(options=options, arguments=tuple(arguments))
