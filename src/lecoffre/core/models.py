"""Declaration and result models for the command framework.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  Declarations are pure data: building
them performs no parsing and no validation.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from lecoffre.core.schema import Schema

Handler = Callable[..., "Awaitable[None] | None"]
"""``(options, *arguments)``; may be a coroutine function."""


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ArgumentSpec:
    """One positional parameter.  Its index in the command is its binding order."""

    schema: Schema
    """Validator for the raw token."""

    description: str
    """One-line help text."""

    placeholder: str
    """Label shown in usage lines and error messages (``<placeholder>``)."""


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """A named flag such as ``--project``/``-p``."""

    name: str
    """Canonical long-flag name, typed by the user as ``--name``."""

    schema: Schema
    """Validator for the raw flag value."""

    description: str
    """One-line help text."""

    aliases: tuple[str, ...] = ()
    """Short-flag equivalents, without the leading dash."""

    placeholder: str | None = None
    """Value label in help; falls back to :attr:`name`."""

    @property
    def flags(self) -> tuple[str, ...]:
        """Every spelling that resolves to this option, canonical first."""
        return (self.name, *self.aliases)


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """A complete command declaration.

    The keys of :attr:`options` are binding names (what the handler
    receives) and may differ from each option's canonical flag name.
    """

    description: str
    handler: Handler
    options: Mapping[str, OptionSpec] = field(default_factory=dict)
    arguments: tuple[ArgumentSpec, ...] = ()


# ---------------------------------------------------------------------------
# Parse results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BoundCall:
    """Validated options and arguments, ready to hand to a handler."""

    options: dict[str, Any]
    arguments: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """A single rejected field."""

    field: Literal["option", "argument"]
    identifier: str
    """``--<name>`` for options, ``<placeholder>`` for arguments."""

    message: str
    """Issue text, verbatim from the schema engine."""

    @property
    def text(self) -> str:
        """User-facing one-line rendering."""
        if self.field == "option":
            return f'option "{self.identifier}": {self.message}'
        return f"argument {self.identifier}: {self.message}"


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def define_argument(*, schema: Schema, description: str, placeholder: str) -> ArgumentSpec:
    return ArgumentSpec(schema=schema, description=description, placeholder=placeholder)


def define_option(
    *,
    name: str,
    schema: Schema,
    description: str,
    aliases: Iterable[str] = (),
    placeholder: str | None = None,
) -> OptionSpec:
    return OptionSpec(
        name=name,
        schema=schema,
        description=description,
        aliases=tuple(aliases),
        placeholder=placeholder,
    )


def define_command(
    *,
    description: str,
    handler: Handler,
    options: Mapping[str, OptionSpec] | None = None,
    arguments: Sequence[ArgumentSpec] = (),
) -> CommandSpec:
    """Bundle a handler with its option and argument declarations.

    Nothing is checked here; flag collisions are reported when the
    command is added to a :class:`~lecoffre.core.registry.CommandRegistry`.
    """
    return CommandSpec(
        description=description,
        handler=handler,
        options=MappingProxyType(dict(options or {})),
        arguments=tuple(arguments),
    )
