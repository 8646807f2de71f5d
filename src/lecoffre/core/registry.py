"""Immutable command-name → :class:`CommandSpec` table."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from lecoffre.core.models import CommandSpec
from lecoffre.exceptions import CommandDefinitionError, UnknownCommandError


def check_flag_collisions(command_name: str, command: CommandSpec) -> None:
    """Raise :class:`CommandDefinitionError` if two options share a spelling.

    Canonical names and aliases live in one namespace: ``-p`` and
    ``--p`` are looked up by the same key.
    """
    owners: dict[str, str] = {}
    for key, option in command.options.items():
        for flag in option.flags:
            if flag in owners:
                raise CommandDefinitionError(
                    f"Command {command_name!r}: flag {flag!r} of option {key!r} "
                    f"is already used by option {owners[flag]!r}",
                )
            owners[flag] = key


class CommandRegistry(Mapping[str, CommandSpec]):
    """Insertion-ordered, read-only registry of commands.

    Built once at startup and passed explicitly to the CLI entry point.
    Every command is checked for flag collisions on construction.
    """

    __slots__ = ("_commands",)

    def __init__(self, commands: Mapping[str, CommandSpec] | None = None) -> None:
        table = dict(commands or {})
        for name, command in table.items():
            check_flag_collisions(name, command)
        self._commands: Mapping[str, CommandSpec] = MappingProxyType(table)

    def __getitem__(self, name: str) -> CommandSpec:
        return self._commands[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._commands)!r})"

    def resolve(self, name: str) -> CommandSpec:
        """Return the command called *name* or raise :class:`UnknownCommandError`."""
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(f"Unknown command {name!r}") from None
