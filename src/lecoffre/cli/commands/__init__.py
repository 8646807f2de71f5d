"""Built-in lecoffre commands.

:func:`build_registry` assembles them, in help order, into the table
the CLI entry point dispatches on.
"""

from __future__ import annotations

from lecoffre.cli.commands.doctor import doctor_command
from lecoffre.cli.commands.import_command import import_command
from lecoffre.cli.commands.list_command import list_command
from lecoffre.cli.commands.load_command import load_command, unload_command
from lecoffre.core.registry import CommandRegistry


def build_registry() -> CommandRegistry:
    return CommandRegistry({
        "list": list_command,
        "load": load_command,
        "unload": unload_command,
        "import": import_command,
        "doctor": doctor_command,
    })


__all__: list[str] = ["build_registry"]
