"""Infrastructure layer — filesystem, process and format integration.

Every raw OS or library exception must be caught here and re-raised as
a :class:`~lecoffre.exceptions.LecoffreError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the command handlers.
"""

from lecoffre.infra.dotenv_parser import parse_dotenv
from lecoffre.infra.json_storage import JsonStorage, get_storage
from lecoffre.infra.shell import (
    SUPPORTED_SHELLS,
    ShellName,
    detect_shell,
    format_unset_variables,
    format_variables,
)

__all__: list[str] = [
    "SUPPORTED_SHELLS",
    "JsonStorage",
    "ShellName",
    "detect_shell",
    "format_unset_variables",
    "format_variables",
    "get_storage",
    "parse_dotenv",
]
