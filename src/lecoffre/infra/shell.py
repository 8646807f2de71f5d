"""Infrastructure: parent-shell detection and export/unset code generation.

The generated text is meant to be ``eval``-ed by the user's shell, so
every value is single-quoted and escaped for the target dialect.

Rules
-----
* Detection asks ``ps`` for the parent process name; no environment
  heuristics beyond the explicit ``LECOFFRE_SHELL`` override.
* No ``print()``: callers decide where the text goes.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Iterable, Mapping
from pathlib import PurePath
from typing import Literal, get_args

from lecoffre.exceptions import UnsupportedShellError

logger = logging.getLogger(__name__)

ShellName = Literal["bash", "zsh", "fish"]
SUPPORTED_SHELLS: tuple[str, ...] = get_args(ShellName)

_OVERRIDE_HINT = "Set LECOFFRE_SHELL to one of: " + ", ".join(SUPPORTED_SHELLS)


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def _parent_process_name() -> str:
    """Return the command name of the parent process via ``ps``."""
    try:
        completed = subprocess.run(
            ["ps", "-p", str(os.getppid()), "-o", "comm="],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise UnsupportedShellError(
            f"Cannot determine the parent shell: {exc}",
            hint=_OVERRIDE_HINT,
        ) from exc
    return completed.stdout.strip()


def detect_shell(override: str | None = None) -> ShellName:
    """Return the name of the shell lecoffre was started from.

    *override* (usually ``Settings.shell``) short-circuits detection.
    Login shells report themselves as ``-bash``; the dash is ignored.
    """
    if override is not None:
        name = override
    else:
        name = PurePath(_parent_process_name()).name.lstrip("-")
        logger.debug("Parent process reports shell %r", name)
    if name in SUPPORTED_SHELLS:
        return name  # type: ignore[return-value]
    raise UnsupportedShellError(f"Unsupported shell: {name}", hint=_OVERRIDE_HINT)


# ---------------------------------------------------------------------------
# Code generation
# ---------------------------------------------------------------------------

def _quote(value: str, shell: ShellName) -> str:
    if shell == "fish":
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    else:
        # POSIX: close the quote, emit an escaped quote, reopen.
        escaped = value.replace("'", "'\\''")
    return f"'{escaped}'"


def format_variables(shell: ShellName, variables: Mapping[str, str]) -> str:
    """Render one export statement per variable, in mapping order."""
    if shell == "fish":
        lines = [f"set -gx {key} {_quote(value, shell)}" for key, value in variables.items()]
    else:
        lines = [f"export {key}={_quote(value, shell)}" for key, value in variables.items()]
    return "\n".join(lines)


def format_unset_variables(shell: ShellName, keys: Iterable[str]) -> str:
    """Render one unset statement per key."""
    template = "set -e {}" if shell == "fish" else "unset {}"
    return "\n".join(template.format(key) for key in keys)
