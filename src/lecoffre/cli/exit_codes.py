"""Process exit codes returned by :func:`lecoffre.cli.app.main` and ``cli()``.

Shell wrappers such as ``eval "$(lecoffre load)"`` only see these
numbers, so every exit path goes through one of them.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command ran, or help/version was printed."""

GENERAL_ERROR: int = 1
"""Rejected options or arguments, an unknown command, or a LecoffreError."""

UNEXPECTED_ERROR: int = 2
"""A defect: some other exception reached the ``cli()`` boundary."""

KEYBOARD_INTERRUPT: int = 130
"""Ctrl+C (128 + SIGINT)."""
