"""Custom exception hierarchy for lecoffre.

All exceptions that cross layer boundaries must inherit from
:class:`LecoffreError`.  Raw OS or library exceptions (``OSError``,
``json.JSONDecodeError``, pydantic's ``ValidationError``) must NEVER
propagate beyond the layer that triggered them; they are caught and
re-raised as a typed subclass defined here.

Hierarchy
---------
LecoffreError
├── SchemaError
├── CommandValidationError
├── CommandDefinitionError
├── UnknownCommandError
├── ProjectNotFoundError
├── EnvironmentNotFoundError
├── UnsupportedShellError
├── StorageError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lecoffre.core.models import ValidationFailure


class LecoffreError(Exception):
    """Base exception for all lecoffre errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command framework -----------------------------------------------------

class SchemaError(LecoffreError):
    """Raised by a schema when a single value fails validation.

    Carries one message per underlying violation.  The binder converts
    these into :class:`~lecoffre.core.models.ValidationFailure` entries;
    they never reach the user on their own.
    """

    def __init__(self, issues: Sequence[str]) -> None:
        super().__init__("; ".join(issues))
        self.issues: tuple[str, ...] = tuple(issues)


class CommandValidationError(LecoffreError):
    """Aggregate of every validation failure from one parse attempt."""

    def __init__(self, failures: Sequence[ValidationFailure]) -> None:
        self.failures: tuple[ValidationFailure, ...] = tuple(failures)
        super().__init__("\n".join(self.errors))

    @property
    def errors(self) -> list[str]:
        """Rendered failure messages, options first, in declaration order."""
        return [failure.text for failure in self.failures]


class CommandDefinitionError(LecoffreError):
    """Raised when a command declaration is internally inconsistent."""


class UnknownCommandError(LecoffreError):
    """Raised when the requested command is not in the registry."""


# --- Variable sets ---------------------------------------------------------

class ProjectNotFoundError(LecoffreError):
    """Raised when a project has no stored environments."""

    def __init__(self, project: str) -> None:
        super().__init__(
            f"Project not found: {project}",
            hint="Run `lecoffre list` to see known projects.",
        )
        self.project = project


class EnvironmentNotFoundError(LecoffreError):
    """Raised when a project exists but the environment does not."""

    def __init__(self, environment: str) -> None:
        super().__init__(
            f"Environment not found: {environment}",
            hint="Run `lecoffre list <project>` to see its environments.",
        )
        self.environment = environment


# --- Environment / tooling -------------------------------------------------

class UnsupportedShellError(LecoffreError):
    """Raised when the parent shell is not one lecoffre can emit code for."""


class StorageError(LecoffreError):
    """Raised when the storage file cannot be read or written."""


class ConfigurationError(LecoffreError):
    """Raised when a LECOFFRE_* environment variable holds an invalid value."""


class EnvironmentError(LecoffreError):
    """Raised when a required runtime dependency is not available."""
