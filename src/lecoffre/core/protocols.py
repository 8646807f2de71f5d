"""Protocols (interfaces) consumed by the command handlers.

These define the contracts that infrastructure adapters must satisfy.
Handlers depend ONLY on these protocols, never on concrete
implementations, so tests can substitute in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class Storage(Protocol):
    """Contract for variable-set persistence backends.

    Data is a three-level mapping: project → environment → variables.
    Implementations must map backend-specific exceptions to
    :class:`~lecoffre.exceptions.StorageError`.
    """

    def get_projects(self) -> list[str]:
        """Return every project name, in storage order."""
        ...  # pragma: no cover

    def get_environments(self, project: str) -> list[str]:
        """Return the environments of *project*; empty when unknown."""
        ...  # pragma: no cover

    def get_variables(self, project: str, env: str) -> dict[str, str]:
        """Return a copy of the variables of *project*/*env*; empty when unknown."""
        ...  # pragma: no cover

    def set_variables(self, project: str, env: str, variables: Mapping[str, str]) -> None:
        """Replace the variables of *project*/*env*, creating both as needed."""
        ...  # pragma: no cover

    def delete_environment(self, project: str, env: str) -> None:
        """Remove *env*; the project goes too once it has no environments left."""
        ...  # pragma: no cover

    def delete_project(self, project: str) -> None:
        """Remove *project* with all its environments.  No-op when unknown."""
        ...  # pragma: no cover
