"""Option declarations and lookups shared by several commands."""

from __future__ import annotations

from pathlib import Path

from lecoffre.config import Settings, get_settings
from lecoffre.core import schema
from lecoffre.core.models import define_option
from lecoffre.core.protocols import Storage
from lecoffre.exceptions import EnvironmentNotFoundError, ProjectNotFoundError
from lecoffre.infra.json_storage import get_storage

DEFAULT_ENVIRONMENT = "default"

project_option = define_option(
    name="project",
    schema=schema.string().optional(),
    description="Project name",
    aliases=["p"],
    placeholder="name",
)

environment_option = define_option(
    name="environment",
    schema=schema.string().default(DEFAULT_ENVIRONMENT),
    description="Environment name",
    aliases=["e"],
    placeholder="env",
)


def resolve_project(project: str | None) -> str:
    """Return *project*, or the name of the current directory."""
    if project is not None:
        return project
    return Path.cwd().resolve().name


def open_storage(settings: Settings | None = None) -> Storage:
    return get_storage(settings or get_settings())


def require_environment(storage: Storage, project: str, environment: str) -> dict[str, str]:
    """Return the variables of *project*/*environment*, which must both exist."""
    if project not in storage.get_projects():
        raise ProjectNotFoundError(project)
    if environment not in storage.get_environments(project):
        raise EnvironmentNotFoundError(environment)
    return storage.get_variables(project, environment)


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"
