"""``lecoffre list`` — show projects, environments and variable counts."""

from __future__ import annotations

from typing import Any

from lecoffre.cli.commands._shared import open_storage, pluralize
from lecoffre.cli.console import output
from lecoffre.core import schema
from lecoffre.core.models import define_argument, define_command
from lecoffre.core.protocols import Storage
from lecoffre.exceptions import ProjectNotFoundError


def _environment_rows(storage: Storage, project: str, indent: str = "") -> list[str]:
    rows = []
    for env in storage.get_environments(project):
        count = len(storage.get_variables(project, env))
        rows.append(f"{indent}{env} ({pluralize(count, 'variable')})")
    return rows


def handle_list(options: dict[str, Any], project: str | None) -> None:
    storage = open_storage()

    if project is not None:
        if project not in storage.get_projects():
            raise ProjectNotFoundError(project)
        rows = _environment_rows(storage, project)
        if rows:
            output.plain("\n".join(rows))
        return

    projects = storage.get_projects()
    if not projects:
        output.plain("No projects found.")
        return

    lines: list[str] = []
    for name in projects:
        lines.append(name)
        lines.extend(_environment_rows(storage, name, indent="  "))
    output.plain("\n".join(lines))


list_command = define_command(
    description="List projects and their environments",
    arguments=[
        define_argument(
            schema=schema.string().optional(),
            description="Project name",
            placeholder="project",
        ),
    ],
    handler=handle_list,
)
