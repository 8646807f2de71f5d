"""``lecoffre import`` — read ``.env`` text from stdin into a variable set.

Without ``--merge`` the stored set is replaced by the input; with it the
input is laid over the existing variables.  A change report goes to
stderr so stdout stays clean for pipelines.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from lecoffre.cli.commands._shared import (
    environment_option,
    open_storage,
    pluralize,
    project_option,
    resolve_project,
)
from lecoffre.cli.console import console
from lecoffre.core import schema
from lecoffre.core.models import define_command, define_option
from lecoffre.infra.dotenv_parser import parse_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImportChanges:
    """Keys touched by an import, each list in input (or stored) order."""

    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    def report_lines(self) -> list[str]:
        return [
            *(f"+ {key} (added)" for key in self.added),
            *(f"~ {key} (updated)" for key in self.updated),
            *(f"- {key} (removed)" for key in self.removed),
        ]


def diff_variables(
    existing: Mapping[str, str],
    incoming: Mapping[str, str],
    *,
    merge: bool,
) -> ImportChanges:
    """Classify *incoming* keys against *existing* ones.

    Keys with an unchanged value are neither added nor updated.  Removed
    keys only exist in replace mode.
    """
    changes = ImportChanges()
    for key, value in incoming.items():
        if key not in existing:
            changes.added.append(key)
        elif existing[key] != value:
            changes.updated.append(key)
    if not merge:
        changes.removed.extend(key for key in existing if key not in incoming)
    return changes


def handle_import(options: dict[str, Any]) -> None:
    storage = open_storage()
    project = resolve_project(options["project"])
    environment: str = options["environment"]

    incoming = parse_dotenv(sys.stdin.read())
    existing = storage.get_variables(project, environment)
    changes = diff_variables(existing, incoming, merge=options["merge"])

    stored = {**existing, **incoming} if options["merge"] else incoming
    storage.set_variables(project, environment, stored)
    logger.info("Stored %d variable(s) in %s [%s]", len(stored), project, environment)

    lines = changes.report_lines()
    lines.append(
        f"Imported {pluralize(len(incoming), 'variable')} into {project} [{environment}]",
    )
    console.plain("\n".join(lines))


import_command = define_command(
    description="Import variables from stdin (.env format)",
    options={
        "project": project_option,
        "environment": environment_option,
        "merge": define_option(
            name="merge",
            schema=schema.boolean().default(False),
            description="Merge with existing variables instead of replacing",
            aliases=["m"],
        ),
    },
    handler=handle_import,
)
