"""``lecoffre load`` / ``lecoffre unload`` — emit shell code for a variable set.

Both commands print to stdout so the result can be evaluated, e.g.
``eval "$(lecoffre load -e staging)"``.
"""

from __future__ import annotations

import logging
from typing import Any

from lecoffre.cli.commands._shared import (
    environment_option,
    open_storage,
    project_option,
    require_environment,
    resolve_project,
)
from lecoffre.cli.console import output
from lecoffre.config import get_settings
from lecoffre.core.models import define_command
from lecoffre.infra.shell import detect_shell, format_unset_variables, format_variables

logger = logging.getLogger(__name__)


def handle_load(options: dict[str, Any]) -> None:
    settings = get_settings()
    project = resolve_project(options["project"])
    variables = require_environment(open_storage(settings), project, options["environment"])

    text = format_variables(detect_shell(settings.shell), variables)
    logger.info("Loading %d variable(s) from %s [%s]", len(variables), project, options["environment"])
    if text:
        output.plain(text)


def handle_unload(options: dict[str, Any]) -> None:
    settings = get_settings()
    project = resolve_project(options["project"])
    variables = require_environment(open_storage(settings), project, options["environment"])

    text = format_unset_variables(detect_shell(settings.shell), variables.keys())
    logger.info("Unloading %d variable(s) from %s [%s]", len(variables), project, options["environment"])
    if text:
        output.plain(text)


load_command = define_command(
    description="Load variables into the current shell environment",
    options={"project": project_option, "environment": environment_option},
    handler=handle_load,
)

unload_command = define_command(
    description="Unload variables from the current shell environment",
    options={"project": project_option, "environment": environment_option},
    handler=handle_unload,
)
