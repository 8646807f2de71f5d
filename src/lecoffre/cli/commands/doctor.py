"""``lecoffre doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can store variable sets and emit shell
code.  Purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from typing import Any

from lecoffre.cli.console import console
from lecoffre.config import Settings, get_settings
from lecoffre.core.models import define_command
from lecoffre.exceptions import LecoffreError, StorageError, UnsupportedShellError
from lecoffre.infra.json_storage import get_storage
from lecoffre.infra.shell import detect_shell
from lecoffre.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _lecoffre_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the lecoffre version row."""
    return "lecoffre", __version__, _OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    return "Python", version, _OK if ok else "[red]FAIL (>=3.10 required)[/red]"


def _shell_check(settings: Settings) -> tuple[str, str, str]:
    """Return (label, value, status) for the shell row.

    An unsupported shell is only a warning: ``list`` and ``import`` still work.
    """
    try:
        shell = detect_shell(settings.shell)
    except UnsupportedShellError as exc:
        return "Shell", str(exc), _WARN
    source = "LECOFFRE_SHELL" if settings.shell else "detected"
    return "Shell", f"{shell} ({source})", _OK


def _storage_check(settings: Settings) -> tuple[str, str, str]:
    """Return (label, value, status) for the storage row."""
    storage = get_storage(settings)
    try:
        count = len(storage.get_projects())
    except StorageError:
        return "Storage", f"{storage.path} (unreadable)", _FAIL
    return "Storage", f"{storage.path} ({count} project{'' if count == 1 else 's'})", _OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nlecoffre doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------

def collect_checks(settings: Settings) -> list[tuple[str, str, str]]:
    return [
        _lecoffre_version_check(),
        _python_version_check(),
        _shell_check(settings),
        _storage_check(settings),
    ]


def handle_doctor(options: dict[str, Any]) -> None:
    """Execute all diagnostic checks and render a summary table.

    Raises
    ------
    LecoffreError
        When at least one critical check failed.
    """
    checks = collect_checks(get_settings())
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
    else:
        table = Table(
            title="lecoffre doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)
        console.print(table)

    if has_failure:
        raise LecoffreError("Some checks failed.")
    console.print("[bold green]All checks passed.[/bold green]")


doctor_command = define_command(
    description="Check the environment lecoffre runs in",
    handler=handle_doctor,
)
