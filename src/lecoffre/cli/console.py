"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Two proxies are exported:

* :data:`console`: stderr, for diagnostics, errors and import reports.
* :data:`output`: stdout, for data meant to be read or ``eval``-ed.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from lecoffre.exceptions import EnvironmentError

_HEADER_PATTERN = r"(?m)^[A-Z]+$"


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def _stream(self) -> TextIO:
		return sys.stderr if self._stderr else sys.stdout

	def print(self, *objects: object) -> None:
		"""Render Rich markup when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(*objects, file=self._stream())
			return
		rich_console.print(*objects)

	def plain(self, text: str) -> None:
		"""Write *text* and a newline exactly as given.

		Rich is bypassed: it expands tabs and drops control characters,
		which would change values meant to be ``eval``-ed.
		"""
		stream = self._stream()
		stream.write(text + "\n")
		stream.flush()

	def help(self, text: str) -> None:
		"""Write help text verbatim, with upper-case section headers in bold."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
			from rich.text import Text
		except (EnvironmentError, ModuleNotFoundError):
			print(text, file=self._stream())
			return
		rendered = Text(text)
		rendered.highlight_regex(_HEADER_PATTERN, "bold")
		rich_console.print(rendered, soft_wrap=True)


console = _ConsoleProxy(stderr=True)
output = _ConsoleProxy(stderr=False)
