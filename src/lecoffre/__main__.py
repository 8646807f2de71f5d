"""Allow ``python -m lecoffre`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m lecoffre`` behaves identically to the ``lecoffre`` console
script.
"""

from __future__ import annotations

from lecoffre.cli.app import cli

if __name__ == "__main__":
    cli()
