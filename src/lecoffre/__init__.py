"""lecoffre — named variable sets for your shell.

Register variables per project and environment, then load, unload or
import them into a shell session.
"""

from lecoffre.version import __version__

__all__: list[str] = ["__version__"]
