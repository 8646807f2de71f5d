"""Infrastructure: ``.env`` text → variables, via python-dotenv."""

from __future__ import annotations

import io

from dotenv import dotenv_values


def parse_dotenv(text: str) -> dict[str, str]:
    """Parse ``.env``-formatted *text*.

    Comments, blank lines, ``export`` prefixes and quoting follow
    python-dotenv.  Lines without ``=`` carry no value and are dropped.
    Variable interpolation is disabled: values are stored verbatim.
    """
    values = dotenv_values(stream=io.StringIO(text), interpolate=False)
    return {key: value for key, value in values.items() if value is not None}
