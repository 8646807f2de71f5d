"""Raw argv tokens → flag map + positional pool.

This layer only structures input.  It never raises and never rejects
anything: undeclared flags are kept under their own name and left for
the binder to ignore, malformed values are left for the schemas to
reject.

Recognised forms
----------------
* ``--name value`` / ``--name=value`` / ``-a value`` / ``-a=value``
* ``--flag`` for boolean-shaped options (binds ``True``)
* ``--no-flag`` for boolean-shaped options (binds ``False``)
* ``-abc``: a bundle of single-letter flags; the last may take a value
* ``-c5``: the rest of a bundle is the value of the first value-taking letter
* ``--``: every later token is positional
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from lecoffre.core.models import OptionSpec
from lecoffre.core.schema_utils import is_boolean_flag

logger = logging.getLogger(__name__)

RawValue = str | bool


@dataclass(frozen=True, slots=True)
class ParsedTokens:
    """Structured, unvalidated view of a token list."""

    flags: dict[str, RawValue] = field(default_factory=dict)
    """Canonical flag name → raw string or boolean."""

    positionals: list[str] = field(default_factory=list)
    """Tokens that are neither flags nor flag values, in order."""


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def _looks_like_flag(token: str) -> bool:
    """``-x``/``--xyz`` but not ``-`` (stdin) nor negative numbers."""
    return token.startswith("-") and token != "-" and not _is_number(token)


class _TokenScanner:
    """Single-use left-to-right scan over one token list."""

    def __init__(
        self,
        tokens: Sequence[str],
        options: Iterable[OptionSpec],
        *,
        undeclared_take_values: bool,
    ) -> None:
        self._tokens = list(tokens)
        self._undeclared_take_values = undeclared_take_values
        self._index = 0
        self._canonical: dict[str, str] = {}
        self._boolean: set[str] = set()
        for option in options:
            for spelling in option.flags:
                self._canonical[spelling] = option.name
            if is_boolean_flag(option.schema):
                self._boolean.add(option.name)
        self.result = ParsedTokens()

    def _next_value(self) -> str | None:
        """Consume and return the next token if it can be a flag value."""
        if self._index < len(self._tokens) and not _looks_like_flag(self._tokens[self._index]):
            value = self._tokens[self._index]
            self._index += 1
            return value
        return None

    def _store(self, spelling: str, inline: str | None, *, may_consume: bool = True) -> None:
        canonical = self._canonical.get(spelling)

        if canonical is None and spelling.startswith("no-") and inline is None:
            negated = self._canonical.get(spelling[3:])
            if negated in self._boolean:
                self.result.flags[negated] = False
                return

        if canonical is None:
            logger.debug("Undeclared flag %r passed through", spelling)
            may_consume = may_consume and self._undeclared_take_values
        key = canonical or spelling

        value: RawValue | None
        if inline is not None:
            value = inline
        elif key in self._boolean or not may_consume:
            value = True
        else:
            value = self._next_value()
        self.result.flags[key] = True if value is None else value

    def _store_group(self, body: str, letters: str, inline: str | None) -> None:
        """``-abc`` is ``-a -b -c``; ``-c5`` is ``-c 5`` when ``c`` takes a value."""
        for position, letter in enumerate(letters[:-1]):
            canonical = self._canonical.get(letter)
            if canonical is not None and canonical not in self._boolean:
                self._store(letter, body[position + 1:])
                return
            self._store(letter, None, may_consume=False)
        self._store(letters[-1], inline)

    def scan(self) -> ParsedTokens:
        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            self._index += 1

            if token == "--":
                self.result.positionals.extend(self._tokens[self._index:])
                break

            if not _looks_like_flag(token):
                self.result.positionals.append(token)
                continue

            long_form = token.startswith("--")
            body = token[2:] if long_form else token[1:]
            spelling, sep, inline_value = body.partition("=")
            inline = inline_value if sep else None

            if not long_form and len(spelling) > 1 and spelling not in self._canonical:
                self._store_group(body, spelling, inline)
                continue

            self._store(spelling, inline)

        return self.result


def parse_tokens(
    tokens: Sequence[str],
    options: Iterable[OptionSpec],
    *,
    undeclared_take_values: bool = True,
) -> ParsedTokens:
    """Split *tokens* into canonical flags and positionals.

    *options* decides which flags are boolean-shaped (no value consumed)
    and which spellings are aliases of which canonical name.  With
    *undeclared_take_values* off, an undeclared flag never consumes the
    following token, so it cannot swallow a command name.
    """
    return _TokenScanner(tokens, options, undeclared_take_values=undeclared_take_values).scan()
