"""Tests for the token parser (core/tokens.py).

The parser only structures input: it must never raise, whatever the
tokens look like.
"""

from __future__ import annotations

import pytest

from lecoffre.core import schema
from lecoffre.core.models import OptionSpec, define_option
from lecoffre.core.tokens import parse_tokens

OPTIONS: list[OptionSpec] = [
    define_option(name="project", schema=schema.string().optional(), description="P", aliases=["p"]),
    define_option(name="merge", schema=schema.boolean().default(False), description="M", aliases=["m"]),
    define_option(name="verbose", schema=schema.boolean().optional(), description="V", aliases=["v"]),
    define_option(name="count", schema=schema.integer().default(1), description="C", aliases=["c"]),
    define_option(
        name="invert",
        schema=schema.boolean().pipe(lambda v: not v),
        description="Piped boolean",
    ),
]


# ---------------------------------------------------------------------------
# Value-taking flags
# ---------------------------------------------------------------------------

class TestValueFlags:
    def test_long_form(self) -> None:
        parsed = parse_tokens(["--project", "myapp"], OPTIONS)
        assert parsed.flags == {"project": "myapp"}
        assert parsed.positionals == []

    def test_alias_resolves_to_canonical(self) -> None:
        assert parse_tokens(["-p", "demo"], OPTIONS).flags == parse_tokens(
            ["--project", "demo"], OPTIONS,
        ).flags

    def test_inline_value(self) -> None:
        assert parse_tokens(["--project=a=b"], OPTIONS).flags == {"project": "a=b"}

    def test_inline_alias_value(self) -> None:
        assert parse_tokens(["-p=demo"], OPTIONS).flags == {"project": "demo"}

    def test_empty_value_is_kept(self) -> None:
        assert parse_tokens(["--project", ""], OPTIONS).flags == {"project": ""}

    def test_missing_value_becomes_true(self) -> None:
        assert parse_tokens(["--project"], OPTIONS).flags == {"project": True}

    def test_next_flag_is_not_consumed(self) -> None:
        parsed = parse_tokens(["--project", "--merge"], OPTIONS)
        assert parsed.flags == {"project": True, "merge": True}

    def test_negative_number_is_a_value(self) -> None:
        assert parse_tokens(["--count", "-5"], OPTIONS).flags == {"count": "-5"}

    def test_last_occurrence_wins(self) -> None:
        assert parse_tokens(["-p", "a", "--project", "b"], OPTIONS).flags == {"project": "b"}


# ---------------------------------------------------------------------------
# Boolean flags
# ---------------------------------------------------------------------------

class TestBooleanFlags:
    def test_present_is_true_and_consumes_nothing(self) -> None:
        parsed = parse_tokens(["--merge", "extra"], OPTIONS)
        assert parsed.flags == {"merge": True}
        assert parsed.positionals == ["extra"]

    def test_optional_boolean_is_flag_shaped(self) -> None:
        parsed = parse_tokens(["-v", "extra"], OPTIONS)
        assert parsed.flags == {"verbose": True}
        assert parsed.positionals == ["extra"]

    def test_negation(self) -> None:
        assert parse_tokens(["--no-merge"], OPTIONS).flags == {"merge": False}

    def test_inline_value_is_passed_through(self) -> None:
        assert parse_tokens(["--merge=false"], OPTIONS).flags == {"merge": "false"}

    def test_piped_boolean_takes_a_value(self) -> None:
        parsed = parse_tokens(["--invert", "true", "rest"], OPTIONS)
        assert parsed.flags == {"invert": "true"}
        assert parsed.positionals == ["rest"]

    def test_negation_only_applies_to_boolean_flags(self) -> None:
        parsed = parse_tokens(["--no-project"], OPTIONS)
        assert parsed.flags == {"no-project": True}


# ---------------------------------------------------------------------------
# Bundles, positionals and undeclared flags
# ---------------------------------------------------------------------------

class TestStructure:
    def test_short_bundle(self) -> None:
        parsed = parse_tokens(["-mv"], OPTIONS)
        assert parsed.flags == {"merge": True, "verbose": True}

    def test_bundle_last_letter_takes_value(self) -> None:
        parsed = parse_tokens(["-mp", "demo"], OPTIONS)
        assert parsed.flags == {"merge": True, "project": "demo"}

    def test_attached_value_in_bundle(self) -> None:
        parsed = parse_tokens(["-c5", "rest"], OPTIONS)
        assert parsed.flags == {"count": "5"}
        assert parsed.positionals == ["rest"]

    def test_attached_value_after_boolean_letters(self) -> None:
        assert parse_tokens(["-mc10"], OPTIONS).flags == {"merge": True, "count": "10"}

    def test_attached_value_keeps_equals(self) -> None:
        assert parse_tokens(["-pa=b"], OPTIONS).flags == {"project": "a=b"}

    def test_positionals_in_order(self) -> None:
        parsed = parse_tokens(["one", "--merge", "two", "-p", "x", "three"], OPTIONS)
        assert parsed.positionals == ["one", "two", "three"]

    def test_double_dash_ends_flags(self) -> None:
        parsed = parse_tokens(["--", "--merge", "-p"], OPTIONS)
        assert parsed.flags == {}
        assert parsed.positionals == ["--merge", "-p"]

    def test_single_dash_is_positional(self) -> None:
        assert parse_tokens(["-"], OPTIONS).positionals == ["-"]

    def test_undeclared_flag_kept_with_value(self) -> None:
        parsed = parse_tokens(["--color", "red", "file"], OPTIONS)
        assert parsed.flags == {"color": "red"}
        assert parsed.positionals == ["file"]

    def test_undeclared_flag_without_value(self) -> None:
        assert parse_tokens(["--dry-run"], OPTIONS).flags == {"dry-run": True}

    def test_undeclared_flag_can_be_kept_from_taking_values(self) -> None:
        parsed = parse_tokens(["--verbose", "list", "-x", "more"], [], undeclared_take_values=False)
        assert parsed.flags == {"verbose": True, "x": True}
        assert parsed.positionals == ["list", "more"]

    def test_declared_flags_still_take_values_when_undeclared_do_not(self) -> None:
        parsed = parse_tokens(["-p", "demo", "--color", "red"], OPTIONS, undeclared_take_values=False)
        assert parsed.flags == {"project": "demo", "color": True}
        assert parsed.positionals == ["red"]

    def test_no_options(self) -> None:
        parsed = parse_tokens(["a", "b"], [])
        assert parsed.flags == {}
        assert parsed.positionals == ["a", "b"]

    @pytest.mark.parametrize(
        "tokens",
        [[], ["--"], ["---"], ["--="], ["-"], ["-=x"], ["--no-"], [""]],
    )
    def test_never_raises(self, tokens: list[str]) -> None:
        parse_tokens(tokens, OPTIONS)
