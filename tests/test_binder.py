"""Tests for validation and binding (core/binder.py).

Covers option/argument binding, defaults, aggregated failures and
their ordering, plus the end-to-end examples of the command framework.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import pytest

from lecoffre.core import schema
from lecoffre.core.binder import parse_command
from lecoffre.core.models import (
    ArgumentSpec,
    BoundCall,
    CommandSpec,
    OptionSpec,
    define_argument,
    define_command,
    define_option,
)
from lecoffre.core.schema import MISSING_MESSAGE
from lecoffre.exceptions import CommandValidationError


def _command(
    options: Mapping[str, OptionSpec] | None = None,
    arguments: Sequence[ArgumentSpec] = (),
) -> CommandSpec:
    return define_command(
        description="test",
        handler=lambda options, *args: None,
        options=options,
        arguments=arguments,
    )


def _errors(tokens: list[str], command: CommandSpec) -> list[str]:
    with pytest.raises(CommandValidationError) as exc_info:
        parse_command(tokens, command)
    return exc_info.value.errors


def _opt(name: str, s: schema.Schema, **kwargs: object) -> OptionSpec:
    return define_option(name=name, schema=s, description=name.title(), **kwargs)  # type: ignore[arg-type]


def _arg(placeholder: str, s: schema.Schema) -> ArgumentSpec:
    return define_argument(schema=s, description=placeholder.title(), placeholder=placeholder)


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

class TestOptions:
    def test_empty_command(self) -> None:
        assert parse_command([], _command()) == BoundCall(options={}, arguments=())

    def test_string_value(self) -> None:
        result = parse_command(["--name", "Alice"], _command({"name": _opt("name", schema.string())}))
        assert result.options["name"] == "Alice"

    def test_default_when_absent(self) -> None:
        cmd = _command({"name": _opt("name", schema.string().default("world"))})
        assert parse_command([], cmd).options["name"] == "world"

    def test_required_when_absent(self) -> None:
        cmd = _command({"name": _opt("name", schema.string())})
        assert _errors([], cmd) == [f'option "--name": {MISSING_MESSAGE}']

    def test_empty_string_reaches_schema(self) -> None:
        cmd = _command({"name": _opt("name", schema.string())})
        assert parse_command(["--name", ""], cmd).options["name"] == ""

    def test_boolean_present(self) -> None:
        cmd = _command({"verbose": _opt("verbose", schema.boolean().default(False))})
        assert parse_command(["--verbose"], cmd).options["verbose"] is True

    def test_boolean_default(self) -> None:
        cmd = _command({"verbose": _opt("verbose", schema.boolean().default(False))})
        assert parse_command([], cmd).options["verbose"] is False

    def test_binding_name_differs_from_flag(self) -> None:
        cmd = _command({
            "last_name": _opt("last-name", schema.string().default("world"), aliases=["l"]),
        })
        assert parse_command(["-l", "Doe"], cmd).options == {"last_name": "Doe"}

    def test_optional_absent_binds_none(self) -> None:
        cmd = _command({"config": _opt("config", schema.string().optional())})
        assert parse_command([], cmd).options == {"config": None}

    def test_coerces_integer(self) -> None:
        cmd = _command({"count": _opt("count", schema.integer())})
        assert parse_command(["--count", "42"], cmd).options["count"] == 42

    def test_min_length_message(self) -> None:
        cmd = _command({"name": _opt("name", schema.string(min_length=3))})
        assert _errors(["--name", "ab"], cmd) == [
            'option "--name": String should have at least 3 characters',
        ]

    def test_choice_failure_names_option(self) -> None:
        cmd = _command({"format": _opt("format", schema.choice("json", "yaml"))})
        (error,) = _errors(["--format", "xml"], cmd)
        assert error.startswith('option "--format":')

    def test_integer_bound_message(self) -> None:
        cmd = _command({"port": _opt("port", schema.integer(ge=1))})
        assert _errors(["--port", "0"], cmd) == [
            'option "--port": Input should be greater than or equal to 1',
        ]

    def test_value_flag_without_value_is_rejected(self) -> None:
        cmd = _command({"name": _opt("name", schema.string())})
        assert _errors(["--name"], cmd) == ['option "--name": Input should be a valid string']

    def test_undeclared_flags_are_ignored(self) -> None:
        cmd = _command({"name": _opt("name", schema.string().default("x"))})
        assert parse_command(["--unknown", "value"], cmd).options == {"name": "x"}


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------

class TestArguments:
    def test_single_argument(self) -> None:
        cmd = _command(arguments=[_arg("name", schema.string())])
        assert parse_command(["Alice"], cmd).arguments == ("Alice",)

    def test_default_when_absent(self) -> None:
        cmd = _command(arguments=[_arg("name", schema.string().default("world"))])
        assert parse_command([], cmd).arguments == ("world",)

    def test_required_when_absent(self) -> None:
        cmd = _command(arguments=[_arg("name", schema.string())])
        assert _errors([], cmd) == [f"argument <name>: {MISSING_MESSAGE}"]

    def test_optional_absent_binds_none(self) -> None:
        cmd = _command(arguments=[_arg("name", schema.string().optional())])
        assert parse_command([], cmd).arguments == (None,)

    def test_multiple_in_order(self) -> None:
        cmd = _command(arguments=[_arg("first", schema.string()), _arg("second", schema.string())])
        assert parse_command(["one", "two"], cmd).arguments == ("one", "two")

    def test_refine_message(self) -> None:
        s = schema.string().refine(lambda v: v.startswith("/"), "Must be an absolute path")
        cmd = _command(arguments=[_arg("file", s)])
        assert _errors(["relative/path"], cmd) == ["argument <file>: Must be an absolute path"]

    def test_extra_positionals_ignored(self) -> None:
        cmd = _command(arguments=[_arg("name", schema.string())])
        assert parse_command(["a", "b", "c"], cmd).arguments == ("a",)

    def test_arguments_and_options_together(self) -> None:
        cmd = _command(
            {"verbose": _opt("verbose", schema.boolean().default(False))},
            [_arg("name", schema.string())],
        )
        result = parse_command(["Alice", "--verbose"], cmd)
        assert result.arguments == ("Alice",)
        assert result.options == {"verbose": True}


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

class TestAggregation:
    def test_option_and_argument_failures_both_reported(self) -> None:
        cmd = _command({"port": _opt("port", schema.integer(ge=1))}, [_arg("file", schema.string())])
        errors = _errors(["--port", "0"], cmd)
        assert len(errors) == 2
        assert errors[0].startswith('option "--port"')
        assert errors[1].startswith("argument <file>")

    def test_options_precede_arguments_in_declaration_order(self) -> None:
        cmd = _command(
            {"b": _opt("b", schema.string()), "a": _opt("a", schema.string())},
            [_arg("x", schema.string()), _arg("y", schema.string())],
        )
        errors = _errors([], cmd)
        assert [error.split(":")[0] for error in errors] == [
            'option "--b"',
            'option "--a"',
            "argument <x>",
            "argument <y>",
        ]

    def test_every_field_validated_exactly_once(self) -> None:
        calls: list[str] = []

        def tracking(label: str, *, fail: bool) -> schema.Schema:
            def check(value: object) -> bool:
                calls.append(label)
                return not fail

            return schema.string().default("d").pipe(schema.string().refine(check, f"{label} bad"))

        cmd = _command(
            {"a": _opt("a", tracking("a", fail=True)), "b": _opt("b", tracking("b", fail=False))},
            [_arg("x", tracking("x", fail=True)), _arg("y", tracking("y", fail=False))],
        )
        errors = _errors([], cmd)
        assert calls == ["a", "b", "x", "y"]
        assert errors == ['option "--a": a bad', "argument <x>: x bad"]

    def test_multiple_issues_from_one_field(self) -> None:
        s = (
            schema.string()
            .refine(lambda v: v.startswith("/"), "Must be absolute")
            .refine(lambda v: v.endswith(".env"), "Must be a .env file")
        )
        cmd = _command({"file": _opt("file", s)})
        assert _errors(["--file", "x"], cmd) == [
            'option "--file": Must be absolute',
            'option "--file": Must be a .env file',
        ]

    def test_failures_are_structured(self) -> None:
        cmd = _command({"name": _opt("name", schema.string())})
        with pytest.raises(CommandValidationError) as exc_info:
            parse_command([], cmd)
        (failure,) = exc_info.value.failures
        assert failure.field == "option"
        assert failure.identifier == "--name"
        assert failure.message == MISSING_MESSAGE
        assert str(exc_info.value) == f'option "--name": {MISSING_MESSAGE}'

    def test_unexpected_errors_propagate(self) -> None:
        def broken(value: str) -> str:
            raise KeyError("bug")

        cmd = _command({"name": _opt("name", schema.string().default("x").pipe(broken))})
        with pytest.raises(KeyError):
            parse_command([], cmd)


# ---------------------------------------------------------------------------
# End-to-end examples
# ---------------------------------------------------------------------------

class TestEndToEnd:
    @pytest.fixture
    def command(self) -> CommandSpec:
        return _command(
            {"project": _opt("project", schema.string(), aliases=["p"])},
            [_arg("env", schema.string().default("default"))],
        )

    def test_alias_and_default_argument(self, command: CommandSpec) -> None:
        assert parse_command(["-p", "demo"], command) == BoundCall(
            options={"project": "demo"}, arguments=("default",),
        )

    def test_alias_and_long_form_bind_identically(self, command: CommandSpec) -> None:
        assert parse_command(["-p", "demo"], command) == parse_command(["--project", "demo"], command)

    def test_missing_required_option(self, command: CommandSpec) -> None:
        assert _errors([], command) == [f'option "--project": {MISSING_MESSAGE}']
