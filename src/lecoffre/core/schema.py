"""Composable value schemas for command options and arguments.

A schema validates exactly one value.  Leaf validation is delegated to
pydantic; everything else is one of a small, closed set of wrapper
nodes that the introspection helpers in :mod:`lecoffre.core.schema_utils`
can see through:

* :class:`PlainSchema`: a pydantic-validated leaf (``str``, ``bool``, …)
* :class:`OptionalSchema`: "no value supplied" becomes ``None``
* :class:`NullableSchema`: an explicit ``None`` is accepted
* :class:`DefaultSchema`: "no value supplied" becomes a static default
* :class:`PipeSchema`: the output of one schema feeds another step

Schemas are immutable.  The fluent helpers return new nodes::

    from lecoffre.core import schema as s

    s.string().default("default")
    s.boolean().default(False)
    s.integer(ge=1).optional()

"No value supplied" is represented by the :data:`MISSING` sentinel, not
``None``, so that ``nullable`` and ``optional`` stay distinguishable.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal

from pydantic import Field, StringConstraints, TypeAdapter, ValidationError

from lecoffre.exceptions import SchemaError

MISSING_MESSAGE: str = "Field required"
"""Issue reported when a required value was not supplied."""


class _Missing:
    """Sentinel type for "no value supplied"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


# ---------------------------------------------------------------------------
# Base node
# ---------------------------------------------------------------------------

class Schema:
    """Common interface of every schema node."""

    def validate(self, value: Any) -> Any:
        """Return the validated value or raise :class:`SchemaError`."""
        raise NotImplementedError

    def optional(self) -> OptionalSchema:
        return OptionalSchema(self)

    def nullable(self) -> NullableSchema:
        return NullableSchema(self)

    def default(self, value: Any) -> DefaultSchema:
        return DefaultSchema(self, value)

    def pipe(self, target: Schema | Callable[[Any], Any]) -> PipeSchema:
        return PipeSchema(self, target)


# ---------------------------------------------------------------------------
# Leaf
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class PlainSchema(Schema):
    """A leaf validated by a pydantic :class:`~pydantic.TypeAdapter`.

    *annotation* is any type pydantic understands, including
    ``Annotated`` constraints.  *checks* are extra ``(predicate, message)``
    refinements run in order after pydantic accepted the value; every
    failing predicate contributes its message.
    """

    annotation: Any
    checks: tuple[tuple[Callable[[Any], bool], str], ...] = ()
    _adapter: TypeAdapter[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_adapter", TypeAdapter(self.annotation))

    def validate(self, value: Any) -> Any:
        if value is MISSING:
            raise SchemaError([MISSING_MESSAGE])
        try:
            result = self._adapter.validate_python(value)
        except ValidationError as exc:
            raise SchemaError([error["msg"] for error in exc.errors()]) from exc

        issues = [message for predicate, message in self.checks if not predicate(result)]
        if issues:
            raise SchemaError(issues)
        return result

    def refine(self, predicate: Callable[[Any], bool], message: str) -> PlainSchema:
        """Return a copy with an additional custom check."""
        return PlainSchema(self.annotation, (*self.checks, (predicate, message)))


# ---------------------------------------------------------------------------
# Transparent wrappers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class OptionalSchema(Schema):
    """Accept "no value supplied" and bind it as ``None``."""

    inner: Schema

    def validate(self, value: Any) -> Any:
        if value is MISSING:
            return None
        return self.inner.validate(value)


@dataclass(frozen=True, eq=False)
class NullableSchema(Schema):
    """Accept an explicit ``None``."""

    inner: Schema

    def validate(self, value: Any) -> Any:
        if value is None:
            return None
        return self.inner.validate(value)


@dataclass(frozen=True, eq=False)
class DefaultSchema(Schema):
    """Replace "no value supplied" with a static default.

    The default is returned as-is; it is not run through *inner*.
    """

    inner: Schema
    value: Any

    def validate(self, value: Any) -> Any:
        if value is MISSING:
            return self.value
        return self.inner.validate(value)


@dataclass(frozen=True, eq=False)
class PipeSchema(Schema):
    """Validate with *source*, then hand the result to *target*.

    *target* is either another schema or a plain transform callable.
    """

    source: Schema
    target: Schema | Callable[[Any], Any]

    def validate(self, value: Any) -> Any:
        result = self.source.validate(value)
        if isinstance(self.target, Schema):
            return self.target.validate(result)
        return self.target(result)


# ---------------------------------------------------------------------------
# Leaf constructors
# ---------------------------------------------------------------------------

def plain(annotation: Any) -> PlainSchema:
    """Build a leaf for any pydantic-compatible *annotation*."""
    return PlainSchema(annotation)


def string(
    *,
    min_length: int | None = None,
    max_length: int | None = None,
    pattern: str | None = None,
) -> PlainSchema:
    """A string leaf, optionally length- or pattern-constrained."""
    if min_length is None and max_length is None and pattern is None:
        return PlainSchema(str)
    constraints = StringConstraints(
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
    )
    return PlainSchema(Annotated[str, constraints])


def boolean() -> PlainSchema:
    """A boolean leaf; options using it are flag-shaped."""
    return PlainSchema(bool)


def integer(
    *,
    ge: int | None = None,
    le: int | None = None,
    gt: int | None = None,
    lt: int | None = None,
) -> PlainSchema:
    """An integer leaf; numeric strings such as ``"42"`` are accepted."""
    if ge is None and le is None and gt is None and lt is None:
        return PlainSchema(int)
    return PlainSchema(Annotated[int, Field(ge=ge, le=le, gt=gt, lt=lt)])


def number(
    *,
    ge: float | None = None,
    le: float | None = None,
) -> PlainSchema:
    """A float leaf; numeric strings are accepted."""
    if ge is None and le is None:
        return PlainSchema(float)
    return PlainSchema(Annotated[float, Field(ge=ge, le=le)])


def choice(*values: str) -> PlainSchema:
    """A leaf accepting only one of *values*."""
    if not values:
        raise ValueError("choice() needs at least one value")
    return PlainSchema(Literal[values])  # type: ignore[valid-type]
