"""Read-only introspection over :mod:`lecoffre.core.schema` nodes.

Three pure questions are answered here, so that declarations stay the
single source of truth for help text and token parsing:

* Is the schema flag-shaped (boolean)?
* Is a value required?
* Does it carry a static default?

None of these functions validate anything or raise; an absent property
is a normal ``False`` / :data:`~lecoffre.core.schema.MISSING` result.
"""

from __future__ import annotations

from typing import Annotated, Any, get_args, get_origin

from lecoffre.core.schema import (
    MISSING,
    DefaultSchema,
    NullableSchema,
    OptionalSchema,
    PipeSchema,
    PlainSchema,
    Schema,
)

_TRANSPARENT = (DefaultSchema, OptionalSchema, NullableSchema)


def _leaf_type(annotation: Any) -> Any:
    """Strip ``Annotated[...]`` metadata from a leaf annotation."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def is_boolean_flag(schema: Schema) -> bool:
    """Return ``True`` when *schema* validates a boolean at the CLI boundary.

    Default, optional and nullable layers are transparent.  A pipe is
    **not** unwrapped: a piped boolean is a value-taking option because
    the input shape is what the token parser cares about.
    """
    current = schema
    while isinstance(current, _TRANSPARENT):
        current = current.inner
    if isinstance(current, PlainSchema):
        return _leaf_type(current.annotation) is bool
    return False


def is_required(schema: Schema) -> bool:
    """Return ``True`` when a value must be supplied for *schema*.

    Any default, optional or nullable layer makes it not required.  For
    a pipe only the input side decides.
    """
    current = schema
    while isinstance(current, PipeSchema):
        current = current.source
    return not isinstance(current, _TRANSPARENT)


def default_value(schema: Schema) -> Any:
    """Return the first static default found, or :data:`MISSING`.

    Optional, nullable and pipe (input side) layers are walked from the
    outside in; any other node ends the search.
    """
    current: Schema = schema
    while True:
        if isinstance(current, DefaultSchema):
            return current.value
        if isinstance(current, (OptionalSchema, NullableSchema)):
            current = current.inner
        elif isinstance(current, PipeSchema):
            current = current.source
        else:
            return MISSING
