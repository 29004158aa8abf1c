"""
Schema shorthand for conformly.

Provides to_validator(), which builds validators from plain Python values.
"""

from __future__ import annotations

from typing import Any

import pydantic

from .combinators import ListOf, Required, Shape, ShapeField, Tuple
from .core import is_validator
from .validators import IsType, Model


def to_validator(v: Any) -> Any:
    """
    Coerce a value to a validator.

    Conversion rules:
        Pydantic model class -> Model(cls)
        type -> IsType(type)
        list of one item -> ListOf(to_validator(item))
        tuple -> Tuple of converted items
        dict -> Shape; bare values become Required, Required/Optional are kept
        validator (callable or object with validate()) -> pass through

    Usage:
        to_validator({
            "name": str,
            "email": Optional(str),
            "tags": [str],
            "point": (int, int),
        })
    """
    if isinstance(v, type):
        if issubclass(v, pydantic.BaseModel):
            return Model(v)
        return IsType(v)

    if isinstance(v, dict):
        fields = {key: _to_field(value) for key, value in v.items()}
        return Shape(fields)

    if isinstance(v, list):
        if len(v) != 1:
            raise ValueError(f"List shorthand takes exactly one item validator, got {len(v)}")
        return ListOf(to_validator(v[0]))

    if isinstance(v, tuple):
        return Tuple(tuple(to_validator(item) for item in v))

    if is_validator(v):
        return v

    raise TypeError(f"Cannot convert {type(v).__name__} to validator")


def _to_field(value: Any) -> ShapeField:
    if isinstance(value, ShapeField):
        return ShapeField(to_validator(value.validator), required=value.required)
    if isinstance(value, tuple) and len(value) == 2 and value[0] in ("required", "optional"):
        return ShapeField(to_validator(value[1]), required=value[0] == "required")
    return Required(to_validator(value))
