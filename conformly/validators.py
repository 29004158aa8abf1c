"""
Leaf validators for conformly.

Literal, Member, Transform and Named are validator nodes with no structure of
their own. IsType, Predicate, Matches and Between are factory functions
returning Check nodes; Model plugs a Pydantic model in as a validator.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Callable

import pydantic

from .core import Composable, ensure_validator, validate
from .errors import ValidationError
from .lib.term_helpers import render_term
from .types import Err, Ok, Outcome


@dataclass(frozen=True, slots=True)
class Literal(Composable):
    """
    Accept only a term equal to `expected`, returned unchanged.

    Equality is Python's `==`, so `Literal(1)` also accepts `True` and `1.0`.
    Combine with IsType when the type matters: `IsType(int) & Literal(1)`.

    Usage:
        Literal(3)
        Literal("yes") | Literal("no")
    """

    expected: Any

    def validate(self, subject: Any) -> Outcome:
        if subject == self.expected:
            return Ok(subject)
        reason = f"expected exact term {render_term(self.expected)}"
        return Err(ValidationError(reason, term=subject))


@dataclass(frozen=True, slots=True)
class Member(Composable):
    """
    Accept a term contained in `collection` (list, set, range, any iterable).

    One-shot iterators such as generators are materialized into a tuple so
    the validator can be reused. Membership uses the collection's own `in`,
    so `Member([1, 2])` also accepts `1.0`.

    Usage:
        Member([1, 2])
        Member(range(1, 101))
        Member({"active", "inactive"})
    """

    collection: Any

    def __post_init__(self) -> None:
        if isinstance(self.collection, Iterator):
            object.__setattr__(self, "collection", tuple(self.collection))

    def validate(self, subject: Any) -> Outcome:
        try:
            found = subject in self.collection
        except TypeError:
            # e.g. an unhashable subject tested against a set
            found = False

        if found:
            return Ok(subject)
        reason = f"not a member of {render_term(self.collection)}"
        return Err(ValidationError(reason, validator="member", term=subject))


@dataclass(frozen=True, slots=True)
class Transform(Composable):
    """
    Always succeed, conforming the subject to `fn(subject)`.

    Only useful inside pipelines such as AllOf, where a plain transformation
    has to look like a validator.

    Usage:
        AllOf([IsType(str), Transform(str.split)])
    """

    fn: Callable[[Any], Any]

    def validate(self, subject: Any) -> Outcome:
        return Ok(self.fn(subject))


@dataclass(frozen=True, slots=True)
class Named(Composable):
    """
    Give `validator` a readable name, shown in its errors.

    Usage:
        Named(lambda x: x > 0, "positive")
    """

    validator: Any
    name: str

    def __post_init__(self) -> None:
        ensure_validator(self.validator)

    def validate(self, subject: Any) -> Outcome:
        result = validate(subject, self.validator)
        if isinstance(result, Err):
            return Err(result.error.replace(validator=self.name))
        return result


@dataclass(frozen=True, slots=True)
class Check(Composable):
    """
    Predicate node with a readable failure message.

    The subject is returned unchanged when `check` passes. An exception raised
    by `check` counts as a failure.
    """

    check: Callable[[Any], bool]
    message: str | None = None
    name: str | None = None

    def validate(self, subject: Any) -> Outcome:
        try:
            passed = self.check(subject)
        except Exception as e:
            return Err(
                ValidationError(f"validation error: {e}", validator=self.name, term=subject)
            )

        if not passed:
            msg = self.message or "predicate failed"
            return Err(ValidationError(msg, validator=self.name, term=subject))

        return Ok(subject)


def IsType(t: type | tuple[type, ...]) -> Check:
    """
    Validate that value is an instance of type.

    Usage:
        IsType(str)
        IsType((int, float)) & Between(0, 100)
    """

    def check(x: Any) -> bool:
        return isinstance(x, t)

    names = t if isinstance(t, tuple) else (t,)
    expected = " or ".join(cls.__name__ for cls in names)
    return Check(check=check, message=f"expected {expected}", name="is_type")


def Predicate(fn: Callable[[Any], bool], message: str | None = None) -> Check:
    """
    Create validator from arbitrary predicate function.

    Usage:
        Predicate(lambda x: x > 0, "must be positive")
        Predicate(str.isalpha, "must be alphabetic")
    """
    return Check(check=fn, message=message, name=getattr(fn, "__name__", None))


def Matches(pattern: str) -> Check:
    """
    Validate string matches regex pattern.

    Usage:
        Matches(r"^[a-z]+$")
        Matches(r"\\d+-\\d+")
    """
    compiled = re.compile(pattern)

    def check(x: Any) -> bool:
        return isinstance(x, str) and compiled.match(x) is not None

    return Check(check=check, message=f"must match pattern: {pattern}", name="matches")


def Between(lower: Any, upper: Any, inclusive: bool = True) -> Check:
    """Validate value is between bounds."""
    if inclusive:

        def check(x: Any) -> bool:
            return lower <= x <= upper

        return Check(
            check=check,
            message=f"must be between {lower} and {upper}",
            name="between",
        )

    def check_exclusive(x: Any) -> bool:
        return lower < x < upper

    return Check(
        check=check_exclusive,
        message=f"must be between {lower} and {upper} (exclusive)",
        name="between",
    )


@dataclass(frozen=True, slots=True)
class Model(Composable):
    """
    Conform a subject into an instance of a Pydantic model.

    Usage:
        class Player(BaseModel):
            name: str
            team_side: int

        validate({"name": "Buffon", "team_side": 2}, Model(Player))
        # Ok(Player(name='Buffon', team_side=2))
    """

    model: type[pydantic.BaseModel]

    def validate(self, subject: Any) -> Outcome:
        try:
            instance = self.model.model_validate(subject)
        except pydantic.ValidationError as e:
            return Err(
                ValidationError(
                    _pydantic_reason(e),
                    validator=self.model.__name__,
                    term=subject,
                )
            )
        return Ok(instance)


def _pydantic_reason(error: pydantic.ValidationError) -> str:
    details = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"])
        details.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "invalid model data: [" + "; ".join(details) + "]"
