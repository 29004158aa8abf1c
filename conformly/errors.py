"""
Error types for conformly.

ValidationError is the nested error tree returned (inside Err) when a subject
does not conform. ContractViolation and its subclasses are raised when a
validator itself is built or behaves incorrectly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .lib.term_helpers import render_term


class _NoTerm(Enum):
    NO_TERM = 0

    def __repr__(self) -> str:
        return "NO_TERM"


# Marks an error that did not capture its failing term (None is a valid term).
NO_TERM = _NoTerm.NO_TERM


@dataclass(frozen=True, slots=True)
class Index:
    """Position of an element inside a sequence or tuple (0-based)."""

    index: int

    def __str__(self) -> str:
        return f"at position {self.index}"


@dataclass(frozen=True, slots=True)
class Key:
    """Position of a value inside a mapping."""

    key: Any

    def __str__(self) -> str:
        return f"at key {render_term(self.key)}"


Position = Union[None, str, Index, Key]


class ValidationError(Exception):
    """
    A (possibly nested) validation error.

    Fields:
        validator: name or textual identity of the failing validator
        position: where inside a composite subject the failure happened
        reason: a message, or the ValidationError of a nested validator
        term: the failing value, or NO_TERM when it was not captured

    Errors are built where a validator fails and wrapped (never mutated) by
    enclosing combinators on the way up. Use ``replace`` to derive a new error.

    Usage:
        error = ValidationError(validator="map", reason="invalid keys: a, b")
        str(error)  # "(map) invalid keys: a, b"
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        reason: str | ValidationError = "",
        *,
        validator: str | None = None,
        position: Position = None,
        term: Any = NO_TERM,
    ):
        super().__init__(reason)
        self.validator = validator
        self.position = position
        self.reason = reason
        self.term = term

    @property
    def has_term(self) -> bool:
        return self.term is not NO_TERM

    @property
    def message(self) -> str:
        """Render the error tree as `(validator) position -> reason - failing term: term`."""
        parts = []
        if self.validator is not None:
            parts.append(f"({self.validator}) ")
        if self.position is not None:
            parts.append(f"{self.position} -> ")

        if isinstance(self.reason, ValidationError):
            parts.append(self.reason.message)
        else:
            parts.append(self.reason)

        if self.has_term:
            parts.append(f" - failing term: {render_term(self.term)}")
        return "".join(parts)

    def replace(self, **changes: Any) -> ValidationError:
        """Return a new error with the given fields replaced."""
        fields = {
            "validator": self.validator,
            "position": self.position,
            "reason": self.reason,
            "term": self.term,
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError(f"Unknown ValidationError fields: {sorted(unknown)}")
        fields.update(changes)
        reason = fields.pop("reason")
        return ValidationError(reason, **fields)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"ValidationError(validator={self.validator!r}, position={self.position!r}, "
            f"reason={self.reason!r}, term={self.term!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (
            self.validator == other.validator
            and self.position == other.position
            and self.reason == other.reason
            and self.term == other.term
        )


class ContractViolation(Exception):
    """Base class for errors in how a validator is built or behaves."""


class InvalidOutcomeError(ContractViolation, TypeError):
    """A validator returned something other than Ok, Err, True or False."""

    def __init__(self, outcome: Any, validator: Any = None):
        super().__init__(
            "validator should return Ok(value), Err(reason), or a boolean, "
            f"got: {outcome!r}"
        )
        self.outcome = outcome
        self.validator = validator


class NotAValidatorError(ContractViolation, TypeError):
    """A value that is neither callable nor implements validate() was used as a validator."""

    def __init__(self, value: Any):
        super().__init__(
            f"expected a one-argument callable or an object with validate(), got: {value!r}"
        )
        self.value = value


class EmptyValidatorsError(ContractViolation, ValueError):
    """A combinator that needs at least one validator was given none."""

    def __init__(self, combinator: str):
        super().__init__(f"{combinator} requires at least one validator")
        self.combinator = combinator
