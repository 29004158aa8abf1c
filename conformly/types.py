"""
Type definitions for conformly.

Provides a minimal Result type (Ok/Err), the Validator protocol, and type aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Protocol, TypeVar, Union, runtime_checkable

if TYPE_CHECKING:
    from .errors import ValidationError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a (conformed) value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error result containing an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


@runtime_checkable
class Validator(Protocol):
    """
    Anything exposing ``validate(subject)`` can be used as a validator.

    ``validate`` returns an Outcome: ``Ok(conformed)``, ``Err(reason)``,
    ``True`` or ``False``. All built-in combinators implement this protocol.
    """

    def validate(self, subject: Any) -> Outcome: ...


# Type aliases
Outcome = Union[Ok[Any], Err[Any], bool]
Result = Union[Ok[Any], "Err[ValidationError]"]
FunctionValidator = Callable[[Any], Outcome]
ValidatorLike = Union[Validator, FunctionValidator]
