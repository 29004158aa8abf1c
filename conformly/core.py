"""
Core entry points for conformly.

validate() is the single place where validators are invoked: it dispatches on
the validator kind and normalizes every raw outcome into Ok(value) or
Err(ValidationError).
"""

from __future__ import annotations

import logging
import types
from typing import Any

from .errors import InvalidOutcomeError, NotAValidatorError, ValidationError
from .lib.term_helpers import render_term
from .types import Err, Ok, Outcome, Result

logger = logging.getLogger(__name__)

_FUNCTION_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.BuiltinMethodType,
)


def _capability(validator: Any) -> Any:
    """Return the bound validate() of a capability object, or None."""
    if isinstance(validator, type):
        return None
    check = getattr(validator, "validate", None)
    return check if callable(check) else None


def is_validator(value: Any) -> bool:
    """Check whether a value can be passed to validate() as a validator."""
    return _capability(value) is not None or callable(value)


def ensure_validator(value: Any) -> Any:
    """Return value unchanged, raising NotAValidatorError if it is not a validator."""
    if not is_validator(value):
        raise NotAValidatorError(value)
    return value


def describe_validator(validator: Any) -> str:
    """
    Textual identity of a validator, used in errors of unnamed validators.

    Functions are described by their name, everything else by its repr().
    """
    if isinstance(validator, _FUNCTION_TYPES):
        return getattr(validator, "__name__", repr(validator))
    return repr(validator)


def _reason_text(reason: Any) -> str:
    if isinstance(reason, str):
        return reason
    return render_term(reason)


def _invoke(validator: Any, subject: Any) -> Outcome:
    check = _capability(validator)
    if check is not None:
        return check(subject)
    if callable(validator):
        return validator(subject)
    raise NotAValidatorError(validator)


def validate(subject: Any, validator: Any) -> Result:
    """
    Validate `subject` through `validator`.

    The validator can be a one-argument function or an object implementing
    ``validate(subject)``. Either one returns an Outcome, normalized here:

        Ok(conformed)              -> Ok(conformed)
        True                       -> Ok(subject)
        Err(ValidationError(...))  -> unchanged
        Err(reason)                -> Err(ValidationError) wrapping the reason
        False                      -> Err(ValidationError) with "predicate failed"

    Returns:
        Ok(conformed) if validation passes
        Err(ValidationError) if validation fails

    Raises:
        InvalidOutcomeError: if the validator returns anything else
        NotAValidatorError: if `validator` is not a validator at all

    Usage:
        validate(12, lambda x: isinstance(x, int))      # Ok(12)
        validate(42, Transform(str))                    # Ok("42")
        validate("x", lambda x: Err("bad"))             # Err(ValidationError(...))
    """
    outcome = _invoke(validator, subject)

    if isinstance(outcome, Ok):
        return outcome

    if outcome is True:
        return Ok(subject)

    if isinstance(outcome, Err):
        if isinstance(outcome.error, ValidationError):
            return outcome
        return Err(
            ValidationError(
                _reason_text(outcome.error),
                validator=describe_validator(validator),
                term=subject,
            )
        )

    if outcome is False:
        return Err(
            ValidationError(
                "predicate failed",
                validator=describe_validator(validator),
                term=subject,
            )
        )

    logger.debug("Validator %r returned an invalid outcome: %r", validator, outcome)
    raise InvalidOutcomeError(outcome, validator)


def validate_or_raise(subject: Any, validator: Any) -> Any:
    """
    Validate `subject`, returning the conformed value directly.

    Raises:
        ValidationError: if validation fails
        InvalidOutcomeError: if the validator returns an invalid outcome

    Usage:
        validate_or_raise("foo", lambda x: isinstance(x, str))   # "foo"
    """
    result = validate(subject, validator)
    if isinstance(result, Ok):
        return result.value

    logger.debug("Validation failed: %s", result.error)
    raise result.error


class Composable:
    """
    Mixin giving validator nodes `&` (AllOf) and `|` (OneOf) operators.

    Usage:
        IsType(str) & Transform(str.upper)
        Literal("yes") | Literal("no")
        is_int & Transform(str)              # plain function on the left
    """

    __slots__ = ()

    def __and__(self, other: Any) -> Any:
        from .combinators import AllOf

        return AllOf([self, other])

    def __rand__(self, other: Any) -> Any:
        from .combinators import AllOf

        return AllOf([other, self])

    def __or__(self, other: Any) -> Any:
        from .combinators import OneOf

        return OneOf([self, other])

    def __ror__(self, other: Any) -> Any:
        from .combinators import OneOf

        return OneOf([other, self])
