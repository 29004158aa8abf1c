"""
Structural combinators for conformly.

Each combinator is an immutable validator node built from other validators.
AllOf, OneOf, SequenceOf and Tuple stop at the deciding sub-validator: the
ones after it are never invoked.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .core import Composable, ensure_validator, validate
from .errors import EmptyValidatorsError, Index, Key, ValidationError
from .lib.term_helpers import is_list, is_mapping, is_tuple, render_keys
from .options import CollectOptions, ShapeOptions
from .types import Err, Ok, Outcome
from .validators import Named


def _validator_tuple(validators: Any, combinator: str, allow_empty: bool = False) -> tuple:
    validators = tuple(validators)
    if not validators and not allow_empty:
        raise EmptyValidatorsError(combinator)
    for validator in validators:
        ensure_validator(validator)
    return validators


@dataclass(frozen=True, slots=True)
class AllOf(Composable):
    """
    Pass when every validator passes, piping each conformed value to the next.

    Stops at the first failure and returns it unchanged; otherwise returns the
    value conformed by the last validator.

    Usage:
        AllOf([IsType(str), Transform(str.strip)])
        IsType(str) & Transform(str.strip)     # same thing
    """

    validators: tuple

    def __post_init__(self) -> None:
        object.__setattr__(self, "validators", _validator_tuple(self.validators, "AllOf"))

    def validate(self, subject: Any) -> Outcome:
        result: Any = Ok(subject)
        for validator in self.validators:
            result = validate(result.value, validator)
            if isinstance(result, Err):
                return result
        return result


@dataclass(frozen=True, slots=True)
class OneOf(Composable):
    """
    Pass when one of the validators passes, trying them in order.

    The first success is returned as is. If every validator fails, the error
    lists all failures in the order they were tried.

    Usage:
        OneOf([IsType(int), AllOf([IsType(str), Transform(int)])])
        Literal("yes") | Literal("no")
    """

    validators: tuple

    def __post_init__(self) -> None:
        object.__setattr__(self, "validators", _validator_tuple(self.validators, "OneOf"))

    def validate(self, subject: Any) -> Outcome:
        errors: list[ValidationError] = []
        for validator in self.validators:
            result = validate(subject, validator)
            if isinstance(result, Ok):
                return result
            errors.append(result.error)

        # A single alternative fails exactly like the validator itself
        if len(errors) == 1:
            return Err(errors[0])

        messages = ", ".join(error.message for error in errors)
        return Err(ValidationError(f"all validators failed: [{messages}]", validator="one_of"))


def _collect_options(options: CollectOptions | None, into: Any, default: Any) -> CollectOptions:
    if options is not None and into is not None:
        raise TypeError("pass either options or into, not both")
    if options is not None:
        return options
    return CollectOptions(into=default if into is None else into)


@dataclass(frozen=True, slots=True, init=False)
class SequenceOf(Composable):
    """
    Validate every element of an iterable, collecting the conformed elements.

    Mappings are iterated as (key, value) pairs. The output container is
    chosen by the `into` option (list by default). An empty iterable always
    passes. Strings and bytes are rejected rather than split into characters.

    Usage:
        SequenceOf(IsType(int))                          # [1, 2] -> [1, 2]
        SequenceOf(Transform(str), into=set)             # [1, 1] -> {"1"}
        SequenceOf(swap_pair, CollectOptions(into=dict)) # {k: v} -> {v: k}
    """

    validator: Any
    options: CollectOptions

    def __init__(
        self,
        validator: Any,
        options: CollectOptions | None = None,
        *,
        into: Any = None,
    ):
        object.__setattr__(self, "validator", ensure_validator(validator))
        object.__setattr__(self, "options", _collect_options(options, into, list))

    def validate(self, subject: Any) -> Outcome:
        if isinstance(subject, (str, bytes, bytearray)):
            return Err(ValidationError("expected an iterable", validator="enum_of", term=subject))

        items = subject.items() if isinstance(subject, Mapping) else subject
        try:
            iterator = iter(items)
        except TypeError:
            return Err(ValidationError("expected an iterable", validator="enum_of", term=subject))

        collector = self.options.into
        acc = collector.start()
        for index, item in enumerate(iterator):
            result = validate(item, self.validator)
            if isinstance(result, Err):
                return Err(ValidationError(result.error, validator="enum_of", position=Index(index)))
            acc = collector.add(acc, result.value)

        return Ok(collector.finish(acc))


Each = SequenceOf


def ListOf(validator: Any) -> Named:
    """
    Validate a list where all elements match `validator`.

    Usage:
        ListOf(AllOf([IsType(int), Transform(str)]))   # [1, 2] -> ["1", "2"]
    """
    return Named(AllOf([is_list, SequenceOf(validator, into=list)]), "list_of")


@dataclass(frozen=True, slots=True, init=False)
class MapOf(Composable):
    """
    Validate a mapping whose keys match `key_validator` and values match `value_validator`.

    The output maps each conformed key to its conformed value. If two keys are
    conformed to the same value they collapse into one entry, and the last
    one iterated wins.

    Usage:
        MapOf(IsType(str), IsType(int))
        MapOf(Transform(str), Transform(float))       # {1: 2} -> {"1": 2.0}
    """

    key_validator: Any
    value_validator: Any
    options: CollectOptions

    def __init__(
        self,
        key_validator: Any,
        value_validator: Any,
        options: CollectOptions | None = None,
        *,
        into: Any = None,
    ):
        object.__setattr__(self, "key_validator", ensure_validator(key_validator))
        object.__setattr__(self, "value_validator", ensure_validator(value_validator))
        object.__setattr__(self, "options", _collect_options(options, into, dict))

    def validate(self, subject: Any) -> Outcome:
        if not is_mapping(subject):
            return Err(ValidationError("predicate failed", validator="map_of", term=subject))

        result = validate(subject, SequenceOf(self._validate_pair, self.options))
        if isinstance(result, Err):
            # Report the failing pair itself, not its position in the iteration
            return Err(result.error.reason.replace(validator="map_of"))
        return result

    def _validate_pair(self, pair: tuple[Any, Any]) -> Outcome:
        key, value = pair

        key_result = validate(key, self.key_validator)
        if isinstance(key_result, Err):
            return Err(ValidationError(f"invalid key: {key_result.error.message}", term=key))

        value_result = validate(value, self.value_validator)
        if isinstance(value_result, Err):
            return Err(ValidationError(value_result.error, position=Key(key)))

        return Ok((key_result.value, value_result.value))


@dataclass(frozen=True, slots=True)
class ShapeField:
    """A validator for one key of a Shape, and whether the key must be present."""

    validator: Any
    required: bool = False

    def __post_init__(self) -> None:
        ensure_validator(self.validator)


def Required(validator: Any) -> ShapeField:
    """
    Mark a Shape key as required.

    Usage:
        Shape({"name": Required(IsType(str))})
    """
    return ShapeField(validator, required=True)


def Optional(validator: Any) -> ShapeField:
    """
    Mark a Shape key as optional: validated only when present.

    Usage:
        Shape({"email": Optional(IsType(str))})
    """
    return ShapeField(validator, required=False)


def _shape_field(key: Any, value: Any) -> ShapeField:
    if isinstance(value, ShapeField):
        return value
    if isinstance(value, tuple) and len(value) == 2 and value[0] in ("required", "optional"):
        return ShapeField(value[1], required=value[0] == "required")
    raise TypeError(
        f"Shape field {key!r} must be Required(v), Optional(v), "
        f"or a ('required' | 'optional', v) pair, got: {value!r}"
    )


@dataclass(frozen=True, slots=True, init=False)
class Shape(Composable):
    """
    Validate a mapping with known keys, each with its own validator.

    Required keys must be present; optional keys are validated only when
    present. Keys that are not declared are passed through unchanged, or
    rejected when `strict` is set. The output is a new dict holding every key
    of the subject, in the subject's order.

    Declared keys are validated in declaration order and validation stops at
    the first failing key.

    Usage:
        Shape({
            "name": Required(IsType(str)),
            "email": Optional(IsType(str)),
        }, strict=True)
    """

    fields: Mapping[Any, ShapeField]
    options: ShapeOptions

    def __init__(
        self,
        fields: Mapping[Any, Any],
        options: ShapeOptions | None = None,
        *,
        strict: bool | None = None,
    ):
        if not isinstance(fields, Mapping):
            raise TypeError(f"Shape fields must be a mapping, got: {fields!r}")
        if options is not None and strict is not None:
            raise TypeError("pass either options or strict, not both")
        if options is None:
            options = ShapeOptions() if strict is None else ShapeOptions(strict=strict)

        normalized = {key: _shape_field(key, value) for key, value in fields.items()}
        object.__setattr__(self, "fields", MappingProxyType(normalized))
        object.__setattr__(self, "options", options)

    @property
    def strict(self) -> bool:
        return self.options.strict

    def validate(self, subject: Any) -> Outcome:
        if not is_mapping(subject):
            return Err(ValidationError("predicate failed", validator="map", term=subject))

        missing = [key for key, field in self.fields.items() if field.required and key not in subject]
        if missing:
            return Err(ValidationError(f"missing required keys: {render_keys(missing)}", validator="map"))

        if self.strict:
            unknown = [key for key in subject if key not in self.fields]
            if unknown:
                reason = f"unknown keys in strict mode: {render_keys(unknown)}"
                return Err(ValidationError(reason, validator="map"))

        conformed = {}
        for key, field in self.fields.items():
            if key not in subject:
                continue
            result = validate(subject[key], field.validator)
            if isinstance(result, Err):
                return Err(ValidationError(result.error, validator="map", position=Key(key)))
            conformed[key] = result.value

        return Ok({key: conformed[key] if key in conformed else value for key, value in subject.items()})


@dataclass(frozen=True, slots=True)
class Tuple(Composable):
    """
    Validate a fixed-size tuple, element by element.

    Usage:
        Tuple((IsType(str), IsType(int)))          # ("a", 1) -> ("a", 1)
        Tuple((Transform(str), Transform(str)))    # (1, 2) -> ("1", "2")
    """

    validators: tuple

    def __post_init__(self) -> None:
        validators = _validator_tuple(self.validators, "Tuple", allow_empty=True)
        object.__setattr__(self, "validators", validators)

    def validate(self, subject: Any) -> Outcome:
        if not is_tuple(subject):
            return Err(ValidationError("predicate failed", validator="tuple", term=subject))

        if len(subject) != len(self.validators):
            reason = (
                f"expected tuple with {len(self.validators)} elements, "
                f"got one with {len(subject)} elements"
            )
            return Err(ValidationError(reason, validator="tuple"))

        conformed = []
        for index, (element, validator) in enumerate(zip(subject, self.validators)):
            result = validate(element, validator)
            if isinstance(result, Err):
                return Err(ValidationError(result.error, validator="tuple", position=Index(index)))
            conformed.append(result.value)

        return Ok(tuple(conformed))
