"""
Configuration records for combinators, and the collectors used to build outputs.

Every combinator that takes options owns an explicit, frozen options record.
There is no global configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator


class Collector(ABC):
    """
    Accumulates conformed items into an output container.

    A collector is used in three steps: ``start()`` creates an empty
    accumulator, ``add(acc, item)`` appends one item and returns the new
    accumulator, ``finish(acc)`` produces the final container.
    """

    @abstractmethod
    def start(self) -> Any: ...

    @abstractmethod
    def add(self, acc: Any, item: Any) -> Any: ...

    def finish(self, acc: Any) -> Any:
        return acc

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class ListCollector(Collector):
    def start(self) -> list:
        return []

    def add(self, acc: list, item: Any) -> list:
        acc.append(item)
        return acc


class TupleCollector(ListCollector):
    def finish(self, acc: list) -> tuple:
        return tuple(acc)


class SetCollector(Collector):
    def start(self) -> set:
        return set()

    def add(self, acc: set, item: Any) -> set:
        acc.add(item)
        return acc


class DictCollector(Collector):
    """Collects ``(key, value)`` pairs; a repeated key keeps the last value."""

    def start(self) -> dict:
        return {}

    def add(self, acc: dict, item: Any) -> dict:
        try:
            key, value = item
        except (TypeError, ValueError) as e:
            raise TypeError(
                f"DictCollector expects (key, value) pairs, got: {item!r}"
            ) from e
        acc[key] = value
        return acc


_SHORTHANDS: dict[Any, Collector] = {
    list: ListCollector(),
    tuple: TupleCollector(),
    set: SetCollector(),
    dict: DictCollector(),
}


class CollectOptions(BaseModel):
    """
    Options for SequenceOf and MapOf.

    Usage:
        CollectOptions()              # collect into a list
        CollectOptions(into=dict)     # collect (key, value) pairs into a dict
        CollectOptions(into=MyCollector())
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    into: Collector = ListCollector()

    @field_validator("into", mode="before")
    @classmethod
    def _coerce_shorthand(cls, value: Any) -> Any:
        if isinstance(value, type) and value in _SHORTHANDS:
            return _SHORTHANDS[value]
        return value


class ShapeOptions(BaseModel):
    """
    Options for Shape.

    strict: reject subjects with keys that are not declared in the shape.
    """

    model_config = ConfigDict(frozen=True)

    strict: StrictBool = False
