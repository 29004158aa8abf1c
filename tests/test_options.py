"""
Tests for conformly.options.
"""

import pydantic
import pytest

from conformly import (
    CollectOptions,
    Collector,
    DictCollector,
    ListCollector,
    Ok,
    SequenceOf,
    SetCollector,
    ShapeOptions,
    TupleCollector,
    validate,
)


class JoinCollector(Collector):
    """Collects strings into one comma-separated string."""

    def start(self):
        return []

    def add(self, acc, item):
        return [*acc, str(item)]

    def finish(self, acc):
        return ",".join(acc)


class TestCollectOptions:
    def test_defaults_to_list(self):
        assert CollectOptions().into == ListCollector()

    def test_shorthands(self):
        assert CollectOptions(into=list).into == ListCollector()
        assert CollectOptions(into=tuple).into == TupleCollector()
        assert CollectOptions(into=set).into == SetCollector()
        assert CollectOptions(into=dict).into == DictCollector()

    def test_custom_collector(self):
        options = CollectOptions(into=JoinCollector())
        assert validate([1, 2, 3], SequenceOf(lambda _: True, options)) == Ok("1,2,3")

    def test_rejects_unknown_into(self):
        with pytest.raises(pydantic.ValidationError):
            CollectOptions(into="list")
        with pytest.raises(pydantic.ValidationError):
            CollectOptions(into=frozenset)

    def test_is_frozen(self):
        options = CollectOptions()
        with pytest.raises(pydantic.ValidationError):
            options.into = DictCollector()


class TestShapeOptions:
    def test_defaults(self):
        assert ShapeOptions().strict is False

    def test_strict_bool_only(self):
        assert ShapeOptions(strict=True).strict is True
        with pytest.raises(pydantic.ValidationError):
            ShapeOptions(strict=1)


class TestCollectors:
    def test_list(self):
        c = ListCollector()
        assert c.finish(c.add(c.add(c.start(), 1), 2)) == [1, 2]

    def test_tuple(self):
        c = TupleCollector()
        assert c.finish(c.add(c.start(), 1)) == (1,)

    def test_set(self):
        c = SetCollector()
        assert c.finish(c.add(c.add(c.start(), 1), 1)) == {1}

    def test_dict(self):
        c = DictCollector()
        acc = c.add(c.add(c.start(), ("a", 1)), ("a", 2))
        assert c.finish(acc) == {"a": 2}

    def test_dict_requires_pairs(self):
        c = DictCollector()
        with pytest.raises(TypeError):
            c.add(c.start(), 1)
        with pytest.raises(TypeError):
            c.add(c.start(), ("a", 1, 2))

    def test_dict_collector_in_sequence_of(self):
        with pytest.raises(TypeError):
            validate([1], SequenceOf(lambda _: True, into=dict))
