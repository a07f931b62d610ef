# tests/core_test/test_types.py
"""
Tests for value classification and introspection (valuegraph/types.py).
"""
import array
import collections
import dataclasses
import datetime
import decimal
import enum
import os
import pathlib
import typing
import uuid
import weakref
from typing import Any, Dict, List, Optional, Sequence, TypeVar

import pytest

from valuegraph.types import INVALID, StructuralCategory as SC, TypedValue, ValueClassifier


T = TypeVar("T")


class Color(enum.Enum):
    RED = 1


@dataclasses.dataclass
class Point:
    x: int
    y: int = 0


class Plain:
    def __init__(self):
        self.a = 1
        self._hidden = 2
        self.__mangled = 3


class Slotted:
    __slots__ = ("first", "__private")

    def __init__(self):
        self.first = 1


class SlottedChild(Slotted):
    __slots__ = ("second",)


class Opaque:
    __slots__ = ()


class Guarded:
    """Hides its attributes from normal attribute access."""

    def __init__(self):
        self.secret = 42

    def __getattribute__(self, name):
        if name == "secret":
            raise AttributeError(name)
        return object.__getattribute__(self, name)


Pair = collections.namedtuple("Pair", "left right")


class Weakrefable:
    pass


def _function():
    pass


def _cell():
    captured = [1]

    def inner():
        return captured
    return inner.__closure__[0]


# ═════════════════════════════════════════════════════════════════
#  CLASSIFICATION
# ═════════════════════════════════════════════════════════════════

class TestClassifyRuntimeValues:

    @pytest.mark.parametrize("value", [
        True, 0, -3, 2.5, 1j, decimal.Decimal("1.1"), None, Ellipsis,
        Color.RED, datetime.date(2024, 1, 1), datetime.timedelta(1),
        uuid.UUID(int=0), pathlib.PurePosixPath("/tmp"), range(3),
        _function, len, int, os, Opaque(), memoryview(b"ab"),
    ])
    def test_scalars(self, value):
        assert ValueClassifier.classify(value) is SC.SCALAR

    @pytest.mark.parametrize("value", ["", "abc", b"xyz", bytearray(b"1")])
    def test_text(self, value):
        assert ValueClassifier.classify(value) is SC.TEXT

    @pytest.mark.parametrize("value", [(), (1, 2), frozenset({1})])
    def test_fixed_sequences(self, value):
        assert ValueClassifier.classify(value) is SC.FIXED_SEQUENCE

    @pytest.mark.parametrize("value", [
        [], [1], {1, 2}, collections.deque(), array.array("i", [1]), {}.keys(),
    ])
    def test_dynamic_sequences(self, value):
        assert ValueClassifier.classify(value) is SC.DYNAMIC_SEQUENCE

    @pytest.mark.parametrize("value", [
        {}, {"a": 1}, collections.OrderedDict(), collections.defaultdict(list),
        collections.ChainMap(), type.__dict__,
    ])
    def test_mappings(self, value):
        assert ValueClassifier.classify(value) is SC.ASSOCIATIVE

    def test_weakref_is_reference(self):
        target = Weakrefable()
        assert ValueClassifier.classify(weakref.ref(target)) is SC.REFERENCE

    def test_cell_is_reference(self):
        assert ValueClassifier.classify(_cell()) is SC.REFERENCE

    @pytest.mark.parametrize("factory", [lambda: Point(1), Plain, Slotted, Guarded,
                                         lambda: Pair(1, 2)])
    def test_records(self, factory):
        assert ValueClassifier.classify(factory()) is SC.RECORD

    def test_invalid(self):
        assert ValueClassifier.classify(INVALID) is SC.INVALID

    def test_invalid_is_singleton_and_falsy(self):
        assert type(INVALID)() is INVALID
        assert not INVALID
        assert repr(INVALID) == "INVALID"


class TestClassifyDeclaredTypes:

    @pytest.mark.parametrize("static", [
        Any, object, Optional[int], typing.Union[int, str], T,
        Sequence[int], typing.Mapping[str, int], typing.Iterable,
    ])
    def test_abstract_declared_type_is_polymorphic(self, static):
        assert ValueClassifier.classify(5, static) is SC.POLYMORPHIC
        assert ValueClassifier.classify(None, static) is SC.POLYMORPHIC

    @pytest.mark.parametrize("static, expected", [
        (dict, SC.ASSOCIATIVE),
        (Dict[str, int], SC.ASSOCIATIVE),
        (list, SC.DYNAMIC_SEQUENCE),
        (List[int], SC.DYNAMIC_SEQUENCE),
        (set, SC.DYNAMIC_SEQUENCE),
        (Point, SC.REFERENCE),
        (str, SC.REFERENCE),
        (tuple, SC.REFERENCE),
        (int, SC.REFERENCE),
    ])
    def test_none_in_concrete_slot_is_nil(self, static, expected):
        assert ValueClassifier.classify(None, static) is expected

    def test_concrete_declared_type_uses_runtime_value(self):
        assert ValueClassifier.classify([1], List[int]) is SC.DYNAMIC_SEQUENCE
        assert ValueClassifier.classify(3, int) is SC.SCALAR

    def test_unresolved_declared_type_is_ignored(self):
        assert ValueClassifier.classify(None, "Point") is SC.SCALAR
        assert ValueClassifier.classify(None, type(None)) is SC.SCALAR

    def test_invalid_wins_over_declared_type(self):
        assert ValueClassifier.classify(INVALID, Any) is SC.INVALID


class TestIdentityBearing:

    @pytest.mark.parametrize("category", [
        SC.FIXED_SEQUENCE, SC.DYNAMIC_SEQUENCE, SC.ASSOCIATIVE, SC.REFERENCE, SC.RECORD,
    ])
    def test_containers_are_tracked(self, category):
        assert ValueClassifier.is_identity_bearing(category, object())

    @pytest.mark.parametrize("category", [SC.SCALAR, SC.TEXT, SC.INVALID, SC.POLYMORPHIC])
    def test_values_are_not_tracked(self, category):
        assert not ValueClassifier.is_identity_bearing(category, object())

    def test_nil_is_not_tracked(self):
        assert not ValueClassifier.is_identity_bearing(SC.ASSOCIATIVE, None)


# ═════════════════════════════════════════════════════════════════
#  NAMES
# ═════════════════════════════════════════════════════════════════

class TestTypeName:

    def test_builtin(self):
        assert ValueClassifier.type_name(int) == "int"

    def test_qualified(self):
        assert ValueClassifier.type_name(collections.OrderedDict) == "collections.OrderedDict"
        assert ValueClassifier.type_name(Point).endswith("test_types.Point")

    def test_typing_constructs(self):
        assert ValueClassifier.type_name(Any) == "Any"
        assert ValueClassifier.type_name(Dict[str, int]) == "Dict[str, int]"
        assert ValueClassifier.type_name(Optional[int]) == "Optional[int]"


# ═════════════════════════════════════════════════════════════════
#  RECORD FIELDS
# ═════════════════════════════════════════════════════════════════

class TestRecordFields:

    def test_dataclass_fields_in_declaration_order(self):
        assert ValueClassifier.record_fields(Point(1, 2)) == [("x", 1), ("y", 2)]

    def test_dataclass_extra_attributes_follow(self):
        p = Point(1)
        p.extra = "e"
        assert ValueClassifier.record_fields(p) == [("x", 1), ("y", 0), ("extra", "e")]

    def test_private_and_mangled_fields_included(self):
        names = [name for name, _ in ValueClassifier.record_fields(Plain())]
        assert names == ["a", "_hidden", "_Plain__mangled"]

    def test_slots_base_first_and_unset_is_invalid(self):
        obj = SlottedChild()
        obj.second = 2
        fields = ValueClassifier.record_fields(obj)
        assert fields == [("first", 1), ("_Slotted__private", INVALID), ("second", 2)]

    def test_namedtuple_fields(self):
        assert ValueClassifier.record_fields(Pair("l", "r")) == [("left", "l"), ("right", "r")]

    def test_custom_getattribute_is_bypassed(self):
        assert ValueClassifier.record_fields(Guarded()) == [("secret", 42)]

    def test_field_types(self):
        assert ValueClassifier.field_types(Point) == {"x": int, "y": int}

    def test_field_types_unresolvable_is_empty(self):
        class Broken:
            missing: "NoSuchType"

        assert ValueClassifier.field_types(Broken) == {}

    def test_typed_value_defaults(self):
        handle = TypedValue([1])
        assert handle.static_type is None
