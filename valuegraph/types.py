"""
    Structural categories and runtime type introspection.

    Every visited value is classified into exactly one ``StructuralCategory``.
    The classification may take the *declared* type of the slot holding the
    value into account (a record field annotation, or the type carried by a
    ``TypedValue``): an abstract declared type turns the slot into a
    polymorphic container, and ``None`` in a concretely typed slot becomes a
    nil of that type's category.
"""
import array
import collections
import collections.abc
import dataclasses
import datetime
import functools
import inspect
import logging
import numbers
import pathlib
import types
import typing
import uuid
import weakref
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)


class StructuralCategory(Enum):
    """Closed set of shapes a runtime value can take. Values are label markers."""
    INVALID = "invalid"
    SCALAR = "scalar"
    TEXT = "text"
    FIXED_SEQUENCE = "array"
    DYNAMIC_SEQUENCE = "slice"
    ASSOCIATIVE = "map"
    REFERENCE = "pointer"
    POLYMORPHIC = "interface"
    RECORD = "struct"


# Categories whose values are collapsed by identity (id()) when seen twice
IDENTITY_CATEGORIES = frozenset({
    StructuralCategory.FIXED_SEQUENCE,
    StructuralCategory.DYNAMIC_SEQUENCE,
    StructuralCategory.ASSOCIATIVE,
    StructuralCategory.REFERENCE,
    StructuralCategory.RECORD,
})


class _Invalid:
    """Marker for an absent value, e.g. a ``__slots__`` member never assigned."""

    _instance: Optional['_Invalid'] = None

    def __new__(cls) -> '_Invalid':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'INVALID'

    def __bool__(self) -> bool:
        return False


INVALID = _Invalid()


class TypedValue(NamedTuple):
    """A value paired with the type it was declared as."""
    value: Any
    static_type: Any = None


_NONE_TYPE = type(None)
_UNION_TYPE = getattr(types, 'UnionType', None)  # PEP 604 unions, 3.10+

_TEXT_TYPES = (str, bytes, bytearray)

_SCALAR_TYPES = (
    bool,
    numbers.Number,
    _NONE_TYPE,
    type(Ellipsis),
    type(NotImplemented),
    Enum,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    pathlib.PurePath,
    range,
    slice,
    memoryview,
)

_FIXED_SEQUENCE_TYPES = (tuple, frozenset)

_DYNAMIC_SEQUENCE_TYPES = (
    list,
    set,
    collections.deque,
    array.array,
    collections.abc.Sequence,
    collections.abc.Set,
)

_REFERENCE_TYPES = (weakref.ref, types.CellType)

_OPAQUE_HANDLE_TYPES = (
    type,
    types.ModuleType,
    types.FrameType,
    types.CodeType,
    types.TracebackType,
)


class ValueClassifier:
    """Classification and introspection of runtime values."""

    @staticmethod
    def classify(value: Any, static_type: Any = None) -> StructuralCategory:
        """Return the structural category of ``value`` held in a slot of ``static_type``."""
        if value is INVALID:
            return StructuralCategory.INVALID
        if ValueClassifier.is_abstract_type(static_type):
            return StructuralCategory.POLYMORPHIC
        if value is None and ValueClassifier.is_concrete_type(static_type):
            return ValueClassifier.nil_category(static_type)

        if isinstance(value, tuple) and hasattr(type(value), '_fields'):
            return StructuralCategory.RECORD
        if isinstance(value, _TEXT_TYPES):
            return StructuralCategory.TEXT
        if isinstance(value, _SCALAR_TYPES):
            return StructuralCategory.SCALAR
        if isinstance(value, collections.abc.Mapping):
            return StructuralCategory.ASSOCIATIVE
        if isinstance(value, _FIXED_SEQUENCE_TYPES):
            return StructuralCategory.FIXED_SEQUENCE
        if isinstance(value, _DYNAMIC_SEQUENCE_TYPES):
            return StructuralCategory.DYNAMIC_SEQUENCE
        if isinstance(value, _REFERENCE_TYPES):
            return StructuralCategory.REFERENCE
        if ValueClassifier.is_opaque_handle(value):
            return StructuralCategory.SCALAR
        if (dataclasses.is_dataclass(value)
                or _instance_dict(value) is not None
                or _slot_names(type(value))):
            return StructuralCategory.RECORD
        return StructuralCategory.SCALAR

    @staticmethod
    def is_identity_bearing(category: StructuralCategory, value: Any) -> bool:
        """Whether a visit of ``value`` should be tracked by ``id()``."""
        return category in IDENTITY_CATEGORIES and value is not None

    @staticmethod
    def is_opaque_handle(value: Any) -> bool:
        """Functions, classes, modules and other objects shown only by name."""
        return (isinstance(value, _OPAQUE_HANDLE_TYPES)
                or inspect.isroutine(value)
                or inspect.isgenerator(value)
                or inspect.iscoroutine(value)
                or inspect.isasyncgen(value))

    # ── Declared types ───────────────────────────────────────────

    @staticmethod
    def is_abstract_type(tp: Any) -> bool:
        """
        Whether a declared type can only be satisfied by some other,
        concrete runtime type: ``Any``, ``object``, unions, type variables,
        protocols and abstract base classes.
        """
        if tp is None or tp is _NONE_TYPE:
            return False
        if tp is typing.Any or tp is object:
            return True
        if isinstance(tp, typing.TypeVar):
            return True
        origin = typing.get_origin(tp)
        if _is_union(origin):
            return True
        if origin is not None:
            tp = origin
        if isinstance(tp, type):
            return inspect.isabstract(tp) or bool(getattr(tp, '_is_protocol', False))
        return False

    @staticmethod
    def is_concrete_type(tp: Any) -> bool:
        """Whether ``tp`` names a concrete class (possibly parametrized)."""
        if tp is None or tp is _NONE_TYPE:
            return False
        return isinstance(typing.get_origin(tp) or tp, type)

    @staticmethod
    def nil_category(tp: Any) -> StructuralCategory:
        """Category of a ``None`` held in a slot declared as concrete type ``tp``."""
        origin = typing.get_origin(tp) or tp
        if issubclass(origin, collections.abc.Mapping):
            return StructuralCategory.ASSOCIATIVE
        if issubclass(origin, _TEXT_TYPES + _FIXED_SEQUENCE_TYPES):
            return StructuralCategory.REFERENCE
        if issubclass(origin, (collections.abc.Sequence, collections.abc.Set, array.array)):
            return StructuralCategory.DYNAMIC_SEQUENCE
        return StructuralCategory.REFERENCE

    @staticmethod
    def type_name(tp: Any) -> str:
        """Readable name of a runtime class or declared type."""
        if isinstance(tp, type) and not typing.get_args(tp):
            module = getattr(tp, '__module__', None)
            qualname = getattr(tp, '__qualname__', tp.__name__)
            if module in (None, 'builtins'):
                return qualname
            return f"{module}.{qualname}"
        if tp is typing.Any:
            return 'Any'
        if _is_union(typing.get_origin(tp)):
            # Spelled the same on every interpreter, whatever the union syntax
            args = typing.get_args(tp)
            members = [ValueClassifier.type_name(arg) for arg in args if arg is not _NONE_TYPE]
            if len(args) == 2 and len(members) == 1:
                return f"Optional[{members[0]}]"
            return f"Union[{', '.join(ValueClassifier.type_name(arg) for arg in args)}]"
        return repr(tp).replace('typing.', '')

    # ── Records ──────────────────────────────────────────────────

    @staticmethod
    def record_fields(value: Any) -> List[Tuple[str, Any]]:
        """
        Named fields of a record, in declaration order.

        Order: named-tuple fields, or dataclass fields followed by
        ``__slots__`` members (base classes first) and remaining
        ``__dict__`` entries.  Private and name-mangled members are
        included; unassigned slots are reported as ``INVALID``.
        """
        cls = type(value)
        if isinstance(value, tuple) and hasattr(cls, '_fields'):
            return list(zip(cls._fields, value))

        names: List[str] = []
        if dataclasses.is_dataclass(value):
            names.extend(f.name for f in dataclasses.fields(value))
        for name in _slot_names(cls):
            if name not in names:
                names.append(name)

        fields = [(name, _read_member(value, name)) for name in names]
        listed = set(names)
        for name, member in (_instance_dict(value) or {}).items():
            if name not in listed:
                fields.append((name, member))
        return fields

    @staticmethod
    def field_types(cls: type) -> Dict[str, Any]:
        """Resolved field annotations of ``cls``; empty when they cannot be resolved."""
        return _field_types(cls)


def _is_union(origin: Any) -> bool:
    return origin is typing.Union or (_UNION_TYPE is not None and origin is _UNION_TYPE)


@functools.lru_cache(maxsize=256)
def _field_types(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception as exc:
        # Annotations are evaluated as code; any failure means "no hints"
        logger.debug("Cannot resolve annotations of %s: %s", cls, exc)
        return {}


def _instance_dict(value: Any) -> Optional[Dict[str, Any]]:
    try:
        members = object.__getattribute__(value, '__dict__')
    except (AttributeError, TypeError):
        return None
    return members if isinstance(members, dict) else None


def _slot_names(cls: type) -> List[str]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ('__dict__', '__weakref__'):
                continue
            names.append(_mangle(klass, name))
    return names


def _mangle(klass: type, name: str) -> str:
    if name.startswith('__') and not name.endswith('__'):
        return f"_{klass.__name__.lstrip('_')}{name}"
    return name


def _read_member(value: Any, name: str) -> Any:
    # object.__getattribute__ skips any custom __getattribute__/__getattr__
    try:
        return object.__getattribute__(value, name)
    except AttributeError:
        return INVALID
