"""
    GraphBuilder — walks an arbitrary value and builds its Graph.

    The walk is pre-order over an explicit LIFO worklist instead of the
    call stack, so nesting depth is bounded by memory rather than by the
    interpreter's recursion limit.  Three kinds of task are scheduled:

        _Visit      classify a value, create its node, schedule children
        _Entry      create the intermediate node of one mapping entry
        _Ellipsis   create the ``... N more`` node of a truncated container

    Children are pushed in reverse so they are popped, and numbered, in
    their natural order.
"""
import collections
import itertools
import logging
import operator
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

from .config import Config, DEFAULT_CONFIG
from .identity import IdentityTracker
from .labels import LabelFormatter
from .models.edge import Edge
from .models.graph import Graph
from .models.node import Node, BOX
from .types import INVALID, StructuralCategory, ValueClassifier

logger = logging.getLogger(__name__)


class _Visit(NamedTuple):
    parent: Optional[Node]
    name: Optional[str]
    value: Any
    static_type: Any
    depth: int


class _Entry(NamedTuple):
    parent: Node
    key: Any
    value: Any
    depth: int


class _Ellipsis(NamedTuple):
    parent: Node
    remaining: int


_Task = Union[_Visit, _Entry, _Ellipsis]


class GraphBuilder:
    """
    Builds the Graph of a value under a fixed ``Config``.

    Usage:
        graph = GraphBuilder(Config(depth_limit=3)).build(value)

    A builder holds no per-build state; every ``build`` call owns a fresh
    Graph and IdentityTracker.
    """

    def __init__(self, config: Optional[Config] = None,
                 formatter: Optional[LabelFormatter] = None):
        self._config = config or DEFAULT_CONFIG
        self._formatter = formatter or LabelFormatter()

    @property
    def config(self) -> Config:
        return self._config

    def build(self, value: Any = INVALID, static_type: Any = None) -> Graph:
        """
        Walk ``value`` and return its graph.

        Args:
            value:       Any Python object.
            static_type: Declared type of the slot holding ``value``, if known.

        Returns:
            A fully built Graph whose first node is the root.
        """
        logger.debug("Building graph of %s", type(value).__name__)
        walk = _Walk(self._config, self._formatter)
        graph = walk.run(value, static_type)
        logger.debug("Built %r with %s", graph, self._config)
        return graph


class _Walk:
    """State of a single build: the graph, the identity tracker, the worklist."""

    def __init__(self, config: Config, formatter: LabelFormatter):
        self.config = config
        self.fmt = formatter
        self.graph = Graph()
        self.tracker = IdentityTracker()
        self.stack: List[_Task] = []
        self._handlers: Dict[StructuralCategory, Callable[[Node, _Visit, StructuralCategory], str]] = {
            StructuralCategory.INVALID: self._invalid,
            StructuralCategory.SCALAR: self._scalar,
            StructuralCategory.TEXT: self._text,
            StructuralCategory.FIXED_SEQUENCE: self._sequence,
            StructuralCategory.DYNAMIC_SEQUENCE: self._sequence,
            StructuralCategory.ASSOCIATIVE: self._mapping,
            StructuralCategory.REFERENCE: self._reference,
            StructuralCategory.POLYMORPHIC: self._polymorphic,
            StructuralCategory.RECORD: self._record,
        }

    def run(self, value: Any, static_type: Any) -> Graph:
        self.stack.append(_Visit(None, None, value, static_type, 0))
        while self.stack:
            task = self.stack.pop()
            if isinstance(task, _Visit):
                self._visit(task)
            elif isinstance(task, _Entry):
                self._entry(task)
            else:
                node = self._add_node(None, self.fmt.ellipsis(task.remaining))
                self._connect(task.parent, node, None)
        return self.graph

    # ── Node / edge helpers ──────────────────────────────────────

    def _add_node(self, category: Optional[StructuralCategory], label: str,
                  shape: Optional[str] = BOX) -> Node:
        node = Node(self.graph.new_node_id(), label=label, shape=shape, category=category)
        self.graph.add_node(node)
        return node

    def _connect(self, parent: Optional[Node], child: Node, role: Optional[str]) -> None:
        if parent is None:
            return
        self.graph.add_edge(Edge(self.graph.new_edge_id(), parent, child, role=role))

    def _schedule(self, tasks: List[_Task]) -> None:
        self.stack.extend(reversed(tasks))

    # ── Visiting ─────────────────────────────────────────────────

    def _visit(self, task: _Visit) -> None:
        category = ValueClassifier.classify(task.value, task.static_type)
        tracked = ValueClassifier.is_identity_bearing(category, task.value)

        if tracked:
            existing = self.tracker.lookup(task.value)
            if existing is not None:
                # Shared or cyclic: converge on the node built earlier
                self._connect(task.parent, self.graph.get_node(existing), task.name)
                return

        node = self._add_node(category, '')
        if tracked:
            self.tracker.record(task.value, node.node_id)
        self._connect(task.parent, node, task.name)

        if task.depth == self.config.depth_limit:
            node.label = self.fmt.depth_limit(self.config.depth_limit)
            node.category = None
            return

        label = self._handlers[category](node, task, category)
        node.label = self.fmt.named(task.name, label)

    def _entry(self, task: _Entry) -> None:
        node = self._add_node(None, '', shape=None)
        self._connect(task.parent, node, None)
        self._schedule([
            _Visit(node, 'key', task.key, None, task.depth),
            _Visit(node, 'value', task.value, None, task.depth),
        ])

    @staticmethod
    def _contents(container: Any, read: Callable[[Any], Any],
                  limit: Optional[int]) -> Tuple[int, List[Any]]:
        """Size of a container and its first ``limit`` items; nothing past them is read."""
        try:
            return len(container), list(itertools.islice(read(container), limit))
        except Exception as exc:
            # A broken container is drawn empty rather than aborting the walk
            logger.warning("Cannot read contents of %s: %s", type(container).__name__, exc)
            return 0, []

    def _type_name(self, task: _Visit) -> str:
        if task.value is None and task.static_type is not None:
            return ValueClassifier.type_name(task.static_type)
        return ValueClassifier.type_name(type(task.value))

    # ── Category handlers (return the node's label) ──────────────

    def _invalid(self, node: Node, task: _Visit, category: StructuralCategory) -> str:
        return self.fmt.invalid()

    def _scalar(self, node: Node, task: _Visit, category: StructuralCategory) -> str:
        return self.fmt.scalar(self._type_name(task), task.value)

    def _text(self, node: Node, task: _Visit, category: StructuralCategory) -> str:
        return self.fmt.text(self._type_name(task), task.value)

    def _sequence(self, node: Node, task: _Visit, category: StructuralCategory) -> str:
        type_name = self._type_name(task)
        if task.value is None:
            return self.fmt.nil(type_name, category)

        length, shown = self._contents(task.value, iter, self.config.sequence_limit)
        capacity = task.value.maxlen if isinstance(task.value, collections.deque) else None

        children: List[_Task] = [
            _Visit(node, f"[{index}]", item, None, task.depth + 1)
            for index, item in enumerate(shown)
        ]
        if len(shown) < length:
            children.append(_Ellipsis(node, length - len(shown)))
        self._schedule(children)
        return self.fmt.sequence(type_name, category, length, capacity)

    def _mapping(self, node: Node, task: _Visit, category: StructuralCategory) -> str:
        type_name = self._type_name(task)
        if task.value is None:
            return self.fmt.nil(type_name, category)

        length, shown = self._contents(
            task.value, operator.methodcaller("items"), self.config.map_limit)

        children: List[_Task] = [
            _Entry(node, key, value, task.depth + 1) for key, value in shown
        ]
        if len(shown) < length:
            children.append(_Ellipsis(node, length - len(shown)))
        self._schedule(children)
        return self.fmt.mapping(type_name)

    def _reference(self, node: Node, task: _Visit, category: StructuralCategory) -> str:
        type_name = self._type_name(task)
        referent = _dereference(task.value)
        if referent is INVALID:
            return self.fmt.nil(type_name, category)
        # Dereferencing does not count as a nesting level
        self._schedule([_Visit(node, None, referent, None, task.depth)])
        return self.fmt.reference(type_name)

    def _polymorphic(self, node: Node, task: _Visit, category: StructuralCategory) -> str:
        type_name = ValueClassifier.type_name(task.static_type)
        if task.value is None:
            return self.fmt.nil(type_name, category)
        self._schedule([_Visit(node, None, task.value, None, task.depth + 1)])
        return self.fmt.polymorphic(type_name)

    def _record(self, node: Node, task: _Visit, category: StructuralCategory) -> str:
        hints = ValueClassifier.field_types(type(task.value))
        self._schedule([
            _Visit(node, name, member, hints.get(name), task.depth + 1)
            for name, member in ValueClassifier.record_fields(task.value)
        ])
        return self.fmt.record(self._type_name(task))


def _dereference(reference: Any) -> Any:
    """Target of a weak reference or closure cell; INVALID when dead or empty."""
    if reference is None:
        return INVALID
    if callable(reference):
        target = reference()
        # A live weakref never yields None
        return INVALID if target is None else target
    try:
        return reference.cell_contents
    except ValueError:
        return INVALID
