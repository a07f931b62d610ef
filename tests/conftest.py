# tests/conftest.py
"""
Shared test fixtures.
Stub graph: a hand-built list-of-pairs value graph with 6 nodes,
one converging edge and no cycle.
"""
import pytest
from typing import Dict, List

from valuegraph.config import Config
from valuegraph.models.graph import Graph
from valuegraph.models.edge import Edge
from valuegraph.models.node import Node
from valuegraph.services.serialization_service import DotSerializer


# ── Node definitions (label, shape) ─────────────────────────────
_NODES = [
    ("list\nslice len: 2", "box"),
    ("", None),                         # mapping entry
    ("key\nstr len: 4\nname", "box"),
    ("value\nstr len: 5\nAlice", "box"),
    ("[1]\nint: 30", "box"),
    ("... 3 more", "box"),
]

# ── Edge definitions (source index, target index, role) ─────────
_EDGES = [
    (0, 1, None),
    (1, 2, "key"),
    (1, 3, "value"),
    (0, 4, "[1]"),
    (0, 5, None),
    (1, 4, "value"),                    # converges on an existing node
]


def _build_graph(name: str = "G") -> Graph:
    g = Graph(name)
    nodes: List[Node] = []

    for label, shape in _NODES:
        node = Node(g.new_node_id(), label=label, shape=shape)
        g.add_node(node)
        nodes.append(node)

    for src, tgt, role in _EDGES:
        g.add_edge(Edge(g.new_edge_id(), nodes[src], nodes[tgt], role=role))

    return g


def labels_by_id(graph: Graph) -> Dict[str, str]:
    return {node.node_id: node.label for node in graph.get_all_nodes()}


# ── Pytest fixtures ──────────────────────────────────────────────

@pytest.fixture
def stub_graph() -> Graph:
    """Hand-built graph: 6 nodes, 6 edges, one converging edge, acyclic."""
    return _build_graph()


@pytest.fixture
def empty_graph() -> Graph:
    """An empty graph with no nodes or edges."""
    return Graph()


@pytest.fixture
def unlimited() -> Config:
    """No truncation at all."""
    return Config(sequence_limit=None, map_limit=None, depth_limit=None)


@pytest.fixture
def serializer() -> DotSerializer:
    return DotSerializer()


@pytest.fixture
def labels():
    """Return a function mapping a graph to {node_id: label}."""
    return labels_by_id
