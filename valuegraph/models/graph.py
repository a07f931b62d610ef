"""
    Graph model - nodes and directed edges produced by one walk.
    Append-only: nodes and edges are never removed or renumbered.
"""
from typing import Dict, List, Optional, Union, TYPE_CHECKING

from .node import Node
from .edge import Edge

if TYPE_CHECKING:
    from ..services.render_service import OutputFormat


class Graph:
    """
        Directed graph of a walked value.
        The first node added is the root; node IDs are ``N0``, ``N1``, ...
        in the order they were allocated.
    """

    def __init__(self, name: str = "G"):
        """
        Initialize a graph.
        Args:
            name: Graph name used in the serialized output
        """
        self.name = name
        self.directed = True
        self.nodes: Dict[str, Node] = {}  # node_id -> Node, in insertion order
        self.edges: List[Edge] = []
        self._outgoing: Dict[str, List[Edge]] = {}  # node_id -> [Edges]
        self._incoming: Dict[str, List[Edge]] = {}  # node_id -> [Edges]
        self._next_node = 0
        self._next_edge = 0

    # ── ID generation ────────────────────────────────────────────

    def new_node_id(self) -> str:
        """Allocate the next node ID; IDs are never reused."""
        node_id = f"N{self._next_node}"
        self._next_node += 1
        return node_id

    def new_edge_id(self) -> str:
        edge_id = f"e{self._next_edge}"
        self._next_edge += 1
        return edge_id

    # ── Construction ─────────────────────────────────────────────

    def add_node(self, node: Node) -> None:
        """Add a node to the graph"""
        if node.node_id in self.nodes:
            raise ValueError(f"Node with id {node.node_id} already exists")

        self.nodes[node.node_id] = node
        self._outgoing[node.node_id] = []
        self._incoming[node.node_id] = []

    def add_edge(self, edge: Edge) -> None:
        """Add an edge to the graph"""
        if edge.source_node.node_id not in self.nodes:
            raise ValueError(f"Source node {edge.source_node.node_id} not in graph")
        if edge.target_node.node_id not in self.nodes:
            raise ValueError(f"Target node {edge.target_node.node_id} not in graph")

        self.edges.append(edge)
        self._outgoing[edge.source_node.node_id].append(edge)
        self._incoming[edge.target_node.node_id].append(edge)

    # ── Queries ──────────────────────────────────────────────────

    @property
    def root(self) -> Optional[Node]:
        """The node of the walked value itself."""
        return next(iter(self.nodes.values()), None)

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def get_all_nodes(self) -> List[Node]:
        return list(self.nodes.values())

    def get_all_edges(self) -> List[Edge]:
        return list(self.edges)

    def get_outgoing_edges(self, node: Node) -> List[Edge]:
        """Edges leaving the node, in the order they were added."""
        return list(self._outgoing.get(node.node_id, []))

    def get_incoming_edges(self, node: Node) -> List[Edge]:
        """Edges arriving at the node: one tree edge, plus any converging ones."""
        return list(self._incoming.get(node.node_id, []))

    def get_children(self, node: Node) -> List[Node]:
        return [edge.target_node for edge in self._outgoing.get(node.node_id, [])]

    def get_edge(self, source: Node, target: Node) -> Optional[Edge]:
        """First edge from ``source`` to ``target``, if any."""
        for edge in self._outgoing.get(source.node_id, []):
            if edge.target_node == target:
                return edge
        return None

    def has_cycle(self) -> bool:
        """
        Check if the graph has a directed cycle.
        Iterative DFS, so very deep graphs do not hit the recursion limit.
        """
        white, grey, black = 0, 1, 2
        color = {node_id: white for node_id in self.nodes}

        for start in self.nodes:
            if color[start] != white:
                continue
            color[start] = grey
            stack = [(start, iter(self._outgoing[start]))]
            while stack:
                node_id, pending = stack[-1]
                edge = next(pending, None)
                if edge is None:
                    color[node_id] = black
                    stack.pop()
                    continue
                target = edge.target_node.node_id
                if color[target] == grey:
                    # Back-edge
                    return True
                if color[target] == white:
                    color[target] = grey
                    stack.append((target, iter(self._outgoing[target])))

        return False

    def get_number_of_nodes(self) -> int:
        return len(self.nodes)

    def get_number_of_edges(self) -> int:
        return len(self.edges)

    # ── Output ───────────────────────────────────────────────────

    def to_dot(self) -> str:
        """The graph in DOT format."""
        # Imported here to avoid circular imports
        from ..services.serialization_service import DotSerializer
        return DotSerializer().serialize(self)

    def render(self, fmt: Union['OutputFormat', str] = "svg") -> bytes:
        """
        Render the graph through Graphviz.

        Raises:
            RenderError: If the ``dot`` executable is unavailable or fails.
        """
        from ..services.render_service import render
        return render(self.to_dot(), fmt)

    def svg(self) -> str:
        """Rendered SVG document."""
        return self.render("svg").decode("utf-8")

    def png(self) -> bytes:
        return self.render("png")

    def pdf(self) -> bytes:
        return self.render("pdf")

    def __repr__(self) -> str:
        return f"Graph({self.name}, nodes={len(self.nodes)}, edges={len(self.edges)})"

    def to_dict(self) -> Dict:
        return {
            'id': self.name,
            'directed': self.directed,
            'nodes': [node.to_dict() for node in self.nodes.values()],
            'edges': [edge.to_dict() for edge in self.edges]
        }
