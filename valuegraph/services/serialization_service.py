"""
    Serialization of value graphs.

    ``DotSerializer.serialize`` renders a Graph in the DOT language read by
    Graphviz.  The output is a pure function of the graph: nodes are
    written in ID order, then edges in the order they were added, so the
    same graph always yields byte-identical text.

    Example:

        digraph G {
        	N0 [label="list\\nslice len: 1", shape=box];
        	N1 [label="[0]\\nint: 7", shape=box];
        	N0 -> N1;
        }
"""
import json
import re
from typing import Any, Dict

from ..models.graph import Graph
from ..models.node import Node
from ..models.edge import Edge

# Identifiers that need no quoting in DOT
_DOT_ID = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


class DotSerializer:
    """
    Serialize ``Graph`` instances to DOT (and JSON for tooling).

    Usage:
        serializer = DotSerializer()
        text = serializer.serialize(graph)       # → DOT source
        json_str = serializer.to_json(graph)     # → str
    """

    def __init__(self, indent: str = "\t"):
        self._indent = indent

    # ── DOT ──────────────────────────────────────────────────────

    def serialize(self, graph: Graph) -> str:
        """Render the whole graph as a DOT document."""
        keyword = "digraph" if graph.directed else "graph"
        lines = [f"{keyword} {self._id(graph.name)} {{"]
        lines.extend(self._node_statement(n) for n in graph.get_all_nodes())
        lines.extend(self._edge_statement(e, graph.directed) for e in graph.get_all_edges())
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _node_statement(self, node: Node) -> str:
        attrs = ", ".join(
            f"{key}={self._value(key, value)}"
            for key, value in node.get_all_attributes().items()
        )
        return f"{self._indent}{self._id(node.node_id)} [{attrs}];"

    def _edge_statement(self, edge: Edge, directed: bool) -> str:
        arrow = "->" if directed else "--"
        return (f"{self._indent}{self._id(edge.source_node.node_id)} {arrow} "
                f"{self._id(edge.target_node.node_id)};")

    def _value(self, key: str, value: str) -> str:
        if key == 'label':
            return self.quote(value)
        return self._id(value)

    def _id(self, text: str) -> str:
        return text if _DOT_ID.match(text) else self.quote(text)

    @staticmethod
    def escape(text: str) -> str:
        """Escape text for a double-quoted DOT string."""
        return (text.replace("\\", "\\\\")
                    .replace('"', '\\"')
                    .replace("\n", "\\n"))

    @classmethod
    def quote(cls, text: str) -> str:
        return f'"{cls.escape(text)}"'

    # ── JSON ─────────────────────────────────────────────────────

    def to_dict(self, graph: Graph) -> Dict[str, Any]:
        """Plain-dictionary form of the graph (nodes, edges, categories)."""
        return graph.to_dict()

    def to_json(self, graph: Graph, *, indent: int = 2) -> str:
        """Serialize a Graph directly to a JSON string."""
        return json.dumps(self.to_dict(graph), indent=indent)
