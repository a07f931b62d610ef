"""
    Edge model - directed link from a container node to a child node.
"""
from typing import Dict, Any, Optional
from .node import Node


class Edge:
    """
        Directed edge between two nodes.
        The role names the child's position: an index such as ``[2]``,
        a field name, or ``key`` / ``value`` inside a mapping entry.
    """

    def __init__(
            self,
            edge_id: Any,
            source_node: Node,
            target_node: Node,
            role: Optional[str] = None,
    ):
        """
        Initialize an edge.

        Args:
            edge_id: Unique identifier of the edge (will be converted to str)
            source_node: Parent node
            target_node: Child node
            role: Position of the child inside its parent, if any
        """
        self.edge_id = str(edge_id)
        self.source_node = source_node
        self.target_node = target_node
        self.role = role

    @property
    def directed(self) -> bool:
        return True

    def is_self_loop(self) -> bool:
        return self.source_node == self.target_node

    def __repr__(self) -> str:
        return f"Edge({self.source_node.node_id} -> {self.target_node.node_id})"

    def __eq__(self, other) -> bool:
        """Two edges are equal if they have the same ID"""
        if not isinstance(other, Edge):
            return False
        return self.edge_id == other.edge_id

    def __hash__(self) -> int:
        """Hash edge by ID"""
        return hash(self.edge_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert edge to dictionary for serialization."""
        return {
            'id': self.edge_id,
            'source': self.source_node.node_id,
            'target': self.target_node.node_id,
            'role': self.role,
        }
