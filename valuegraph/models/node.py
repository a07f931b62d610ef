"""
    Node model - one visited position of the walked value.
"""
from typing import Any, Dict, Optional

from ..types import StructuralCategory

# Shape of every value node; intermediate mapping-entry nodes have none
BOX = 'box'


class Node:
    """
    A node in the value graph.

    Each node has a unique ID assigned in visit order, the label text
    shown inside it, and an optional shape.  The label may be written
    once after creation, when the node's children have been scheduled.
    """

    def __init__(
            self,
            node_id: Any,
            label: str = '',
            shape: Optional[str] = BOX,
            category: Optional[StructuralCategory] = None,
    ):
        """
        Initialize a node.

        Args:
            node_id:  Unique identifier of the node (will be converted to str)
            label:    Text shown inside the node
            shape:    Graphviz shape, or None for the renderer's default
            category: Structural category of the value this node stands for;
                      None for synthetic nodes (entries, ellipses, depth limits)
        """
        # Ensure ID is always a string for consistency in comparisons
        self.node_id = str(node_id)
        self.label = label
        self.shape = shape
        self.category = category

    def get_attribute(self, key: str) -> Optional[str]:
        return self.get_all_attributes().get(key)

    def get_all_attributes(self) -> Dict[str, str]:
        """Graphviz attributes of the node, in output order."""
        attrs = {'label': self.label}
        if self.shape is not None:
            attrs['shape'] = self.shape
        return attrs

    def __repr__(self) -> str:
        return f"Node({self.node_id}, label={self.label!r})"

    def __eq__(self, other) -> bool:
        """Two nodes are equal if they have the same ID"""
        if not isinstance(other, Node):
            return False
        return self.node_id == other.node_id

    def __hash__(self) -> int:
        """Hash node by ID"""
        return hash(self.node_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary for serialization."""
        return {
            'id': self.node_id,
            'attributes': self.get_all_attributes(),
            'category': self.category.name if self.category is not None else None,
        }
