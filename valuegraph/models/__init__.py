"""
Graph model — nodes, edges and the graph of one walked value.
"""
from .node import Node, BOX
from .edge import Edge
from .graph import Graph

__all__ = ['Node', 'BOX', 'Edge', 'Graph']
