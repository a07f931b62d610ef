"""
valuegraph — draw any Python value as a directed graph.

Public API:
    make / make_typed   – build a Graph with DEFAULT_CONFIG
    Config              – truncation limits (frozen); Config.make / make_typed
    GraphBuilder        – the traversal engine
    Graph, Node, Edge   – graph model
    DotSerializer       – DOT / JSON output
    render, open_svg    – Graphviz rendering and local viewing
"""
from typing import Any

from .config import Config, DEFAULT_CONFIG, UNLIMITED
from .exceptions import ValueGraphError, ConfigError, RenderError, ViewerError
from .identity import IdentityTracker
from .labels import LabelFormatter
from .models import Node, Edge, Graph
from .services import DotSerializer, OutputFormat, render, open_svg
from .types import INVALID, StructuralCategory, TypedValue, ValueClassifier
from .walker import GraphBuilder


def make(value: Any) -> Graph:
    """Build the graph of ``value`` using DEFAULT_CONFIG."""
    return DEFAULT_CONFIG.make(value)


def make_typed(handle: TypedValue) -> Graph:
    """Build the graph of a value whose declared type is known, using DEFAULT_CONFIG."""
    return DEFAULT_CONFIG.make_typed(handle)


__all__ = [
    'make',
    'make_typed',
    'Config',
    'DEFAULT_CONFIG',
    'UNLIMITED',
    'GraphBuilder',
    'IdentityTracker',
    'LabelFormatter',
    'Graph',
    'Node',
    'Edge',
    'DotSerializer',
    'OutputFormat',
    'render',
    'open_svg',
    'INVALID',
    'StructuralCategory',
    'TypedValue',
    'ValueClassifier',
    'ValueGraphError',
    'ConfigError',
    'RenderError',
    'ViewerError',
]
