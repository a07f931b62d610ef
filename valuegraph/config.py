"""
    Traversal configuration — truncation limits for one graph build.

    A ``Config`` is frozen: once a build starts, the limits that govern it
    cannot change.  ``None`` means "unlimited".
"""
from dataclasses import dataclass, replace
from typing import Any, Optional, TYPE_CHECKING

from .exceptions import ConfigError

if TYPE_CHECKING:
    from .models.graph import Graph
    from .types import TypedValue

UNLIMITED = None


def _check_limit(name: str, value: Any) -> None:
    if value is None:
        return
    # bool is an int subclass, but "True elements" is never meant
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            f"{name} must be a non-negative int or None, got {type(value).__name__}"
        )
    if value < 0:
        raise ConfigError(f"{name} must be >= 0 or None (unlimited), got {value}")


@dataclass(frozen=True)
class Config:
    """
    Limits applied while walking a value.

    Attributes:
        sequence_limit: Child nodes generated per sequence before a
                        ``... N more`` node is emitted.
        map_limit:      Entries generated per mapping before a
                        ``... N more`` node is emitted.
        depth_limit:    Nesting level at which the walk stops and emits a
                        ``(depth limit N reached)`` node instead.
    """
    sequence_limit: Optional[int] = 5
    map_limit: Optional[int] = UNLIMITED
    depth_limit: Optional[int] = UNLIMITED

    def __post_init__(self) -> None:
        _check_limit('sequence_limit', self.sequence_limit)
        _check_limit('map_limit', self.map_limit)
        _check_limit('depth_limit', self.depth_limit)

    def with_limits(self, **changes: Optional[int]) -> 'Config':
        """Return a validated copy with some limits replaced."""
        return replace(self, **changes)

    def make(self, value: Any) -> 'Graph':
        """Build the graph of ``value`` using these limits."""
        from .walker import GraphBuilder
        return GraphBuilder(self).build(value)

    def make_typed(self, handle: 'TypedValue') -> 'Graph':
        """Build the graph of a value whose declared type is already known."""
        from .walker import GraphBuilder
        return GraphBuilder(self).build(handle.value, handle.static_type)


DEFAULT_CONFIG = Config()
