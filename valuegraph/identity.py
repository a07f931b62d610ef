"""
    IdentityTracker — maps a value's identity to the node already built for it.
"""
from typing import Any, Dict, Optional, Tuple


class IdentityTracker:
    """
    Registry of visited objects, keyed by ``id()``.

    The tracker holds a strong reference to every recorded object, so an
    ``id()`` cannot be recycled by a new object while one build is running.
    It only grows; it is discarded together with the build that owns it.
    """

    def __init__(self):
        self._seen: Dict[int, Tuple[Any, str]] = {}  # id(obj) -> (obj, node_id)

    def record(self, value: Any, node_id: str) -> None:
        """Remember that ``value`` is drawn as ``node_id``."""
        key = id(value)
        if key in self._seen:
            raise ValueError(f"{type(value).__name__} at {key:#x} already tracked")
        self._seen[key] = (value, node_id)

    def lookup(self, value: Any) -> Optional[str]:
        """Node id already assigned to this exact object, or None."""
        entry = self._seen.get(id(value))
        if entry is None or entry[0] is not value:
            return None
        return entry[1]

    def __contains__(self, value: Any) -> bool:
        return self.lookup(value) is not None

    def __len__(self) -> int:
        return len(self._seen)

    def __repr__(self) -> str:
        return f"IdentityTracker(tracked={len(self._seen)})"
