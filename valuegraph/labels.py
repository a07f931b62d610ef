"""
    Label formatting — the text shown inside each graph node.

    Labels are plain text; lines are separated by ``\\n``.  Quoting and
    escaping for the DOT format is the serializer's job, but control
    characters embedded in user text are turned into visible escapes here
    so that no label can break a diagram.
"""
import logging
from typing import Any, Optional

from .types import StructuralCategory, ValueClassifier

logger = logging.getLogger(__name__)

NIL_MARKER = '<nil>'


class LabelFormatter:
    """
    Per-category label text.

    Attributes:
        text_preview:  Characters (or bytes) of a text value shown in its label.
        literal_width: Maximum width of a rendered scalar literal.
    """

    def __init__(self, text_preview: int = 10, literal_width: int = 50):
        self.text_preview = text_preview
        self.literal_width = literal_width

    # ── Per category ─────────────────────────────────────────────

    def scalar(self, type_name: str, value: Any) -> str:
        return f"{type_name}: {self.literal(value)}"

    def text(self, type_name: str, value: Any) -> str:
        length = len(value)
        lines = [f"{type_name} len: {length}"]
        head = value[:self.text_preview]
        preview = _bytes_preview(head) if isinstance(head, (bytes, bytearray)) else _printable(head)
        if preview:
            lines.append(preview)
        if length > self.text_preview:
            lines.append(self.ellipsis(length - self.text_preview))
        return "\n".join(lines)

    def sequence(self, type_name: str, category: StructuralCategory,
                 length: int, capacity: Optional[int] = None) -> str:
        label = f"{type_name}\n{category.value} len: {length}"
        if capacity is not None:
            label += f" cap: {capacity}"
        return label

    def mapping(self, type_name: str) -> str:
        return f"{type_name}\n{StructuralCategory.ASSOCIATIVE.value}"

    def reference(self, type_name: str) -> str:
        return type_name

    def polymorphic(self, type_name: str) -> str:
        return f"{type_name}\n{StructuralCategory.POLYMORPHIC.value}"

    def record(self, type_name: str) -> str:
        return f"{type_name}\n{StructuralCategory.RECORD.value}"

    def nil(self, type_name: str, category: StructuralCategory) -> str:
        """Label of a nil reference, nil collection or empty interface."""
        if category is StructuralCategory.REFERENCE:
            return f"{type_name}: {NIL_MARKER}"
        return f"{type_name}\n{category.value}: {NIL_MARKER}"

    @staticmethod
    def invalid() -> str:
        return 'Invalid'

    # ── Synthetic nodes ──────────────────────────────────────────

    @staticmethod
    def depth_limit(limit: int) -> str:
        return f"(depth limit {limit} reached)"

    @staticmethod
    def ellipsis(remaining: int) -> str:
        return f"... {remaining} more"

    @staticmethod
    def named(name: Optional[str], label: str) -> str:
        """Prefix a label with the index, field or key/value role of its position."""
        if not name:
            return label
        return f"{_printable(name)}\n{label}"

    # ── Literals ─────────────────────────────────────────────────

    def literal(self, value: Any) -> str:
        """
        Deterministic, locale-independent text of a scalar.

        Functions, classes and modules are shown by qualified name so the
        output carries no memory addresses.
        """
        if ValueClassifier.is_opaque_handle(value):
            text = _qualified_name(value)
        else:
            try:
                text = str(value)
            except Exception as exc:
                # A broken __str__ must not abort the walk
                logger.debug("str() failed for %s: %s", type(value), exc)
                text = f"<unprintable {type(value).__name__}>"
        text = _printable(text.replace("\n", " "))
        if len(text) > self.literal_width:
            text = text[:self.literal_width] + '...'
        return text


def _qualified_name(value: Any) -> str:
    qualname = getattr(value, '__qualname__', None) or getattr(value, '__name__', None)
    if not isinstance(qualname, str):
        return repr(value)
    module = getattr(value, '__module__', None)
    if isinstance(module, str) and module != 'builtins':
        return f"{module}.{qualname}"
    return qualname


def _printable(text: str) -> str:
    """Replace control characters (except newline) with visible escapes."""
    if text.isprintable():
        return text
    out = []
    for ch in text:
        if ch == "\n" or ch.isprintable():
            out.append(ch)
        else:
            out.append(ch.encode('unicode_escape').decode('ascii'))
    return "".join(out)


def _bytes_preview(data: bytes) -> str:
    out = []
    for byte in data:
        if byte == 0x0A:
            out.append("\n")
        elif 0x20 <= byte < 0x7F:
            out.append(chr(byte))
        else:
            out.append(f"\\x{byte:02x}")
    return "".join(out)
