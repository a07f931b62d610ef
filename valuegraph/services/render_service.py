"""
    Rendering of DOT source through the Graphviz executables.

    Process handling belongs to the ``graphviz`` package; this module only
    selects the output format and turns Graphviz failures into
    ``RenderError``.
"""
import logging
from enum import Enum
from typing import Union

import graphviz

from ..exceptions import RenderError

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Image formats supported by ``render``."""
    SVG = "svg"
    PNG = "png"
    GIF = "gif"
    PDF = "pdf"
    POSTSCRIPT = "ps"


def render(dot_source: str, fmt: Union[OutputFormat, str] = OutputFormat.SVG,
           engine: str = "dot") -> bytes:
    """
    Lay out and rasterize a DOT document.

    Args:
        dot_source: DOT text, e.g. from ``DotSerializer.serialize``.
        fmt:        Output format (``OutputFormat`` or its string value).
        engine:     Graphviz layout engine.

    Returns:
        The rendered document as bytes.

    Raises:
        RenderError: If Graphviz is not installed or exits with an error.
        ValueError:  If ``fmt`` is not a supported format.
    """
    fmt = OutputFormat(fmt)
    source = graphviz.Source(dot_source, engine=engine)
    try:
        data = source.pipe(format=fmt.value)
    except graphviz.ExecutableNotFound as exc:
        logger.error("Graphviz '%s' executable not found", engine)
        raise RenderError(
            f"Graphviz '{engine}' executable not found; install Graphviz "
            f"and make sure it is on PATH"
        ) from exc
    except graphviz.CalledProcessError as exc:
        logger.error("Graphviz '%s' exited with status %s", engine, exc.returncode)
        raise RenderError(
            f"Graphviz '{engine}' failed with exit status {exc.returncode}"
        ) from exc

    logger.info("Rendered %d bytes of %s", len(data), fmt.value)
    return data
