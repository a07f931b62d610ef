"""
    Convenience viewer — render a value to SVG and open it locally.

    Intended for interactive debugging.  The SVG is written to a fresh
    temporary directory and handed to the first viewer program that
    starts, trying browsers first and the platform opener last.
"""
import logging
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Any, List, Optional

from ..config import Config, DEFAULT_CONFIG
from ..exceptions import ViewerError
from .render_service import OutputFormat, render

logger = logging.getLogger(__name__)

SVG_FILE_NAME = "valuegraph.svg"


def viewer_commands(platform: Optional[str] = None) -> List[List[str]]:
    """Viewer command lines in preference order; the file path is appended."""
    platform = platform or sys.platform
    commands = [["chrome"], ["google-chrome"], ["firefox"]]
    if platform == "darwin":
        commands.append(["/usr/bin/open"])
    elif platform.startswith("win"):
        commands.append(["cmd", "/c", "start"])
    else:
        commands.append(["xdg-open"])
    return commands


def write_temporary(data: bytes, file_name: str = SVG_FILE_NAME) -> Path:
    """Write ``data`` into a new temporary directory and return the file path."""
    directory = Path(tempfile.mkdtemp(prefix="valuegraph"))
    path = directory / file_name
    path.write_bytes(data)
    return path


def open_file(path: Path, commands: Optional[List[List[str]]] = None) -> str:
    """
    Launch the first viewer that starts on ``path``.

    Returns:
        The program that was launched.

    Raises:
        ViewerError: If no viewer program could be started.
    """
    for command in commands if commands is not None else viewer_commands():
        try:
            subprocess.Popen(command + [str(path)])
        except OSError as exc:
            logger.debug("Viewer %s did not start: %s", command[0], exc)
            continue
        logger.info("Opened %s with %s", path, command[0])
        return command[0]

    raise ViewerError(
        f"no command to open SVG found; temp file is at {path}", path=path
    )


def open_svg(value: Any, config: Optional[Config] = None) -> Path:
    """
    Render the graph of ``value`` as SVG and open it in a viewer.

    Returns:
        Path of the written SVG file.

    Raises:
        RenderError: If Graphviz is unavailable.
        ViewerError: If no viewer could be launched; ``path`` names the file.
    """
    graph = (config or DEFAULT_CONFIG).make(value)
    path = write_temporary(render(graph.to_dot(), OutputFormat.SVG))
    open_file(path)
    return path
