"""
Services around the graph model — DOT serialization, rendering, viewing.
"""
from .serialization_service import DotSerializer
from .render_service import OutputFormat, render
from .viewer_service import open_file, open_svg, viewer_commands

__all__ = [
    'DotSerializer',
    'OutputFormat',
    'render',
    'open_file',
    'open_svg',
    'viewer_commands',
]
