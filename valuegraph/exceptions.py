# valuegraph/exceptions.py

class ValueGraphError(Exception):
    """Base class for every error raised by valuegraph."""
    pass

class ConfigError(ValueGraphError, ValueError):
    """Raised when a traversal limit is not None or a non-negative int."""
    pass

class RenderError(ValueGraphError):
    """Raised when the Graphviz executable is missing or exits with an error."""
    pass

class ViewerError(ValueGraphError):
    """Raised when no viewer program could be launched for a rendered file."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
