"""Error types raised by the auto-console pass and its parser."""

from typing import Optional


class AutoConsoleError(Exception):
    """Base class for all auto-console errors."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class JSSyntaxError(AutoConsoleError):
    """JavaScript syntax error during parsing."""

    def __init__(self, message: str = "", line: int = 0, column: int = 0):
        self.line = line
        self.column = column
        # Include line/column in the message if provided
        if line > 0:
            full_message = f"line {line}, column {column}: {message}"
        else:
            full_message = message
        super().__init__(f"SyntaxError: {full_message}")


class MalformedNodeError(AutoConsoleError):
    """A visited node is missing a child field required by its kind."""

    def __init__(self, node_type: str, field: str, line: Optional[int] = None):
        self.node_type = node_type
        self.field = field
        self.line = line
        where = f" (line {line})" if line else ""
        super().__init__(f"{node_type} node is missing required field '{field}'{where}")


class ConfigError(AutoConsoleError):
    """Invalid pass options."""


class ScopeError(AutoConsoleError):
    """Scope frame stack misuse."""
