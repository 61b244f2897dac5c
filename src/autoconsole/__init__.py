"""
autoconsole - Wrap bare JavaScript expression statements in console.log()

A source-to-source pass over a JavaScript syntax tree: calls, computations
and references to declared names whose values would otherwise be discarded
are printed instead. Implemented entirely in Python with no external
dependencies.
"""

__version__ = "0.1.0"

from .config import AutoConsoleOptions, ExclusionPolicy, OutputCall
from .errors import AutoConsoleError, ConfigError, JSSyntaxError, MalformedNodeError, ScopeError
from .parser import parse
from .plugin import auto_console
from .printer import print_program
from .transform import transform, transform_program
from .traverse import Visitor, traverse

__all__ = [
    "AutoConsoleOptions",
    "AutoConsoleError",
    "ConfigError",
    "ExclusionPolicy",
    "JSSyntaxError",
    "MalformedNodeError",
    "OutputCall",
    "ScopeError",
    "Visitor",
    "auto_console",
    "parse",
    "print_program",
    "transform",
    "transform_program",
    "traverse",
]
