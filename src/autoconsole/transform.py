"""Source-to-source entry points: parse, run the pass, print."""

import logging
from typing import Any, Mapping, Union

from .ast_nodes import Program
from .config import AutoConsoleOptions
from .parser import parse
from .plugin import AutoConsolePass
from .printer import print_program
from .traverse import traverse

logger = logging.getLogger(__name__)


Options = Union[AutoConsoleOptions, Mapping[str, Any], None]


def _options(options: Options) -> AutoConsoleOptions:
    if isinstance(options, AutoConsoleOptions):
        return options
    return AutoConsoleOptions.from_dict(options)


def run_pass(program: Program, options: Options = None) -> AutoConsolePass:
    """Rewrite ``program`` in place and return the finished pass."""
    run = AutoConsolePass(_options(options))
    traverse(program, run.visitors())
    logger.debug("wrapped %d statement(s) in %s", run.rewritten, run.options.output)
    return run


def transform_program(program: Program, options: Options = None) -> Program:
    """Run the auto-console pass over ``program`` in place and return it."""
    run_pass(program, options)
    return program


def transform(source: str, options: Options = None) -> str:
    """Rewrite JavaScript ``source`` and return the printed result."""
    return print_program(transform_program(parse(source), options))
