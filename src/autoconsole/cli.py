"""Command line interface: ``autoconsole [FILE]``."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import AutoConsoleOptions, ExclusionPolicy, OutputCall, PRESETS
from .errors import AutoConsoleError
from .parser import parse
from .printer import print_program
from .transform import run_pass

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="autoconsole",
        description="Wrap bare JavaScript expression statements in console.log(...)",
    )
    p.add_argument("file", nargs="?", default="-", help="JavaScript file to rewrite (default: stdin)")
    p.add_argument("--object", default=OutputCall.object, help="Output object name (default: console)")
    p.add_argument("--property", default=OutputCall.property, help="Output method name (default: log)")
    p.add_argument(
        "--exclude",
        choices=sorted(PRESETS),
        default="named-functions",
        help="Function kinds whose bodies are left untouched (default: named-functions)",
    )
    p.add_argument(
        "--no-namespace",
        dest="namespace",
        action="store_false",
        help="Only skip calls to OBJECT.PROPERTY, not every method of OBJECT",
    )
    p.add_argument("--check", action="store_true", help="Exit 1 if the file would be rewritten, print nothing")
    p.add_argument("-v", "--verbose", action="store_true", help="Log each rewrite to stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = AutoConsoleOptions(
            output=OutputCall(args.object, args.property),
            exclude=ExclusionPolicy.preset(args.exclude),
            namespace=args.namespace,
        )
        program = parse(_read(args.file))
        run = run_pass(program, options)
    except OSError as err:
        print(f"autoconsole: {err}", file=sys.stderr)
        return 2
    except AutoConsoleError as err:
        print(f"autoconsole: {err}", file=sys.stderr)
        return 1

    if args.check:
        if run.rewritten:
            logger.info("%s: %d statement(s) would be wrapped", args.file, run.rewritten)
            return 1
        return 0
    sys.stdout.write(print_program(program))
    return 0
