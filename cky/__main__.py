"""Command line entry point: run a file, a code string, or the interactive loop.

    python -m cky                 # interactive loop on stdin
    python -m cky prog.lisp       # evaluate every form in a file
    python -m cky -e "(+ 1 2)"    # evaluate a code string
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cky import __version__
from cky.config import get_log_level
from cky.errors import CkyError
from cky.interpreter import Interpreter
from cky.reader.lexer import create_lexer


logger = logging.getLogger("cky")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cky", description="A small reference-counted Lisp.")
    parser.add_argument("file", nargs="?", help="file to run (if empty, goes to interactive mode)")
    parser.add_argument("-e", "--eval", dest="code", help="evaluate CODE and print the last result")
    parser.add_argument("--patterns", type=Path, help="pattern-registration file for the lexer")
    parser.add_argument("--log-level", help="logging level (default: $CKY_LOG_LEVEL or WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=(args.log_level or get_log_level()).upper())

    try:
        tokenizer = create_lexer(args.patterns) if args.patterns else None
    except (CkyError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    with Interpreter(tokenizer) as interp:
        if args.code is None and args.file is None:
            interp.interact()
            return 0

        try:
            code = args.code if args.code is not None else Path(args.file).read_text(encoding="utf-8")
            outcome = interp.feed(code)
        except OSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        except CkyError as exc:
            logger.debug("evaluation failed", exc_info=exc)
            print(f"error: {exc}", file=sys.stderr)
            return 1

        if outcome.value is not None:
            print(outcome.value)
            outcome.value.decref()
    return 0


if __name__ == "__main__":
    sys.exit(main())
