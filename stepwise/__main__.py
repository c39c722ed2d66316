"""Command-line front end: evaluate, or trace, an expression after loading definitions."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from stepwise import config
from stepwise.errors import StepwiseError
from stepwise.interpreter import Interpreter
from stepwise.printer import stringify_program

STEP_SEPARATOR = "----"


def _read_definitions(path: Path | None) -> str:
    if path is None:
        path = config.get_definitions_path()
    if path is None:
        return ""
    return path.read_text(encoding="utf-8")


def trace(interp: Interpreter, program: list, max_steps: int | None) -> int:
    """Print every intermediate program. Returns the exit status."""
    print(stringify_program(program))
    steps = 0
    while max_steps is None or steps < max_steps:
        result = interp.step_once(program)
        if not result.ok:
            print(result.format_error(), file=sys.stderr)
            return 1
        if not result.stepped:
            return 0
        program = result.value
        steps += 1
        print(STEP_SEPARATOR)
        print(result.text)
    logging.warning("Stopped after %d steps", steps)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="stepwise",
        description="Evaluate an expression one reduction at a time.",
    )
    parser.add_argument("expression", nargs="?", default="-",
                        help="expression text, or - to read standard input")
    parser.add_argument("--defs", type=Path, default=None,
                        help="file of definitions to load first")
    parser.add_argument("--step", action="store_true",
                        help="print every intermediate form")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="stop tracing after this many steps")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.get_log_level(), format='%(message)s', stream=sys.stderr)

    source = sys.stdin.read() if args.expression == "-" else args.expression
    interp = Interpreter()
    try:
        definitions = _read_definitions(args.defs)
    except FileNotFoundError as e:
        print(f"Error: definitions file not found: {e.filename}", file=sys.stderr)
        return 1
    try:
        program = interp.prepare(definitions, source)
    except StepwiseError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    if args.step:
        return trace(interp, program, args.max_steps)

    result = interp.evaluate_all(program)
    if not result.ok:
        print(result.format_error(), file=sys.stderr)
        return 1
    print(result.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
