"""
SATEnum command line interface.

Solve a formula given on the command line, in an infix file or in a DIMACS
file, or start an interactive shell when no formula is given.
"""

import argparse
import logging
import sys
import traceback
from typing import TextIO

from satenum.config import get_config, load_config
from satenum.enumeration import EnumerationResult, enumerate_solutions
from satenum.parser import parse
from satenum.printer import PrintStyle, format_assignment, format_formula, format_table
from satenum.solvers import SolverRegistry
from satenum.types import Formula
from satenum.utils.cnf import load_cnf_file
from satenum.utils.exceptions import SATBaseException
from satenum.utils.logging_utils import LoggingManager, StructuredLogger, configure_logging

logger = logging.getLogger(__name__)

PROMPT = "> "
SHELL_HELP = """Enter a formula such as (x1 or -x2) and x3.
Commands:
  :style normal|programmatic|mathematical   change the notation
  :help                                     show this message
  :quit                                     leave the shell"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="satenum",
        description="Find every satisfying assignment of a CNF formula. "
        "Without a formula an interactive shell is started.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("formula", nargs="?", help="Formula, e.g. '(x1 or -x2) and x3'")
    source.add_argument("-f", "--file", type=str, help="File holding an infix formula")
    source.add_argument("-d", "--dimacs", type=str, help="DIMACS CNF file to solve")

    parser.add_argument(
        "-s",
        "--style",
        choices=[s.value for s in PrintStyle],
        help="Notation for formulas and solutions",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    parser.add_argument("--table", action="store_true", help="Print solutions as a truth table")
    parser.add_argument("--solver", type=str, help="Solving strategy to use")
    parser.add_argument("--list-solvers", action="store_true", help="List strategies and exit")
    parser.add_argument("-n", "--limit", type=int, help="Stop after this many solutions")
    parser.add_argument("-c", "--config", type=str, help="YAML or JSON configuration file")
    parser.add_argument("--log-level", type=str, help="Logging level, e.g. DEBUG")
    parser.add_argument("--log-dir", type=str, help="Write text and JSON Lines logs here")
    return parser


def report(
    formula: Formula,
    result: EnumerationResult,
    style: PrintStyle = PrintStyle.NORMAL,
    color: bool = False,
    table: bool = False,
    out: TextIO | None = None,
) -> None:
    """Print a formula and its enumeration result."""
    out = out or sys.stdout
    print(f"Formula: {format_formula(formula, style, color)}", file=out)

    solutions = result.solutions
    if not solutions:
        if result.complete:
            print("Unsatisfiable", file=out)
        else:
            print("No solutions collected (solution limit reached)", file=out)
        return

    if table:
        count = "1 solution" if len(solutions) == 1 else f"{len(solutions)} solutions"
        print(f"Satisfiable ({count}):", file=out)
        print(format_table(solutions, result.literals, style), file=out)
    elif len(solutions) == 1:
        print(f"Satisfiable: {format_assignment(solutions[0], style, color)}", file=out)
    else:
        print(f"Satisfiable ({len(solutions)} solutions):", file=out)
        for solution in solutions:
            print(f"  {format_assignment(solution, style, color)}", file=out)

    if not result.complete:
        print("(solution limit reached)", file=out)


class Session:
    """Settings shared by the one-shot mode and the interactive shell."""

    def __init__(
        self,
        style: PrintStyle,
        color: bool,
        table: bool = False,
        solver: str | None = None,
        limit: int | None = None,
        structured_logger: StructuredLogger | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        self.style = style
        self.color = color
        self.table = table
        self.solver = SolverRegistry.create(solver or get_config().get("solver.name"))
        self.limit = limit
        self.structured_logger = structured_logger
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def solve(self, formula: Formula) -> EnumerationResult | None:
        """Enumerate and report; a rejected limit is reported and gives None."""
        # Statistics are reported per formula
        if hasattr(self.solver, "reset_statistics"):
            self.solver.reset_statistics()
        try:
            result = enumerate_solutions(
                formula,
                self.solver,
                limit=self.limit,
                structured_logger=self.structured_logger,
            )
        except ValueError as e:
            self.error(e)
            return None
        report(formula, result, self.style, self.color, self.table, self.out)
        return result

    def solve_text(self, text: str) -> EnumerationResult | None:
        """Parse and solve; errors are reported and give None."""
        try:
            formula = parse(text)
        except SATBaseException as e:
            self.error(e)
            return None
        return self.solve(formula)

    def error(self, exc: Exception) -> None:
        print(f"Error: {exc}", file=self.err)
        logger.debug(f"{type(exc).__name__}: {exc}")
        if self.structured_logger is not None:
            self.structured_logger.log_exception(
                type(exc).__name__, str(exc), traceback.format_exc()
            )


def run_shell(session: Session, stdin: TextIO | None = None) -> int:
    """
    Read formulas line by line until EOF or :quit.

    Returns:
        Process exit code
    """
    stdin = stdin or sys.stdin
    print("Welcome to the SAT solver! Type :help for help.", file=session.out)
    while True:
        session.out.write(PROMPT)
        session.out.flush()
        line = stdin.readline()
        if not line:
            session.out.write("\n")
            return 0

        line = line.strip()
        if not line:
            continue

        if line.startswith(":"):
            command, _, argument = line[1:].partition(" ")
            if command in ("quit", "exit", "q"):
                return 0
            elif command == "help":
                print(SHELL_HELP, file=session.out)
            elif command == "style":
                try:
                    session.style = PrintStyle(argument.strip().lower())
                except ValueError:
                    print(f"Error: unknown style {argument.strip()!r}", file=session.err)
                    continue
                print(f"Style: {session.style.value}", file=session.out)
            else:
                print(f"Error: unknown command :{command}", file=session.err)
            continue

        session.solve_text(line)
        print(file=session.out)


def _setup_logging(args, level: str) -> LoggingManager | None:
    if args.log_dir:
        return LoggingManager(
            experiment_name="satenum",
            output_dir=args.log_dir,
            console_level=level,
        )
    configure_logging(
        level,
        get_config().get("logging.format"),
        get_config().get("logging.file"),
    )
    return None


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)

    if args.config:
        load_config(args.config)
    config = get_config()

    if args.list_solvers:
        for name in SolverRegistry.list_solvers():
            print(name, file=stdout)
        return 0

    if args.limit is not None and args.limit < 0:
        print(f"Error: Solution limit must be non-negative, got {args.limit}", file=stderr)
        return 2

    level = args.log_level or config.get("logging.level", "WARNING")
    try:
        manager = _setup_logging(args, level)
    except ValueError as e:
        print(f"Error: {e}", file=stderr)
        return 2

    style = PrintStyle(args.style or config.get("output.style", "normal"))
    color = config.get("output.color", True) and not args.no_color and stdout.isatty()

    try:
        try:
            session = Session(
                style,
                color,
                table=args.table,
                solver=args.solver,
                limit=args.limit,
                structured_logger=manager.get_structured_logger() if manager else None,
                out=stdout,
                err=stderr,
            )
        except SATBaseException as e:
            print(f"Error: {e}", file=stderr)
            return 1

        if args.dimacs:
            try:
                formula, _ = load_cnf_file(args.dimacs)
            except (OSError, ValueError) as e:
                session.error(e)
                return 1
            return 0 if session.solve(formula) is not None else 1

        if args.file:
            try:
                with open(args.file) as f:
                    text = f.read()
            except OSError as e:
                session.error(e)
                return 1
            return 0 if session.solve_text(text) is not None else 1

        if args.formula:
            return 0 if session.solve_text(args.formula) is not None else 1

        return run_shell(session, stdin)
    finally:
        if manager is not None:
            manager.close()


if __name__ == "__main__":
    sys.exit(main())
