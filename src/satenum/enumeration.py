"""
All-solutions enumeration.

The enumerator drives a solving strategy repeatedly over a private copy of
the formula. After each solution it appends a blocking clause that forbids
exactly that assignment, and it stops once the strategy finds nothing.
"""

import logging
import time
from typing import Any

import numpy as np

from satenum.config import get_config
from satenum.solvers.base import SolverBase, SolverStatus
from satenum.solvers.registry import SolverRegistry
from satenum.types import Assignment, Clause, Formula, Literal, Variable
from satenum.utils.cnf import referenced_literals
from satenum.utils.logging_utils import StructuredLogger

# Set up logging
logger = logging.getLogger(__name__)


class EnumerationResult:
    """
    Result object returned by enumerate_solutions().
    """

    def __init__(
        self,
        solutions: list[Assignment],
        literals: list[Literal],
        runtime: float = 0.0,
        complete: bool = True,
        statistics: dict[str, Any] | None = None,
    ):
        self.solutions = solutions
        self.literals = literals
        self.runtime = runtime
        # False when a solution limit stopped the enumeration early
        self.complete = complete
        self.statistics = statistics or {}

    @property
    def status(self) -> SolverStatus:
        if self.solutions:
            return SolverStatus.SATISFIABLE
        if self.complete:
            return SolverStatus.UNSATISFIABLE
        return SolverStatus.UNKNOWN

    @property
    def is_sat(self) -> bool:
        """Returns True if at least one solution was found."""
        return bool(self.solutions)

    def to_array(self) -> np.ndarray:
        return solutions_to_array(self.solutions, self.literals)

    def __len__(self) -> int:
        return len(self.solutions)

    def __str__(self) -> str:
        if not self.solutions:
            return f"Enumeration Result: {self.status.name} ({self.runtime:.4f}s)"
        suffix = "" if self.complete else ", limit reached"
        return (
            f"Enumeration Result: SATISFIABLE "
            f"({len(self.solutions)} solutions{suffix}, {self.runtime:.4f}s)"
        )


def blocking_clause(assignment: Assignment) -> Clause:
    """
    Build the clause that forbids exactly `assignment`.

    Uses De Morgan's law: not(x1 and x2 ... and xN) becomes
    (not x1 or not x2 ... or not xN), so every literal appears with the
    opposite of its assigned value. Literals are ordered by id.
    """
    return Clause(
        Variable.negative(literal) if value else Variable.positive(literal)
        for literal, value in assignment.items()
    )


def solutions_to_array(
    solutions: list[Assignment], literals: list[Literal] | None = None
) -> np.ndarray:
    """
    Stack solutions into a boolean matrix.

    Args:
        solutions: Assignments to export
        literals: Column order; defaults to the sorted union of the
            solutions' literals

    Returns:
        Array of shape (len(solutions), len(literals))
    """
    if literals is None:
        literals = sorted({lit for solution in solutions for lit in solution.literals()})
    table = np.zeros((len(solutions), len(literals)), dtype=bool)
    for row, solution in enumerate(solutions):
        for column, literal in enumerate(literals):
            table[row, column] = solution.get(literal)
    return table


def _resolve_solver(solver: SolverBase | str | None) -> SolverBase:
    if isinstance(solver, SolverBase):
        return solver
    if solver is None:
        solver = get_config().get("solver.name")
    return SolverRegistry.create(solver)


def enumerate_solutions(
    formula: Formula,
    solver: SolverBase | str | None = None,
    limit: int | None = None,
    structured_logger: StructuredLogger | None = None,
) -> EnumerationResult:
    """
    Find every satisfying assignment of a formula.

    Args:
        formula: Formula to enumerate. It is copied and never modified.
        solver: Strategy instance, registered strategy name, or None for the
            configured default
        limit: Stop after this many solutions. None uses the
            enumeration.limit setting, which defaults to no limit.
        structured_logger: Optional sink for solution and blocking clause events

    Returns:
        EnumerationResult holding the solutions in discovery order
    """
    strategy = _resolve_solver(solver)
    if limit is None:
        limit = get_config().get("enumeration.limit")
    if limit is not None and limit < 0:
        raise ValueError(f"Solution limit must be non-negative, got {limit}")

    start_time = time.time()
    working = formula.copy()
    literals = referenced_literals(working)
    logger.debug(f"Enumerating over literals {literals}")

    buffer = Assignment()
    solutions: list[Assignment] = []
    complete = True

    while True:
        if limit is not None and len(solutions) >= limit:
            complete = False
            break

        buffer.reset(literals)
        found = strategy.solve(working, literals, buffer)
        if found is None:
            break

        index = len(solutions)
        solution = found.copy()
        solutions.append(solution)
        logger.debug(f"Solution {index}: {solution}")

        blocker = blocking_clause(solution)
        working.add(blocker)
        logger.debug(f"Added blocking clause {blocker}")

        if structured_logger is not None:
            structured_logger.log_solution(index, solution)
            structured_logger.log_blocking_clause(index, blocker, len(working))

    runtime = time.time() - start_time
    statistics = {
        "num_literals": len(literals),
        "input_clauses": len(formula),
        "blocking_clauses": len(working) - len(formula),
        **strategy.get_statistics(),
    }
    result = EnumerationResult(solutions, literals, runtime, complete, statistics)
    logger.info(
        f"Found {len(solutions)} solution(s) over {len(literals)} literal(s) "
        f"in {runtime:.4f}s"
    )

    if structured_logger is not None:
        structured_logger.log_summary(
            result.status.value,
            len(solutions),
            literals,
            runtime,
            solutions=result.to_array(),
            statistics=statistics,
        )

    return result


def solve_all(
    formula: Formula,
    solver: SolverBase | str | None = None,
    limit: int | None = None,
    structured_logger: StructuredLogger | None = None,
) -> list[Assignment]:
    """
    Return every satisfying assignment of `formula`.

    An unsatisfiable formula gives an empty list. Each assignment binds every
    literal of the formula; an empty formula gives a single empty assignment.
    """
    return enumerate_solutions(formula, solver, limit, structured_logger).solutions
