"""
Depth-first brute-force solver using the unified solver interface.
"""

import logging
from typing import Any

from satenum.config import get_config
from satenum.types import Assignment, Formula, Literal
from satenum.utils.cnf import satisfies

from .base import SolverBase
from .registry import register_solver

# Set up logging
logger = logging.getLogger(__name__)


@register_solver("dfs")
class DFSSolver(SolverBase):
    """
    Exhaustive depth-first search over truth assignments.

    Each literal is tried False first, then True, in the order given. The
    formula is only checked once every literal has a value, so partial
    assignments are never pruned. When both values of a literal fail its
    binding is removed from the buffer before backtracking.
    """

    def __init__(self, max_recursion_depth: int | None = None):
        """
        Initialize the DFS solver.

        Args:
            max_recursion_depth: Largest literal count searched with plain
                recursion. Longer literal lists use an explicit stack that
                visits assignments in the same order.
        """
        if max_recursion_depth is None:
            max_recursion_depth = get_config().get("solver.max_recursion_depth", 900)
        self.max_recursion_depth = max_recursion_depth

        self.stats = {
            "solve_calls": 0,
            "decisions": 0,
            "leaves_checked": 0,
            "solver_name": self.solver_name,
        }

    def solve(
        self,
        formula: Formula,
        literals: list[Literal],
        assignment: Assignment,
    ) -> Assignment | None:
        self.stats["solve_calls"] += 1

        if len(literals) > self.max_recursion_depth:
            logger.debug(f"Using explicit stack for {len(literals)} literals")
            found = self._search_iterative(formula, literals, assignment)
        else:
            found = self._search(formula, literals, assignment, 0)

        if found:
            return assignment.copy()
        return None

    def _search(
        self,
        formula: Formula,
        literals: list[Literal],
        assignment: Assignment,
        index: int,
    ) -> bool:
        if index == len(literals):
            self.stats["leaves_checked"] += 1
            return satisfies(formula, assignment)

        literal = literals[index]
        for value in (False, True):
            self.stats["decisions"] += 1
            assignment.set(literal, value)
            if self._search(formula, literals, assignment, index + 1):
                return True

        assignment.unset(literal)
        return False

    def _search_iterative(
        self,
        formula: Formula,
        literals: list[Literal],
        assignment: Assignment,
    ) -> bool:
        # tried[d] counts how many values literal d has been given so far
        depth = 0
        count = len(literals)
        tried = [0] * count

        while depth >= 0:
            if depth == count:
                self.stats["leaves_checked"] += 1
                if satisfies(formula, assignment):
                    return True
                depth -= 1
                continue

            literal = literals[depth]
            if tried[depth] < 2:
                self.stats["decisions"] += 1
                assignment.set(literal, tried[depth] == 1)
                tried[depth] += 1
                depth += 1
            else:
                assignment.unset(literal)
                tried[depth] = 0
                depth -= 1

        return False

    def get_statistics(self) -> dict[str, Any]:
        return dict(self.stats)

    def reset_statistics(self) -> None:
        for key in ("solve_calls", "decisions", "leaves_checked"):
            self.stats[key] = 0
