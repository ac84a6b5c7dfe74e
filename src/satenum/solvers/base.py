"""
Base interface for all SAT solving strategies in the framework.
Defines the standardized solver interface that the enumerator drives.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from satenum.types import Assignment, Formula, Literal


class SolverStatus(Enum):
    """Enum representing the outcome of a solver or enumeration run."""

    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"
    # Stopped by a solution limit before any solution was found
    UNKNOWN = "unknown"


class SolverBase(ABC):
    """
    Abstract base class for solving strategies.

    A strategy completes an assignment buffer into a satisfying assignment of
    a formula. The enumerator only depends on solve(), so new strategies can
    be registered without changing it.
    """

    #: Name used when the strategy is registered by auto-discovery
    solver_name: str | None = None

    @abstractmethod
    def solve(
        self,
        formula: Formula,
        literals: list[Literal],
        assignment: Assignment,
    ) -> Assignment | None:
        """
        Attempt to complete `assignment` into a satisfying assignment.

        Args:
            formula: Formula to satisfy
            literals: Literal ids to decide, in exploration order. Should be
                referenced_literals(formula) for deterministic behaviour.
            assignment: Mutable buffer, updated in place. It may hold stale
                bindings from an earlier attempt.

        Returns:
            A copy of the satisfying assignment, or None if no completion of
            the buffer satisfies the formula. The buffer contents after a
            failed attempt are unspecified.
        """

    def get_statistics(self) -> dict[str, Any]:
        """
        Get solver statistics.

        Returns:
            Dictionary of statistics
        """
        return {"solver_name": self.solver_name}
