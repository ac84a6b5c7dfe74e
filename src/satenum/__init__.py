"""
SATEnum: find every satisfying assignment of a CNF formula.
"""

from satenum.types import Assignment, Clause, Formula, Literal, Polarity, Variable
from satenum.utils.cnf import evaluate, referenced_literals, satisfies, satisfies_clause
from satenum.solvers import DFSSolver, SolverBase, SolverRegistry, register_solver
from satenum.enumeration import (
    EnumerationResult,
    blocking_clause,
    enumerate_solutions,
    solve_all,
    solutions_to_array,
)
from satenum.parser import parse

__version__ = "0.1.0"

__all__ = [
    "Literal",
    "Polarity",
    "Variable",
    "Clause",
    "Formula",
    "Assignment",
    "referenced_literals",
    "evaluate",
    "satisfies_clause",
    "satisfies",
    "SolverBase",
    "SolverRegistry",
    "register_solver",
    "DFSSolver",
    "EnumerationResult",
    "blocking_clause",
    "enumerate_solutions",
    "solve_all",
    "solutions_to_array",
    "parse",
]
