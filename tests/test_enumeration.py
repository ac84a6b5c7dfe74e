"""
Unit tests for all-solutions enumeration.

Checks soundness, completeness against exhaustive enumeration, absence of
duplicates and the concrete scenarios the enumerator must reproduce.
"""

import itertools
import json
import os
import shutil
import sys
import tempfile
import unittest

import numpy as np

# Add the source directory to the path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from satenum.config import get_config, load_config
from satenum.enumeration import (
    blocking_clause,
    enumerate_solutions,
    solutions_to_array,
    solve_all,
)
from satenum.solvers import DFSSolver, SolverBase, SolverStatus
from satenum.types import Assignment, Clause, Formula, Variable
from satenum.utils.cnf import referenced_literals, satisfies
from satenum.utils.exceptions import SolverNotFoundError
from satenum.utils.logging_utils import StructuredLogger


def all_models(formula):
    """Every total assignment over the formula's literals that satisfies it."""
    literals = referenced_literals(formula)
    models = set()
    for values in itertools.product([False, True], repeat=len(literals)):
        assignment = Assignment(dict(zip(literals, values)))
        if satisfies(formula, assignment):
            models.add(assignment.as_tuple())
    return models


class RecordingSolver(SolverBase):
    """Delegates to DFS and remembers every formula it was asked to solve."""

    solver_name = "recording"

    def __init__(self):
        self.inner = DFSSolver()
        self.sizes = []

    def solve(self, formula, literals, assignment):
        self.sizes.append(len(formula))
        return self.inner.solve(formula, literals, assignment)


class TestBlockingClause(unittest.TestCase):
    """Test cases for blocking_clause()."""

    def test_polarities_are_inverted(self):
        assignment = Assignment({2: False, 1: True, 3: True})
        self.assertEqual(
            blocking_clause(assignment),
            Clause([Variable.negative(1), Variable.positive(2), Variable.negative(3)]),
        )

    def test_blocks_only_its_assignment(self):
        assignment = Assignment({1: True, 2: False})
        clause = Formula([blocking_clause(assignment)])
        self.assertFalse(satisfies(clause, assignment))
        for other in ({1: False, 2: False}, {1: True, 2: True}, {1: False, 2: True}):
            self.assertTrue(satisfies(clause, Assignment(other)))

    def test_empty_assignment_gives_empty_clause(self):
        self.assertEqual(len(blocking_clause(Assignment())), 0)


class TestSolveAll(unittest.TestCase):
    """Test cases for solve_all()."""

    def test_scenario_a(self):
        # (x1 or -x2) and x3
        formula = Formula.from_lists([[1, -2], [3]])
        solutions = solve_all(formula)
        self.assertEqual(
            solutions,
            [
                Assignment({1: False, 2: False, 3: True}),
                Assignment({1: True, 2: False, 3: True}),
                Assignment({1: True, 2: True, 3: True}),
            ],
        )

    def test_scenario_b(self):
        # (x1 or x2) and (x1 or -x2) and (-x1 or x2)
        formula = Formula.from_lists([[1, 2], [1, -2], [-1, 2]])
        self.assertEqual(solve_all(formula), [Assignment({1: True, 2: True})])

    def test_contradiction(self):
        formula = Formula.from_lists([[1], [-1]])
        self.assertEqual(solve_all(formula), [])

    def test_empty_formula(self):
        self.assertEqual(solve_all(Formula()), [Assignment()])

    def test_tautology_gives_every_assignment(self):
        formula = Formula.from_lists([[1, -1], [2, -2]])
        solutions = solve_all(formula)
        self.assertEqual(len(solutions), 4)
        self.assertEqual(
            [s.to_model() for s in solutions],
            [[-1, -2], [-1, 2], [1, -2], [1, 2]],
        )

    def test_completeness_soundness_and_uniqueness(self):
        cases = [
            [[1, -2], [3]],
            [[1, 2, 3], [-1, -2], [-2, -3], [-1, -3]],
            [[1, 2], [-1, 3], [-3, 4], [-4, -2]],
            [[5, -9], [9, 12], [-5, -12]],
            [[1, 2, 3, 4]],
            [[1], [2], [-3], [4, -4]],
        ]
        for clauses in cases:
            formula = Formula.from_lists(clauses)
            solutions = solve_all(formula)
            keys = [s.as_tuple() for s in solutions]
            self.assertEqual(len(keys), len(set(keys)), clauses)
            self.assertEqual(set(keys), all_models(formula), clauses)
            literals = referenced_literals(formula)
            for solution in solutions:
                self.assertTrue(satisfies(formula, solution))
                self.assertEqual(solution.literals(), literals)

    def test_caller_formula_is_not_modified(self):
        formula = Formula.from_lists([[1, -2], [3]])
        before = formula.copy()
        solve_all(formula)
        self.assertEqual(formula, before)

    def test_results_do_not_alias(self):
        solutions = solve_all(Formula.from_lists([[1, 2]]))
        solutions[0].set(1, True)
        self.assertNotEqual(solutions[0], solutions[1])

    def test_blocking_clause_prevents_rediscovery(self):
        formula = Formula.from_lists([[1, -2], [3]])
        solver = DFSSolver()
        literals = referenced_literals(formula)
        first = solver.solve(formula, literals, Assignment())
        working = formula.copy()
        working.add(blocking_clause(first))
        second = solver.solve(working, literals, Assignment())
        self.assertIsNotNone(second)
        self.assertNotEqual(first, second)

    def test_one_clause_added_per_solution(self):
        solver = RecordingSolver()
        solutions = solve_all(Formula.from_lists([[1, -2], [3]]), solver)
        # Sizes seen: 2 input clauses, then one more per solution found
        self.assertEqual(solver.sizes, [2, 3, 4, 5])
        self.assertEqual(len(solutions), 3)

    def test_solver_by_name(self):
        formula = Formula.from_lists([[1, 2]])
        self.assertEqual(len(solve_all(formula, "dfs")), 3)
        with self.assertRaises(SolverNotFoundError):
            solve_all(formula, "no-such-solver")


class TestEnumerateSolutions(unittest.TestCase):
    """Test cases for enumerate_solutions() and EnumerationResult."""

    def tearDown(self):
        load_config()

    def test_result_fields(self):
        result = enumerate_solutions(Formula.from_lists([[1, -2], [3]]))
        self.assertTrue(result.is_sat)
        self.assertEqual(result.status, SolverStatus.SATISFIABLE)
        self.assertEqual(result.literals, [1, 2, 3])
        self.assertTrue(result.complete)
        self.assertEqual(len(result), 3)
        self.assertEqual(result.statistics["blocking_clauses"], 3)
        self.assertEqual(result.statistics["input_clauses"], 2)
        self.assertIn("SATISFIABLE", str(result))

    def test_unsatisfiable_result(self):
        result = enumerate_solutions(Formula.from_lists([[1], [-1]]))
        self.assertFalse(result.is_sat)
        self.assertEqual(result.status, SolverStatus.UNSATISFIABLE)
        self.assertEqual(result.to_array().shape, (0, 1))

    def test_zero_limit_status_is_unknown(self):
        result = enumerate_solutions(Formula.from_lists([[1]]), limit=0)
        self.assertEqual(len(result), 0)
        self.assertFalse(result.complete)
        self.assertEqual(result.status, SolverStatus.UNKNOWN)
        self.assertIn("UNKNOWN", str(result))

    def test_limit(self):
        result = enumerate_solutions(Formula.from_lists([[1, 2]]), limit=2)
        self.assertEqual(len(result), 2)
        self.assertFalse(result.complete)

    def test_limit_from_config(self):
        get_config().set("enumeration.limit", 1)
        self.assertEqual(len(solve_all(Formula.from_lists([[1, 2]]))), 1)

    def test_negative_limit_rejected(self):
        with self.assertRaises(ValueError):
            enumerate_solutions(Formula.from_lists([[1]]), limit=-1)

    def test_to_array(self):
        result = enumerate_solutions(Formula.from_lists([[1, -2], [3]]))
        np.testing.assert_array_equal(
            result.to_array(),
            np.array([[False, False, True], [True, False, True], [True, True, True]]),
        )

    def test_solutions_to_array_default_columns(self):
        table = solutions_to_array([Assignment({4: True, 2: False})])
        np.testing.assert_array_equal(table, np.array([[False, True]]))

    def test_structured_logging(self):
        log_dir = tempfile.mkdtemp()
        try:
            structured = StructuredLogger(output_dir=log_dir, experiment_name="enum")
            solve_all(Formula.from_lists([[1, -2], [3]]), structured_logger=structured)
            structured.close()

            with open(os.path.join(log_dir, "enum_solution.jsonl")) as f:
                rows = [json.loads(line) for line in f]
            self.assertEqual([r["model"] for r in rows], [[-1, -2, 3], [1, -2, 3], [1, 2, 3]])

            with open(os.path.join(log_dir, "enum_blocking_clause.jsonl")) as f:
                rows = [json.loads(line) for line in f]
            self.assertEqual(rows[0]["clause"], [1, 2, -3])
            self.assertEqual(rows[-1]["num_clauses"], 5)

            with open(os.path.join(log_dir, "enum_summary.jsonl")) as f:
                summary = json.loads(f.readline())
            self.assertEqual(summary["status"], "satisfiable")
            self.assertEqual(summary["num_solutions"], 3)
            self.assertEqual(summary["solutions"][0], [False, False, True])
        finally:
            shutil.rmtree(log_dir)


if __name__ == "__main__":
    unittest.main()
