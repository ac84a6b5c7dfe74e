"""
Unit tests for the depth-first brute-force solver.
"""

import os
import sys
import unittest

# Add the source directory to the path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from satenum.solvers import DFSSolver, SolverBase
from satenum.types import Assignment, Formula
from satenum.utils.cnf import referenced_literals, satisfies


class TestDFSSolver(unittest.TestCase):
    """Test cases for DFSSolver."""

    def setUp(self):
        self.solver = DFSSolver()

    def solve(self, clauses, buffer=None, solver=None):
        formula = Formula.from_lists(clauses)
        literals = referenced_literals(formula)
        buffer = buffer if buffer is not None else Assignment()
        return (solver or self.solver).solve(formula, literals, buffer), buffer

    def test_is_a_solver(self):
        self.assertIsInstance(self.solver, SolverBase)
        self.assertEqual(self.solver.solver_name, "dfs")

    def test_false_is_tried_before_true(self):
        # (x1 or -x2) and x3: first leaf that satisfies is x1=F, x2=F, x3=T
        result, _ = self.solve([[1, -2], [3]])
        self.assertEqual(result, Assignment({1: False, 2: False, 3: True}))

    def test_all_false_when_allowed(self):
        result, _ = self.solve([[-1, -2]])
        self.assertEqual(result, Assignment({1: False, 2: False}))

    def test_single_solution(self):
        result, _ = self.solve([[1, 2], [1, -2], [-1, 2]])
        self.assertEqual(result, Assignment({1: True, 2: True}))

    def test_unsatisfiable_returns_none(self):
        result, buffer = self.solve([[1], [-1]])
        self.assertIsNone(result)
        # Bindings are removed when both values of a literal fail
        self.assertEqual(len(buffer), 0)

    def test_empty_formula(self):
        result, _ = self.solve([])
        self.assertEqual(result, Assignment())

    def test_result_is_a_copy_of_the_buffer(self):
        result, buffer = self.solve([[2]])
        self.assertEqual(result, buffer)
        buffer.set(2, False)
        self.assertTrue(result[2])

    def test_stale_buffer_is_overwritten(self):
        stale = Assignment({1: True, 2: True, 3: False})
        result, _ = self.solve([[1, -2], [3]], buffer=stale)
        self.assertEqual(result, Assignment({1: False, 2: False, 3: True}))

    def test_non_contiguous_literals(self):
        result, _ = self.solve([[10, 42], [-10]])
        self.assertEqual(result, Assignment({10: False, 42: True}))

    def test_solution_satisfies_formula(self):
        clauses = [[1, 2, -3], [-1, 3], [2, 3], [-2, -3, 4]]
        result, _ = self.solve(clauses)
        self.assertTrue(satisfies(Formula.from_lists(clauses), result))

    def test_explicit_stack_matches_recursion(self):
        iterative = DFSSolver(max_recursion_depth=0)
        cases = [
            [[1, -2], [3]],
            [[1, 2], [1, -2], [-1, 2]],
            [[1], [-1]],
            [[-1, -2, 3], [2, 4], [-4, 1]],
            [],
        ]
        for clauses in cases:
            expected, expected_buffer = self.solve(clauses)
            result, buffer = self.solve(clauses, solver=iterative)
            self.assertEqual(result, expected, clauses)
            self.assertEqual(buffer, expected_buffer, clauses)

    def test_deep_literal_list(self):
        # Deeper than the default recursion limit allows for plain recursion
        count = 1500
        formula = Formula.from_lists([[-i] for i in range(1, count + 1)])
        literals = referenced_literals(formula)
        result = self.solver.solve(formula, literals, Assignment())
        self.assertIsNotNone(result)
        self.assertEqual(len(result), count)
        self.assertFalse(any(result[i] for i in literals))

    def test_statistics(self):
        self.solve([[1], [2]])
        stats = self.solver.get_statistics()
        self.assertEqual(stats["solve_calls"], 1)
        # Leaves FF, FT, TF, TT; only the last one satisfies
        self.assertEqual(stats["leaves_checked"], 4)
        self.assertEqual(stats["solver_name"], "dfs")
        self.solver.reset_statistics()
        self.assertEqual(self.solver.get_statistics()["leaves_checked"], 0)


if __name__ == "__main__":
    unittest.main()
