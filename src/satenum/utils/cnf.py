"""
CNF formula utilities.

This module provides the pure query operations on formulas (literal
extraction and satisfaction checks) together with functions for loading,
parsing and writing formulas in DIMACS format.
"""

import os
from typing import Any, TextIO

from satenum.types import Assignment, Clause, Formula, Literal, Variable
from satenum.utils.exceptions import InvalidClauseError, InvalidLiteralError


def referenced_literals(formula: Formula) -> list[Literal]:
    """
    Collect the literal ids a formula refers to.

    Polarity is ignored, duplicates are removed and the ids are sorted
    ascending. This order fixes the variable order explored by the solvers.

    Args:
        formula: Formula to scan

    Returns:
        Sorted list of literal ids
    """
    return formula.literals()


def evaluate(variable: Variable, assignment: Assignment) -> bool:
    """
    Evaluate a single variable under an assignment.

    Raises:
        UnassignedLiteralError: If the variable's literal has no binding
    """
    value = assignment.get(variable.literal)
    return value if variable.is_positive else not value


def satisfies_clause(clause: Clause, assignment: Assignment) -> bool:
    """A clause is satisfied if at least one of its variables is true."""
    for variable in clause:
        if evaluate(variable, assignment):
            return True
    return False


def satisfies(formula: Formula, assignment: Assignment) -> bool:
    """A formula is satisfied if all of its clauses are satisfied."""
    for clause in formula:
        if not satisfies_clause(clause, assignment):
            return False
    return True


def load_cnf_file(file_path: str) -> tuple[Formula, dict[str, Any]]:
    """
    Load a CNF formula from a DIMACS file.

    Args:
        file_path: Path to the CNF file in DIMACS format

    Returns:
        Tuple of (formula, metadata)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file format is invalid
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"CNF file not found: {file_path}")

    with open(file_path) as f:
        dimacs_content = f.read()

    return parse_dimacs(dimacs_content)


def parse_dimacs(source: str | TextIO) -> tuple[Formula, dict[str, Any]]:
    """
    Parse CNF formula from DIMACS format.

    Args:
        source: DIMACS content as a string or file-like object

    Returns:
        Tuple of (formula, metadata)
        - formula: Parsed Formula
        - metadata: Dictionary with comments, num_variables and num_clauses

    Raises:
        ValueError: If the format is invalid
        InvalidClauseError: If a clause contains a token that is not an integer
    """
    if isinstance(source, str):
        lines = source.strip().split("\n")
    else:
        lines = source.readlines()

    formula = Formula()
    metadata = {"comments": [], "num_variables": 0, "num_clauses": 0}

    found_problem_line = False
    current_clause: list[int] = []

    for line in lines:
        line = line.strip()

        if not line:
            continue

        if line.startswith("c"):
            metadata["comments"].append(line[1:].strip())
            continue

        # Some generators terminate the file with a '%' line
        if line.startswith("%"):
            break

        if line.startswith("p"):
            if found_problem_line:
                raise ValueError("Multiple problem lines in CNF file")

            parts = line.split()
            if len(parts) < 4 or parts[1] != "cnf":
                raise ValueError(f"Invalid problem line: {line}")

            try:
                metadata["num_variables"] = int(parts[2])
                metadata["num_clauses"] = int(parts[3])
            except ValueError:
                raise ValueError(f"Invalid numbers in problem line: {line}")

            found_problem_line = True
            continue

        try:
            values = [int(x) for x in line.split()]
        except ValueError:
            raise InvalidClauseError("Non-integer literal in clause", clause=line.split())

        for value in values:
            if value == 0:
                if current_clause:
                    formula.add(Clause.from_ints(current_clause))
                    current_clause = []
            else:
                current_clause.append(value)

    if current_clause:
        formula.add(Clause.from_ints(current_clause))

    if not found_problem_line:
        raise ValueError("No problem line found in CNF file")

    if len(formula) != metadata["num_clauses"]:
        raise ValueError(
            f"Expected {metadata['num_clauses']} clauses, but found {len(formula)}"
        )

    highest = max(formula.literals(), default=0)
    if highest > metadata["num_variables"]:
        raise InvalidLiteralError(
            f"Literal exceeds declared variable count {metadata['num_variables']}",
            literal=highest,
        )

    return formula, metadata


def formula_to_dimacs(
    formula: Formula,
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> str:
    """
    Convert a formula to DIMACS format.

    Args:
        formula: Formula to convert
        num_variables: Number of variables (highest literal id if not provided)
        comments: List of comment lines to include

    Returns:
        DIMACS format string representation
    """
    if comments is None:
        comments = []

    if num_variables is None:
        num_variables = max(formula.literals(), default=0)

    lines = [f"c {comment}" for comment in comments]
    lines.append(f"p cnf {num_variables} {len(formula)}")

    for clause in formula.to_lists():
        lines.append(" ".join(map(str, clause + [0])))

    return "\n".join(lines)


def save_cnf_file(
    file_path: str,
    formula: Formula,
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> None:
    """
    Save a CNF formula to a DIMACS file.

    Args:
        file_path: Path to save the CNF file
        formula: Formula to save
        num_variables: Number of variables (computed if not provided)
        comments: List of comment lines to include
    """
    dimacs_str = formula_to_dimacs(formula, num_variables, comments)

    with open(file_path, "w") as f:
        f.write(dimacs_str + "\n")
