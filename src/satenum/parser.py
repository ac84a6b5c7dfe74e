"""
Parser for infix CNF formulas.

Accepted syntax, case-insensitive::

    (x1 OR -x2) AND (x2 | !x3) & ~x1

Clauses are separated by ``and`` or ``&``, variables within a clause by ``or``
or ``|``. A variable is ``x<N>`` with N >= 1, optionally negated with ``-``,
``!``, ``~`` or ``¬``. Parentheses around a clause are optional.
"""

import logging
import re

from satenum.types import Clause, Formula, Variable
from satenum.utils.exceptions import FormulaParseError

logger = logging.getLogger(__name__)

AND_PATTERN = re.compile(r"\band\b|&&?")
OR_PATTERN = re.compile(r"\bor\b|\|\|?")
VARIABLE_PATTERN = re.compile(r"(?P<negation>[-!~¬]?)\s*(?P<name>.*)", re.DOTALL)
LITERAL_PREFIX = "x"


def parse(text: str) -> Formula:
    """
    Parse an infix formula string into a Formula.

    Args:
        text: Formula text, e.g. "(x1 or x2) and (-x2 or x3)"

    Returns:
        The parsed Formula

    Raises:
        FormulaParseError: If the text is empty or a variable is malformed
    """
    if not text or not text.strip():
        raise FormulaParseError("Empty formula")

    formula = Formula()
    for clause_text in AND_PATTERN.split(text.lower()):
        formula.add(parse_clause(clause_text))

    logger.debug(f"Parsed {len(formula)} clause(s) from {text!r}")
    return formula


def parse_clause(text: str) -> Clause:
    """Parse one disjunction, with or without surrounding parentheses."""
    inner = text.strip().lstrip("(").rstrip(")")
    return Clause(parse_variable(part) for part in OR_PATTERN.split(inner))


def parse_variable(text: str) -> Variable:
    """Parse a possibly negated variable such as "x3" or "-x3"."""
    match = VARIABLE_PATTERN.fullmatch(text.strip())
    name = match.group("name").strip()
    literal = parse_literal(name)
    if match.group("negation"):
        return Variable.negative(literal)
    return Variable.positive(literal)


def parse_literal(text: str) -> int:
    """Parse a literal name such as "x3" into its id."""
    text = text.strip().lower()
    if not text:
        raise FormulaParseError("Missing variable")
    if not text.startswith(LITERAL_PREFIX):
        raise FormulaParseError("Invalid variable, expected xN", text=text)

    digits = text[len(LITERAL_PREFIX):].strip()
    if not digits.isdecimal():
        raise FormulaParseError("Invalid variable, expected a number", text=text)

    literal = int(digits)
    if literal < 1:
        raise FormulaParseError("Variable ids start at 1", text=text)
    return literal
