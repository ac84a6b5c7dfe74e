"""
Text rendering for formulas and assignments.

Three notations are supported:

- ``normal``:        (X1 or -X2) and (X3)       X1 = T, X2 = F
- ``programmatic``:  (X1 | !X2) & (X3)          X1 = 1, X2 = 0
- ``mathematical``:  (𝑋₁ ∨ ¬𝑋₂) ∧ (𝑋₃)          𝑋₁ = ⊤, 𝑋₂ = ⊥

With ``color=True`` tokens are wrapped in ANSI escape sequences.
"""

from enum import Enum

from satenum.enumeration import solutions_to_array
from satenum.types import Assignment, Clause, Formula, Literal, Variable

RESET = "\033[0m"
BOLD = "\033[1m"
GREEN = "\033[32m"
RED = "\033[31m"
YELLOW = "\033[33m"
GREY = "\033[90m"

SUBSCRIPT_DIGITS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")


class PrintStyle(Enum):
    """Notation used when rendering formulas and assignments."""

    NORMAL = "normal"
    PROGRAMMATIC = "programmatic"
    MATHEMATICAL = "mathematical"

    @property
    def neg_sign(self) -> str:
        return {"normal": "-", "programmatic": "!", "mathematical": "¬"}[self.value]

    @property
    def and_sign(self) -> str:
        return {"normal": "and", "programmatic": "&", "mathematical": "∧"}[self.value]

    @property
    def or_sign(self) -> str:
        return {"normal": "or", "programmatic": "|", "mathematical": "∨"}[self.value]

    def bool_text(self, value: bool) -> str:
        if self is PrintStyle.PROGRAMMATIC:
            return "1" if value else "0"
        if self is PrintStyle.MATHEMATICAL:
            return "⊤" if value else "⊥"
        return "T" if value else "F"

    def literal_text(self, literal: Literal) -> str:
        if self is PrintStyle.MATHEMATICAL:
            return "𝑋" + str(literal).translate(SUBSCRIPT_DIGITS)
        return f"X{literal}"


def _paint(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{RESET}" if color else text


def format_variable(
    variable: Variable, style: PrintStyle = PrintStyle.NORMAL, color: bool = False
) -> str:
    text = style.literal_text(variable.literal)
    if not variable.is_positive:
        text = style.neg_sign + text
    return _paint(text, GREEN if variable.is_positive else RED, color)


def format_clause(
    clause: Clause, style: PrintStyle = PrintStyle.NORMAL, color: bool = False
) -> str:
    separator = " " + _paint(style.or_sign, YELLOW, color) + " "
    body = separator.join(format_variable(v, style, color) for v in clause)
    return _paint("(", GREY, color) + body + _paint(")", GREY, color)


def format_formula(
    formula: Formula, style: PrintStyle = PrintStyle.NORMAL, color: bool = False
) -> str:
    separator = " " + _paint(style.and_sign, YELLOW, color) + " "
    return separator.join(format_clause(c, style, color) for c in formula)


def format_assignment(
    assignment: Assignment, style: PrintStyle = PrintStyle.NORMAL, color: bool = False
) -> str:
    """Render bindings in ascending literal order, e.g. "X1 = T, X2 = F"."""
    parts = []
    for literal, value in assignment.items():
        name = _paint(style.literal_text(literal), BOLD, color)
        equals = _paint(" = ", GREY, color)
        shown = _paint(style.bool_text(value), GREEN if value else RED, color)
        parts.append(name + equals + shown)
    return _paint(", ", GREY, color).join(parts)


def format_table(
    solutions: list[Assignment],
    literals: list[Literal],
    style: PrintStyle = PrintStyle.NORMAL,
) -> str:
    """Render solutions as an aligned truth table, one row per solution."""
    table = solutions_to_array(solutions, literals)
    headers = [style.literal_text(literal) for literal in literals]
    widths = [max(len(h), 1) for h in headers]
    lines = [" ".join(h.rjust(w) for h, w in zip(headers, widths))]
    for row in table:
        lines.append(
            " ".join(style.bool_text(bool(v)).rjust(w) for v, w in zip(row, widths))
        )
    return "\n".join(lines)
