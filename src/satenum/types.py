"""
Value types for CNF formulas and their truth assignments.

A literal is a positive integer id. A Variable is a literal with a polarity,
a Clause is a disjunction of variables and a Formula is a conjunction of
clauses. An Assignment maps literal ids to truth values.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from satenum.utils.exceptions import InvalidLiteralError, UnassignedLiteralError

Literal = int


def _check_literal(literal) -> int:
    # bool is an int subclass but never a valid id
    if isinstance(literal, bool) or not isinstance(literal, int) or literal < 1:
        raise InvalidLiteralError(literal=literal)
    return literal


class Polarity(Enum):
    """Occurrence sign of a literal inside a clause."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class Variable:
    """A literal occurrence with a polarity, e.g. x1 or -x2."""

    polarity: Polarity
    literal: Literal

    def __post_init__(self):
        _check_literal(self.literal)

    @classmethod
    def positive(cls, literal: Literal) -> "Variable":
        return cls(Polarity.POSITIVE, literal)

    @classmethod
    def negative(cls, literal: Literal) -> "Variable":
        return cls(Polarity.NEGATIVE, literal)

    @classmethod
    def from_int(cls, value: int) -> "Variable":
        """Build a variable from a signed DIMACS-style integer."""
        if isinstance(value, bool) or not isinstance(value, int) or value == 0:
            raise InvalidLiteralError(literal=value)
        if value > 0:
            return cls.positive(value)
        return cls.negative(-value)

    @property
    def is_positive(self) -> bool:
        return self.polarity is Polarity.POSITIVE

    def negated(self) -> "Variable":
        if self.is_positive:
            return Variable.negative(self.literal)
        return Variable.positive(self.literal)

    def to_int(self) -> int:
        return self.literal if self.is_positive else -self.literal

    def __str__(self) -> str:
        return f"x{self.literal}" if self.is_positive else f"-x{self.literal}"


class Clause:
    """
    A disjunction of variables.

    The order of variables is kept for display only; it has no effect on
    evaluation.
    """

    def __init__(self, variables: Iterable[Variable] = ()):
        self._variables: list[Variable] = list(variables)

    @classmethod
    def from_ints(cls, values: Iterable[int]) -> "Clause":
        return cls(Variable.from_int(v) for v in values)

    def to_ints(self) -> list[int]:
        return [v.to_int() for v in self._variables]

    def literals(self) -> list[Literal]:
        """Literal ids in the clause, deduplicated and sorted ascending."""
        return sorted({v.literal for v in self._variables})

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __getitem__(self, index: int) -> Variable:
        return self._variables[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Clause):
            return NotImplemented
        return self._variables == other._variables

    def __repr__(self) -> str:
        return f"Clause({self._variables!r})"

    def __str__(self) -> str:
        return "(" + " or ".join(str(v) for v in self._variables) + ")"


class Formula:
    """
    A boolean formula in conjunctive normal form.

    Formulas are append-only: clauses can be added but never edited or
    removed. Use copy() before adding clauses to a formula you do not own.
    """

    def __init__(self, clauses: Iterable[Clause | Iterable[Variable]] = ()):
        self._clauses: list[Clause] = []
        for clause in clauses:
            self.add(clause)

    @classmethod
    def from_lists(cls, clauses: Iterable[Iterable[int]]) -> "Formula":
        """Build a formula from lists of signed integers, e.g. [[1, -2], [3]]."""
        return cls(Clause.from_ints(clause) for clause in clauses)

    def to_lists(self) -> list[list[int]]:
        return [clause.to_ints() for clause in self._clauses]

    def add(self, clause: Clause | Iterable[Variable]) -> None:
        """Append a clause to the formula."""
        if not isinstance(clause, Clause):
            clause = Clause(clause)
        self._clauses.append(clause)

    def literals(self) -> list[Literal]:
        """Literal ids referenced anywhere in the formula, sorted ascending."""
        found = set()
        for clause in self._clauses:
            found.update(v.literal for v in clause)
        return sorted(found)

    def copy(self) -> "Formula":
        # Variables are immutable, so copying the clause lists is a deep copy
        return Formula(Clause(clause) for clause in self._clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def __getitem__(self, index: int) -> Clause:
        return self._clauses[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Formula):
            return NotImplemented
        return self._clauses == other._clauses

    def __repr__(self) -> str:
        return f"Formula({self._clauses!r})"

    def __str__(self) -> str:
        return " and ".join(str(c) for c in self._clauses)


class Assignment:
    """
    A mapping from literal ids to truth values.

    Lookups are strict: reading a literal that has no binding raises
    UnassignedLiteralError instead of defaulting to False.
    """

    def __init__(self, values: dict[Literal, bool] | None = None):
        self._values: dict[Literal, bool] = {}
        for literal, value in (values or {}).items():
            self.set(literal, value)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Literal, bool]]) -> "Assignment":
        assignment = cls()
        for literal, value in pairs:
            assignment.set(literal, value)
        return assignment

    def get(self, literal: Literal) -> bool:
        try:
            return self._values[literal]
        except KeyError:
            raise UnassignedLiteralError(literal=literal) from None

    def set(self, literal: Literal, value: bool) -> None:
        self._values[_check_literal(literal)] = bool(value)

    def unset(self, literal: Literal) -> None:
        """Remove the binding for a literal, if any."""
        self._values.pop(literal, None)

    def clear(self) -> None:
        self._values.clear()

    def reset(self, literals: Iterable[Literal] | None = None) -> None:
        """
        Reset the assignment to all-false.

        Args:
            literals: If given, drop every binding and bind exactly these
                literals to False. Otherwise set every existing binding
                to False.
        """
        if literals is None:
            for literal in self._values:
                self._values[literal] = False
            return
        self._values.clear()
        for literal in literals:
            self.set(literal, False)

    def literals(self) -> list[Literal]:
        return sorted(self._values)

    def items(self) -> list[tuple[Literal, bool]]:
        """(literal, value) pairs sorted by literal id."""
        return sorted(self._values.items())

    def as_tuple(self) -> tuple[tuple[Literal, bool], ...]:
        """Hashable snapshot of the assignment."""
        return tuple(self.items())

    def to_model(self) -> list[int]:
        """Signed integer model, e.g. [1, -2, 3] for x1=T, x2=F, x3=T."""
        return [lit if value else -lit for lit, value in self.items()]

    def copy(self) -> "Assignment":
        return Assignment(self._values)

    def __getitem__(self, literal: Literal) -> bool:
        return self.get(literal)

    def __setitem__(self, literal: Literal, value: bool) -> None:
        self.set(literal, value)

    def __contains__(self, literal) -> bool:
        return literal in self._values

    def __iter__(self) -> Iterator[Literal]:
        return iter(self.literals())

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Assignment):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Assignment({dict(self.items())!r})"

    def __str__(self) -> str:
        return ", ".join(f"x{lit} = {'T' if value else 'F'}" for lit, value in self.items())
