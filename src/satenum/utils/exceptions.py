"""
Custom exceptions for the SATEnum project.

This module defines exception classes specific to formula construction, parsing
and evaluation. An unsatisfiable formula is never reported through an exception:
solvers return None and the enumerator returns an empty list.
"""

from typing import Any


class SATBaseException(Exception):
    """Base class for all SATEnum specific exceptions."""

    def __init__(self, message: str = None):
        """
        Initialize the exception.

        Args:
            message: Optional error message
        """
        self.message = message
        super().__init__(message)


class UnassignedLiteralError(SATBaseException, KeyError):
    """
    Exception raised when a literal is evaluated without a truth value.

    Evaluation is strict: every literal referenced by a formula must be bound
    in the assignment before the formula is checked.
    """

    def __init__(self, message: str = "Literal has no assigned value", literal: int = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            literal: The literal id that was looked up
        """
        self.literal = literal

        if literal is not None:
            message = f"{message}: x{literal}"

        super().__init__(message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.message)


class InvalidLiteralError(SATBaseException, ValueError):
    """Exception raised when a literal id is not a positive integer."""

    def __init__(self, message: str = "Invalid literal", literal: Any = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            literal: The offending literal value
        """
        self.literal = literal

        if literal is not None:
            message = f"{message}: {literal!r}"

        super().__init__(message)


class InvalidClauseError(SATBaseException, ValueError):
    """
    Exception raised when an invalid clause is detected.

    This occurs when a clause has invalid literals or structure.
    """

    def __init__(self, message: str = "Invalid clause detected", clause: list[int] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            clause: The invalid clause
        """
        self.clause = clause

        # Enhance the message with the clause if available
        if clause is not None:
            message = f"{message}: {clause}"

        super().__init__(message)


class FormulaParseError(SATBaseException, ValueError):
    """Exception raised when infix formula text cannot be parsed."""

    def __init__(self, message: str = "Could not parse formula", text: str = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            text: The fragment of input that failed to parse
        """
        self.text = text

        if text is not None:
            message = f"{message}: {text!r}"

        super().__init__(message)


class SolverNotFoundError(SATBaseException, ValueError):
    """Exception raised when a solver name is not registered."""

    def __init__(self, message: str = "No solver registered", name: str = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            name: The requested solver name
        """
        self.name = name

        if name is not None:
            message = f"{message} with name '{name}'"

        super().__init__(message)
