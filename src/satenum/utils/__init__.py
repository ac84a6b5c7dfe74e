"""
Utilities for the SATEnum package.
"""

# cnf is imported explicitly (satenum.utils.cnf) since it depends on satenum.types
from satenum.utils import exceptions, logging_utils
from satenum.utils.exceptions import (
    FormulaParseError,
    InvalidClauseError,
    InvalidLiteralError,
    SATBaseException,
    SolverNotFoundError,
    UnassignedLiteralError,
)
from satenum.utils.logging_utils import (
    LoggingManager,
    NumpyJSONEncoder,
    StructuredLogger,
    configure_logging,
    create_logger,
)

__all__ = [
    "exceptions",
    "logging_utils",
    "SATBaseException",
    "UnassignedLiteralError",
    "InvalidLiteralError",
    "InvalidClauseError",
    "FormulaParseError",
    "SolverNotFoundError",
    "StructuredLogger",
    "NumpyJSONEncoder",
    "LoggingManager",
    "create_logger",
    "configure_logging",
]
