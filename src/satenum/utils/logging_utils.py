"""
Structured logging utilities for the SATEnum project.

This module provides a StructuredLogger class that records enumeration events
(solutions found, blocking clauses added, run summaries) in JSON Lines or CSV
format, a NumpyJSONEncoder for serializing numpy arrays to JSON, and helpers
for configuring Python's built-in logging system.
"""

import csv
import json
import logging
import os
import time
from datetime import datetime
from typing import Any

import numpy as np

PACKAGE_LOGGER = "satenum"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder that can handle NumPy arrays and scalars."""

    def default(self, obj):
        """Convert numpy objects to standard Python types."""
        if isinstance(obj, np.bool_):
            return bool(obj)
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


class StructuredLogger:
    """
    A logger for structured enumeration data.

    This logger can output data in JSON Lines or CSV format.
    It maintains separate files for different event types.
    """

    FORMAT_JSON = "json"
    FORMAT_CSV = "csv"

    def __init__(
        self,
        output_dir: str,
        experiment_name: str,
        format_type: str = "json",
        visualize_ready: bool = False,
    ):
        """
        Initialize the structured logger.

        Args:
            output_dir: Directory to save log files in
            experiment_name: Name of the run (used in filenames)
            format_type: Format to save logs in ("json" or "csv")
            visualize_ready: Whether to write a metadata file on finalize()
        """
        if format_type not in (self.FORMAT_JSON, self.FORMAT_CSV):
            raise ValueError(f"Unsupported log format: {format_type}")

        self.output_dir = output_dir
        self.experiment_name = experiment_name
        self.format_type = format_type
        self.visualize_ready = visualize_ready

        os.makedirs(output_dir, exist_ok=True)

        self.files = {}
        self.write_counts = {}

        self.metadata = {
            "experiment_name": experiment_name,
            "start_time": datetime.now().isoformat(),
            "log_files": {},
        }

    def _get_file(self, event_type: str) -> tuple:
        """
        Get the file handle for a given event type.

        Returns:
            Tuple of (file_handle, is_new)
        """
        if event_type not in self.files:
            ext = ".jsonl" if self.format_type == self.FORMAT_JSON else ".csv"
            filename = f"{self.experiment_name}_{event_type}{ext}"
            filepath = os.path.join(self.output_dir, filename)

            self.metadata["log_files"][event_type] = filepath

            file = open(
                filepath,
                "w",
                newline="" if self.format_type == self.FORMAT_CSV else None,
            )
            self.files[event_type] = file
            self.write_counts[event_type] = 0
            return file, True

        return self.files[event_type], False

    def _write_event(self, event_type: str, data: dict[str, Any]):
        """
        Write an event to the appropriate log file.

        Args:
            event_type: Type of event
            data: Data to log
        """
        file, is_new = self._get_file(event_type)

        if self.format_type == self.FORMAT_JSON:
            file.write(json.dumps(data, cls=NumpyJSONEncoder) + "\n")
        else:
            # Nested values are stored as JSON text in a single CSV cell
            row = {
                key: json.dumps(value, cls=NumpyJSONEncoder)
                if isinstance(value, (list, dict, np.ndarray))
                else value
                for key, value in data.items()
            }
            writer = csv.DictWriter(file, fieldnames=list(row.keys()))
            if is_new:
                writer.writeheader()
            writer.writerow(row)
        file.flush()

        self.write_counts[event_type] += 1

    def log_solution(self, index: int, assignment):
        """
        Log a satisfying assignment.

        Args:
            index: Position of the solution in the enumeration order
            assignment: The Assignment that was found
        """
        data = {
            "index": index,
            "model": assignment.to_model(),
            "timestamp": time.time(),
        }
        self._write_event("solution", data)

    def log_blocking_clause(self, index: int, clause, num_clauses: int):
        """
        Log a blocking clause appended to the working formula.

        Args:
            index: Index of the solution the clause blocks
            clause: The Clause that was added
            num_clauses: Size of the working formula after the addition
        """
        data = {
            "index": index,
            "clause": clause.to_ints(),
            "num_clauses": num_clauses,
            "timestamp": time.time(),
        }
        self._write_event("blocking_clause", data)

    def log_summary(
        self,
        status: str,
        num_solutions: int,
        literals: list[int],
        runtime: float,
        solutions: np.ndarray | None = None,
        statistics: dict | None = None,
    ):
        """
        Log the outcome of an enumeration run.

        Args:
            status: "satisfiable" or "unsatisfiable"
            num_solutions: Number of solutions found
            literals: Literal order used by the search
            runtime: Elapsed time in seconds
            solutions: Optional boolean matrix, one row per solution
            statistics: Solver statistics
        """
        data = {
            "status": status,
            "num_solutions": num_solutions,
            "literals": literals,
            "runtime": runtime,
            "solutions": solutions if solutions is not None else [],
            "statistics": statistics or {},
            "timestamp": time.time(),
        }
        self._write_event("summary", data)

    def log_exception(
        self,
        exception_type: str,
        exception_message: str,
        stack_trace: str = "",
    ):
        """
        Log an exception.

        Args:
            exception_type: Type of the exception
            exception_message: Exception message
            stack_trace: Stack trace
        """
        data = {
            "exception_type": exception_type,
            "exception_message": exception_message,
            "stack_trace": stack_trace,
            "timestamp": time.time(),
        }
        self._write_event("exception", data)

    def close(self):
        """Close all open file handles."""
        for file in self.files.values():
            file.close()
        self.files = {}

    def finalize(self) -> str:
        """
        Finalize logging and write metadata file if visualization is enabled.

        Returns:
            Path to metadata file if visualization is enabled, empty string otherwise
        """
        self.close()

        if self.visualize_ready:
            self.metadata["end_time"] = datetime.now().isoformat()
            self.metadata["record_counts"] = self.write_counts

            metadata_path = os.path.join(
                self.output_dir, f"{self.experiment_name}_viz_metadata.json"
            )
            with open(metadata_path, "w") as f:
                json.dump(self.metadata, f, indent=2)

            return metadata_path

        return ""


def create_logger(
    experiment_name: str,
    output_dir: str = "logs",
    format_type: str = "json",
    visualize_ready: bool = False,
) -> StructuredLogger:
    """
    Create a structured logger with default settings.

    Args:
        experiment_name: Name of the run
        output_dir: Directory to save logs in
        format_type: Format to save logs in ("json" or "csv")
        visualize_ready: Whether to write a metadata file on finalize()

    Returns:
        StructuredLogger instance
    """
    os.makedirs(output_dir, exist_ok=True)

    return StructuredLogger(
        output_dir=output_dir,
        experiment_name=experiment_name,
        format_type=format_type,
        visualize_ready=visualize_ready,
    )


def resolve_level(level: str | int) -> int:
    """Translate a level name such as "debug" into its numeric value."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {level}")
    return value


def configure_logging(
    level: str | int = logging.WARNING,
    fmt: str = DEFAULT_FORMAT,
    log_file: str | None = None,
) -> logging.Logger:
    """
    Configure the package logger with a console handler and an optional file handler.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        level: Logging level name or number
        fmt: Format string for all handlers
        log_file: Optional path of a log file

    Returns:
        The configured package logger
    """
    level = resolve_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class LoggingManager:
    """
    Manager for configuring Python's built-in logging system alongside structured logging.

    Messages go to the console and to a text log file in the output directory;
    enumeration events go to the structured JSON Lines files.
    """

    def __init__(
        self,
        experiment_name: str,
        output_dir: str = "logs",
        console_level: str | int = logging.WARNING,
        file_level: str | int = logging.DEBUG,
    ):
        """
        Initialize the logging manager.

        Args:
            experiment_name: Name of the run
            output_dir: Directory to save logs in
            console_level: Logging level for console output
            file_level: Logging level for file output
        """
        console_level = resolve_level(console_level)
        file_level = resolve_level(file_level)
        self.experiment_name = experiment_name
        self.output_dir = output_dir

        os.makedirs(output_dir, exist_ok=True)

        self.logger = logging.getLogger(PACKAGE_LOGGER)
        self.logger.setLevel(min(console_level, file_level))

        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        )
        self.logger.addHandler(console_handler)

        self.log_file = os.path.join(output_dir, f"{experiment_name}_log.txt")
        file_handler = logging.FileHandler(self.log_file)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        self.logger.addHandler(file_handler)

        self.structured_logger = create_logger(
            experiment_name=experiment_name,
            output_dir=output_dir,
            format_type="json",
            visualize_ready=True,
        )

    def get_logger(self) -> logging.Logger:
        """Get the Python logger."""
        return self.logger

    def get_structured_logger(self) -> StructuredLogger:
        """Get the structured data logger."""
        return self.structured_logger

    def close(self):
        """Close all loggers."""
        self.structured_logger.finalize()

        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)
