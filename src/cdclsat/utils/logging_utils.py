"""
Structured logging utilities for the CDCL solver.

This module provides a SolverTraceLogger that records search events
(decisions, conflicts, backtracks, results) as JSON Lines or CSV, and the
root logger setup used by the command line.
"""

import csv
import json
import logging
import os
import time
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)


class SolverTraceLogger:
    """
    A logger for search events.

    Each event type is written to its own file in the output directory.
    """

    FORMAT_JSON = "json"
    FORMAT_CSV = "csv"

    def __init__(self, output_dir: str, run_name: str, format_type: str = "json"):
        """
        Initialize the trace logger.

        Args:
            output_dir: Directory to save trace files in
            run_name: Name of the run (used in filenames)
            format_type: Format to save traces in ("json" or "csv")
        """
        if format_type not in (self.FORMAT_JSON, self.FORMAT_CSV):
            raise ValueError(f"Unsupported trace format: {format_type}")

        self.output_dir = output_dir
        self.run_name = run_name
        self.format_type = format_type

        os.makedirs(output_dir, exist_ok=True)

        self.files = {}
        self.write_counts = {}
        self.metadata = {
            "run_name": run_name,
            "start_time": datetime.now().isoformat(),
            "trace_files": {},
        }

    def _get_file(self, event_type: str) -> tuple:
        """
        Get the file handle for a given event type.

        Args:
            event_type: Type of event (used in filename)

        Returns:
            Tuple of (file_handle, is_new)
        """
        if event_type not in self.files:
            ext = ".jsonl" if self.format_type == self.FORMAT_JSON else ".csv"
            filepath = os.path.join(self.output_dir, f"{self.run_name}_{event_type}{ext}")
            self.metadata["trace_files"][event_type] = filepath

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
        file, is_new = self._get_file(event_type)

        if self.format_type == self.FORMAT_JSON:
            file.write(json.dumps(data) + "\n")
        else:
            writer = csv.DictWriter(file, fieldnames=list(data.keys()))
            if is_new:
                writer.writeheader()
            writer.writerow(data)
        file.flush()

        self.write_counts[event_type] += 1

    def log_decision(self, step: int, level: int, variable: int, value: bool):
        """
        Log a branching decision.

        Args:
            step: Decision counter
            level: Decision level after the decision
            variable: Decided variable
            value: Chosen polarity
        """
        self._write_event(
            "decision",
            {
                "step": step,
                "level": level,
                "variable": variable,
                "value": value,
                "timestamp": time.time(),
            },
        )

    def log_conflict(
        self, step: int, level: int, clause: list[int], learned: list[int], backtrack_level: int
    ):
        """
        Log a conflict and its analysis.

        Args:
            step: Conflict counter
            level: Decision level where the conflict happened
            clause: Falsified clause as signed integers
            learned: Learned clause as signed integers
            backtrack_level: Level returned by conflict analysis
        """
        self._write_event(
            "conflict",
            {
                "step": step,
                "level": level,
                "clause": clause,
                "learned": learned,
                "backtrack_level": backtrack_level,
                "timestamp": time.time(),
            },
        )

    def log_backtrack(self, from_level: int, to_level: int, removed: int):
        self._write_event(
            "backtrack",
            {
                "from_level": from_level,
                "to_level": to_level,
                "removed": removed,
                "timestamp": time.time(),
            },
        )

    def log_result(self, status: str, statistics: dict[str, Any]):
        """
        Log the final verdict of a solve.

        Args:
            status: Solver status value
            statistics: Search statistics
        """
        self._write_event(
            "result",
            {"status": status, "statistics": statistics, "timestamp": time.time()},
        )

    def close(self):
        """Close all open file handles."""
        for file in self.files.values():
            file.close()
        self.files = {}

    def finalize(self) -> str:
        """
        Close all files and write a metadata file describing the trace.

        Returns:
            Path to the metadata file
        """
        self.close()

        self.metadata["end_time"] = datetime.now().isoformat()
        self.metadata["record_counts"] = self.write_counts

        metadata_path = os.path.join(self.output_dir, f"{self.run_name}_metadata.json")
        with open(metadata_path, "w") as f:
            json.dump(self.metadata, f, indent=2)

        logger.debug(f"Wrote trace metadata to {metadata_path}")
        return metadata_path


def create_trace_logger(
    run_name: str, output_dir: str = "logs", format_type: str = "json"
) -> SolverTraceLogger:
    """
    Create a trace logger with default settings.

    Args:
        run_name: Name of the run
        output_dir: Directory to save traces in
        format_type: Format to save traces in ("json" or "csv")

    Returns:
        SolverTraceLogger instance
    """
    return SolverTraceLogger(
        output_dir=output_dir, run_name=run_name, format_type=format_type
    )


def setup_logging(
    verbosity: int = 0, fmt: str | None = None, level: str | int = "WARNING"
) -> None:
    """
    Configure the root logger.

    Args:
        verbosity: Number of -v flags; each one lowers the threshold by one
            level, from `level` down to DEBUG
        fmt: Log record format
        level: Base level name or number, used when verbosity is 0
    """
    base = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(base, int):
        raise ValueError(f"Unknown logging level: {level}")

    effective = max(logging.DEBUG, base - 10 * verbosity)
    logging.basicConfig(
        level=effective,
        format=fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(effective)
