"""
Solver interface shared by everything registered in the solver registry.

A solve never raises for an unsatisfiable formula or an exhausted budget; both
are reported through the status of the returned SolverResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SolverStatus(Enum):
    """Outcome of a solve call."""

    UNKNOWN = "unknown"
    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"
    TIMEOUT = "timeout"
    ERROR = "error"


def assignment_to_model(assignment: dict[int, bool]) -> list[int]:
    """Signed DIMACS literals for an assignment, in ascending variable order."""
    return [var if value else -var for var, value in sorted(assignment.items())]


@dataclass
class SolverResult:
    """
    Verdict and search figures of one solve call.

    `assignment` covers every formula variable for SATISFIABLE results and is
    None otherwise. `satisfied_clauses` counts the original clauses made true
    by the final assignment, or by the partial one when the budget ran out.
    """

    status: SolverStatus = SolverStatus.UNKNOWN
    assignment: dict[int, bool] | None = None
    runtime: float = 0.0
    satisfied_clauses: int = 0
    total_clauses: int = 0
    statistics: dict[str, Any] = field(default_factory=dict)
    error_message: str | None = None

    @property
    def is_sat(self) -> bool:
        return self.status == SolverStatus.SATISFIABLE

    @property
    def is_unsat(self) -> bool:
        return self.status == SolverStatus.UNSATISFIABLE

    @property
    def model(self) -> list[int] | None:
        if self.assignment is None:
            return None
        return assignment_to_model(self.assignment)

    def __str__(self) -> str:
        decisions = self.statistics.get("decisions", 0)
        conflicts = self.statistics.get("conflicts", 0)
        search = f"{decisions} decisions, {conflicts} conflicts, {self.runtime:.4f}s"

        if self.status in (SolverStatus.TIMEOUT, SolverStatus.ERROR):
            return (
                f"SAT Result: {self.status.name} ({self.error_message}; "
                f"{self.satisfied_clauses}/{self.total_clauses} clauses satisfied, {search})"
            )
        return f"SAT Result: {self.status.name} ({search})"


class SolverBase(ABC):
    """
    Abstract base class for SAT solvers.

    Clauses are lists of nonzero signed integers, as in DIMACS. Subclasses
    register themselves with `register_solver` to be reachable by name.
    """

    solver_name: str = ""

    @abstractmethod
    def add_clause(self, clause: list[int]) -> None:
        """Add one clause to the instance."""

    @abstractmethod
    def add_clauses(self, clauses: list[list[int]]) -> None:
        """Add every clause of an iterable of clauses."""

    @abstractmethod
    def solve(
        self, assumptions: list[int] | None = None, timeout: float | None = None
    ) -> SolverResult:
        """
        Decide the clauses added so far.

        Args:
            assumptions: Literals assumed true for this call only
            timeout: Time budget in seconds, None for the solver's default

        Returns:
            SolverResult describing the verdict
        """

    @abstractmethod
    def get_model(self) -> list[int] | None:
        """Signed literals of the last satisfying assignment, or None."""

    @abstractmethod
    def get_statistics(self) -> dict[str, Any]:
        """Search statistics of the last solve call."""

    @abstractmethod
    def interrupt(self) -> None:
        """Ask a running solve to stop at its next cut point."""

    @abstractmethod
    def configure(self, config: dict[str, Any]) -> None:
        """Override solver parameters by name."""
