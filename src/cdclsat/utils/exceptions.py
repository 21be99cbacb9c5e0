"""
Custom exceptions for the CDCL solver.

This module defines exception classes for input errors, solver precondition
violations and exhausted search budgets. An unsatisfiable formula is a solver
result, not an error, so there is no exception for it.
"""

from typing import Any


class SATBaseException(Exception):
    """Base class for all solver specific exceptions."""

    def __init__(self, message: str = None):
        """
        Initialize the exception.

        Args:
            message: Optional error message
        """
        self.message = message
        super().__init__(message)


class DimacsParseError(SATBaseException, ValueError):
    """
    Exception raised when a DIMACS token cannot be read as an integer.

    There is no partial-formula recovery: the whole parse fails.
    """

    def __init__(
        self,
        message: str = "Malformed DIMACS input",
        token: str = None,
        line_number: int = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            token: The offending token
            line_number: 1-based line number of the token
        """
        self.token = token
        self.line_number = line_number

        details = []
        if token is not None:
            details.append(f"token={token!r}")
        if line_number is not None:
            details.append(f"line={line_number}")
        if details:
            message = f"{message} ({', '.join(details)})"

        super().__init__(message)


class SolverTimeoutError(SATBaseException):
    """
    Exception raised when a solve exceeds its time or conflict budget.

    This exception can include details about the partial assignment reached.
    """

    def __init__(
        self,
        message: str = "Solver exceeded its budget",
        time_spent: float = None,
        partial_assignment: dict[int, bool] = None,
        conflicts: int = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            time_spent: Time spent before the budget ran out (seconds)
            partial_assignment: Trail contents when the solve was stopped
            conflicts: Number of conflicts analysed before stopping
        """
        self.time_spent = time_spent
        self.partial_assignment = partial_assignment
        self.conflicts = conflicts

        if time_spent is not None or conflicts is not None:
            details = []
            if time_spent is not None:
                details.append(f"time_spent={time_spent:.2f}s")
            if conflicts is not None:
                details.append(f"conflicts={conflicts}")

            if details:
                message = f"{message} ({', '.join(details)})"

        super().__init__(message)


class InconsistentAssignmentError(SATBaseException):
    """
    Exception raised when an already assigned variable is assigned again.

    Reaching this indicates a defect in the search itself.
    """

    def __init__(
        self,
        message: str = "Inconsistent variable assignment detected",
        variable: int = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            variable: The variable with inconsistent assignment
        """
        self.variable = variable

        if variable is not None:
            message = f"{message} for variable {variable}"

        super().__init__(message)


class InvalidClauseError(SATBaseException):
    """
    Exception raised when an invalid clause or literal is detected.

    This occurs when a literal names a non-positive variable.
    """

    def __init__(self, message: str = "Invalid clause detected", clause: Any = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            clause: The invalid clause or literal
        """
        self.clause = clause

        if clause is not None:
            message = f"{message}: {clause}"

        super().__init__(message)


class DecisionError(SATBaseException):
    """Exception raised when a branching decision is requested with nothing left to decide."""

    def __init__(self, message: str = "No unassigned variable left to decide"):
        super().__init__(message)
