"""
Assignment trail for the CDCL search.

The trail maps each assigned variable to its Assignment record and tracks the
current decision level. Entries are inserted when a variable is decided or
propagated and removed only by backtracking. Insertion order is kept, so the
mapping doubles as the chronological log of the search.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from cdclsat.formula import Clause, Formula, Literal
from cdclsat.utils.exceptions import InconsistentAssignmentError


@dataclass(frozen=True)
class Assignment:
    """
    A single variable assignment.

    An antecedent of None marks a decision; otherwise it is the clause that
    became unit and forced the value.
    """

    value: bool
    antecedent: Clause | None
    decision_level: int

    @property
    def is_decision(self) -> bool:
        return self.antecedent is None


class Trail:
    """Partial assignment with decision-level bookkeeping."""

    def __init__(self):
        self.assignments: dict[int, Assignment] = {}
        self.dl = 0

    def value(self, literal: Literal) -> bool:
        """
        Evaluate a literal under the current assignment.

        Unassigned variables evaluate to False. Callers that need to tell
        "false" from "unassigned" must check is_assigned first.

        Args:
            literal: Literal to evaluate

        Returns:
            Truth value of the literal
        """
        assignment = self.assignments.get(literal.variable)
        if assignment is None:
            return False
        return not assignment.value if literal.negation else assignment.value

    def is_assigned(self, variable: int) -> bool:
        return variable in self.assignments

    def assign(self, variable: int, value: bool, antecedent: Clause | None) -> None:
        """
        Assign a variable at the current decision level.

        Args:
            variable: Variable to assign
            value: Boolean value
            antecedent: Clause that forced the value, or None for a decision

        Raises:
            InconsistentAssignmentError: If the variable is already assigned
        """
        if variable in self.assignments:
            raise InconsistentAssignmentError(
                "Variable is already assigned", variable=variable
            )
        self.assignments[variable] = Assignment(bool(value), antecedent, self.dl)

    def unassign(self, variable: int) -> None:
        del self.assignments[variable]

    def satisfies(self, formula: Formula | Iterable[Clause]) -> bool:
        """
        Check whether every clause has a true literal.

        Only meaningful for a complete assignment, since unassigned variables
        count as False.

        Args:
            formula: Formula or iterable of clauses to check

        Returns:
            True if every clause is satisfied
        """
        return all(any(self.value(lit) for lit in clause) for clause in formula)

    def unassigned(self, variables: Iterable[int]) -> list[int]:
        """Return the variables from `variables` with no entry, in ascending order."""
        return sorted(var for var in variables if var not in self.assignments)

    def level_of(self, variable: int) -> int:
        return self.assignments[variable].decision_level

    def to_dict(self) -> dict[int, bool]:
        return {var: a.value for var, a in sorted(self.assignments.items())}

    def to_model(self) -> list[int]:
        """Return the assignment as signed DIMACS literals in variable order."""
        return [var if value else -var for var, value in self.to_dict().items()]

    def __len__(self) -> int:
        return len(self.assignments)

    def __contains__(self, variable: int) -> bool:
        return variable in self.assignments

    def __iter__(self) -> Iterator[int]:
        return iter(self.assignments)

    def __str__(self) -> str:
        return ", ".join(
            f"{var}={a.value}@{a.decision_level}" for var, a in self.assignments.items()
        )


def all_variables_assigned(formula: Formula, trail: Trail) -> bool:
    return len(formula.get_variables()) == len(trail)
