"""
Formula model for CNF problems.

Literals, clauses and formulas are value types. A formula grows only by
appending learned clauses; its variable set is fixed when it is built.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from cdclsat.utils.exceptions import InvalidClauseError


@dataclass(frozen=True)
class Literal:
    """A variable or its negation."""

    variable: int
    negation: bool = False

    def __post_init__(self):
        if not isinstance(self.variable, int) or self.variable <= 0:
            raise InvalidClauseError("Literal variable must be a positive integer", self)

    def neg(self) -> "Literal":
        """Return the complementary literal."""
        return Literal(self.variable, not self.negation)

    @classmethod
    def from_int(cls, value: int) -> "Literal":
        """
        Build a literal from a signed DIMACS integer.

        Args:
            value: Nonzero integer, negative for a negated literal

        Returns:
            The corresponding literal
        """
        if value == 0:
            raise InvalidClauseError("Literal 0 is a clause terminator", value)
        return cls(abs(value), value < 0)

    def to_int(self) -> int:
        return -self.variable if self.negation else self.variable

    def __str__(self) -> str:
        return f"¬{self.variable}" if self.negation else str(self.variable)


class Clause:
    """
    An immutable disjunction of literals.

    Literal order is kept and duplicates are not removed.
    """

    __slots__ = ("_literals",)

    def __init__(self, literals: Iterable[Literal] = ()):
        self._literals = tuple(literals)

    @classmethod
    def from_ints(cls, values: Iterable[int]) -> "Clause":
        return cls(Literal.from_int(v) for v in values)

    @property
    def literals(self) -> tuple[Literal, ...]:
        return self._literals

    def to_ints(self) -> list[int]:
        return [lit.to_int() for lit in self._literals]

    def variables(self) -> set[int]:
        return {lit.variable for lit in self._literals}

    def __len__(self) -> int:
        return len(self._literals)

    def __iter__(self) -> Iterator[Literal]:
        return iter(self._literals)

    def __contains__(self, literal: Literal) -> bool:
        return literal in self._literals

    def __eq__(self, other) -> bool:
        if not isinstance(other, Clause):
            return NotImplemented
        return self._literals == other._literals

    def __hash__(self) -> int:
        return hash(self._literals)

    def __repr__(self) -> str:
        return f"Clause({self.to_ints()})"

    def __str__(self) -> str:
        return " ∨ ".join(str(lit) for lit in self._literals)


class Formula:
    """
    A conjunction of clauses.

    The variable set is computed once at construction. Learned clauses may be
    appended during search but must only mention variables already present.
    """

    def __init__(self, clauses: Iterable[Clause] = ()):
        """
        Initialize the formula.

        Args:
            clauses: The original clauses
        """
        self.clauses: list[Clause] = list(clauses)
        self.num_original = len(self.clauses)
        self.variables: frozenset[int] = frozenset(
            lit.variable for clause in self.clauses for lit in clause
        )

    @classmethod
    def from_ints(cls, clauses: Iterable[Iterable[int]]) -> "Formula":
        """
        Build a formula from DIMACS-style integer clauses.

        Args:
            clauses: Iterable of clauses, each an iterable of nonzero integers

        Returns:
            Formula over the given clauses
        """
        return cls(Clause.from_ints(clause) for clause in clauses)

    @property
    def original_clauses(self) -> list[Clause]:
        """The clauses present at construction time, without learned clauses."""
        return self.clauses[: self.num_original]

    @property
    def learned_clauses(self) -> list[Clause]:
        return self.clauses[self.num_original :]

    def get_variables(self) -> frozenset[int]:
        return self.variables

    def add_learned(self, clause: Clause) -> None:
        """
        Append a learned clause.

        Args:
            clause: Clause derived by conflict analysis
        """
        unknown = clause.variables() - self.variables
        if unknown:
            raise InvalidClauseError(
                f"Learned clause mentions unknown variables {sorted(unknown)}", clause
            )
        self.clauses.append(clause)

    def to_ints(self) -> list[list[int]]:
        return [clause.to_ints() for clause in self.clauses]

    def __len__(self) -> int:
        return len(self.clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __repr__(self) -> str:
        return (
            f"Formula(variables={len(self.variables)}, clauses={len(self.clauses)}, "
            f"learned={len(self.clauses) - self.num_original})"
        )

    def __str__(self) -> str:
        return " ∧ ".join(f"({clause})" for clause in self.clauses)
