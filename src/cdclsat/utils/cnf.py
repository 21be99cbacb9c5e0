"""
CNF file handling utilities.

This module provides functions for loading, parsing and writing CNF formulas
in a simplified DIMACS format, as well as checking solutions against the
original clause set.

The reader is a token scanner rather than a strict DIMACS parser: a `c` or
`p` token ends the current line, `0` ends the current clause, and any other
token must be an integer literal. Tokens that appear before a `c` or `p` on
the same line are still read as literals.
"""

import logging
import os
from collections.abc import Iterable
from typing import TextIO

from cdclsat.formula import Clause, Formula, Literal
from cdclsat.utils.exceptions import DimacsParseError

logger = logging.getLogger(__name__)

LINE_STOP_TOKENS = ("c", "p")


def load_cnf_file(file_path: str) -> Formula:
    """
    Load a CNF formula from a DIMACS file.

    Args:
        file_path: Path to the CNF file

    Returns:
        Parsed formula

    Raises:
        FileNotFoundError: If the file doesn't exist
        DimacsParseError: If a token is not an integer
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"CNF file not found: {file_path}")

    with open(file_path) as f:
        return parse_dimacs(f)


def parse_dimacs(source: str | TextIO) -> Formula:
    """
    Parse a CNF formula from DIMACS text.

    Args:
        source: DIMACS content as a string or file-like object

    Returns:
        Formula with one clause per `0` terminator

    Raises:
        DimacsParseError: If a token is not an integer
    """
    if isinstance(source, str):
        lines = source.splitlines()
    else:
        lines = source.readlines()

    clauses = []
    current_clause = []

    for line_number, line in enumerate(lines, start=1):
        for token in line.split():
            if token in LINE_STOP_TOKENS:
                break

            try:
                value = int(token)
            except ValueError:
                raise DimacsParseError(
                    "Expected an integer literal", token=token, line_number=line_number
                ) from None

            if value == 0:
                clauses.append(Clause(current_clause))
                current_clause = []
            else:
                current_clause.append(Literal.from_int(value))

    if current_clause:
        logger.warning(
            f"Dropping {len(current_clause)} literal(s) after the last clause terminator"
        )

    formula = Formula(clauses)
    logger.debug(
        f"Parsed {len(formula.clauses)} clauses over {len(formula.variables)} variables"
    )
    return formula


def formula_to_dimacs(
    formula: Formula | Iterable[Iterable[int]],
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> str:
    """
    Convert a formula to DIMACS format.

    Args:
        formula: Formula, or list of clauses as signed integers
        num_variables: Number of variables (computed if not provided)
        comments: List of comment lines to include

    Returns:
        DIMACS format string representation
    """
    if comments is None:
        comments = []

    if isinstance(formula, Formula):
        clauses = formula.to_ints()
    else:
        clauses = [list(clause) for clause in formula]

    if num_variables is None:
        all_vars = {abs(lit) for clause in clauses for lit in clause}
        num_variables = max(all_vars) if all_vars else 0

    lines = []

    for comment in comments:
        lines.append(f"c {comment}")

    lines.append(f"p cnf {num_variables} {len(clauses)}")

    for clause in clauses:
        lines.append(" ".join([*map(str, clause), "0"]))

    return "\n".join(lines) + "\n"


def save_cnf_file(
    file_path: str,
    formula: Formula | Iterable[Iterable[int]],
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> None:
    """
    Save a CNF formula to a DIMACS file.

    Args:
        file_path: Path to save the CNF file
        formula: Formula, or list of clauses as signed integers
        num_variables: Number of variables (computed if not provided)
        comments: List of comment lines to include
    """
    dimacs_str = formula_to_dimacs(formula, num_variables, comments)

    with open(file_path, "w") as f:
        f.write(dimacs_str)


def check_solution(
    formula: Formula | Iterable[Iterable[int]], assignment: dict[int, bool]
) -> bool:
    """
    Check if a variable assignment satisfies a CNF formula.

    For a Formula only the original clauses are checked; learned clauses are
    consequences of them.

    Args:
        formula: Formula, or list of clauses as signed integers
        assignment: Dictionary mapping variables to Boolean values

    Returns:
        True if every clause has a literal made true by the assignment
    """
    if isinstance(formula, Formula):
        clauses = [clause.to_ints() for clause in formula.original_clauses]
    else:
        clauses = formula

    for clause in clauses:
        if not any(assignment.get(abs(lit)) == (lit > 0) for lit in clause):
            return False
    return True


def compute_satisfied_clauses(
    formula: Formula | Iterable[Iterable[int]], assignment: dict[int, bool]
) -> int:
    """
    Count the clauses satisfied by an assignment.

    Args:
        formula: Formula, or list of clauses as signed integers
        assignment: Dictionary mapping variables to Boolean values

    Returns:
        Number of satisfied clauses
    """
    if isinstance(formula, Formula):
        clauses = [clause.to_ints() for clause in formula.original_clauses]
    else:
        clauses = formula

    return sum(
        1
        for clause in clauses
        if any(assignment.get(abs(lit)) == (lit > 0) for lit in clause)
    )
