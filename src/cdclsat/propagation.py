"""
Unit propagation (Boolean Constraint Propagation).

Runs a full scan over the clause list until a pass assigns nothing. There is
no watched-literal index: every pass touches every literal of every clause.
"""

import logging
from dataclasses import dataclass
from typing import Any

from cdclsat.formula import Clause, Formula
from cdclsat.trail import Trail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conflict:
    """Propagation stopped on a clause whose literals are all false."""

    clause: Clause


@dataclass(frozen=True)
class NoConflict:
    """Propagation reached a fixpoint without falsifying any clause."""


PropagationResult = Conflict | NoConflict


def unit_propagation(
    formula: Formula, trail: Trail, stats: dict[str, Any] | None = None
) -> PropagationResult:
    """
    Propagate unit clauses until a fixpoint or a conflict.

    Units found during one pass are applied immediately, in clause order, so
    later clauses of the same pass see them.

    Args:
        formula: Formula whose clauses are scanned
        trail: Trail to extend with forced assignments
        stats: Optional statistics mapping; its "propagations" count is increased

    Returns:
        Conflict(clause) for the first falsified clause, NoConflict otherwise
    """
    finished = False
    while not finished:
        finished = True
        for clause in formula.clauses:
            false_count = 0
            unassigned_literal = None
            satisfied = False
            for literal in clause:
                if not trail.is_assigned(literal.variable):
                    unassigned_literal = literal
                elif trail.value(literal):
                    satisfied = True
                    break
                else:
                    false_count += 1

            if satisfied:
                continue

            size = len(clause)
            if false_count == size - 1 and unassigned_literal is not None:
                trail.assign(
                    unassigned_literal.variable, not unassigned_literal.negation, clause
                )
                if stats is not None:
                    stats["propagations"] = stats.get("propagations", 0) + 1
                finished = False
            elif false_count == size:
                logger.debug(f"Conflict on clause ({clause}) at level {trail.dl}")
                return Conflict(clause)

    return NoConflict()
