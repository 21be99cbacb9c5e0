"""
Conflict analysis and backtracking.

Two learning policies are available. The default, `conflict_analysis`, learns
the conflicting clause itself and goes back exactly one decision level.
`first_uip_analysis` resolves the conflict back through antecedents to the
first unique implication point and jumps to the second-highest level in the
learned clause.
"""

import logging

from cdclsat.formula import Clause, Literal
from cdclsat.trail import Trail

logger = logging.getLogger(__name__)

# Backtrack level returned when the conflict cannot be retracted.
UNSAT_LEVEL = -1


def conflict_analysis(clause: Clause, trail: Trail) -> tuple[int, Clause]:
    """
    Learn the conflicting clause and back off one decision level.

    Args:
        clause: Clause falsified by propagation
        trail: Current trail

    Returns:
        Tuple of (backtrack_level, learned_clause); backtrack_level is -1 when
        the conflict happened at decision level 0
    """
    if trail.dl == 0:
        return UNSAT_LEVEL, clause
    return trail.dl - 1, clause


def first_uip_analysis(clause: Clause, trail: Trail) -> tuple[int, Clause]:
    """
    Derive a first-UIP clause by resolution over the trail.

    Literals falsified at level 0 are dropped from the learned clause. The UIP
    literal comes first.

    Args:
        clause: Clause falsified by propagation
        trail: Current trail; every literal of `clause` must be assigned

    Returns:
        Tuple of (backtrack_level, learned_clause); backtrack_level is -1 when
        the conflict depends only on level-0 assignments
    """
    if trail.dl == 0:
        return UNSAT_LEVEL, clause

    conflict_level = max((trail.level_of(lit.variable) for lit in clause), default=0)
    if conflict_level == 0:
        return UNSAT_LEVEL, clause

    seen: set[int] = set()
    lower: list[Literal] = []
    pending = 0

    def visit(literal: Literal) -> None:
        nonlocal pending
        if literal.variable in seen:
            return
        seen.add(literal.variable)
        level = trail.level_of(literal.variable)
        if level == conflict_level:
            pending += 1
        elif level > 0:
            lower.append(literal)

    for literal in clause:
        visit(literal)

    uip = None
    for variable in reversed(list(trail.assignments)):
        if variable not in seen or trail.level_of(variable) != conflict_level:
            continue
        if pending == 1:
            uip = variable
            break
        pending -= 1
        for literal in trail.assignments[variable].antecedent:
            if literal.variable != variable:
                visit(literal)

    # The UIP literal is the one currently false under the trail.
    uip_literal = Literal(uip, trail.assignments[uip].value)
    learned = Clause([uip_literal, *lower])
    backtrack_level = max((trail.level_of(lit.variable) for lit in lower), default=0)

    logger.debug(
        f"Learned ({learned}) at level {conflict_level}, jumping to {backtrack_level}"
    )
    return backtrack_level, learned


LEARNING_POLICIES = {
    "conflict": conflict_analysis,
    "first_uip": first_uip_analysis,
}


def backtrack(trail: Trail, level: int) -> None:
    """
    Undo every assignment made above `level`.

    The trail's decision level counter is left alone; the caller sets it.

    Args:
        trail: Trail to shrink
        level: Highest decision level to keep
    """
    to_remove = [
        var for var, a in trail.assignments.items() if a.decision_level > level
    ]
    for var in to_remove:
        trail.unassign(var)
