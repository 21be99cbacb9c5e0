"""
cdclsat: a conflict-driven clause learning SAT solver.
"""

from cdclsat.formula import Clause, Formula, Literal
from cdclsat.trail import Assignment, Trail
from cdclsat.propagation import Conflict, NoConflict, unit_propagation
from cdclsat.analysis import backtrack, conflict_analysis, first_uip_analysis
from cdclsat.heuristics import (
    DecisionStrategy,
    OrderedDecisionStrategy,
    RandomDecisionStrategy,
    make_strategy,
)
from cdclsat.solvers import CDCLSolver, SolverResult, SolverStatus, cdcl_solve
from cdclsat.utils.cnf import load_cnf_file, parse_dimacs

__version__ = "0.1.0"

__all__ = [
    "Literal",
    "Clause",
    "Formula",
    "Assignment",
    "Trail",
    "Conflict",
    "NoConflict",
    "unit_propagation",
    "conflict_analysis",
    "first_uip_analysis",
    "backtrack",
    "DecisionStrategy",
    "RandomDecisionStrategy",
    "OrderedDecisionStrategy",
    "make_strategy",
    "cdcl_solve",
    "CDCLSolver",
    "SolverResult",
    "SolverStatus",
    "parse_dimacs",
    "load_cnf_file",
]
