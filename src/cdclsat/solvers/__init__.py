"""
SAT solver package with unified interface.
"""

from .base import SolverBase, SolverResult, SolverStatus
from .cdcl_solver import CDCLSolver, cdcl_solve
from .config import SolverConfig, get_config, load_config
from .registry import SolverRegistry, register_solver

SolverRegistry.auto_discover()

__all__ = [
    "CDCLSolver",
    "cdcl_solve",
    "SolverBase",
    "SolverResult",
    "SolverStatus",
    "SolverRegistry",
    "register_solver",
    "get_config",
    "load_config",
    "SolverConfig",
]
