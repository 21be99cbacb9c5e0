"""
CDCL solver implementation using the unified solver interface.

`cdcl_solve` is the search loop itself. `CDCLSolver` wraps it with clause
collection, configuration, time and conflict budgets, and result reporting.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from cdclsat.analysis import LEARNING_POLICIES, UNSAT_LEVEL, backtrack
from cdclsat.formula import Clause, Formula
from cdclsat.heuristics import DecisionStrategy, make_strategy
from cdclsat.propagation import Conflict, unit_propagation
from cdclsat.trail import Trail, all_variables_assigned
from cdclsat.utils.cnf import compute_satisfied_clauses
from cdclsat.utils.exceptions import SolverTimeoutError
from cdclsat.utils.logging_utils import SolverTraceLogger

from .base import SolverBase, SolverResult, SolverStatus, assignment_to_model
from .config import get_config
from .registry import register_solver

logger = logging.getLogger(__name__)


def _new_stats() -> dict[str, Any]:
    return {
        "decisions": 0,
        "conflicts": 0,
        "propagations": 0,
        "learned_clauses": 0,
        "max_decision_level": 0,
    }


def cdcl_solve(
    formula: Formula,
    strategy: DecisionStrategy,
    learning: str = "conflict",
    stats: dict[str, Any] | None = None,
    should_stop: Callable[[], bool] | None = None,
    tracer: SolverTraceLogger | None = None,
) -> Trail | None:
    """
    Run the CDCL search on a formula.

    Learned clauses are appended to `formula`, so callers that need the
    original clause set afterwards should use `formula.original_clauses`.

    Args:
        formula: Formula to solve; owned by this call until it returns
        strategy: Decision strategy used to branch
        learning: Name of the learning policy ("conflict" or "first_uip")
        stats: Optional mapping that receives search statistics
        should_stop: Optional callable polled at every decision and conflict;
            returning True stops the search
        tracer: Optional trace logger receiving search events

    Returns:
        The satisfying trail, or None if the formula is unsatisfiable

    Raises:
        SolverTimeoutError: If `should_stop` asked the search to stop
    """
    if learning not in LEARNING_POLICIES:
        raise ValueError(
            f"Unknown learning policy '{learning}', expected one of {sorted(LEARNING_POLICIES)}"
        )
    analyze = LEARNING_POLICIES[learning]

    if stats is None:
        stats = {}
    for key, value in _new_stats().items():
        stats.setdefault(key, value)

    start_time = time.time()
    trail = Trail()

    def stopped() -> SolverTimeoutError:
        return SolverTimeoutError(
            "Search stopped",
            time_spent=time.time() - start_time,
            partial_assignment=trail.to_dict(),
            conflicts=stats["conflicts"],
        )

    result = unit_propagation(formula, trail, stats)
    if isinstance(result, Conflict):
        logger.debug("Conflict before any decision")
        return None

    while not all_variables_assigned(formula, trail):
        if should_stop is not None and should_stop():
            raise stopped()

        var, val = strategy.pick(formula, trail)
        trail.dl += 1
        trail.assign(var, val, None)
        stats["decisions"] += 1
        stats["max_decision_level"] = max(stats["max_decision_level"], trail.dl)
        logger.debug(f"Decide {var}={val} at level {trail.dl}")
        if tracer is not None:
            tracer.log_decision(stats["decisions"], trail.dl, var, val)

        while True:
            result = unit_propagation(formula, trail, stats)
            if not isinstance(result, Conflict):
                break

            stats["conflicts"] += 1
            level, learned_clause = analyze(result.clause, trail)
            if tracer is not None:
                tracer.log_conflict(
                    stats["conflicts"],
                    trail.dl,
                    result.clause.to_ints(),
                    learned_clause.to_ints(),
                    level,
                )
            if level < 0:
                logger.debug(f"Conflict on ({result.clause}) cannot be retracted")
                return None

            formula.add_learned(learned_clause)
            stats["learned_clauses"] += 1

            before = len(trail)
            backtrack(trail, level)
            logger.debug(f"Backtrack from level {trail.dl} to {level}")
            if tracer is not None:
                tracer.log_backtrack(trail.dl, level, before - len(trail))
            trail.dl = level

            if should_stop is not None and should_stop():
                raise stopped()

    return trail


@register_solver("cdcl")
class CDCLSolver(SolverBase):
    """
    Conflict-driven clause learning solver.

    Every call to solve builds a fresh formula and trail from the clauses
    added so far; no search state is kept between calls.
    """

    def __init__(
        self,
        heuristic: str | DecisionStrategy | None = None,
        seed: int | None = None,
        learning: str | None = None,
        timeout: float | None = None,
        max_conflicts: int | None = None,
        tracer: SolverTraceLogger | None = None,
    ):
        """
        Initialize the CDCL solver.

        Unset arguments fall back to the global configuration.

        Args:
            heuristic: Strategy name or a DecisionStrategy instance
            seed: Seed for the random decision strategy
            learning: Learning policy name ("conflict" or "first_uip")
            timeout: Default time budget in seconds, None for no limit
            max_conflicts: Conflict budget, None for no limit
            tracer: Optional trace logger receiving search events
        """
        config = get_config()

        self.heuristic = heuristic or config.get("solver.heuristic", "random")
        self.seed = seed if seed is not None else config.get("solver.seed")
        self.learning = learning or config.get("solver.learning", "conflict")
        self.default_timeout = (
            timeout if timeout is not None else config.get("solver.timeout")
        )
        self.max_conflicts = (
            max_conflicts if max_conflicts is not None else config.get("solver.max_conflicts")
        )
        self.tracer = tracer

        self.clauses: list[list[int]] = []
        self.formula: Formula | None = None
        self.assignment: dict[int, bool] | None = None
        self.interrupted = False
        self.stats = {**_new_stats(), "solver_name": "cdcl"}

    def add_clause(self, clause: list[int]) -> None:
        """
        Add a single clause to the solver.

        Args:
            clause: A list of nonzero integers representing literals
        """
        self.clauses.append(list(clause))

    def add_clauses(self, clauses: list[list[int]]) -> None:
        for clause in clauses:
            self.add_clause(clause)

    def add_formula(self, formula: Formula) -> None:
        """Add the original clauses of an already parsed formula."""
        self.add_clauses(formula.to_ints()[: formula.num_original])

    def _make_strategy(self) -> DecisionStrategy:
        if isinstance(self.heuristic, DecisionStrategy):
            return self.heuristic
        return make_strategy(self.heuristic, self.seed)

    def solve(
        self, assumptions: list[int] | None = None, timeout: float | None = None
    ) -> SolverResult:
        """
        Solve the collected clauses.

        Args:
            assumptions: Not supported; ignored with a warning
            timeout: Time budget in seconds, overriding the default

        Returns:
            SolverResult with SATISFIABLE, UNSATISFIABLE, TIMEOUT or ERROR status
        """
        if assumptions:
            logger.warning("CDCL solver does not support assumptions - ignoring")

        timeout = timeout if timeout is not None else self.default_timeout
        start_time = time.time()

        self.interrupted = False
        self.assignment = None
        self.formula = Formula(Clause.from_ints(c) for c in self.clauses)
        stats = {**_new_stats(), "solver_name": "cdcl"}
        self.stats = stats

        def should_stop() -> bool:
            if self.interrupted:
                return True
            if timeout is not None and time.time() - start_time > timeout:
                return True
            return self.max_conflicts is not None and stats["conflicts"] >= self.max_conflicts

        logger.info(
            f"Solving {len(self.formula.clauses)} clauses over "
            f"{len(self.formula.variables)} variables (learning={self.learning})"
        )

        try:
            trail = cdcl_solve(
                self.formula,
                self._make_strategy(),
                learning=self.learning,
                stats=stats,
                should_stop=should_stop,
                tracer=self.tracer,
            )
        except SolverTimeoutError as e:
            runtime = time.time() - start_time
            stats["runtime"] = runtime
            if self.interrupted:
                status, message = SolverStatus.ERROR, "Solving was interrupted"
            elif timeout is not None and runtime > timeout:
                status, message = SolverStatus.TIMEOUT, f"Timeout reached ({timeout}s)"
            else:
                status, message = (
                    SolverStatus.TIMEOUT,
                    f"Conflict limit reached ({self.max_conflicts})",
                )
            logger.info(f"{message} after {e.conflicts} conflicts in {e.time_spent:.2f}s")
            return self._finish(
                SolverResult(
                    status=status,
                    runtime=runtime,
                    satisfied_clauses=compute_satisfied_clauses(
                        self.formula, e.partial_assignment
                    ),
                    total_clauses=self.formula.num_original,
                    statistics=stats,
                    error_message=message,
                )
            )

        runtime = time.time() - start_time
        stats["runtime"] = runtime

        if trail is None:
            logger.info(f"UNSAT after {stats['conflicts']} conflicts")
            return self._finish(
                SolverResult(
                    status=SolverStatus.UNSATISFIABLE,
                    runtime=runtime,
                    total_clauses=self.formula.num_original,
                    statistics=stats,
                )
            )

        if not trail.satisfies(self.formula.original_clauses):
            # A complete trail always satisfies the original clauses.
            raise AssertionError("Search returned an assignment that violates the formula")

        self.assignment = trail.to_dict()
        logger.info(
            f"SAT after {stats['decisions']} decisions and {stats['conflicts']} conflicts"
        )
        return self._finish(
            SolverResult(
                status=SolverStatus.SATISFIABLE,
                assignment=self.assignment,
                runtime=runtime,
                satisfied_clauses=self.formula.num_original,
                total_clauses=self.formula.num_original,
                statistics=stats,
            )
        )

    def _finish(self, result: SolverResult) -> SolverResult:
        if self.tracer is not None:
            self.tracer.log_result(result.status.value, result.statistics)
        return result

    def get_model(self) -> list[int] | None:
        """
        Get the satisfying assignment if one exists.

        Returns:
            Signed literals for every variable, or None if no model was found
        """
        if self.assignment is None:
            return None
        return assignment_to_model(self.assignment)

    def get_statistics(self) -> dict[str, Any]:
        return self.stats

    def interrupt(self) -> None:
        logger.debug("Interrupting CDCL solver")
        self.interrupted = True

    def configure(self, config: dict[str, Any]) -> None:
        """
        Configure the solver with the given parameters.

        Args:
            config: Dictionary of configuration parameters
        """
        for key, value in config.items():
            if key == "timeout":
                key = "default_timeout"
            if hasattr(self, key) and key not in ("clauses", "formula", "assignment", "stats"):
                setattr(self, key, value)
                logger.debug(f"Set {key}={value} for CDCL solver")
            else:
                logger.warning(f"Unknown configuration parameter: {key}")
