#!/usr/bin/env python
"""
Command-line interface for the CDCL solver.

Reads a DIMACS CNF file, solves it and prints the verdict. Exit status is 0
for a verdict (SAT or UNSAT), 1 when the input cannot be read or parsed, 2 for
usage errors and 3 when the search budget runs out. With --exit-codes, SAT and
UNSAT exit with 10 and 20 instead.
"""
import argparse
import logging
import os
import sys

from cdclsat.solvers import SolverRegistry, SolverStatus
from cdclsat.solvers.config import load_config, reset_config
from cdclsat.utils.cnf import load_cnf_file
from cdclsat.utils.exceptions import DimacsParseError, InvalidClauseError
from cdclsat.utils.logging_utils import create_trace_logger, setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_BUDGET_EXHAUSTED = 3
EXIT_SAT = 10
EXIT_UNSAT = 20


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="cdclsat", description="Decide satisfiability of a DIMACS CNF formula"
    )

    parser.add_argument("file", type=str, help="DIMACS CNF file to solve")

    parser.add_argument("--config", type=str, help="YAML configuration file")

    parser.add_argument(
        "--heuristic",
        choices=["random", "ordered"],
        help="Decision strategy (default: from configuration, 'random')",
    )

    parser.add_argument("--seed", type=int, help="Seed for the random decision strategy")

    parser.add_argument(
        "--learning",
        choices=["conflict", "first_uip"],
        help="Clause learning policy (default: from configuration, 'conflict')",
    )

    parser.add_argument("--timeout", type=float, help="Time budget in seconds")

    parser.add_argument("--max-conflicts", type=int, help="Conflict budget")

    parser.add_argument(
        "--trace-dir", type=str, help="Write search events to this directory"
    )

    parser.add_argument(
        "--stats", action="store_true", help="Print search statistics after the verdict"
    )

    parser.add_argument(
        "--exit-codes",
        action="store_true",
        help="Exit with 10 for SAT and 20 for UNSAT",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Lower the log level one step below logging.level (repeatable)",
    )

    return parser.parse_args(argv)


def _apply_overrides(config, args) -> None:
    overrides = {
        "solver.heuristic": args.heuristic,
        "solver.seed": args.seed,
        "solver.learning": args.learning,
        "solver.timeout": args.timeout,
        "solver.max_conflicts": args.max_conflicts,
    }
    for key, value in overrides.items():
        if value is not None:
            config.set(key, value)
    if args.trace_dir:
        config.set("trace.enabled", True)
        config.set("trace.dir", args.trace_dir)


def print_result(result, out=None) -> None:
    """Print the verdict and, for SAT, one `var: value` line per variable."""
    out = out or sys.stdout
    if result.is_sat:
        print("Formula is SAT with assignments:", file=out)
        for var, value in sorted(result.assignment.items()):
            print(f"{var}: {value}", file=out)
    elif result.is_unsat:
        print("Formula is UNSAT.", file=out)
        print("No satisfying assignment exists for the given formula.", file=out)
    else:
        print(f"Formula is UNKNOWN ({result.error_message}).", file=out)


def print_statistics(result, out=None) -> None:
    out = out or sys.stdout
    for key, value in result.statistics.items():
        print(f"c {key}: {value}", file=out)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config) if args.config else reset_config()
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        setup_logging(
            args.verbose, config.get("logging.format"), config.get("logging.level", "WARNING")
        )
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return EXIT_INPUT_ERROR
    _apply_overrides(config, args)

    try:
        formula = load_cnf_file(args.file)
    except (OSError, UnicodeDecodeError):
        print(f"Unable to open the file: {args.file}")
        return EXIT_INPUT_ERROR
    except (DimacsParseError, InvalidClauseError) as e:
        logger.error(f"Malformed input: {e}")
        print(f"Unable to parse the file: {args.file}: {e}")
        return EXIT_INPUT_ERROR

    tracer = None
    if config.get("trace.enabled", False):
        run_name = os.path.splitext(os.path.basename(args.file))[0]
        tracer = create_trace_logger(
            run_name, config.get("trace.dir", "./logs"), config.get("trace.format", "json")
        )

    solver = SolverRegistry.create(config.get("solver.name", "cdcl"), tracer=tracer)
    solver.add_clauses(formula.to_ints())

    try:
        result = solver.solve()
    finally:
        if tracer is not None:
            tracer.finalize()

    print_result(result)
    if args.stats:
        print_statistics(result)

    if result.status in (SolverStatus.TIMEOUT, SolverStatus.ERROR):
        return EXIT_BUDGET_EXHAUSTED
    if args.exit_codes:
        return EXIT_SAT if result.is_sat else EXIT_UNSAT
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
