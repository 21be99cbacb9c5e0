"""
Utilities for the cdclsat package: DIMACS I/O, exceptions and logging.

Submodules are imported directly (`from cdclsat.utils.cnf import ...`) since
`cnf` depends on the formula model, which itself depends on `exceptions`.
"""
