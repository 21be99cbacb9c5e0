"""
Name-based lookup of solver classes.

Solvers in this package register through the `register_solver` decorator;
`SolverRegistry.auto_discover` picks up any concrete subclass that was not
decorated. The first registered solver becomes the default.
"""

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Callable

from .base import SolverBase

logger = logging.getLogger(__name__)

_NON_SOLVER_MODULES = {"base", "config", "registry"}


class SolverRegistry:
    """Class-level mapping from solver names to SolverBase subclasses."""

    _registry: dict[str, type[SolverBase]] = {}
    _default_solver: str | None = None

    @classmethod
    def register(cls, name: str, solver_cls: type[SolverBase]) -> None:
        """
        Map `name` to `solver_cls`.

        Registering the same class twice is a no-op; registering a different
        class under a taken name replaces it with a warning.

        Raises:
            TypeError: If `solver_cls` is not a SolverBase subclass
        """
        if not (inspect.isclass(solver_cls) and issubclass(solver_cls, SolverBase)):
            raise TypeError(f"{solver_cls!r} is not a SolverBase subclass")

        current = cls._registry.get(name)
        if current is solver_cls:
            return
        if current is not None:
            logger.warning(f"Solver '{name}' was {current.__name__}, now {solver_cls.__name__}")

        cls._registry[name] = solver_cls
        if cls._default_solver is None:
            cls._default_solver = name

    @classmethod
    def register_as(cls, name: str) -> Callable[[type[SolverBase]], type[SolverBase]]:
        """Class decorator registering the solver under `name`."""

        def decorator(solver_cls: type[SolverBase]) -> type[SolverBase]:
            solver_cls.solver_name = name
            cls.register(name, solver_cls)
            return solver_cls

        return decorator

    @classmethod
    def get(cls, name: str | None = None) -> type[SolverBase]:
        """
        Look up a solver class.

        Args:
            name: Registered name, or None for the default solver

        Raises:
            ValueError: If no solver is registered under the name
        """
        if name is None:
            name = cls._default_solver
        if name not in cls._registry:
            raise ValueError(f"No solver registered with name '{name}'")
        return cls._registry[name]

    @classmethod
    def list_solvers(cls) -> list[str]:
        return list(cls._registry)

    @classmethod
    def create(cls, name: str | None = None, **kwargs) -> SolverBase:
        """Instantiate a registered solver, passing `kwargs` to its constructor."""
        return cls.get(name)(**kwargs)

    @classmethod
    def auto_discover(cls) -> None:
        """Import every solver module of this package and register its solvers."""
        package = importlib.import_module(__package__)

        for _, module_name, is_pkg in pkgutil.iter_modules(package.__path__):
            if is_pkg or module_name in _NON_SOLVER_MODULES:
                continue
            module = importlib.import_module(f"{__package__}.{module_name}")

            for class_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj is SolverBase or not issubclass(obj, SolverBase) or inspect.isabstract(obj):
                    continue
                name = obj.solver_name or class_name.lower()
                cls.register(name, obj)
                logger.debug(f"Discovered solver {name} in {module_name}")


register_solver = SolverRegistry.register_as
