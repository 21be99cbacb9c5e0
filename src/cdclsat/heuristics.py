"""
Decision strategies for choosing the next branching variable.

The driver loop receives a strategy object instead of reading a global random
source, so tests can pass a seeded or fixed-order strategy.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from cdclsat.formula import Formula
from cdclsat.trail import Trail
from cdclsat.utils.exceptions import DecisionError

logger = logging.getLogger(__name__)


class DecisionStrategy(ABC):
    """Base class for branching heuristics."""

    name = "base"

    @abstractmethod
    def pick(self, formula: Formula, trail: Trail) -> tuple[int, bool]:
        """
        Choose an unassigned variable and a polarity.

        Args:
            formula: Formula being solved
            trail: Current trail

        Returns:
            Tuple of (variable, value)

        Raises:
            DecisionError: If every variable is already assigned
        """

    @staticmethod
    def _candidates(formula: Formula, trail: Trail) -> list[int]:
        candidates = trail.unassigned(formula.get_variables())
        if not candidates:
            raise DecisionError()
        return candidates


class RandomDecisionStrategy(DecisionStrategy):
    """Uniform-random variable and uniform-random polarity."""

    name = "random"

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def pick(self, formula: Formula, trail: Trail) -> tuple[int, bool]:
        candidates = self._candidates(formula, trail)
        variable = candidates[int(self.rng.integers(len(candidates)))]
        value = bool(self.rng.integers(2))
        return variable, value


class OrderedDecisionStrategy(DecisionStrategy):
    """Smallest unassigned variable with a fixed polarity."""

    name = "ordered"

    def __init__(self, polarity: bool = False):
        self.polarity = polarity

    def pick(self, formula: Formula, trail: Trail) -> tuple[int, bool]:
        return self._candidates(formula, trail)[0], self.polarity


STRATEGIES = {
    RandomDecisionStrategy.name: RandomDecisionStrategy,
    OrderedDecisionStrategy.name: OrderedDecisionStrategy,
}


def make_strategy(name: str = "random", seed: int | None = None) -> DecisionStrategy:
    """
    Create a decision strategy by name.

    Args:
        name: "random" or "ordered"
        seed: Seed for the random strategy; ignored by the ordered one

    Returns:
        Strategy instance
    """
    if name not in STRATEGIES:
        raise ValueError(
            f"Unknown decision strategy '{name}', expected one of {sorted(STRATEGIES)}"
        )
    if name == RandomDecisionStrategy.name:
        return RandomDecisionStrategy(seed)
    if seed is not None:
        logger.debug(f"Seed {seed} ignored by the '{name}' strategy")
    return STRATEGIES[name]()
