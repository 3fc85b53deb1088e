"""Base classes for operator selection strategies in ALNS."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic

import numpy as np

from alns_engine.alns.operators import Operator


class OperatorSelector(ABC, Generic[Operator]):
    """
    Abstract base class for operator selection strategies.

    A selector owns the learning state of one operator pool (destroy or
    repair). The runner addresses operators by their index in the pool, so
    the order of ``operators`` is significant and must not change.
    """

    def __init__(self, operators: list[Operator]):
        self.operators = list(operators)
        self.operator_names = [op.name for op in self.operators]

    @abstractmethod
    def select(self, rng: np.random.Generator) -> int:
        """
        Select an operator to use.

        Args:
            rng: The run's random generator

        Returns:
            Index of the selected operator in ``operators``
        """
        pass

    @abstractmethod
    def record(self, index: int, reward: float):
        """
        Accumulate the reward earned by the operator at ``index``.

        Args:
            index: Index of the operator that was used
            reward: Reward signal (score_new_best, score_improved, score_accepted or 0.0)
        """
        pass

    @abstractmethod
    def update_weights(self):
        """Close the current segment and recompute operator weights."""
        pass

    @property
    @abstractmethod
    def weights(self) -> list[float]:
        """Current weights, in operator order."""
        pass

    def get_statistics(self) -> Dict[str, Any]:
        """
        Return selection statistics for analysis and debugging.

        Returns:
            Dictionary with statistics (e.g., weights, counts, etc.)
        """
        return {}
