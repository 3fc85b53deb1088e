from abc import ABC, abstractmethod
from typing import Generic, TypeVar

import numpy as np


Solution = TypeVar('Solution')


class Problem(ABC, Generic[Solution]):
    """
    Problem definition consumed by the ALNS runner.

    The runner never looks inside a solution: it only builds one through
    ``initial_solution`` and scores it through ``cost``.
    """

    @abstractmethod
    def initial_solution(self, rng: np.random.Generator) -> Solution:
        """Create the starting solution."""
        pass

    @abstractmethod
    def cost(self, solution: Solution) -> float:
        """Return the cost of ``solution``. Lower is better; must be finite."""
        pass


class DestroyOperator(ABC, Generic[Solution]):
    """Base class for destroy operators."""

    def __init__(self, name: str = None):
        self.name = name if name is not None else type(self).__name__

    @abstractmethod
    def destroy(self, solution: Solution, degree: float, rng: np.random.Generator) -> Solution:
        """
        Partially disassemble ``solution``.

        ``degree`` in [0, 1] is the fraction of the solution to destroy.
        Must return a new object and leave ``solution`` untouched.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class RepairOperator(ABC, Generic[Solution]):
    """Base class for repair operators."""

    def __init__(self, name: str = None):
        self.name = name if name is not None else type(self).__name__

    @abstractmethod
    def repair(self, solution: Solution, rng: np.random.Generator) -> Solution:
        """
        Rebuild a complete solution from a partially destroyed one.

        Must return a new object and leave ``solution`` untouched.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


Operator = TypeVar('Operator', DestroyOperator, RepairOperator)
