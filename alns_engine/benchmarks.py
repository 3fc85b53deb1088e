"""
Reference problems with small destroy/repair portfolios.

Used by the tests, the experiment runner and as a template for writing
new problems against the engine.
"""

import math

import numpy as np

from alns_engine.alns.operators import DestroyOperator, Problem, RepairOperator


# ===== ONE-MAX (maximise the number of true bits) =====

class OneMaxProblem(Problem[np.ndarray]):
    """Bit string of length n; cost is minus the number of true bits."""

    def __init__(self, n: int = 20):
        self.n = n

    def initial_solution(self, rng: np.random.Generator) -> np.ndarray:
        return rng.random(self.n) < 0.5

    def cost(self, solution: np.ndarray) -> float:
        return -float(np.count_nonzero(solution))

    def __repr__(self):
        return f"OneMaxProblem(n={self.n})"


class RandomFlipDestroy(DestroyOperator[np.ndarray]):
    """Clear each true bit with probability ``degree``."""

    def __init__(self, name: str = "RandomFlip"):
        super().__init__(name)

    def destroy(self, solution, degree, rng):
        result = solution.copy()
        result[solution & (rng.random(len(solution)) < degree)] = False
        return result


class WorstFlipDestroy(DestroyOperator[np.ndarray]):
    """Clear up to ceil(n·degree) true bits, scanning left to right."""

    def __init__(self, name: str = "WorstFlip", flip_probability: float = 0.7):
        super().__init__(name)
        self.flip_probability = flip_probability

    def destroy(self, solution, degree, rng):
        result = solution.copy()
        n_remove = math.ceil(len(solution) * degree)
        eligible = np.flatnonzero(solution & (rng.random(len(solution)) < self.flip_probability))
        result[eligible[:n_remove]] = False
        return result


class GreedyFillRepair(RepairOperator[np.ndarray]):
    """Set each false bit with probability ``fill_probability``."""

    def __init__(self, name: str = "GreedyFill", fill_probability: float = 0.6):
        super().__init__(name)
        self.fill_probability = fill_probability

    def repair(self, solution, rng):
        result = solution.copy()
        result[~solution & (rng.random(len(solution)) < self.fill_probability)] = True
        return result


class FillAllRepair(RepairOperator[np.ndarray]):
    """Set every bit."""

    def __init__(self, name: str = "FillAll"):
        super().__init__(name)

    def repair(self, solution, rng):
        return np.ones_like(solution, dtype=bool)


# ===== SPHERE (continuous, f(x) = Σ x_i²) =====

class SphereProblem(Problem[np.ndarray]):
    """Minimise the sum of squares over ``n`` dimensions, starting in [-bound, bound)."""

    def __init__(self, n: int = 5, bound: float = 10.0):
        self.n = n
        self.bound = bound

    def initial_solution(self, rng: np.random.Generator) -> np.ndarray:
        return rng.uniform(-self.bound, self.bound, self.n)

    def cost(self, solution: np.ndarray) -> float:
        return float(np.sum(solution ** 2))

    def __repr__(self):
        return f"SphereProblem(n={self.n})"


class PerturbDestroy(DestroyOperator[np.ndarray]):
    """Shift each coordinate by U(-step, step) with probability ``degree``."""

    def __init__(self, name: str = "Perturb", step: float = 3.0):
        super().__init__(name)
        self.step = step

    def destroy(self, solution, degree, rng):
        mask = rng.random(len(solution)) < degree
        shift = rng.uniform(-self.step, self.step, len(solution))
        return np.where(mask, solution + shift, solution)


class IdentityRepair(RepairOperator[np.ndarray]):
    def __init__(self, name: str = "Identity"):
        super().__init__(name)

    def repair(self, solution, rng):
        return solution.copy()


def one_max_operators() -> tuple[list[DestroyOperator], list[RepairOperator]]:
    """Default OneMax portfolio: {RandomFlip, WorstFlip} × {GreedyFill, FillAll}."""
    return [RandomFlipDestroy(), WorstFlipDestroy()], [GreedyFillRepair(), FillAllRepair()]


def sphere_operators() -> tuple[list[DestroyOperator], list[RepairOperator]]:
    return [PerturbDestroy()], [IdentityRepair()]
