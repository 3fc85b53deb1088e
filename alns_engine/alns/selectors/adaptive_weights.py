"""Adaptive weight selection strategy (ALNS baseline)."""

from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from alns_engine.alns.selectors.base import OperatorSelector, Operator


@dataclass
class OperatorStatistics:
    """Learning state of a single operator."""
    weight: float = 1.0
    segment_score: float = 0.0
    segment_uses: int = 0

    def record(self, score: float):
        self.segment_score += score
        self.segment_uses += 1

    def update_weight(self, reaction_factor: float, min_weight: float):
        """
        Exponential smoothing at the end of a segment.

        Formula: w ← w·(1-ρ) + ρ·(s/a), floored at min_weight

        Operators not used during the segment keep their weight.
        """
        if self.segment_uses > 0:
            avg_score = self.segment_score / self.segment_uses
            self.weight = self.weight * (1 - reaction_factor) + avg_score * reaction_factor
            self.weight = max(self.weight, min_weight)

        self.segment_score = 0.0
        self.segment_uses = 0


def roulette_select(stats: list[OperatorStatistics], rng: np.random.Generator) -> int:
    """
    Pick an index with probability proportional to its weight.

    An empty pool or a non-positive weight sum yields index 0 without
    consuming a random number.
    """
    total = sum(s.weight for s in stats)
    if not stats or total <= 0.0:
        return 0

    roll = rng.uniform(0.0, total)
    for i, stat in enumerate(stats):
        roll -= stat.weight
        if roll <= 0.0:
            return i
    # Rounding can leave a tiny positive remainder
    return len(stats) - 1


class AdaptiveWeightSelector(OperatorSelector[Operator]):
    """
    Adaptive weight selection using roulette wheel (baseline ALNS approach).

    This selector implements the standard ALNS adaptive weight mechanism:
    - Maintains weights for each operator, all starting at 1.0
    - Selects operators probabilistically (roulette wheel)
    - Accumulates rewards over a segment of iterations
    - Updates weights when the runner closes the segment

    Weight update formula:
        ρ_i ← ρ_i·(1-γ) + γ·(s_i/a_i)

    Where:
        ρ_i: weight of operator i, floored at min_weight
        γ: reaction factor (how quickly weights adapt)
        s_i: total score of operator i in segment
        a_i: number of applications of operator i in segment
    """

    def __init__(
        self,
        operators: list[Operator],
        reaction_factor: float = 0.1,
        min_weight: float = 0.01,
    ):
        super().__init__(operators)
        self.reaction_factor = reaction_factor
        self.min_weight = min_weight

        self.stats = [OperatorStatistics() for _ in self.operators]
        self.total_uses = [0 for _ in self.operators]
        self.segments = 0

    def select(self, rng: np.random.Generator) -> int:
        return roulette_select(self.stats, rng)

    def record(self, index: int, reward: float):
        self.stats[index].record(reward)
        self.total_uses[index] += 1

    def update_weights(self):
        for stat in self.stats:
            stat.update_weight(self.reaction_factor, self.min_weight)
        self.segments += 1

    @property
    def weights(self) -> list[float]:
        return [stat.weight for stat in self.stats]

    def get_statistics(self) -> Dict[str, Any]:
        return {
            "weights": dict(zip(self.operator_names, self.weights)),
            "uses": dict(zip(self.operator_names, self.total_uses)),
            "segments": self.segments,
        }
