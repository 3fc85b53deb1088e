from dataclasses import dataclass
from enum import Enum

import numpy as np

from alns_engine.alns.config import ALNSConfig


class AcceptanceOutcome(Enum):
    """Classification of a candidate, best tier first."""
    NEW_BEST = "new_best"
    IMPROVED = "improved"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class AcceptanceDecision:
    outcome: AcceptanceOutcome
    reward: float

    @property
    def accepted(self) -> bool:
        return self.outcome is not AcceptanceOutcome.REJECTED


def acceptance_probability(delta: float, temperature: float) -> float:
    """Metropolis probability of accepting a move that worsens the cost by ``delta``."""
    if temperature <= 0.0:
        return 0.0
    return float(np.exp(-delta / temperature))


def evaluate_acceptance(
    current_cost: float,
    candidate_cost: float,
    best_cost: float,
    temperature: float,
    config: ALNSConfig,
    rng: np.random.Generator,
) -> AcceptanceDecision:
    """
    Decide whether to accept a candidate using Simulated Annealing.

    Tiers are checked in order, ties falling to the earlier tier:
    a new global best and an improvement over the current solution are
    always accepted; anything else is accepted with probability
    exp(-Δ/T). Exactly one uniform number is drawn, and only in that last
    case. Search state is left to the caller.
    """
    if candidate_cost < best_cost:
        return AcceptanceDecision(AcceptanceOutcome.NEW_BEST, config.score_new_best)

    if candidate_cost < current_cost:
        return AcceptanceDecision(AcceptanceOutcome.IMPROVED, config.score_improved)

    # Non-improvement: Metropolis criterion
    accept_prob = acceptance_probability(candidate_cost - current_cost, temperature)
    if rng.random() < accept_prob:
        return AcceptanceDecision(AcceptanceOutcome.ACCEPTED, config.score_accepted)
    return AcceptanceDecision(AcceptanceOutcome.REJECTED, 0.0)
