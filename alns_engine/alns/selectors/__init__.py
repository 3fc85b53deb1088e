"""Operator selection strategies for ALNS."""

from alns_engine.alns.selectors.base import OperatorSelector
from alns_engine.alns.selectors.adaptive_weights import (
    AdaptiveWeightSelector,
    OperatorStatistics,
    roulette_select,
)

__all__ = [
    "OperatorSelector",
    "AdaptiveWeightSelector",
    "OperatorStatistics",
    "roulette_select",
]
