"""Adaptive Large Neighborhood Search engine."""

from alns_engine.alns.acceptance import (
    AcceptanceDecision,
    AcceptanceOutcome,
    acceptance_probability,
    evaluate_acceptance,
)
from alns_engine.alns.alns import ALNS, ALNSResult, ALNSStatistics, SearchState
from alns_engine.alns.config import ALNSConfig
from alns_engine.alns.exceptions import ALNSError, ConfigurationError, PreconditionError
from alns_engine.alns.operators import DestroyOperator, Problem, RepairOperator
from alns_engine.alns.selectors import (
    AdaptiveWeightSelector,
    OperatorSelector,
    OperatorStatistics,
    roulette_select,
)

__all__ = [
    "ALNS",
    "ALNSConfig",
    "ALNSResult",
    "ALNSStatistics",
    "SearchState",
    "AcceptanceDecision",
    "AcceptanceOutcome",
    "acceptance_probability",
    "evaluate_acceptance",
    "ALNSError",
    "ConfigurationError",
    "PreconditionError",
    "Problem",
    "DestroyOperator",
    "RepairOperator",
    "OperatorSelector",
    "AdaptiveWeightSelector",
    "OperatorStatistics",
    "roulette_select",
]
