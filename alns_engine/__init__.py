"""Generic Adaptive Large Neighborhood Search with adaptive operator weights."""

from alns_engine.alns import (
    ALNS,
    ALNSConfig,
    ALNSResult,
    ConfigurationError,
    DestroyOperator,
    PreconditionError,
    Problem,
    RepairOperator,
)

__version__ = "0.1.0"

__all__ = [
    "ALNS",
    "ALNSConfig",
    "ALNSResult",
    "ConfigurationError",
    "PreconditionError",
    "Problem",
    "DestroyOperator",
    "RepairOperator",
]
