from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
import json

from alns_engine.alns.exceptions import ConfigurationError


@dataclass(frozen=True)
class ALNSConfig:
    """Configuration for ALNS algorithm with tunable parameters."""

    # ===== STOPPING CRITERIA =====
    max_iterations: int = 10000

    # ===== WEIGHT MANAGEMENT =====
    segment_length: int = 100  # Update weights every segment_length iterations
    reaction_factor: float = 0.1  # ρ ∈ (0, 1]; higher = faster adaptation towards successful operators
    min_weight: float = 0.01  # Floor so no operator is ever starved

    # ===== SUCCESS SCORING =====
    # Each iteration the selected destroy/repair pair receives one of these:
    #   σ1 score_new_best: candidate beats the global best
    #   σ2 score_improved: candidate beats the current solution only
    #   σ3 score_accepted: worse candidate accepted by the SA criterion
    # A rejected candidate scores 0.0 but still counts as a use.
    # The ordering σ1 > σ2 > σ3 is conventional and not enforced.
    score_new_best: float = 33.0
    score_improved: float = 9.0
    score_accepted: float = 3.0

    # ===== DESTROY PARAMETERS =====
    min_destroy_degree: float = 0.1  # Destroy at least 10% of the solution
    max_destroy_degree: float = 0.4  # Destroy at most 40% of the solution

    # ===== SIMULATED ANNEALING PARAMETERS =====
    initial_temperature: float = 100.0
    cooling_rate: float = 0.9995  # T = max(T * cooling_rate, min_temperature) each iteration
    min_temperature: float = 0.01

    # ===== REPRODUCIBILITY =====
    seed: int | None = None

    # ===== LOGGING =====
    log_interval: int = 1000  # Log progress every N iterations (0 disables)

    def __post_init__(self):
        object.__setattr__(self, "segment_length", max(1, int(self.segment_length)))

    def validate(self) -> None:
        """Raise ConfigurationError for the first violated rule."""
        if self.max_iterations <= 0:
            raise ConfigurationError("max_iterations must be positive")
        if not 0.0 < self.reaction_factor <= 1.0:
            raise ConfigurationError(
                f"reaction_factor must be in (0, 1], got {self.reaction_factor}"
            )
        if not 0.0 < self.cooling_rate < 1.0:
            raise ConfigurationError(
                f"cooling_rate must be in (0, 1), got {self.cooling_rate}"
            )
        if self.initial_temperature <= 0.0:
            raise ConfigurationError("initial_temperature must be positive")
        if self.min_temperature <= 0.0:
            raise ConfigurationError("min_temperature must be positive")
        if self.min_destroy_degree > self.max_destroy_degree:
            raise ConfigurationError("min_destroy_degree must be <= max_destroy_degree")

    # ===== DERIVED COPIES =====

    def with_max_iterations(self, n: int) -> 'ALNSConfig':
        return replace(self, max_iterations=n)

    def with_segment_length(self, n: int) -> 'ALNSConfig':
        return replace(self, segment_length=n)

    def with_scores(self, new_best: float, improved: float, accepted: float) -> 'ALNSConfig':
        return replace(
            self,
            score_new_best=new_best,
            score_improved=improved,
            score_accepted=accepted,
        )

    def with_reaction_factor(self, rho: float) -> 'ALNSConfig':
        return replace(self, reaction_factor=rho)

    def with_destroy_degree(self, minimum: float, maximum: float) -> 'ALNSConfig':
        """Clamp ``minimum`` into [0, 1] and ``maximum`` into [minimum, 1]."""
        minimum = min(max(minimum, 0.0), 1.0)
        maximum = min(max(maximum, minimum), 1.0)
        return replace(self, min_destroy_degree=minimum, max_destroy_degree=maximum)

    def with_temperature(self, initial: float, cooling_rate: float, minimum: float) -> 'ALNSConfig':
        return replace(
            self,
            initial_temperature=initial,
            cooling_rate=cooling_rate,
            min_temperature=minimum,
        )

    def with_seed(self, seed: int | None) -> 'ALNSConfig':
        return replace(self, seed=seed)

    # ===== SERIALISATION =====

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(params: dict, **override_params) -> 'ALNSConfig':
        known = {f.name for f in fields(ALNSConfig)}
        merged = {**params, **override_params}
        unknown = sorted(set(merged) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return ALNSConfig(**merged)

    @staticmethod
    def from_json(config_file: Path, **override_params) -> 'ALNSConfig':
        """
        Load tuned parameters from a JSON file.

        The file holds either the parameters at the top level or a tuning
        result of the form ``{"best_params": {...}}``. Keyword arguments
        override values read from the file.
        """
        config_file = Path(config_file)
        if not config_file.exists():
            raise FileNotFoundError(f"No tuned parameters found at {config_file}")

        with open(config_file, 'r') as f:
            tuning_result = json.load(f)

        params = tuning_result.get("best_params", tuning_result)
        return ALNSConfig.from_dict(params, **override_params)
