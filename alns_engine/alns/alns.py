from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
from typing import Any, Protocol

import numpy as np

from alns_engine.alns.acceptance import AcceptanceOutcome, evaluate_acceptance
from alns_engine.alns.config import ALNSConfig
from alns_engine.alns.exceptions import PreconditionError
from alns_engine.alns.operators import DestroyOperator, Problem, RepairOperator
from alns_engine.alns.selectors import AdaptiveWeightSelector, OperatorSelector
from alns_engine.utils import create_rng


logger = logging.getLogger(__name__)

# Tolerance under which the final best cost counts as already sampled
HISTORY_EPSILON = 1e-15


class CancellationFlag(Protocol):
    """Anything with ``is_set()``, e.g. ``threading.Event``."""

    def is_set(self) -> bool:
        ...


class SearchState(Enum):
    INITIALIZING = "initializing"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ALNSStatistics:
    """Track ALNS performance statistics per iteration."""
    iteration: int
    best_objective: float
    current_objective: float
    candidate_objective: float
    temperature: float
    destroy_operator_used: str
    repair_operator_used: str
    destroy_degree: float
    outcome: AcceptanceOutcome
    reward: float
    time_elapsed: float

    @property
    def accepted(self) -> bool:
        return self.outcome is not AcceptanceOutcome.REJECTED


@dataclass(frozen=True)
class ALNSResult:
    """Result of an ALNS optimization run."""
    best: Any
    best_cost: float
    iterations: int
    improvements: int
    final_temperature: float
    cancelled: bool
    destroy_weights: list[float]
    repair_weights: list[float]
    cost_history: list[float]  # best cost, sampled every history_interval iterations
    history_interval: int = 1
    destroy_operator_names: list[str] = field(default_factory=list)
    repair_operator_names: list[str] = field(default_factory=list)
    runtime_seconds: float = 0.0
    statistics: list[ALNSStatistics] = field(default_factory=list)

    @property
    def initial_cost(self) -> float:
        return self.cost_history[0]

    def weights_by_name(self) -> dict[str, dict[str, float]]:
        return {
            "destroy": dict(zip(self.destroy_operator_names, self.destroy_weights)),
            "repair": dict(zip(self.repair_operator_names, self.repair_weights)),
        }


class ALNS:
    """
    Adaptive Large Neighborhood Search over an opaque solution type.

    The runner owns the current and best solutions, the temperature and one
    operator selector per pool. Everything problem specific is delegated to
    the ``Problem`` and the destroy/repair operators.
    """

    def __init__(
        self,
        problem: Problem,
        destroy_operators: list[DestroyOperator],
        repair_operators: list[RepairOperator],
        config: ALNSConfig = None,
        destroy_selector: OperatorSelector = None,
        repair_selector: OperatorSelector = None,
        record_statistics: bool = False,
    ):
        self.problem = problem
        self.destroy_operators = list(destroy_operators)
        self.repair_operators = list(repair_operators)
        self.config = config if config is not None else ALNSConfig()

        # Custom selectors are used as given; defaults are rebuilt on every run
        self._custom_destroy_selector = destroy_selector
        self._custom_repair_selector = repair_selector
        self.destroy_selector: OperatorSelector | None = None
        self.repair_selector: OperatorSelector | None = None

        self.record_statistics = record_statistics
        self.state = SearchState.INITIALIZING

    def run(self, cancel_event: CancellationFlag = None) -> ALNSResult:
        """
        Main ALNS loop.

        Args:
            cancel_event: Optional flag polled before every iteration; once set,
                the run stops and returns the best solution found so far

        Returns:
            ALNSResult snapshot of the finished (or cancelled) run
        """
        self.state = SearchState.INITIALIZING
        self._check_preconditions()

        config = self.config
        rng = create_rng(config.seed)
        self.destroy_selector = self._build_selector(self._custom_destroy_selector, self.destroy_operators)
        self.repair_selector = self._build_selector(self._custom_repair_selector, self.repair_operators)

        current = self.problem.initial_solution(rng)
        current_cost = float(self.problem.cost(current))
        best = deepcopy(current)
        best_cost = current_cost

        temperature = config.initial_temperature
        improvements = 0
        iterations = 0
        history_interval = config.segment_length
        cost_history = [best_cost]
        statistics: list[ALNSStatistics] = []

        logger.info(
            "Starting ALNS: %d iterations, destroy=%s, repair=%s, initial cost=%.4f",
            config.max_iterations,
            self.destroy_selector.operator_names,
            self.repair_selector.operator_names,
            best_cost,
        )

        start_time = time.time()
        self.state = SearchState.RUNNING

        for iteration in range(config.max_iterations):
            if cancel_event is not None and cancel_event.is_set():
                self.state = SearchState.CANCELLED
                logger.info("ALNS cancelled after %d iterations", iterations)
                break

            # Draw order (destroy, repair, degree) fixes the seeded stream
            d_idx = self.destroy_selector.select(rng)
            r_idx = self.repair_selector.select(rng)
            degree = self._sample_destroy_degree(rng)

            destroyed = self.destroy_operators[d_idx].destroy(current, degree, rng)
            candidate = self.repair_operators[r_idx].repair(destroyed, rng)
            candidate_cost = float(self.problem.cost(candidate))

            decision = evaluate_acceptance(
                current_cost, candidate_cost, best_cost, temperature, config, rng
            )

            if decision.accepted:
                current = candidate
                current_cost = candidate_cost

                if decision.outcome is AcceptanceOutcome.NEW_BEST:
                    best = deepcopy(candidate)
                    best_cost = candidate_cost
                    improvements += 1
                    logger.debug("Iteration %d: new best %.6f", iteration + 1, best_cost)

            # Rejections count as a use with reward 0
            self.destroy_selector.record(d_idx, decision.reward)
            self.repair_selector.record(r_idx, decision.reward)

            temperature = max(temperature * config.cooling_rate, config.min_temperature)

            iterations = iteration + 1
            if iterations % config.segment_length == 0:
                self.destroy_selector.update_weights()
                self.repair_selector.update_weights()
                cost_history.append(best_cost)

            if self.record_statistics:
                statistics.append(ALNSStatistics(
                    iteration=iteration,
                    best_objective=best_cost,
                    current_objective=current_cost,
                    candidate_objective=candidate_cost,
                    temperature=temperature,
                    destroy_operator_used=self.destroy_operators[d_idx].name,
                    repair_operator_used=self.repair_operators[r_idx].name,
                    destroy_degree=degree,
                    outcome=decision.outcome,
                    reward=decision.reward,
                    time_elapsed=time.time() - start_time,
                ))

            if config.log_interval and iterations % config.log_interval == 0:
                self._log_progress(iterations, best_cost, current_cost, temperature, start_time)

        if abs(cost_history[-1] - best_cost) > HISTORY_EPSILON:
            cost_history.append(best_cost)

        if self.state is SearchState.RUNNING:
            self.state = SearchState.COMPLETED

        runtime = time.time() - start_time
        logger.info(
            "ALNS %s: best cost %.4f after %d iterations (%d improvements) in %.1fs",
            self.state.value, best_cost, iterations, improvements, runtime,
        )

        return ALNSResult(
            best=best,
            best_cost=best_cost,
            iterations=iterations,
            improvements=improvements,
            final_temperature=temperature,
            cancelled=self.state is SearchState.CANCELLED,
            destroy_weights=self.destroy_selector.weights,
            repair_weights=self.repair_selector.weights,
            cost_history=cost_history,
            history_interval=history_interval,
            destroy_operator_names=list(self.destroy_selector.operator_names),
            repair_operator_names=list(self.repair_selector.operator_names),
            runtime_seconds=runtime,
            statistics=statistics,
        )

    def _check_preconditions(self):
        """Validate configuration and operator pools before the loop starts."""
        self.config.validate()
        if not self.destroy_operators:
            raise PreconditionError("at least one destroy operator required")
        if not self.repair_operators:
            raise PreconditionError("at least one repair operator required")

        pools = [
            ("destroy", self._custom_destroy_selector, self.destroy_operators),
            ("repair", self._custom_repair_selector, self.repair_operators),
        ]
        for pool_name, selector, operators in pools:
            if selector is not None and len(selector.operators) != len(operators):
                raise PreconditionError(
                    f"{pool_name} selector manages {len(selector.operators)} operators, "
                    f"but the {pool_name} pool has {len(operators)}"
                )

    def _build_selector(self, selector: OperatorSelector | None, operators: list) -> OperatorSelector:
        if selector is not None:
            return selector
        return AdaptiveWeightSelector(
            operators,
            reaction_factor=self.config.reaction_factor,
            min_weight=self.config.min_weight,
        )

    def _sample_destroy_degree(self, rng: np.random.Generator) -> float:
        """Uniform in [min_destroy_degree, max_destroy_degree); the bound itself when they coincide."""
        low, high = self.config.min_destroy_degree, self.config.max_destroy_degree
        if high <= low:
            return low
        return float(rng.uniform(low, high))

    def _log_progress(
        self,
        iteration: int,
        best_cost: float,
        current_cost: float,
        temperature: float,
        start_time: float,
    ):
        elapsed = time.time() - start_time
        logger.info(
            "Iteration %d: Best=%.2f, Current=%.2f, Temp=%.4f, Time=%.1fs",
            iteration, best_cost, current_cost, temperature, elapsed,
        )
