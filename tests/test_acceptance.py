import numpy as np
import pytest

from alns_engine.alns.acceptance import (
    AcceptanceOutcome,
    acceptance_probability,
    evaluate_acceptance,
)
from alns_engine.alns.config import ALNSConfig


@pytest.mark.parametrize("temperature", [100.0, 1.0, 1e-12, 0.0, -1.0])
def test_new_best_always_accepted(rng, config, temperature):
    decision = evaluate_acceptance(
        current_cost=5.0, candidate_cost=-1.0, best_cost=0.0,
        temperature=temperature, config=config, rng=rng,
    )
    assert decision.outcome is AcceptanceOutcome.NEW_BEST
    assert decision.accepted
    assert decision.reward == config.score_new_best


def test_improvement_over_current(rng, config):
    decision = evaluate_acceptance(10.0, 5.0, 0.0, 0.0, config, rng)
    assert decision.outcome is AcceptanceOutcome.IMPROVED
    assert decision.accepted
    assert decision.reward == config.score_improved


def test_tie_with_best_is_improvement_not_new_best(rng, config):
    decision = evaluate_acceptance(10.0, 5.0, 5.0, 1.0, config, rng)
    assert decision.outcome is AcceptanceOutcome.IMPROVED


def test_tie_with_current_goes_through_metropolis(rng, config):
    decision = evaluate_acceptance(5.0, 5.0, 0.0, 1.0, config, rng)
    # exp(0) == 1, always accepted
    assert decision.outcome is AcceptanceOutcome.ACCEPTED
    assert decision.reward == config.score_accepted


@pytest.mark.parametrize("temperature", [0.0, -5.0])
def test_non_positive_temperature_rejects_worse(rng, config, temperature):
    decision = evaluate_acceptance(5.0, 6.0, 0.0, temperature, config, rng)
    assert decision.outcome is AcceptanceOutcome.REJECTED
    assert not decision.accepted
    assert decision.reward == 0.0


def test_acceptance_probability_vanishes_as_temperature_drops():
    probabilities = [acceptance_probability(1.0, t) for t in (10.0, 1.0, 0.1, 0.01, 1e-6)]
    assert probabilities == sorted(probabilities, reverse=True)
    assert probabilities[-1] == 0.0
    assert acceptance_probability(1.0, 1.0) == pytest.approx(np.exp(-1.0))


def test_worse_candidates_rejected_at_tiny_temperature(rng, config):
    outcomes = {
        evaluate_acceptance(0.0, 0.5, 0.0, 1e-9, config, rng).outcome
        for _ in range(1000)
    }
    assert outcomes == {AcceptanceOutcome.REJECTED}


def test_metropolis_acceptance_rate(rng, config):
    accepted = [
        evaluate_acceptance(0.0, 1.0, 0.0, 1.0, config, rng).accepted
        for _ in range(20000)
    ]
    assert np.mean(accepted) == pytest.approx(np.exp(-1.0), abs=0.02)


def test_only_metropolis_tier_draws(rng, config):
    state = rng.bit_generator.state
    evaluate_acceptance(5.0, -1.0, 0.0, 1.0, config, rng)
    evaluate_acceptance(5.0, 1.0, 0.0, 1.0, config, rng)
    assert rng.bit_generator.state == state

    evaluate_acceptance(5.0, 6.0, 0.0, 1.0, config, rng)
    assert rng.bit_generator.state != state


def test_custom_scores_used_as_given(rng):
    config = ALNSConfig().with_scores(1.0, 2.0, 3.0)
    assert evaluate_acceptance(5.0, -1.0, 0.0, 1.0, config, rng).reward == 1.0
    assert evaluate_acceptance(5.0, 1.0, 0.0, 1.0, config, rng).reward == 2.0
    assert evaluate_acceptance(5.0, 5.0, 0.0, 1.0, config, rng).reward == 3.0
