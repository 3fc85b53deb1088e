import pickle

import numpy as np
import pytest

from alns_engine.alns.alns import ALNS
from alns_engine.alns.config import ALNSConfig
from alns_engine.plotting.plot_convergence import history_iterations, load_results, plot_convergence
from alns_engine.plotting.plot_operator_weights import (
    compute_operator_frequencies,
    plot_final_weights,
    plot_operator_evolution,
)


@pytest.fixture
def traced_result(one_max, destroy_ops, repair_ops):
    config = ALNSConfig(max_iterations=500, segment_length=50, seed=42, log_interval=0)
    return ALNS(one_max, destroy_ops, repair_ops, config=config, record_statistics=True).run()


def test_history_iterations(traced_result):
    x = history_iterations(traced_result)
    assert list(x) == list(range(0, 501, 50))


def test_plot_convergence_saves(tmp_path, traced_result):
    save_path = tmp_path / "plots" / "convergence.png"
    plot_convergence({"seed 42": traced_result}, save_path=save_path)
    assert save_path.exists()


def test_load_results(tmp_path, traced_result):
    with open(tmp_path / "seed_42.pkl", 'wb') as f:
        pickle.dump(traced_result, f)

    results = load_results(tmp_path)

    assert list(results) == ["seed_42"]
    assert results["seed_42"].cost_history == traced_result.cost_history


def test_plot_final_weights_saves(tmp_path, traced_result):
    save_path = tmp_path / "weights.png"
    plot_final_weights(traced_result, save_path=save_path)
    assert save_path.exists()


@pytest.mark.parametrize("operator_type", ["destroy", "repair"])
def test_operator_frequencies(traced_result, operator_type):
    names, frequencies = compute_operator_frequencies(traced_result.statistics, operator_type, n_segments=5)

    assert frequencies.shape == (len(names), 5)
    assert np.allclose(frequencies.sum(axis=0), 100.0)


def test_operator_frequencies_rejects_unknown_type(traced_result):
    with pytest.raises(ValueError):
        compute_operator_frequencies(traced_result.statistics, "mutation")


def test_plot_operator_evolution_saves(tmp_path, traced_result):
    save_path = tmp_path / "evolution.png"
    plot_operator_evolution(traced_result.statistics, operator_type="repair", save_path=save_path)
    assert save_path.exists()


def test_operator_frequencies_follow_pool_order(traced_result):
    pool_order = list(reversed(traced_result.destroy_operator_names))

    names, frequencies = compute_operator_frequencies(
        traced_result.statistics, "destroy", n_segments=5, operator_names=pool_order
    )

    assert names == pool_order
    first_segment = traced_result.statistics[:100]
    share = sum(s.destroy_operator_used == pool_order[0] for s in first_segment)
    assert frequencies[0, 0] == pytest.approx(share)


def test_operator_frequencies_default_to_first_use_order(traced_result):
    names, _ = compute_operator_frequencies(traced_result.statistics, "repair")

    first_seen = []
    for stat in traced_result.statistics:
        if stat.repair_operator_used not in first_seen:
            first_seen.append(stat.repair_operator_used)
    assert names == first_seen
