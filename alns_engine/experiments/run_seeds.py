"""
Multi-seed ALNS experiment runner.

Runs independent ALNS trajectories, one per seed, and saves:
- Final objectives and counters in a summary table
- Full ALNSResult objects for convergence plotting
- Final operator weights for weight analysis
"""

import logging
import pickle
from dataclasses import dataclass
from functools import partial
from multiprocessing import Pool, cpu_count
from pathlib import Path

import numpy as np
import pandas as pd
from tqdm import tqdm

from alns_engine.alns.alns import ALNS, ALNSResult
from alns_engine.alns.config import ALNSConfig
from alns_engine.alns.operators import DestroyOperator, Problem, RepairOperator


logger = logging.getLogger(__name__)


@dataclass
class ExperimentResult:
    """Results from a single seeded ALNS run."""
    seed: int
    initial_objective: float
    final_objective: float
    improvement_pct: float
    runtime_seconds: float
    iterations: int
    improvements: int
    destroy_weights: dict
    repair_weights: dict
    result: ALNSResult


def run_single_seed(
    seed: int,
    problem: Problem,
    destroy_operators: list[DestroyOperator],
    repair_operators: list[RepairOperator],
    config: ALNSConfig,
    record_statistics: bool = False,
) -> ExperimentResult:
    """
    Run ALNS once with ``config`` reseeded to ``seed``.

    Args:
        seed: Seed for this trajectory
        problem: Problem definition
        destroy_operators: Destroy portfolio
        repair_operators: Repair portfolio
        config: Base configuration; its seed is replaced
        record_statistics: Keep the per-iteration trace in the result

    Returns:
        ExperimentResult with the full ALNSResult attached
    """
    alns = ALNS(
        problem,
        destroy_operators,
        repair_operators,
        config=config.with_seed(seed),
        record_statistics=record_statistics,
    )
    result = alns.run()

    initial_objective = result.initial_cost
    final_objective = result.best_cost
    if initial_objective != 0:
        improvement = (initial_objective - final_objective) / abs(initial_objective) * 100
    else:
        improvement = 0.0

    weights = result.weights_by_name()
    return ExperimentResult(
        seed=seed,
        initial_objective=initial_objective,
        final_objective=final_objective,
        improvement_pct=improvement,
        runtime_seconds=result.runtime_seconds,
        iterations=result.iterations,
        improvements=result.improvements,
        destroy_weights=weights["destroy"],
        repair_weights=weights["repair"],
        result=result,
    )


def results_to_frame(results: list[ExperimentResult]) -> pd.DataFrame:
    """One row per seed; the attached ALNSResult is left out."""
    rows = []
    for r in results:
        row = {
            "seed": r.seed,
            "initial_objective": r.initial_objective,
            "final_objective": r.final_objective,
            "improvement_pct": r.improvement_pct,
            "runtime_seconds": r.runtime_seconds,
            "iterations": r.iterations,
            "improvements": r.improvements,
        }
        for name, weight in r.destroy_weights.items():
            row[f"destroy_{name}"] = weight
        for name, weight in r.repair_weights.items():
            row[f"repair_{name}"] = weight
        rows.append(row)
    return pd.DataFrame(rows)


def summarise_results(df: pd.DataFrame) -> dict[str, float]:
    """Aggregate best costs and runtimes across seeds."""
    objectives = df["final_objective"].to_numpy(dtype=float)
    runtimes = df["runtime_seconds"].to_numpy(dtype=float)
    return {
        "n_runs": int(len(objectives)),
        "mean_objective": float(np.mean(objectives)),
        "std_objective": float(np.std(objectives, ddof=1)) if len(objectives) > 1 else 0.0,
        "min_objective": float(np.min(objectives)),
        "max_objective": float(np.max(objectives)),
        "mean_runtime": float(np.mean(runtimes)),
    }


def run_seed_suite(
    problem: Problem,
    destroy_operators: list[DestroyOperator],
    repair_operators: list[RepairOperator],
    seeds: list[int],
    config: ALNSConfig = None,
    n_workers: int = None,
    results_dir: Path = None,
) -> tuple[pd.DataFrame, list[ExperimentResult]]:
    """
    Run one ALNS trajectory per seed and collect the results.

    Seeds run in a process pool when ``n_workers`` > 1; problem and
    operators must then be picklable. Results are pickled into
    ``results_dir`` when given.

    Returns:
        (summary table with one row per seed, list of ExperimentResult)
    """
    if not seeds:
        raise ValueError("at least one seed required")
    if config is None:
        config = ALNSConfig(max_iterations=1000, log_interval=0)
    if n_workers is None:
        n_workers = min(cpu_count(), len(seeds))

    process_func = partial(
        run_single_seed,
        problem=problem,
        destroy_operators=destroy_operators,
        repair_operators=repair_operators,
        config=config,
    )

    logger.info("Running %d seeds on %s with %d workers", len(seeds), problem, n_workers)

    if n_workers <= 1:
        results = [process_func(seed) for seed in tqdm(seeds, desc="Seeds")]
    else:
        with Pool(n_workers) as pool:
            results = list(tqdm(
                pool.imap(process_func, seeds, chunksize=1),
                total=len(seeds),
                desc="Seeds"
            ))

    df = results_to_frame(results)

    if results_dir is not None:
        results_dir = Path(results_dir)
        results_dir.mkdir(parents=True, exist_ok=True)
        for r in results:
            with open(results_dir / f"seed_{r.seed}.pkl", 'wb') as f:
                pickle.dump(r.result, f)
        df.to_csv(results_dir / "summary.csv", index=False)
        logger.info("Results saved to %s", results_dir)

    return df, results


def print_summary_table(df: pd.DataFrame):
    """Print summary table of results."""
    print("\n" + "="*80)
    print("SUMMARY TABLE")
    print("="*80)
    for _, r in df.iterrows():
        print(f"  seed {int(r['seed']):6d}: {r['final_objective']:10.4f} "
              f"({r['improvement_pct']:+6.1f}%) [{int(r['iterations']):6d} iters, "
              f"{int(r['improvements']):4d} improvements]")

    summary = summarise_results(df)
    print("-"*80)
    print(f"  mean {summary['mean_objective']:.4f} ± {summary['std_objective']:.4f} "
          f"(min {summary['min_objective']:.4f}, max {summary['max_objective']:.4f})")


if __name__ == "__main__":
    from alns_engine.benchmarks import OneMaxProblem, SphereProblem, one_max_operators, sphere_operators

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    seeds = list(range(10))

    destroy_ops, repair_ops = one_max_operators()
    df, _ = run_seed_suite(
        OneMaxProblem(50),
        destroy_ops,
        repair_ops,
        seeds=seeds,
        config=ALNSConfig(max_iterations=2000, log_interval=0),
        results_dir=Path("results/one_max"),
    )
    print_summary_table(df)

    destroy_ops, repair_ops = sphere_operators()
    df, _ = run_seed_suite(
        SphereProblem(5),
        destroy_ops,
        repair_ops,
        seeds=seeds,
        config=ALNSConfig(max_iterations=5000, log_interval=0)
            .with_temperature(100.0, 0.999, 0.001)
            .with_destroy_degree(0.3, 0.8),
        results_dir=Path("results/sphere"),
    )
    print_summary_table(df)

    print("\nTo plot results, run:")
    print("  python -m alns_engine.plotting.plot_convergence")
