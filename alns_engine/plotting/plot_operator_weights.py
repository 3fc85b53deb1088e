"""
Operator weight and selection plots for ALNS runs.

Shows which operators the adaptive weights ended up favouring and how
selection changed over time.
"""

from pathlib import Path
import matplotlib.pyplot as plt
import numpy as np

from alns_engine.alns.alns import ALNSResult, ALNSStatistics


def _finish(fig, save_path: Path, label: str):
    plt.tight_layout()

    if save_path:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"{label} plot saved to {save_path}")
        plt.close(fig)
    else:
        plt.show()


def plot_final_weights(
    result: ALNSResult,
    title: str = "Final Operator Weights",
    save_path: Path = None
):
    """Bar chart of the final destroy and repair weights side by side."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    pools = [
        ("Destroy", result.destroy_operator_names, result.destroy_weights),
        ("Repair", result.repair_operator_names, result.repair_weights),
    ]
    for ax, (pool_name, names, weights) in zip(axes, pools):
        x = np.arange(len(names))
        ax.bar(x, weights, color=plt.cm.Set3(np.linspace(0, 1, max(len(names), 1))), alpha=0.9)
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=15, ha='right')
        ax.set_ylabel('Weight', fontsize=12)
        ax.set_title(f'{pool_name} Operators', fontsize=12)
        ax.grid(True, alpha=0.3, axis='y')

    fig.suptitle(title, fontsize=14, fontweight='bold')
    _finish(fig, save_path, "Operator weights")


def compute_operator_frequencies(
    statistics: list[ALNSStatistics],
    operator_type: str = "destroy",
    n_segments: int = 5,
    operator_names: list[str] = None
) -> tuple[list[str], np.ndarray]:
    """
    Compute operator selection frequencies over time segments.

    Args:
        statistics: Per-iteration trace from a run with record_statistics=True
        operator_type: "destroy" or "repair"
        n_segments: Number of time segments to divide iterations into
        operator_names: Row order, usually the pool order from ALNSResult;
            defaults to the order in which operators first appear in the trace

    Returns:
        Tuple of (operator_names, frequency_matrix) where frequency_matrix
        is shape (n_operators, n_segments) with selection frequencies in percent
    """
    if operator_type not in ("destroy", "repair"):
        raise ValueError(f"Unknown operator type: {operator_type}")
    used = [getattr(stat, f"{operator_type}_operator_used") for stat in statistics]

    if operator_names is None:
        operator_names = list(dict.fromkeys(used))
    row_of = {name: row for row, name in enumerate(operator_names)}

    segment_size = max(1, len(statistics) // n_segments)
    counts = np.zeros((len(operator_names), n_segments))
    for i, name in enumerate(used):
        counts[row_of[name], min(i // segment_size, n_segments - 1)] += 1

    totals = counts.sum(axis=0)
    frequency_matrix = np.divide(counts * 100, totals, out=np.zeros_like(counts), where=totals > 0)
    return list(operator_names), frequency_matrix


def plot_operator_evolution(
    statistics: list[ALNSStatistics],
    operator_type: str = "destroy",
    title: str = None,
    save_path: Path = None,
    n_segments: int = 5,
    operator_names: list[str] = None
):
    """
    Plot operator selection evolution as stacked bar chart.

    Args:
        statistics: Per-iteration trace from a run with record_statistics=True
        operator_type: "destroy" or "repair"
        title: Plot title
        save_path: Optional path to save plot
        n_segments: Number of time segments
        operator_names: Legend order, e.g. result.destroy_operator_names
    """
    operator_names, frequency_matrix = compute_operator_frequencies(
        statistics, operator_type, n_segments, operator_names
    )

    total_iterations = len(statistics)
    segment_size = max(1, total_iterations // n_segments)
    segment_labels = [f"{i*segment_size}-{min((i+1)*segment_size, total_iterations)}"
                      for i in range(n_segments)]

    fig, ax = plt.subplots(figsize=(10, 6))

    x = np.arange(n_segments)
    bottom = np.zeros(n_segments)

    colors = plt.cm.Set3(np.linspace(0, 1, max(len(operator_names), 1)))

    for op_idx, op_name in enumerate(operator_names):
        ax.bar(x, frequency_matrix[op_idx], bottom=bottom, label=op_name,
               color=colors[op_idx], width=0.8, alpha=0.9)
        bottom += frequency_matrix[op_idx]

    ax.set_xlabel('Iteration Range', fontsize=12)
    ax.set_ylabel('Selection Frequency (%)', fontsize=12)
    ax.set_title(title or f'{operator_type.capitalize()} Operator Selection Evolution',
                 fontsize=14, fontweight='bold')
    ax.set_xticks(x)
    ax.set_xticklabels(segment_labels, rotation=15, ha='right')
    ax.legend(loc='upper left', bbox_to_anchor=(1, 1), fontsize=10)
    ax.set_ylim(0, 100)
    ax.grid(True, alpha=0.3, axis='y')

    _finish(fig, save_path, "Operator evolution")


if __name__ == "__main__":
    from alns_engine.alns.alns import ALNS
    from alns_engine.alns.config import ALNSConfig
    from alns_engine.benchmarks import OneMaxProblem, one_max_operators

    destroy_ops, repair_ops = one_max_operators()
    alns = ALNS(
        OneMaxProblem(50),
        destroy_ops,
        repair_ops,
        config=ALNSConfig(max_iterations=2000, segment_length=50, seed=42),
        record_statistics=True,
    )
    result = alns.run()

    save_dir = Path("plots/")
    plot_final_weights(result, save_path=save_dir / "one_max_weights.png")
    for operator_type in ("destroy", "repair"):
        plot_operator_evolution(
            result.statistics,
            operator_type=operator_type,
            operator_names=getattr(result, f"{operator_type}_operator_names"),
            save_path=save_dir / f"one_max_{operator_type}_evolution.png",
        )
