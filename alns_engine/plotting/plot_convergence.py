import pickle
from pathlib import Path
import matplotlib.pyplot as plt
import numpy as np

from alns_engine.alns.alns import ALNSResult


def history_iterations(result: ALNSResult) -> np.ndarray:
    """Iteration index of each cost-history sample."""
    x = np.arange(len(result.cost_history)) * result.history_interval
    return np.minimum(x, result.iterations)


def plot_convergence(
    results: dict[str, ALNSResult],
    title: str = "ALNS Convergence Comparison",
    save_path: Path = None
):
    """
    Plot best-cost curves for multiple ALNS runs.

    Args:
        results: Dict mapping run label to ALNSResult
        title: Plot title
        save_path: Optional path to save plot
    """
    fig, ax = plt.subplots(figsize=(10, 6))

    colors = plt.cm.tab10(np.linspace(0, 1, max(len(results), 1)))

    for color, (label, result) in zip(colors, results.items()):
        ax.step(history_iterations(result), result.cost_history, where='post',
                label=label, color=color, linewidth=2, alpha=0.8)

    ax.set_xlabel('Iteration', fontsize=12)
    ax.set_ylabel('Best Objective', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(fontsize=11)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Convergence plot saved to {save_path}")
        plt.close(fig)
    else:
        plt.show()


def load_results(results_dir: Path) -> dict[str, ALNSResult]:
    """Load the pickled ALNSResult files written by the seed runner."""
    results = {}
    for result_file in sorted(Path(results_dir).glob("seed_*.pkl")):
        with open(result_file, 'rb') as f:
            results[result_file.stem] = pickle.load(f)
    return results


if __name__ == "__main__":
    """
    Example usage:
        python -m alns_engine.plotting.plot_convergence
    """
    save_dir = Path("plots/convergence")

    for experiment in ["one_max", "sphere"]:
        results_dir = Path("results") / experiment
        if not results_dir.exists():
            print(f"Results directory {results_dir} not found")
            print("Run experiments first: python -m alns_engine.experiments.run_seeds")
            continue

        plot_convergence(
            load_results(results_dir),
            title=f"Convergence: {experiment}",
            save_path=save_dir / f"convergence_{experiment}.png"
        )
