"""Visualization utilities for simulation traces."""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from ..core.trace import Trace

sns.set_style("whitegrid")
sns.set_palette("husl")


def plot_trace(trace: Trace, output_path: Path) -> None:
    """Plot cumulative outputs over simulation time.

    Args:
        trace: Trace returned by a simulation run
        output_path: Output file path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    times = np.array(trace.times(), dtype=float)
    fig, ax = plt.subplots(figsize=(10, 5))

    if len(times):
        ax.step(times, np.arange(1, len(times) + 1), where='post', linewidth=2)
        ax.scatter(times, np.arange(1, len(times) + 1), s=15, color='coral', zorder=3)
    else:
        ax.text(0.5, 0.5, 'No outputs', ha='center', va='center', transform=ax.transAxes)

    ax.set_xlabel('Simulation time')
    ax.set_ylabel('Cumulative outputs')
    ax.set_title('Outputs at Exit Point')
    ax.grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
