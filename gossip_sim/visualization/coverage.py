"""Dispersion plots: holders per round and rounds to full dispersion."""

import matplotlib.pyplot as plt
import numpy as np

from gossip_sim.visualization.style import FULL_DISPERSION_COLOR, PALETTE


def plot_coverage_curves(coverage: dict[str, np.ndarray], n: int) -> plt.Figure:
    """Fraction of nodes holding the datum after each round, one line per policy.

    Round 0 (origin only) is prepended so every curve starts at 1/n.

    Args:
        coverage: Policy name -> holders after each round.
        n: Number of nodes in the graph.

    Returns:
        The matplotlib Figure.
    """
    fig, ax = plt.subplots()
    for i, (policy, curve) in enumerate(coverage.items()):
        fraction = np.concatenate(([1], np.asarray(curve))) / n
        ax.plot(
            np.arange(fraction.size), fraction,
            color=PALETTE[i % len(PALETTE)], linewidth=1.5, label=policy,
        )
    ax.axhline(1.0, color=FULL_DISPERSION_COLOR, linestyle="--", linewidth=1)
    ax.set_xscale("symlog")
    ax.set_xlabel("Round")
    ax.set_ylabel("Fraction of nodes holding the datum")
    ax.set_ylim(0, 1.05)
    ax.set_title("Gossip dispersion by peer-selection policy")
    ax.legend(loc="lower right")
    return fig


def plot_round_counts(rounds: dict[str, int]) -> plt.Figure:
    """Horizontal bar chart of rounds to full dispersion per policy."""
    fig, ax = plt.subplots(figsize=(8, 0.6 * len(rounds) + 1.5))
    names = list(rounds)
    values = [rounds[name] for name in names]
    colors = [PALETTE[i % len(PALETTE)] for i in range(len(names))]
    bars = ax.barh(names, values, color=colors)
    ax.bar_label(bars, padding=3)
    ax.invert_yaxis()
    ax.set_xlabel("Rounds to full dispersion")
    ax.set_title("Rounds to full dispersion")
    return fig
