"""Figures for gossip experiments: dispersion curves and round counts."""

from gossip_sim.visualization.coverage import plot_coverage_curves, plot_round_counts
from gossip_sim.visualization.render import load_result_data, render_all
from gossip_sim.visualization.style import apply_style, save_figure

__all__ = [
    "apply_style",
    "load_result_data",
    "plot_coverage_curves",
    "plot_round_counts",
    "render_all",
    "save_figure",
]
