"""Orchestrator: render all figures for a single experiment.

Reads result.json + coverage.npz and saves figures to
results/{experiment_id}/figures/ as PNG + SVG.
"""

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from gossip_sim.visualization.coverage import plot_coverage_curves, plot_round_counts
from gossip_sim.visualization.style import apply_style, save_figure

log = logging.getLogger(__name__)


def load_result_data(result_dir: str | Path) -> dict[str, Any]:
    """Load result.json and coverage.npz from an experiment directory.

    Returns:
        Dict with keys "result" (parsed result.json) and "coverage"
        (policy name -> holders-per-round array, empty if no npz).
    """
    result_dir = Path(result_dir)
    with open(result_dir / "result.json") as f:
        result = json.load(f)

    coverage: dict[str, np.ndarray] = {}
    npz_path = result_dir / "coverage.npz"
    if npz_path.exists():
        with np.load(str(npz_path), allow_pickle=False) as npz:
            coverage = {name: npz[name] for name in npz.files}

    return {"result": result, "coverage": coverage}


def render_all(result_dir: str | Path) -> list[Path]:
    """Generate all figures for a single experiment.

    Returns:
        Paths of every file written (PNG and SVG).
    """
    result_dir = Path(result_dir)
    data = load_result_data(result_dir)
    fig_dir = result_dir / "figures"
    apply_style()

    written: list[Path] = []
    rounds = {
        name: block["rounds"]
        for name, block in data["result"]["metrics"].get("policies", {}).items()
    }
    if rounds:
        written.extend(save_figure(plot_round_counts(rounds), fig_dir, "round_counts"))

    if data["coverage"]:
        n = data["result"]["config"]["graph"]["n"]
        written.extend(
            save_figure(plot_coverage_curves(data["coverage"], n), fig_dir, "coverage")
        )
    else:
        log.warning("No coverage.npz in %s, skipping coverage plot", result_dir)

    log.info("Rendered %d figure files to %s", len(written), fig_dir)
    return written
