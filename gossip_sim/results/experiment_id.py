"""Experiment ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from gossip_sim.config.experiment import ExperimentConfig


def generate_experiment_id(config: ExperimentConfig) -> str:
    """Generate a scannable experiment ID from config parameters.

    Format: n{n}_e{n_edges}_h{max_hops}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: n100_e200_h10_s42_20261019_143012
    """
    ts = datetime.now(timezone.utc)
    return (
        f"n{config.graph.n}"
        f"_e{config.graph.n_edges}"
        f"_h{config.graph.max_hops}"
        f"_s{config.seed}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )
