"""Result schema validation, writing, and experiment ID generation."""

from gossip_sim.results.schema import build_metrics, validate_result, write_result, load_result
from gossip_sim.results.experiment_id import generate_experiment_id

__all__ = [
    "build_metrics",
    "validate_result",
    "write_result",
    "load_result",
    "generate_experiment_id",
]
