"""Experiment configuration system with frozen, hashable, serializable dataclasses."""

from gossip_sim.config.experiment import (
    KNOWN_POLICIES,
    ExperimentConfig,
    GraphConfig,
    SimulationConfig,
)
from gossip_sim.config.defaults import ANCHOR_CONFIG
from gossip_sim.config.hashing import config_hash, graph_config_hash, full_config_hash
from gossip_sim.config.serialization import config_to_json, config_from_json

__all__ = [
    "ExperimentConfig",
    "GraphConfig",
    "SimulationConfig",
    "KNOWN_POLICIES",
    "ANCHOR_CONFIG",
    "config_hash",
    "graph_config_hash",
    "full_config_hash",
    "config_to_json",
    "config_from_json",
]
