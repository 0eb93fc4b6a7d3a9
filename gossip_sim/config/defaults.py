"""Anchor configuration: single source of truth for default experiment parameters."""

from gossip_sim.config.experiment import ExperimentConfig

# 100 nodes, 200 directed edges, full reachability from node 0 within 10 hops,
# all four peer-selection policies, seed=42.
ANCHOR_CONFIG = ExperimentConfig()
