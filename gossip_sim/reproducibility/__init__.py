"""Reproducibility infrastructure: seed management and RNG streams."""

from gossip_sim.reproducibility.seed import set_seed, spawn_generators, verify_seed_determinism

__all__ = [
    "set_seed",
    "spawn_generators",
    "verify_seed_determinism",
]
