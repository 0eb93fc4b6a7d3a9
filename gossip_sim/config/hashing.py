"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from gossip_sim.config.experiment import ExperimentConfig


def _drop_path(d: dict[str, Any], dotted: str) -> None:
    """Remove a dotted-path key ("simulation.max_rounds") from a nested dict."""
    *parents, leaf = dotted.split(".")
    node = d
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            return
        node = child
    node.pop(leaf, None)


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Deterministic SHA-256 hash of a config dataclass.

    Args:
        config: Any dataclass instance (or sub-config).
        exclude_fields: Optional dotted field paths left out of the hash.

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    d = asdict(config)
    for dotted in exclude_fields or ():
        _drop_path(d, dotted)
    payload = json.dumps(d, sort_keys=True, ensure_ascii=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]


def graph_config_hash(config: ExperimentConfig) -> str:
    """Hash of the topology parameters only.

    Two experiments that differ in policies, round cap or seed share the
    same graph hash; the seed decides which concrete graph is drawn.
    """
    return config_hash(config.graph)


def full_config_hash(config: ExperimentConfig) -> str:
    """Hash for full experiment identity, seed included."""
    return config_hash(config)
