"""Gossip dissemination engine, peer-selection policies and shared ledgers."""

from gossip_sim.simulation.engine import gossip_round, run_gossip
from gossip_sim.simulation.ledger import FailureLedger
from gossip_sim.simulation.policies import (
    POLICIES,
    POLICY_LABELS,
    PeerPolicy,
    SelectionContext,
    UnknownPolicyError,
    failure_weighted_node,
    get_policy,
    popularity_weighted_node,
    random_neighbor,
    random_node,
)
from gossip_sim.simulation.popularity import PopularityIndex, build_popularity_index
from gossip_sim.simulation.runner import run_experiment_simulation, run_policy_comparison
from gossip_sim.simulation.types import (
    DatumState,
    GossipResult,
    RoundLimitExceededError,
    SimulationError,
)

__all__ = [
    "DatumState",
    "FailureLedger",
    "GossipResult",
    "POLICIES",
    "POLICY_LABELS",
    "PeerPolicy",
    "PopularityIndex",
    "RoundLimitExceededError",
    "SelectionContext",
    "SimulationError",
    "UnknownPolicyError",
    "build_popularity_index",
    "failure_weighted_node",
    "get_policy",
    "gossip_round",
    "popularity_weighted_node",
    "random_neighbor",
    "random_node",
    "run_experiment_simulation",
    "run_gossip",
    "run_policy_comparison",
]
