"""Peer selection policies for gossip rounds.

Every policy takes the sending node and a SelectionContext and returns one
candidate peer id from the full id space, or None when it has no candidate
to offer this round. The chosen peer need not be a neighbour: the engine
only delivers when an edge actually exists. Policies never touch the
has-datum flags.

The two adaptive policies build their candidate pool by independent
inclusion draws (one Bernoulli trial per node id) and then pick uniformly
from the pool. An empty pool yields None, which the engine treats as a
skipped contact. After picking, they record a failure for (source, peer)
when the peer is not a neighbour of the source.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from gossip_sim.graph.types import GraphData
from gossip_sim.simulation.ledger import FailureLedger
from gossip_sim.simulation.popularity import PopularityIndex

# Popularity above this adds no further inclusion weight.
POPULARITY_CAP = 10


@dataclass
class SelectionContext:
    """Shared inputs for peer selection within one run."""

    graph: GraphData
    rng: np.random.Generator
    failures: FailureLedger
    popularity: PopularityIndex


PeerPolicy = Callable[[int, SelectionContext], int | None]


class UnknownPolicyError(KeyError):
    """Raised when a policy name is not in the registry."""


def random_node(source: int, ctx: SelectionContext) -> int | None:
    """Uniform over all node ids, the source itself included."""
    return int(ctx.rng.integers(0, ctx.graph.n))


def random_neighbor(source: int, ctx: SelectionContext) -> int | None:
    """Uniform over the source's outbound neighbours; None if it has none."""
    neighbors = ctx.graph.neighbor_array(source)
    if neighbors.size == 0:
        return None
    return int(neighbors[ctx.rng.integers(0, neighbors.size)])


def failure_inclusion_probs(source: int, ctx: SelectionContext) -> np.ndarray:
    """P(include c) = 1 / (1 + failures(source, c)) for every id c."""
    failures = ctx.failures.failure_row(source, ctx.graph.n)
    return 1.0 / (1.0 + failures)


def popularity_inclusion_probs(source: int, ctx: SelectionContext) -> np.ndarray:
    """P(include c) = (min(pop(c), 10) + 10) / ((failures(source, c) + 1) * 20).

    Clipped to [0, 1]: popularity >= 10 with no failures is certain
    inclusion, an unpopular node with no failures is a coin flip.
    """
    failures = ctx.failures.failure_row(source, ctx.graph.n)
    popularity = np.minimum(ctx.popularity.as_array(), POPULARITY_CAP)
    probs = (popularity + 10) / ((failures + 1) * 20.0)
    return np.clip(probs, 0.0, 1.0)


def _draw_from_pool(
    source: int, probs: np.ndarray, ctx: SelectionContext
) -> int | None:
    """Include each id independently with probs[id], pick one uniformly.

    Records a failure when the picked peer is not a neighbour of source.
    """
    pool = np.flatnonzero(ctx.rng.random(probs.size) < probs)
    if pool.size == 0:
        return None
    peer = int(pool[ctx.rng.integers(0, pool.size)])
    if not ctx.graph.has_edge(source, peer):
        ctx.failures.record_failure(source, peer)
    return peer


def failure_weighted_node(source: int, ctx: SelectionContext) -> int | None:
    """Random node, biased away from peers this source failed to reach."""
    return _draw_from_pool(source, failure_inclusion_probs(source, ctx), ctx)


def popularity_weighted_node(source: int, ctx: SelectionContext) -> int | None:
    """Random node, biased toward high in-degree and away from past failures."""
    return _draw_from_pool(source, popularity_inclusion_probs(source, ctx), ctx)


POLICIES: dict[str, PeerPolicy] = {
    "random_node": random_node,
    "random_neighbor": random_neighbor,
    "failure_weighted_node": failure_weighted_node,
    "popularity_weighted_node": popularity_weighted_node,
}

# Human-readable labels used by the CLI report.
POLICY_LABELS: dict[str, str] = {
    "random_node": "Random selection from all nodes",
    "random_neighbor": "Random selection from nodes' edges",
    "failure_weighted_node": "Failure-weighted selection from all nodes",
    "popularity_weighted_node": "Popularity- and failure-weighted selection",
}


def get_policy(name: str) -> PeerPolicy:
    try:
        return POLICIES[name]
    except KeyError:
        raise UnknownPolicyError(
            f"unknown policy {name!r}; expected any of {sorted(POLICIES)}"
        ) from None
