"""Reachability validation for gossip topologies.

A topology is usable for a dissemination run only if the origin reaches
every node within the agreed hop bound; otherwise no peer-selection policy
can ever reach full dispersion.
"""

import logging
from collections import Counter

from gossip_sim.graph.types import GraphData

log = logging.getLogger(__name__)


def validate_graph(
    graph: GraphData,
    origin: int,
    max_hops: int,
    expected_edges: int | None = None,
) -> list[str]:
    """Validate a generated graph for use by the gossip engine.

    Checks (cheapest first):
    1. No self-loops
    2. Edge count matches the requested count (if given)
    3. Every node reachable from origin within max_hops

    Returns:
        List of error strings (empty = valid graph).
    """
    errors: list[str] = []

    diag_sum = graph.adjacency.diagonal().sum()
    if diag_sum != 0:
        errors.append(f"Self-loops detected: diagonal sum = {diag_sum}")

    if expected_edges is not None and graph.adjacency.nnz != expected_edges:
        errors.append(
            f"Edge count {graph.adjacency.nnz} != requested {expected_edges}"
        )

    reachable = graph.reachability(origin, max_hops)
    log.debug(
        "Node %d reaches %d/%d nodes within %d hops",
        origin,
        len(reachable),
        graph.n,
        max_hops,
    )
    if len(reachable) != graph.n:
        errors.append(
            f"Only {len(reachable)}/{graph.n} nodes reachable from node "
            f"{origin} within {max_hops} hops"
        )

    return errors


def hop_histogram(reachable: dict[int, int]) -> dict[int, int]:
    """Count nodes at each hop distance.

    Args:
        reachable: Output of GraphData.reachability.

    Returns:
        Dict mapping hop distance -> node count, ascending by distance.
    """
    counts = Counter(reachable.values())
    return {hops: counts[hops] for hops in sorted(counts)}


def format_connectivity(histogram: dict[int, int]) -> str:
    """Render a hop histogram as one "N hops: count" line per distance."""
    return "\n".join(f"{hops} hops: {count}" for hops, count in histogram.items())
