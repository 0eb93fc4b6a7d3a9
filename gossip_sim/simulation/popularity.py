"""Popularity index: inbound edge count per node, built once per graph."""

from dataclasses import dataclass

import numpy as np

from gossip_sim.graph.types import GraphData


@dataclass(frozen=True)
class PopularityIndex:
    """Read-only inbound-degree lookup. Unknown ids have popularity 0."""

    counts: np.ndarray  # int64 array of length n

    def get(self, node: int) -> int:
        if 0 <= node < self.counts.size:
            return int(self.counts[node])
        return 0

    def as_array(self) -> np.ndarray:
        return self.counts.copy()


def build_popularity_index(graph: GraphData) -> PopularityIndex:
    """Count inbound edges by visiting every node's outbound edge set once."""
    counts = np.zeros(graph.n, dtype=np.int64)

    def visit(node: int, neighbors: frozenset[int]) -> None:
        for peer in neighbors:
            counts[peer] += 1

    graph.for_each_node(visit)
    counts.flags.writeable = False
    return PopularityIndex(counts=counts)
