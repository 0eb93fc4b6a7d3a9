"""Graph data structures for random network generation and traversal."""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
import scipy.sparse
from scipy.sparse.csgraph import shortest_path


@dataclass(frozen=True)
class GraphData:
    """Immutable container for a generated directed graph and its provenance.

    Row i of the adjacency holds the outbound edges of node i: an entry at
    (i, j) means a gossip attempt from i to j always connects. Uses
    frozen=True but omits slots=True since scipy objects don't interact
    well with __slots__.
    """

    adjacency: scipy.sparse.csr_matrix  # directed adjacency (n x n)
    n: int  # number of nodes
    n_edges: int  # number of directed edges
    generation_seed: int  # seed used for this specific generation attempt
    attempt: int  # which retry attempt produced this graph (0-indexed)

    @classmethod
    def from_edges(cls, n: int, edges: list[tuple[int, int]]) -> "GraphData":
        """Build a graph from explicit (src, dst) pairs; duplicates collapse."""
        pairs = sorted(set(edges))
        src = np.array([s for s, _ in pairs], dtype=np.int64)
        dst = np.array([d for _, d in pairs], dtype=np.int64)
        adj = scipy.sparse.csr_matrix(
            (np.ones(len(pairs), dtype=np.int8), (src, dst)), shape=(n, n)
        )
        return cls(adjacency=adj, n=n, n_edges=int(adj.nnz), generation_seed=-1, attempt=0)

    def _row(self, node: int) -> np.ndarray:
        indptr = self.adjacency.indptr
        return self.adjacency.indices[indptr[node] : indptr[node + 1]]

    def neighbors(self, node: int) -> frozenset[int]:
        """Ids reachable from node by a single directed edge."""
        return frozenset(self._row(node).tolist())

    def neighbor_array(self, node: int) -> np.ndarray:
        """Outbound neighbour ids of node as a sorted int array."""
        return np.sort(self._row(node))

    def has_edge(self, src: int, dst: int) -> bool:
        return bool(np.any(self._row(src) == dst))

    def for_each_node(self, visitor: Callable[[int, frozenset[int]], None]) -> None:
        """Call visitor(node, neighbors) once per node, in ascending id order."""
        for node in range(self.n):
            visitor(node, self.neighbors(node))

    def reachability(self, start: int, max_hops: int) -> dict[int, int]:
        """Minimum hop distance to every node reachable within max_hops.

        The start node is included at distance 0. Entries are ordered by
        distance, then by node id.

        Args:
            start: Node the traversal begins at.
            max_hops: Largest hop count still considered reachable.

        Returns:
            Dict mapping node id -> hop distance.
        """
        if not 0 <= start < self.n:
            raise ValueError(f"start node {start} outside [0, {self.n})")
        dist = shortest_path(
            self.adjacency, directed=True, unweighted=True, indices=start
        )
        within = np.flatnonzero(dist <= max_hops)
        order = np.lexsort((within, dist[within]))
        return {int(within[i]): int(dist[within[i]]) for i in order}
