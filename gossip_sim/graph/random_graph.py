"""Random directed graph generator with reachability validation and retry.

Graphs are drawn with a fixed number of distinct directed edges and no
self-loops. The gossip experiments need every node to be reachable from
the origin within a hop bound, so generation retries with an incremented
seed until a draw passes validation.
"""

import logging

import numpy as np
import scipy.sparse

from gossip_sim.config.experiment import ExperimentConfig
from gossip_sim.graph.types import GraphData
from gossip_sim.graph.validation import validate_graph

log = logging.getLogger(__name__)


class GraphGenerationError(Exception):
    """Raised when graph generation fails after all retry attempts."""


def sample_spanning_edges(
    n: int, root: int, rng: np.random.Generator
) -> tuple[np.ndarray, np.ndarray]:
    """Sample a random spanning arborescence rooted at root.

    Nodes are visited in a random order with the root first; each later
    node gets exactly one inbound edge from a uniformly chosen earlier node,
    so every node is reachable from the root.

    Returns:
        (src, dst) int arrays of length n - 1.
    """
    others = rng.permutation(np.delete(np.arange(n), root))
    order = np.concatenate(([root], others))
    # Position k (k >= 1) attaches to a uniform parent among positions [0, k)
    parent_pos = np.floor(rng.random(n - 1) * np.arange(1, n)).astype(np.int64)
    return order[parent_pos], order[1:]


def sample_edges(
    n: int,
    n_edges: int,
    rng: np.random.Generator,
    exclude: np.ndarray | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Sample n_edges distinct directed edges uniformly, without self-loops.

    Args:
        n: Number of nodes.
        n_edges: Number of edges to draw.
        rng: numpy random Generator for reproducibility.
        exclude: Flat edge indices (src * n + dst) that must not be drawn.

    Returns:
        (src, dst) int arrays of length n_edges.
    """
    flat = np.arange(n * n, dtype=np.int64)
    free = flat[flat // n != flat % n]
    if exclude is not None and exclude.size:
        free = np.setdiff1d(free, exclude, assume_unique=True)
    if n_edges > free.size:
        raise ValueError(
            f"cannot place {n_edges} edges: only {free.size} free node pairs"
        )
    chosen = np.sort(rng.choice(free, size=n_edges, replace=False))
    return chosen // n, chosen % n


def generate_random_graph(
    n: int,
    n_edges: int,
    rng: np.random.Generator,
    spanning_from: int | None = 0,
    generation_seed: int = -1,
    attempt: int = 0,
) -> GraphData:
    """Draw a directed graph with exactly n_edges edges.

    With spanning_from set, the first n - 1 edges form a random spanning
    arborescence rooted at that node and the remaining edges are placed
    uniformly among the other node pairs. With spanning_from=None all edges
    are uniform and nothing guarantees connectivity.

    Args:
        n: Number of nodes.
        n_edges: Total number of directed edges.
        rng: numpy random Generator for reproducibility.
        spanning_from: Root of the spanning arborescence, or None.
        generation_seed: Provenance recorded on the returned GraphData.
        attempt: Provenance recorded on the returned GraphData.

    Returns:
        GraphData holding the sampled adjacency.

    Raises:
        ValueError: If n_edges cannot be placed on n nodes.
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    max_edges = n * (n - 1)
    min_edges = 0 if spanning_from is None else n - 1
    if not min_edges <= n_edges <= max_edges:
        raise ValueError(
            f"n_edges ({n_edges}) must be in [{min_edges}, {max_edges}] for n={n}"
        )

    if spanning_from is None:
        src, dst = sample_edges(n, n_edges, rng)
    else:
        if not 0 <= spanning_from < n:
            raise ValueError(f"spanning_from ({spanning_from}) outside [0, {n})")
        tree_src, tree_dst = sample_spanning_edges(n, spanning_from, rng)
        extra_src, extra_dst = sample_edges(
            n, n_edges - (n - 1), rng, exclude=np.sort(tree_src * n + tree_dst)
        )
        src = np.concatenate((tree_src, extra_src))
        dst = np.concatenate((tree_dst, extra_dst))

    adj = scipy.sparse.csr_matrix(
        (np.ones(src.size, dtype=np.int8), (src, dst)), shape=(n, n)
    )
    return GraphData(
        adjacency=adj,
        n=n,
        n_edges=int(adj.nnz),
        generation_seed=generation_seed,
        attempt=attempt,
    )


def generate_connected_graph(
    config: ExperimentConfig, max_retries: int = 100
) -> GraphData:
    """Generate a graph whose origin reaches every node within the hop bound.

    Implements the full generation pipeline:
    1. Seed a Generator with config.seed + attempt
    2. Draw the random graph
    3. Validate (self-loops, edge count, hop-bounded reachability)
    4. Retry with incremented seed on failure

    Args:
        config: Full experiment configuration.
        max_retries: Maximum generation attempts before raising error.

    Returns:
        GraphData containing the valid graph and metadata.

    Raises:
        GraphGenerationError: If no valid graph produced after max_retries.
    """
    g = config.graph
    spanning_from = g.origin if g.spanning else None
    last_errors: list[str] = []

    for attempt in range(max_retries):
        seed = config.seed + attempt
        rng = np.random.default_rng(seed)
        graph = generate_random_graph(
            g.n,
            g.n_edges,
            rng,
            spanning_from=spanning_from,
            generation_seed=seed,
            attempt=attempt,
        )

        errors = validate_graph(graph, g.origin, g.max_hops, expected_edges=g.n_edges)
        if not errors:
            log.info(
                "Graph generated successfully on attempt %d (n=%d, edges=%d)",
                attempt,
                graph.n,
                graph.n_edges,
            )
            return graph

        last_errors = errors
        log.warning(
            "Graph generation attempt %d failed: %s", attempt, "; ".join(errors)
        )

    raise GraphGenerationError(
        f"Failed to generate valid graph after {max_retries} attempts. "
        f"Last errors: {'; '.join(last_errors)}"
    )
