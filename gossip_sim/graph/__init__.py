"""Random directed graph generation and hop-bounded reachability."""

from gossip_sim.graph.random_graph import (
    GraphGenerationError,
    generate_connected_graph,
    generate_random_graph,
    sample_edges,
    sample_spanning_edges,
)
from gossip_sim.graph.types import GraphData
from gossip_sim.graph.validation import (
    format_connectivity,
    hop_histogram,
    validate_graph,
)

__all__ = [
    "GraphData",
    "GraphGenerationError",
    "format_connectivity",
    "generate_connected_graph",
    "generate_random_graph",
    "hop_histogram",
    "sample_edges",
    "sample_spanning_edges",
    "validate_graph",
]
