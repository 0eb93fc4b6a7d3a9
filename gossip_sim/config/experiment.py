"""Experiment configuration dataclasses, all frozen and slotted for immutability."""

from dataclasses import dataclass, field

# Names must match gossip_sim.simulation.policies.POLICIES. Kept here as plain
# strings so config validation does not import the simulation package.
KNOWN_POLICIES = (
    "random_node",
    "random_neighbor",
    "failure_weighted_node",
    "popularity_weighted_node",
)


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """Random directed graph parameters."""

    n: int = 100  # number of nodes
    n_edges: int = 200  # directed edges (2% of full connectivity at n=100)
    max_hops: int = 10  # origin must reach every node within this many hops
    origin: int = 0  # node that holds the datum at round 0
    spanning: bool = True  # seed edges with a spanning arborescence from origin


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Gossip round engine parameters."""

    policies: tuple[str, ...] = KNOWN_POLICIES
    max_rounds: int | None = 10_000  # None disables the round cap
    carry_failure_history: bool = True  # share one failure ledger across runs


@dataclass(frozen=True, slots=True)
class ExperimentConfig:
    """Top-level experiment configuration composing all sub-configs.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations early.
    """

    graph: GraphConfig = field(default_factory=GraphConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        n = self.graph.n
        if n < 1:
            raise ValueError(f"n must be >= 1, got {n}")
        if not 0 <= self.graph.origin < n:
            raise ValueError(
                f"origin ({self.graph.origin}) must be in [0, {n})"
            )
        max_edges = n * (n - 1)
        min_edges = n - 1 if self.graph.spanning else 0
        if not min_edges <= self.graph.n_edges <= max_edges:
            raise ValueError(
                f"n_edges ({self.graph.n_edges}) must be in "
                f"[{min_edges}, {max_edges}] for n={n}"
            )
        if self.graph.max_hops < 1:
            raise ValueError(
                f"max_hops must be >= 1, got {self.graph.max_hops}"
            )
        if not self.simulation.policies:
            raise ValueError("at least one policy must be configured")
        unknown = [p for p in self.simulation.policies if p not in KNOWN_POLICIES]
        if unknown:
            raise ValueError(
                f"unknown policies {unknown}; expected any of {list(KNOWN_POLICIES)}"
            )
        repeated = sorted(
            {p for p in self.simulation.policies if self.simulation.policies.count(p) > 1}
        )
        if repeated:
            raise ValueError(
                f"policies must be unique, got repeated {repeated}"
            )
        if self.simulation.max_rounds is not None and self.simulation.max_rounds < 1:
            raise ValueError(
                f"max_rounds must be >= 1 or None, got {self.simulation.max_rounds}"
            )
