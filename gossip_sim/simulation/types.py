"""Simulation state and result containers for gossip dissemination runs."""

from dataclasses import dataclass, field

import numpy as np


class SimulationError(Exception):
    """Base class for gossip simulation failures."""


class RoundLimitExceededError(SimulationError):
    """Raised when a run hits its round cap without full dispersion.

    Almost always means a non-convergent topology: some node cannot be
    reached from the origin, so no policy can ever deliver to it.
    """

    def __init__(self, run_id: int, rounds: int, holders: int, n: int) -> None:
        self.run_id = run_id
        self.rounds = rounds
        self.holders = holders
        self.n = n
        super().__init__(
            f"Run {run_id} did not converge within {rounds} rounds "
            f"({holders}/{n} nodes hold the datum); non-convergent topology?"
        )


class DatumState:
    """Per-run has-datum flags, keyed by an explicit run id.

    Several runs can share one graph without seeing each other's flags.
    A flag set true is never unset for the lifetime of its run.
    """

    def __init__(self, n: int) -> None:
        self.n = n
        self._runs: dict[int, np.ndarray] = {}

    def start_run(self, run_id: int, origin: int = 0) -> None:
        if run_id in self._runs:
            raise ValueError(f"run {run_id} is already active")
        if not 0 <= origin < self.n:
            raise ValueError(f"origin {origin} outside [0, {self.n})")
        flags = np.zeros(self.n, dtype=bool)
        flags[origin] = True
        self._runs[run_id] = flags

    def end_run(self, run_id: int) -> None:
        self._runs.pop(run_id, None)

    def active_runs(self) -> list[int]:
        return sorted(self._runs)

    def has_datum(self, run_id: int, node: int) -> bool:
        return bool(self._runs[run_id][node])

    def deliver(self, run_id: int, node: int) -> bool:
        """Set node's flag for run_id. Returns True if the node was new."""
        flags = self._runs[run_id]
        was_new = not flags[node]
        flags[node] = True
        return was_new

    def holders(self, run_id: int) -> np.ndarray:
        """Ascending ids of nodes holding the datum (a snapshot copy)."""
        return np.flatnonzero(self._runs[run_id])

    def count(self, run_id: int) -> int:
        return int(self._runs[run_id].sum())

    def is_dispersed(self, run_id: int) -> bool:
        return bool(self._runs[run_id].all())


@dataclass
class GossipResult:
    """Outcome of one policy run over one graph.

    attempts counts every policy invocation; deliveries counts contacts that
    hit a real edge (including redundant ones to nodes that already held
    the datum); failed_attempts counts contacts with no edge; skipped counts
    rounds where the policy had no candidate to offer.
    """

    policy: str
    run_id: int
    rounds: int
    attempts: int = 0
    deliveries: int = 0
    failed_attempts: int = 0
    skipped: int = 0
    coverage: list[int] = field(default_factory=list)  # holders after each round

    def to_dict(self) -> dict:
        return {
            "policy": self.policy,
            "run_id": self.run_id,
            "rounds": self.rounds,
            "attempts": self.attempts,
            "deliveries": self.deliveries,
            "failed_attempts": self.failed_attempts,
            "skipped": self.skipped,
            "coverage": list(self.coverage),
        }
