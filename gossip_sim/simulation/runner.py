"""Run several peer-selection policies over one graph and collect round counts."""

import logging

import numpy as np

from gossip_sim.config.experiment import ExperimentConfig
from gossip_sim.graph.types import GraphData
from gossip_sim.simulation.engine import run_gossip
from gossip_sim.simulation.ledger import FailureLedger
from gossip_sim.simulation.policies import SelectionContext, get_policy
from gossip_sim.simulation.popularity import build_popularity_index
from gossip_sim.simulation.types import DatumState, GossipResult

log = logging.getLogger(__name__)


def run_policy_comparison(
    graph: GraphData,
    policies: tuple[str, ...] | list[str],
    rng: np.random.Generator,
    failures: FailureLedger | None = None,
    carry_failure_history: bool = True,
    max_rounds: int | None = None,
    origin: int = 0,
) -> list[GossipResult]:
    """Gossip from origin once per policy, in order, over the same graph.

    Runs are numbered 1, 2, ... in policy order; each starts from fresh
    has-datum flags. The popularity index is built once up front.

    With carry_failure_history=True every run reads and extends the same
    failure ledger (the one passed in, or a new one), so later adaptive
    policies inherit the failures recorded by earlier ones. With False each
    run gets its own empty ledger and the passed ledger is left untouched.

    Args:
        graph: Topology shared by all runs.
        policies: Policy names from gossip_sim.simulation.policies.POLICIES.
        rng: Random source shared by all runs, consumed in run order.
        failures: Caller-owned failure ledger to carry forward.
        carry_failure_history: Share one ledger across runs.
        max_rounds: Per-run round cap, or None.
        origin: Node that holds the datum before round 1.

    Returns:
        One GossipResult per policy, in the given order.
    """
    popularity = build_popularity_index(graph)
    datum = DatumState(graph.n)
    shared = failures if failures is not None else FailureLedger()
    results: list[GossipResult] = []

    for run_id, name in enumerate(policies, start=1):
        policy = get_policy(name)
        ledger = shared if carry_failure_history else FailureLedger()
        ctx = SelectionContext(
            graph=graph, rng=rng, failures=ledger, popularity=popularity
        )
        result = run_gossip(
            graph,
            policy,
            ctx,
            datum,
            run_id,
            origin=origin,
            max_rounds=max_rounds,
            policy_name=name,
        )
        log.info(
            "Policy %s: %d rounds (ledger holds %d pairs)",
            name,
            result.rounds,
            len(ledger),
        )
        results.append(result)

    return results


def run_experiment_simulation(
    graph: GraphData,
    config: ExperimentConfig,
    rng: np.random.Generator,
    failures: FailureLedger | None = None,
) -> list[GossipResult]:
    """run_policy_comparison with every knob taken from config."""
    return run_policy_comparison(
        graph,
        config.simulation.policies,
        rng,
        failures=failures,
        carry_failure_history=config.simulation.carry_failure_history,
        max_rounds=config.simulation.max_rounds,
        origin=config.graph.origin,
    )
