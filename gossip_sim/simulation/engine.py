"""Synchronous gossip round engine.

Each round, every node that held the datum at the start of the round asks
the active policy for one peer and, if an edge to that peer exists, hands
it the datum. Nodes reached during a round start sending in the next one.
Rounds repeat until every node holds the datum.
"""

import logging

from gossip_sim.graph.types import GraphData
from gossip_sim.simulation.policies import PeerPolicy, SelectionContext
from gossip_sim.simulation.types import DatumState, GossipResult, RoundLimitExceededError

log = logging.getLogger(__name__)


def gossip_round(
    graph: GraphData,
    policy: PeerPolicy,
    ctx: SelectionContext,
    datum: DatumState,
    run_id: int,
    result: GossipResult,
) -> int:
    """Execute one synchronous round and update result's counters in place.

    Returns:
        Number of nodes that newly received the datum this round.
    """
    # Snapshot before any delivery: new holders wait for the next round
    senders = datum.holders(run_id)
    newly_reached = 0

    for node in senders.tolist():
        peer = policy(node, ctx)
        result.attempts += 1
        if peer is None:
            result.skipped += 1
            continue
        if graph.has_edge(node, peer):
            result.deliveries += 1
            if datum.deliver(run_id, peer):
                newly_reached += 1
        else:
            result.failed_attempts += 1

    return newly_reached


def run_gossip(
    graph: GraphData,
    policy: PeerPolicy,
    ctx: SelectionContext,
    datum: DatumState,
    run_id: int,
    origin: int = 0,
    max_rounds: int | None = None,
    policy_name: str | None = None,
) -> GossipResult:
    """Gossip a datum from origin until every node holds it.

    Args:
        graph: Topology to gossip over.
        policy: Peer selection policy invoked once per sender per round.
        ctx: Selection context (rng, failure ledger, popularity index).
        datum: Per-run has-datum state; run_id must not be active yet.
        run_id: Identifier namespacing this run's has-datum flags.
        origin: Node that holds the datum before round 1.
        max_rounds: Round cap, or None to run until convergence.
        policy_name: Label stored on the result (defaults to the function name).

    Returns:
        GossipResult with the number of rounds to full dispersion.

    Raises:
        RoundLimitExceededError: If max_rounds rounds pass without convergence.
    """
    name = policy_name or getattr(policy, "__name__", repr(policy))
    result = GossipResult(policy=name, run_id=run_id, rounds=0)
    datum.start_run(run_id, origin)

    try:
        while not datum.is_dispersed(run_id):
            if max_rounds is not None and result.rounds >= max_rounds:
                raise RoundLimitExceededError(
                    run_id, result.rounds, datum.count(run_id), graph.n
                )
            newly_reached = gossip_round(graph, policy, ctx, datum, run_id, result)
            result.rounds += 1
            result.coverage.append(datum.count(run_id))
            log.debug(
                "Run %d (%s) round %d: +%d, %d/%d hold the datum",
                run_id,
                name,
                result.rounds,
                newly_reached,
                result.coverage[-1],
                graph.n,
            )
    finally:
        datum.end_run(run_id)

    log.info(
        "Run %d (%s) dispersed to %d nodes in %d rounds "
        "(%d attempts, %d failed, %d skipped)",
        run_id,
        name,
        graph.n,
        result.rounds,
        result.attempts,
        result.failed_attempts,
        result.skipped,
    )
    return result
