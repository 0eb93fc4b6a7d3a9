#!/usr/bin/env python3
"""Entry point for gossip dissemination experiments.

Chains all stages into a single executable command:
graph generation -> connectivity report -> policy runs -> result.json ->
figures.

Usage:
    python run_simulation.py
    python run_simulation.py --config config.json
    python run_simulation.py --config config.json --dry-run
    python run_simulation.py --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from gossip_sim.config import (
    ANCHOR_CONFIG,
    ExperimentConfig,
    config_from_json,
    full_config_hash,
    graph_config_hash,
)
from gossip_sim.results import generate_experiment_id

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(
    config: ExperimentConfig, results_dir: str = "results", render_figures: bool = True
) -> Path:
    """Execute the full experiment.

    Args:
        config: Experiment configuration.
        results_dir: Base directory for results output.
        render_figures: Render PNG/SVG figures after writing result.json.

    Returns:
        Path to the output directory.
    """
    from gossip_sim.graph import format_connectivity, generate_connected_graph, hop_histogram
    from gossip_sim.reproducibility import set_seed, spawn_generators
    from gossip_sim.results import build_metrics, write_result
    from gossip_sim.simulation import POLICY_LABELS, run_experiment_simulation

    pipeline_start = time.monotonic()
    set_seed(config.seed)
    streams = spawn_generators(config.seed, ("simulation",))

    with stage_timer("Graph Generation"):
        graph = generate_connected_graph(config)
        reachable = graph.reachability(config.graph.origin, config.graph.max_hops)
        histogram = hop_histogram(reachable)
        print(
            f"Graph generated, connectivity from node #{config.graph.origin}...\n"
            + format_connectivity(histogram)
        )

    with stage_timer("Gossip Simulation"):
        results = run_experiment_simulation(graph, config, streams["simulation"])
        print("A datum was gossiped across the network, starting from "
              f"node #{config.graph.origin}, using...")
        width = max(len(POLICY_LABELS.get(r.policy, r.policy)) for r in results) + 1
        for r in results:
            label = POLICY_LABELS.get(r.policy, r.policy) + ":"
            print(f"{label:<{width + 1}} {r.rounds} rounds")

    with stage_timer("Write Result"):
        experiment_id = write_result(
            config,
            build_metrics(results, histogram),
            metadata={
                "graph_generation_seed": graph.generation_seed,
                "graph_attempt": graph.attempt,
                "n_edges": graph.n_edges,
            },
            coverage={r.policy: r.coverage for r in results},
            results_dir=results_dir,
        )
        output_dir = Path(results_dir) / experiment_id
        log.info("result.json written to %s", output_dir)

    figures: list[Path] = []
    if render_figures:
        from gossip_sim.visualization import render_all

        with stage_timer("Visualization"):
            figures = render_all(output_dir)
            log.info("Generated %d figure files", len(figures))

    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Simulation complete in {total_elapsed:.1f}s")
    print(f"  Experiment: {experiment_id}")
    print(f"  Output:     {output_dir}")
    print(f"  Result:     {output_dir / 'result.json'}")
    print(f"  Figures:    {len(figures)} files")
    print(f"{'=' * 60}")

    return output_dir


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compare gossip peer-selection policies on a random graph"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to experiment config JSON file (defaults to the anchor config)",
    )
    parser.add_argument(
        "--results-dir",
        type=str,
        default="results",
        help="Base directory for result output",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the experiment plan without running it",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip figure rendering",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is None:
        config = ANCHOR_CONFIG
    else:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        config = config_from_json(config_path.read_text())

    experiment_id = generate_experiment_id(config)
    print(f"Experiment ID: {experiment_id}")
    print(f"Config hash:   {full_config_hash(config)}")
    print(f"Graph hash:    {graph_config_hash(config)}")
    print()
    print(f"Graph:      n={config.graph.n}, edges={config.graph.n_edges}, "
          f"max_hops={config.graph.max_hops}, origin={config.graph.origin}")
    print(f"Simulation: policies={', '.join(config.simulation.policies)}")
    print(f"            max_rounds={config.simulation.max_rounds}, "
          f"carry_failure_history={config.simulation.carry_failure_history}")
    print(f"Seed:       {config.seed}")

    if args.dry_run:
        print(f"\nPlan for experiment {experiment_id}:")
        print(f"  1. Set seed: {config.seed}")
        print(f"  2. Graph generation: n={config.graph.n}, edges={config.graph.n_edges}, "
              f"retry until node #{config.graph.origin} reaches all within "
              f"{config.graph.max_hops} hops")
        for i, name in enumerate(config.simulation.policies, start=3):
            print(f"  {i}. Gossip run: {name}")
        print(f"\nOutput: {args.results_dir}/{experiment_id}/")
        print("  - result.json")
        print("  - coverage.npz")
        print("  - figures/ (PNG + SVG)")
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(
            config, results_dir=args.results_dir, render_figures=not args.no_plots
        )
    except Exception:
        log.exception("Simulation failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
