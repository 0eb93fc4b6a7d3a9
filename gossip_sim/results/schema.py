"""Result schema validation and writing.

Uses a Python validation function (not jsonschema) to check required fields,
types, and per-policy consistency before writing result.json files.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from gossip_sim.config.experiment import ExperimentConfig
from gossip_sim.config.hashing import full_config_hash, graph_config_hash
from gossip_sim.results.experiment_id import generate_experiment_id
from gossip_sim.simulation.types import GossipResult

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "experiment_id",
    "timestamp",
    "description",
    "tags",
    "config",
    "metrics",
}

POLICY_COUNTERS = ("rounds", "attempts", "deliveries", "failed_attempts", "skipped")


def build_metrics(
    results: list[GossipResult], histogram: dict[int, int]
) -> dict[str, Any]:
    """Assemble the metrics block from policy runs and the hop histogram.

    scalars maps "rounds.<policy>" to the round count; policies holds the
    full counters per policy; connectivity holds the hop histogram with
    string keys (JSON object keys).

    Raises:
        ValueError: If two results share a policy name.
    """
    names = [r.policy for r in results]
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate policy names in results: {names}")
    return {
        "scalars": {f"rounds.{r.policy}": r.rounds for r in results},
        "policies": {
            r.policy: {k: v for k, v in r.to_dict().items() if k != "coverage"}
            for r in results
        },
        "connectivity": {str(hops): count for hops, count in histogram.items()},
    }


def validate_result(result: dict[str, Any]) -> list[str]:
    """Validate a result dict against the project schema.

    Returns a list of error strings. An empty list means the result is valid.

    Checks:
    - All required top-level fields are present
    - schema_version is a string, tags a list, config a dict
    - timestamp parses as ISO 8601
    - metrics.scalars is present
    - every metrics.policies entry carries non-negative integer counters
      and its rounds agree with metrics.scalars
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in result and not isinstance(result["schema_version"], str):
        errors.append("schema_version must be a string")

    if "tags" in result and not isinstance(result["tags"], list):
        errors.append("tags must be a list")

    if "config" in result and not isinstance(result["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in result:
        ts = result["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    metrics = result.get("metrics")
    if "metrics" in result and not isinstance(metrics, dict):
        errors.append("metrics must be a dict")
        return errors
    if metrics is None:
        return errors

    scalars = metrics.get("scalars")
    if scalars is None:
        errors.append("metrics.scalars is required")
        scalars = {}

    policies = metrics.get("policies", {})
    if not isinstance(policies, dict):
        errors.append("metrics.policies must be a dict")
        policies = {}
    for name, block in policies.items():
        if not isinstance(block, dict):
            errors.append(f"metrics.policies.{name} must be a dict")
            continue
        for counter in POLICY_COUNTERS:
            value = block.get(counter)
            if not isinstance(value, int) or value < 0:
                errors.append(
                    f"metrics.policies.{name}.{counter} must be a non-negative int"
                )
        key = f"rounds.{name}"
        if key in scalars and scalars[key] != block.get("rounds"):
            errors.append(
                f"metrics.scalars.{key} ({scalars[key]}) disagrees with "
                f"metrics.policies.{name}.rounds ({block.get('rounds')})"
            )

    return errors


def write_result(
    config: ExperimentConfig,
    metrics: dict[str, Any],
    metadata: dict[str, Any] | None = None,
    coverage: dict[str, list[int]] | None = None,
    results_dir: str = "results",
) -> str:
    """Write result.json and optional coverage.npz.

    Creates a directory at results/{experiment_id}/ containing result.json
    and optionally coverage.npz holding the per-round holder counts of each
    policy run.

    Args:
        config: The experiment configuration.
        metrics: Metrics dict (must include 'scalars' key).
        metadata: Optional additional metadata to merge into the metadata block.
        coverage: Optional dict mapping policy name to holders-per-round.
        results_dir: Base directory for result output.

    Returns:
        The generated experiment_id string.

    Raises:
        ValueError: If the assembled result fails validation.
    """
    experiment_id = generate_experiment_id(config)
    out_dir = Path(results_dir) / experiment_id
    out_dir.mkdir(parents=True, exist_ok=True)

    result = {
        "schema_version": SCHEMA_VERSION,
        "experiment_id": experiment_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "metrics": metrics,
        "metadata": {
            "seed": config.seed,
            "config_hash": full_config_hash(config),
            "graph_config_hash": graph_config_hash(config),
            **(metadata or {}),
        },
    }

    errors = validate_result(result)
    if errors:
        raise ValueError(
            "Result validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    with open(out_dir / "result.json", "w") as f:
        json.dump(result, f, indent=2)

    if coverage:
        np.savez_compressed(
            str(out_dir / "coverage.npz"),
            **{name: np.asarray(curve, dtype=np.int64) for name, curve in coverage.items()},
        )

    return experiment_id


def load_result(result_path: str | Path) -> dict[str, Any]:
    """Load and validate a result.json file.

    Raises:
        ValueError: If the loaded result fails validation.
    """
    with open(result_path) as f:
        result = json.load(f)

    errors = validate_result(result)
    if errors:
        raise ValueError(
            f"Invalid result file {result_path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return result
