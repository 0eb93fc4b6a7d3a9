"""Tests for the result schema validation, writing, and experiment ID generation."""

import json
import re
from pathlib import Path

import numpy as np
import pytest

from gossip_sim.config import ANCHOR_CONFIG
from gossip_sim.results import (
    build_metrics,
    generate_experiment_id,
    load_result,
    validate_result,
    write_result,
)
from gossip_sim.simulation.types import GossipResult


@pytest.fixture
def policy_results() -> list[GossipResult]:
    return [
        GossipResult(policy="random_node", run_id=1, rounds=40, attempts=900,
                     deliveries=30, failed_attempts=870, coverage=[1, 2, 3]),
        GossipResult(policy="random_neighbor", run_id=2, rounds=9, attempts=300,
                     deliveries=300, coverage=[2, 3]),
    ]


class TestBuildMetrics:
    """build_metrics lays out scalars, per-policy counters and connectivity."""

    def test_scalars(self, policy_results):
        metrics = build_metrics(policy_results, {0: 1, 1: 2})
        assert metrics["scalars"] == {"rounds.random_node": 40, "rounds.random_neighbor": 9}

    def test_policy_blocks_omit_coverage(self, policy_results):
        metrics = build_metrics(policy_results, {0: 1})
        block = metrics["policies"]["random_node"]
        assert block["failed_attempts"] == 870
        assert "coverage" not in block

    def test_rejects_repeated_policy(self, policy_results):
        repeat = GossipResult(policy="random_node", run_id=3, rounds=12, coverage=[3])
        with pytest.raises(ValueError, match="Duplicate policy"):
            build_metrics(policy_results + [repeat], {0: 1})

    def test_connectivity_keys_are_strings(self, policy_results):
        metrics = build_metrics(policy_results, {0: 1, 3: 7})
        assert metrics["connectivity"] == {"0": 1, "3": 7}


class TestValidateResult:
    """validate_result accepts valid dicts and rejects invalid ones."""

    @pytest.fixture
    def valid_result(self, policy_results):
        return {
            "schema_version": "1.0",
            "experiment_id": "n100_e200_h10_s42_20261019_120000",
            "timestamp": "2026-10-19T12:00:00+00:00",
            "description": "test experiment",
            "tags": ["test"],
            "config": {"graph": {"n": 100}},
            "metrics": build_metrics(policy_results, {0: 1}),
        }

    def test_validate_result_valid(self, valid_result):
        assert validate_result(valid_result) == []

    def test_validate_result_missing_fields(self):
        errors = validate_result({"schema_version": "1.0"})
        assert any("Missing required" in e for e in errors)

    def test_validate_result_missing_scalars(self, valid_result):
        valid_result["metrics"] = {"policies": {}}
        errors = validate_result(valid_result)
        assert any("scalars" in e for e in errors)

    def test_validate_result_bad_schema_version_type(self, valid_result):
        valid_result["schema_version"] = 1.0
        assert any("schema_version" in e for e in validate_result(valid_result))

    def test_validate_result_bad_tags_type(self, valid_result):
        valid_result["tags"] = "not-a-list"
        assert any("tags" in e for e in validate_result(valid_result))

    def test_validate_result_bad_timestamp(self, valid_result):
        valid_result["timestamp"] = "yesterday"
        assert any("ISO 8601" in e for e in validate_result(valid_result))

    def test_validate_result_negative_counter(self, valid_result):
        valid_result["metrics"]["policies"]["random_node"]["skipped"] = -1
        assert any("skipped" in e for e in validate_result(valid_result))

    def test_validate_result_rounds_mismatch(self, valid_result):
        valid_result["metrics"]["scalars"]["rounds.random_node"] = 41
        assert any("disagrees" in e for e in validate_result(valid_result))


class TestGenerateExperimentId:
    """Experiment ID follows the scannable slug format."""

    def test_format(self):
        experiment_id = generate_experiment_id(ANCHOR_CONFIG)
        assert re.fullmatch(r"n100_e200_h10_s42_\d{8}_\d{6}", experiment_id)


class TestWriteResult:
    """write_result produces a loadable result directory."""

    def test_write_and_load(self, tmp_path: Path, policy_results):
        metrics = build_metrics(policy_results, {0: 1, 1: 99})
        experiment_id = write_result(
            ANCHOR_CONFIG,
            metrics,
            metadata={"graph_attempt": 0},
            coverage={r.policy: r.coverage for r in policy_results},
            results_dir=str(tmp_path),
        )
        out_dir = tmp_path / experiment_id
        loaded = load_result(out_dir / "result.json")
        assert loaded["metrics"]["scalars"]["rounds.random_neighbor"] == 9
        assert loaded["metadata"]["seed"] == 42
        assert loaded["metadata"]["graph_attempt"] == 0
        assert loaded["config"]["graph"]["n_edges"] == 200

        with np.load(out_dir / "coverage.npz") as npz:
            assert npz["random_node"].tolist() == [1, 2, 3]

    def test_write_rejects_invalid_metrics(self, tmp_path: Path):
        with pytest.raises(ValueError, match="validation failed"):
            write_result(ANCHOR_CONFIG, {"policies": {}}, results_dir=str(tmp_path))

    def test_load_rejects_invalid_file(self, tmp_path: Path):
        path = tmp_path / "result.json"
        path.write_text(json.dumps({"schema_version": "1.0"}))
        with pytest.raises(ValueError, match="Invalid result file"):
            load_result(path)
