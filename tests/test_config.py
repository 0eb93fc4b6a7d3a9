"""Tests for the experiment configuration system."""

import json
import re

import pytest
from dataclasses import FrozenInstanceError, replace

from gossip_sim.config import (
    ExperimentConfig,
    GraphConfig,
    SimulationConfig,
    KNOWN_POLICIES,
    ANCHOR_CONFIG,
    config_hash,
    graph_config_hash,
    full_config_hash,
    config_to_json,
    config_from_json,
)
from gossip_sim.simulation.policies import POLICIES


class TestAnchorConfigDefaults:
    """ANCHOR_CONFIG has correct locked values."""

    def test_anchor_config_defaults(self):
        assert ANCHOR_CONFIG.graph.n == 100
        assert ANCHOR_CONFIG.graph.n_edges == 200
        assert ANCHOR_CONFIG.graph.max_hops == 10
        assert ANCHOR_CONFIG.graph.origin == 0
        assert ANCHOR_CONFIG.graph.spanning is True
        assert ANCHOR_CONFIG.simulation.max_rounds == 10_000
        assert ANCHOR_CONFIG.simulation.carry_failure_history is True
        assert ANCHOR_CONFIG.seed == 42

    def test_anchor_runs_every_policy(self):
        assert ANCHOR_CONFIG.simulation.policies == KNOWN_POLICIES

    def test_known_policies_match_registry(self):
        assert set(KNOWN_POLICIES) == set(POLICIES)


class TestConfigImmutability:
    """Frozen dataclasses prevent mutation."""

    def test_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.seed = 99  # type: ignore[misc]

    def test_graph_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.graph.n = 1000  # type: ignore[misc]

    def test_simulation_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.simulation.max_rounds = 5  # type: ignore[misc]


class TestConfigValidation:
    """__post_init__ rejects inconsistent parameter combinations."""

    def test_rejects_empty_graph(self):
        with pytest.raises(ValueError, match="n must be >= 1"):
            ExperimentConfig(graph=GraphConfig(n=0, n_edges=0))

    def test_rejects_origin_out_of_range(self):
        with pytest.raises(ValueError, match="origin"):
            ExperimentConfig(graph=GraphConfig(n=10, n_edges=20, origin=10))

    def test_rejects_too_many_edges(self):
        with pytest.raises(ValueError, match="n_edges"):
            ExperimentConfig(graph=GraphConfig(n=5, n_edges=21))

    def test_rejects_too_few_edges_for_spanning(self):
        with pytest.raises(ValueError, match="n_edges"):
            ExperimentConfig(graph=GraphConfig(n=10, n_edges=8))

    def test_allows_sparse_graph_without_spanning(self):
        config = ExperimentConfig(graph=GraphConfig(n=10, n_edges=3, spanning=False))
        assert config.graph.n_edges == 3

    def test_rejects_unknown_policy(self):
        with pytest.raises(ValueError, match="unknown policies"):
            ExperimentConfig(simulation=SimulationConfig(policies=("round_robin",)))

    def test_rejects_repeated_policy(self):
        with pytest.raises(ValueError, match=r"repeated \['failure_weighted_node'\]"):
            ExperimentConfig(
                simulation=SimulationConfig(
                    policies=("failure_weighted_node", "random_node", "failure_weighted_node")
                )
            )

    def test_rejects_empty_policy_list(self):
        with pytest.raises(ValueError, match="at least one policy"):
            ExperimentConfig(simulation=SimulationConfig(policies=()))

    def test_rejects_non_positive_round_cap(self):
        with pytest.raises(ValueError, match="max_rounds"):
            ExperimentConfig(simulation=SimulationConfig(max_rounds=0))

    def test_round_cap_can_be_disabled(self):
        config = ExperimentConfig(simulation=SimulationConfig(max_rounds=None))
        assert config.simulation.max_rounds is None

    def test_rejects_zero_hop_bound(self):
        with pytest.raises(ValueError, match="max_hops"):
            ExperimentConfig(graph=GraphConfig(max_hops=0))


class TestConfigHashing:
    """Hashes are deterministic and scoped correctly."""

    def test_hash_is_deterministic(self):
        assert full_config_hash(ANCHOR_CONFIG) == full_config_hash(ExperimentConfig())

    def test_hash_format(self):
        assert re.fullmatch(r"[0-9a-f]{16}", config_hash(ANCHOR_CONFIG))

    def test_full_hash_changes_with_seed(self):
        other = replace(ANCHOR_CONFIG, seed=7)
        assert full_config_hash(ANCHOR_CONFIG) != full_config_hash(other)

    def test_graph_hash_ignores_seed_and_simulation(self):
        other = replace(
            ANCHOR_CONFIG,
            seed=7,
            simulation=SimulationConfig(policies=("random_node",)),
        )
        assert graph_config_hash(ANCHOR_CONFIG) == graph_config_hash(other)

    def test_graph_hash_changes_with_edges(self):
        other = replace(ANCHOR_CONFIG, graph=GraphConfig(n_edges=300))
        assert graph_config_hash(ANCHOR_CONFIG) != graph_config_hash(other)

    def test_exclude_fields(self):
        other = replace(ANCHOR_CONFIG, seed=7)
        assert config_hash(ANCHOR_CONFIG, ["seed"]) == config_hash(other, ["seed"])

    def test_exclude_nested_field(self):
        other = replace(ANCHOR_CONFIG, simulation=SimulationConfig(max_rounds=50))
        assert config_hash(ANCHOR_CONFIG, ["simulation.max_rounds"]) == config_hash(
            other, ["simulation.max_rounds"]
        )


class TestConfigSerialization:
    """JSON round-trip preserves configs and rejects schema drift."""

    def test_json_roundtrip(self):
        config = ExperimentConfig(
            graph=GraphConfig(n=20, n_edges=40, max_hops=6),
            simulation=SimulationConfig(
                policies=("random_neighbor", "failure_weighted_node"),
                max_rounds=None,
                carry_failure_history=False,
            ),
            seed=3,
            description="roundtrip",
            tags=("a", "b"),
        )
        assert config_from_json(config_to_json(config)) == config

    def test_json_is_sorted(self):
        data = json.loads(config_to_json(ANCHOR_CONFIG))
        assert list(data) == sorted(data)

    def test_partial_json_uses_defaults(self):
        config = config_from_json('{"seed": 5, "graph": {"n": 30, "n_edges": 60}}')
        assert config.seed == 5
        assert config.graph.n == 30
        assert config.graph.max_hops == 10
        assert config.simulation == SimulationConfig()

    def test_unknown_key_rejected(self):
        with pytest.raises(Exception):
            config_from_json('{"seed": 5, "fanout": 3}')

    def test_invalid_values_rejected(self):
        with pytest.raises(ValueError):
            config_from_json('{"graph": {"n": 5, "n_edges": 100}}')
