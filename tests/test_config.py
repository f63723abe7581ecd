"""Tests for the generator configuration system."""

import json
from dataclasses import FrozenInstanceError

import pytest

from netbuild.config import (
    ConfigModelConfig,
    GeometricConfig,
    LatticeConfig,
    NetworkConfig,
    RandomGraphConfig,
    TopologyRequest,
    config_from_dict,
    config_from_json,
    config_to_json,
    params_from_dict,
)
from netbuild.errors import InvalidRequestError


class TestDefaults:
    """Documented defaults of the per-generator configs."""

    def test_random_graph_defaults(self):
        config = RandomGraphConfig()
        assert config.N is None
        assert config.K is None
        assert config.S == 1

    def test_geometric_defaults(self):
        config = GeometricConfig()
        assert config.dim == 2
        assert config.deg == 2.0

    def test_lattice_defaults(self):
        config = LatticeConfig()
        assert config.dims == 1
        assert config.periodic is False


class TestConfigImmutability:
    """Frozen dataclasses prevent mutation."""

    def test_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            RandomGraphConfig().N = 10  # type: ignore[misc]

    def test_lists_become_tuples(self):
        config = LatticeConfig(dims=[2, 3], periodic=[True, False])
        assert config.dims == (2, 3)
        assert config.periodic == (True, False)
        assert hash(config) == hash(LatticeConfig(dims=(2, 3), periodic=(True, False)))


class TestParamsFromDict:
    """Per-model params are checked by dacite."""

    def test_lattice_lists_cast_to_tuples(self):
        config = params_from_dict(
            "lattice", {"dims": [10, 20, 10], "periodic": [True, False, True]}
        )
        assert config == LatticeConfig(dims=(10, 20, 10), periodic=(True, False, True))

    def test_int_cast_to_float(self):
        config = params_from_dict("geometric", {"deg": 3, "dim": 3})
        assert config.deg == 3.0
        assert isinstance(config.deg, float)

    def test_degreedist(self):
        config = params_from_dict("config_model", {"degreedist": [0.5, 0.5], "N": 10})
        assert config == ConfigModelConfig(degreedist=(0.5, 0.5), N=10)

    def test_unknown_model(self):
        with pytest.raises(InvalidRequestError, match="Unknown model"):
            params_from_dict("smallworld", {})

    def test_unknown_key(self):
        with pytest.raises(InvalidRequestError, match="Invalid params"):
            params_from_dict("random", {"M": 5})

    def test_wrong_type(self):
        with pytest.raises(InvalidRequestError, match="Invalid params"):
            params_from_dict("random", {"N": "many"})


class TestRequestRoundTrip:
    """JSON serialization round-trip preserves identity."""

    def test_round_trip(self):
        request = TopologyRequest(
            network=NetworkConfig(max_nodes=2000, max_links=6000, seed=42),
            model="lattice",
            params={"dims": [10, 20, 10], "periodic": [True, False, True]},
        )
        restored = config_from_json(config_to_json(request))
        assert restored == request

    def test_matrix_round_trip(self):
        request = TopologyRequest(
            network=NetworkConfig(max_nodes=3, max_links=3),
            model="adjacency",
            matrix=((0.0, 1.0), (1.0, 0.0)),
        )
        assert config_from_json(config_to_json(request)) == request

    def test_json_is_sorted(self):
        request = TopologyRequest(network=NetworkConfig(10, 10), model="random")
        keys = list(json.loads(config_to_json(request)).keys())
        assert keys == sorted(keys)

    def test_bad_params_rejected_at_load(self):
        with pytest.raises(InvalidRequestError):
            config_from_dict(
                {
                    "network": {"max_nodes": 10, "max_links": 10},
                    "model": "regular",
                    "params": {"degree": 4},
                }
            )

    def test_missing_network(self):
        with pytest.raises(InvalidRequestError, match="Malformed"):
            config_from_dict({"model": "random"})
