"""Tests for the configuration-model and regular graph builders."""

import numpy as np
import pytest

from netbuild.config import ConfigModelConfig, RegularGraphConfig
from netbuild.errors import InvalidRequestError
from netbuild.generators import (
    config_model,
    directed_config_model,
    plan_regular_graph,
    random_graph,
    regular_graph,
)
from netbuild.network import Network, degree_distribution, degrees, to_adjacency
from netbuild.reproducibility import make_rng


class TestConfigModel:
    """Degree sequences are realized exactly from the partitioned counts."""

    def test_documented_example(self) -> None:
        net = Network(1000, 2000, rng=42)
        config_model(net, ConfigModelConfig(degreedist=(0.5, 0.25, 0.25), N=200))
        assert net.node_count() == 200
        assert net.link_count() == 175
        np.testing.assert_allclose(degree_distribution(net), [0.5, 0.25, 0.25])

    def test_partial_mass(self) -> None:
        net = Network(1000, 2000, rng=42)
        config_model(net, ConfigModelConfig(degreedist=(0.5, 0.25), N=200))
        assert net.node_count() == 200
        assert net.link_count() == 100
        np.testing.assert_allclose(degree_distribution(net), [0.5, 0.25])

    def test_odd_stub_total_rounds_down(self) -> None:
        net = Network(10, 10, rng=0)
        config_model(net, ConfigModelConfig(degreedist=(1.0,), N=3))
        assert net.link_count() == 1

    def test_list_distribution_is_accepted(self) -> None:
        config = ConfigModelConfig(degreedist=[0.0, 1.0], N=10)
        assert config.degreedist == (0.0, 1.0)
        net = Network(10, 10, rng=0)
        config_model(net, config)
        assert degrees(net).tolist() == [2] * 10

    def test_state(self) -> None:
        net = Network(100, 100, n_states=3, rng=0)
        config_model(net, ConfigModelConfig(degreedist=(1.0,), N=20, S=2))
        assert net.state_count(2) == 20

    def test_failed_request_leaves_net_untouched(self) -> None:
        net = Network(100, 20, rng=0)
        random_graph(net)
        with pytest.raises(InvalidRequestError):
            config_model(net, ConfigModelConfig(degreedist=(0.0, 0.0, 1.0), N=100))
        assert net.node_count() == 100
        assert net.link_count() == 20

    def test_reproducible_with_seed(self) -> None:
        adjs = []
        for _ in range(2):
            net = Network(500, 1000)
            config_model(net, ConfigModelConfig(degreedist=(0.2, 0.3, 0.5), N=500), rng=make_rng(9))
            adjs.append(to_adjacency(net))
        assert (adjs[0] != adjs[1]).nnz == 0


class TestRegularGraph:
    """Every node gets the same degree; impossible requests are rejected."""

    def test_documented_example(self) -> None:
        net = Network(1000, 2000, rng=42)
        regular_graph(net, RegularGraphConfig(deg=4))
        assert net.node_count() == 1000
        assert net.link_count() == 2000
        deg = degrees(net)
        assert deg.sum() == 4000
        assert (deg == 4).all()
        np.testing.assert_allclose(degree_distribution(net), [0.0, 0.0, 0.0, 1.0])

    def test_odd_degree_odd_nodes(self) -> None:
        net = Network(1000, 2000)
        with pytest.raises(InvalidRequestError, match="odd node degree"):
            regular_graph(net, RegularGraphConfig(deg=3, N=999))

    def test_odd_degree_even_nodes(self) -> None:
        net = Network(1000, 2000, rng=1)
        regular_graph(net, RegularGraphConfig(deg=3, N=100))
        assert net.link_count() == 150
        assert (degrees(net) == 3).all()

    def test_zero_degree(self) -> None:
        net = Network(10, 10)
        regular_graph(net, RegularGraphConfig(deg=0))
        assert net.node_count() == 10
        assert net.link_count() == 0

    def test_integral_float_degree(self) -> None:
        plan = plan_regular_graph(Network(10, 100), RegularGraphConfig(deg=4.0, N=10))
        assert plan.deg == 4
        assert plan.n_links == 20

    def test_non_integer_degree(self) -> None:
        with pytest.raises(InvalidRequestError, match="integer"):
            plan_regular_graph(Network(10, 100), RegularGraphConfig(deg=2.5))

    def test_negative_degree(self) -> None:
        with pytest.raises(InvalidRequestError, match="non-negative"):
            plan_regular_graph(Network(10, 100), RegularGraphConfig(deg=-2))

    def test_no_nodes(self) -> None:
        with pytest.raises(InvalidRequestError, match="positive"):
            plan_regular_graph(Network(10, 100), RegularGraphConfig(deg=2, N=0))

    def test_link_capacity(self) -> None:
        with pytest.raises(InvalidRequestError, match="links exceed"):
            plan_regular_graph(Network(100, 100), RegularGraphConfig(deg=4, N=100))

    def test_node_capacity(self) -> None:
        with pytest.raises(InvalidRequestError, match="nodes exceed"):
            plan_regular_graph(Network(100, 1000), RegularGraphConfig(deg=2, N=101))

    def test_repeated_builds_keep_counts(self) -> None:
        net = Network(200, 400, rng=3)
        for _ in range(2):
            regular_graph(net, RegularGraphConfig(deg=4))
            assert net.node_count() == 200
            assert net.link_count() == 400
            assert (degrees(net) == 4).all()


class TestDirectedConfigModel:
    """The directed variant is an explicit, unimplemented capability."""

    def test_not_implemented(self) -> None:
        net = Network(100, 100)
        with pytest.raises(NotImplementedError):
            directed_config_model(net, [0.5, 0.5], N=10)
        assert net.node_count() == 0

    def test_invalid_arguments_reported_first(self) -> None:
        with pytest.raises(InvalidRequestError):
            directed_config_model(Network(100, 100), [2.0], N=10)
