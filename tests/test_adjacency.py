"""Tests for importing topologies from adjacency matrices."""

import numpy as np
import pytest
import scipy.sparse

from netbuild.config import AdjacencyConfig
from netbuild.errors import CapacityError, InvalidRequestError
from netbuild.generators import from_adjacency, plan_from_adjacency, random_graph
from netbuild.network import Network, to_adjacency

PATH3 = [[0, 1, 0], [1, 0, 1], [0, 1, 0]]


class TestFromAdjacency:
    """Links follow the mat[i, j] = link from j to i convention."""

    def test_documented_example(self) -> None:
        net = Network(1000, 2000)
        from_adjacency(net, PATH3)
        assert net.node_count() == 3
        assert net.link_count() == 2

    def test_symmetric_pair_gives_one_link_from_upper_entry(self) -> None:
        net = Network(10, 10)
        from_adjacency(net, PATH3)
        endpoints = {net.link_endpoints(link) for link in net.links()}
        assert endpoints == {
            (net.node_at(2), net.node_at(1)),
            (net.node_at(3), net.node_at(2)),
        }

    def test_directed_matrix_round_trips(self) -> None:
        mat = np.array(
            [
                [0, 1, 0, 0],
                [0, 0, 0, 1],
                [1, 0, 0, 0],
                [0, 0, 1, 0],
            ]
        )
        net = Network(10, 10)
        from_adjacency(net, mat)
        assert net.link_count() == 4
        assert (to_adjacency(net).toarray() == mat).all()

    def test_bool_and_float_entries(self) -> None:
        net = Network(10, 10)
        from_adjacency(net, np.array([[False, True], [False, False]]))
        assert net.link_count() == 1
        from_adjacency(net, [[0.0, 0.5], [0.0, 0.0]])
        assert net.link_count() == 1

    def test_diagonal_is_ignored(self) -> None:
        net = Network(10, 10)
        from_adjacency(net, [[1, 0], [0, 1]])
        assert net.node_count() == 2
        assert net.link_count() == 0

    def test_sparse_matrix(self) -> None:
        net = Network(10, 10)
        from_adjacency(net, scipy.sparse.csr_matrix(np.array(PATH3)))
        assert net.link_count() == 2
        assert (to_adjacency(net).toarray() == np.array([[0, 1, 0], [0, 0, 1], [0, 0, 0]])).all()

    def test_state(self) -> None:
        net = Network(10, 10, n_states=3)
        from_adjacency(net, PATH3, AdjacencyConfig(S=2))
        assert net.state_count(2) == 3

    def test_empty_matrix(self) -> None:
        net = Network(10, 10)
        from_adjacency(net, np.zeros((0, 0)))
        assert net.node_count() == 0


class TestAdjacencyValidation:
    """Shape, entry type and capacity checks."""

    def test_rectangular(self) -> None:
        with pytest.raises(InvalidRequestError, match="square"):
            plan_from_adjacency(Network(10, 10), [[0, 1, 0], [1, 0, 1]])

    def test_ragged(self) -> None:
        with pytest.raises(InvalidRequestError, match="square"):
            plan_from_adjacency(Network(10, 10), [[0, 1], [1]])

    def test_string_entries(self) -> None:
        with pytest.raises(InvalidRequestError, match="convert"):
            plan_from_adjacency(Network(10, 10), [[0, "a"], [1, 0]])

    def test_none_entry(self) -> None:
        with pytest.raises(InvalidRequestError, match="convert None"):
            plan_from_adjacency(Network(10, 10), [[0, None], [1, 0]])

    def test_nan_entry(self) -> None:
        with pytest.raises(InvalidRequestError, match="convert"):
            plan_from_adjacency(Network(10, 10), [[0.0, np.nan], [1.0, 0.0]])

    def test_too_many_nodes(self) -> None:
        with pytest.raises(InvalidRequestError, match="larger than"):
            plan_from_adjacency(Network(2, 10), PATH3)

    def test_too_many_links(self) -> None:
        with pytest.raises(InvalidRequestError, match="more links"):
            plan_from_adjacency(Network(10, 1), PATH3)

    def test_lower_only_entries_count_against_budget(self) -> None:
        mat = [[0, 0, 0], [1, 0, 0], [1, 0, 0]]
        plan = plan_from_adjacency(Network(10, 2), mat)
        assert plan.budgeted_links == 2
        with pytest.raises(InvalidRequestError, match="more links"):
            plan_from_adjacency(Network(10, 1), mat)

    def test_upper_only_budget_undercounts(self) -> None:
        mat = [[0, 0, 0], [1, 0, 0], [1, 0, 0]]
        config = AdjacencyConfig(count_lower_triangle=False)
        plan = plan_from_adjacency(Network(10, 1), mat, config)
        assert plan.budgeted_links == 0
        assert plan.n_links == 2
        with pytest.raises(CapacityError):
            from_adjacency(Network(10, 1), mat, config)

    def test_failed_request_leaves_net_untouched(self) -> None:
        net = Network(10, 10, rng=0)
        random_graph(net)
        with pytest.raises(InvalidRequestError):
            from_adjacency(net, [[0, 1, 0], [1, 0, 1]])
        assert net.node_count() == 10
        assert net.link_count() == 10
