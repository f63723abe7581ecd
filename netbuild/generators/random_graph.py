"""Erdős–Rényi style random graph with a fixed number of links.

Each link joins two independently drawn nodes. The result is not guaranteed
to be simple, but in large sparse networks it is simple with high
probability.
"""

import logging
from dataclasses import dataclass

import numpy as np

from netbuild.config.builders import RandomGraphConfig
from netbuild.errors import InvalidRequestError
from netbuild.generators.reset import null_graph
from netbuild.generators.validation import check_capacity, check_node_state, resolve_count
from netbuild.network.substrate import Network
from netbuild.reproducibility.seed import resolve_rng

log = logging.getLogger(__name__)

TASK = "Trying to create a random graph"


@dataclass(frozen=True, slots=True)
class RandomGraphPlan:
    n: int
    k: int
    state: int


def plan_random_graph(
    net: Network, config: RandomGraphConfig | None = None
) -> RandomGraphPlan:
    """Validate a random graph request without touching ``net``."""
    if config is None:
        config = RandomGraphConfig()
    n = resolve_count(config.N, net.max_nodes, "N", TASK)
    k = resolve_count(config.K, net.max_links, "K", TASK)
    if n < 1 and k > 0:
        raise InvalidRequestError(
            f"{TASK}, but in order to create links the net has to have at "
            f"least one node"
        )
    check_capacity(net, n, k, TASK)
    s = check_node_state(net, config.S, TASK)
    return RandomGraphPlan(n=n, k=k, state=s)


def random_graph(
    net: Network,
    config: RandomGraphConfig | None = None,
    rng: np.random.Generator | None = None,
) -> Network:
    """Replace the topology of ``net`` with a random graph.

    By default every node and link the substrate can hold is used and all
    nodes are set to state 1.

    Args:
        net: Substrate to rebuild.
        config: Node count ``N``, link count ``K`` and node state ``S``.
        rng: Random source; defaults to the substrate's generator.

    Returns:
        ``net``, holding exactly ``N`` nodes and ``K`` links.
    """
    plan = plan_random_graph(net, config)
    rng = resolve_rng(net, rng)

    null_graph(net)
    net.create_nodes(plan.n, plan.state)
    for _ in range(plan.k):
        src = net.random_node(plan.state, rng)
        dst = net.random_node(plan.state, rng)
        net.create_link(src, dst)

    log.info("Random graph built: n=%d, links=%d", plan.n, plan.k)
    return net
