"""Configuration-model and random regular graphs via stub matching.

Both builders lay out a stub buffer in which every node appears once per unit
of its target degree and pair the stubs uniformly at random. Generation is
fast and unbiased but the result is not guaranteed to be a simple graph.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from netbuild.config.builders import ConfigModelConfig, RegularGraphConfig
from netbuild.errors import InvalidRequestError
from netbuild.generators.degree_sequence import DegreeSequence, partition_degree_sequence
from netbuild.generators.reset import null_graph
from netbuild.generators.stubs import StubBuffer, match_stubs
from netbuild.generators.validation import as_int, check_capacity, check_node_state
from netbuild.network.substrate import Network
from netbuild.reproducibility.seed import resolve_rng

log = logging.getLogger(__name__)


def plan_config_model(net: Network, config: ConfigModelConfig) -> DegreeSequence:
    """Validate a configuration-model request and partition its degrees."""
    return partition_degree_sequence(net, config.degreedist, config.N, config.S)


def config_model(
    net: Network,
    config: ConfigModelConfig,
    rng: np.random.Generator | None = None,
) -> Network:
    """Replace the topology of ``net`` with a configuration-model graph.

    The degree distribution is matched as closely as whole node counts
    allow; an odd stub total leaves one stub unmatched.

    Example: ``degreedist=(0.5, 0.25, 0.25)`` with ``N=200`` gives 100 nodes
    of degree 1 and 50 each of degree 2 and 3, i.e. 350 stubs and 175 links.

    Args:
        net: Substrate to rebuild.
        config: Degree distribution, node count and node state.
        rng: Random source; defaults to the substrate's generator.

    Returns:
        ``net`` with ``N`` nodes and ``total_stubs // 2`` links.
    """
    seq = plan_config_model(net, config)
    rng = resolve_rng(net, rng)

    null_graph(net)
    net.create_nodes(seq.n, seq.state)
    buffer = StubBuffer.from_degrees(seq.node_degrees())
    n_links = match_stubs(net, buffer, rng)

    log.info(
        "Configuration model built: n=%d, stubs=%d, links=%d",
        seq.n,
        seq.total_stubs,
        n_links,
    )
    return net


@dataclass(frozen=True, slots=True)
class RegularGraphPlan:
    n: int
    deg: int
    state: int

    @property
    def n_links(self) -> int:
        return (self.n * self.deg) // 2


def plan_regular_graph(net: Network, config: RegularGraphConfig) -> RegularGraphPlan:
    """Validate a regular graph request without touching ``net``."""
    task = "Trying to create regular graph"
    s = as_int(config.S, "S", task)
    n = net.max_nodes if config.N is None else as_int(config.N, "N", task)
    d = as_int(config.deg, "deg", task)
    check_node_state(net, s, task)
    if n < 1:
        raise InvalidRequestError(f"{task}, but the number of nodes N must be positive")
    if d < 0:
        raise InvalidRequestError(f"{task}, but the node degree deg must be non-negative")
    check_capacity(net, n, (n * d) // 2, task)
    if n % 2 == 1 and d % 2 == 1:
        raise InvalidRequestError(
            f"{task}, but a regular graph of odd node degree must have an "
            f"even number of nodes (deg={d}, N={n})"
        )
    return RegularGraphPlan(n=n, deg=d, state=s)


def regular_graph(
    net: Network,
    config: RegularGraphConfig,
    rng: np.random.Generator | None = None,
) -> Network:
    """Replace the topology of ``net`` with a random ``deg``-regular graph.

    Finite regular graphs with odd degree and an odd number of nodes do not
    exist, so either ``deg`` or ``N`` must be even.

    Returns:
        ``net`` with ``N`` nodes whose degrees sum to exactly ``N * deg``.
    """
    plan = plan_regular_graph(net, config)
    rng = resolve_rng(net, rng)

    null_graph(net)
    net.create_nodes(plan.n, plan.state)
    buffer = StubBuffer.from_degrees(np.full(plan.n, plan.deg, dtype=np.int64))
    n_links = match_stubs(net, buffer, rng)

    log.info(
        "Regular graph built: n=%d, deg=%d, links=%d", plan.n, plan.deg, n_links
    )
    return net


def directed_config_model(
    net: Network,
    degreedist: Sequence[float],
    N: int | None = None,
    S: int = 1,
) -> Network:
    """Directed configuration model. Not implemented.

    The arguments are validated like ``config_model`` so that a bad request
    is still reported as such, then NotImplementedError is raised. ``net``
    is never modified.
    """
    partition_degree_sequence(
        net, degreedist, N, S, task="Trying to create a directed configuration model"
    )
    raise NotImplementedError(
        "The directed configuration model has no link construction; use "
        "config_model for undirected degree sequences"
    )
