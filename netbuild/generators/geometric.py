"""Random geometric (threshold) graphs in the unit hypercube.

Nodes get uniform positions in [0, 1)^dim and every pair closer than a
connection radius is linked. The radius is chosen so that the expected
degree of a node away from the boundary equals the requested mean degree:

    deg = n * V_dim(r),   V_dim(r) = (pi/2)^floor(dim/2) * (2r)^dim / dim!!

which gives ``r = 0.5 * ((deg / n) * dim!! / (pi/2)^floor(dim/2))^(1/dim)``.
Nodes near the faces of the cube have fewer neighbours, so the realized mean
degree falls slightly below ``deg``.
"""

import logging
import math
import numbers
from dataclasses import dataclass

import numpy as np
from scipy.spatial import cKDTree
from scipy.special import factorial2, gammaln

from netbuild.config.builders import GeometricConfig
from netbuild.errors import InvalidRequestError
from netbuild.generators.reset import null_graph
from netbuild.generators.validation import (
    as_int,
    check_capacity,
    check_node_state,
    resolve_count,
)
from netbuild.network.substrate import Network
from netbuild.reproducibility.seed import resolve_rng

log = logging.getLogger(__name__)

TASK = "Trying to create a random geometric graph"


def double_factorial(n: int) -> int:
    """n!! = n * (n - 2) * ... down to 1 or 2; 0!! = 1."""
    return int(factorial2(n, exact=True))


def log_double_factorial(n: int) -> float:
    """Natural log of n!!, finite for any n >= 0."""
    m = n // 2
    if n % 2 == 0:
        return m * math.log(2.0) + float(gammaln(m + 1))
    return float(gammaln(n + 1)) - m * math.log(2.0) - float(gammaln(m + 1))


def connection_radius(n: int, dim: int, deg: float) -> float:
    """Distance below which two of ``n`` nodes are linked, for mean degree ``deg``.

    Evaluated in log space since dim!! overflows a float for large ``dim``.
    """
    if deg == 0:
        return 0.0
    log_volume = (
        math.log(deg / n)
        + log_double_factorial(dim)
        - (dim // 2) * math.log(math.pi / 2)
    )
    return 0.5 * math.exp(log_volume / dim)


@dataclass(frozen=True)
class GeometricPlan:
    """Sampled positions and the pairs within the connection radius.

    Uses frozen=True but omits slots=True since it holds numpy arrays.
    """

    n: int
    k: int  # link budget
    state: int
    radius: float
    positions: np.ndarray  # (n, dim) float64
    pairs: np.ndarray  # (n_links, 2) int64 positions, 1-based, i < j

    @property
    def n_links(self) -> int:
        return len(self.pairs)


def close_pairs(positions: np.ndarray, radius: float) -> np.ndarray:
    """All index pairs ``i < j`` with Euclidean distance strictly below ``radius``.

    Rows are sorted lexicographically (0-based indices).
    """
    if len(positions) < 2 or radius <= 0:
        return np.zeros((0, 2), dtype=np.int64)
    tree = cKDTree(positions)
    pairs = tree.query_pairs(radius, output_type="ndarray").astype(np.int64)
    if len(pairs):
        # query_pairs is inclusive at the radius
        dist = np.linalg.norm(positions[pairs[:, 0]] - positions[pairs[:, 1]], axis=1)
        pairs = pairs[dist < radius]
        pairs = pairs[np.lexsort((pairs[:, 1], pairs[:, 0]))]
    return pairs.reshape(-1, 2)


def plan_random_geometric_graph(
    net: Network,
    config: GeometricConfig | None = None,
    rng: np.random.Generator | None = None,
) -> GeometricPlan:
    """Validate, sample positions and find links without touching ``net``.

    Raises:
        InvalidRequestError: For out-of-range arguments, or when the sampled
            positions produce more links than the budget ``K``.
    """
    if config is None:
        config = GeometricConfig()
    n = resolve_count(config.N, net.max_nodes, "N", TASK)
    k = resolve_count(config.K, net.max_links, "K", TASK)
    if n < 1 and k > 0:
        raise InvalidRequestError(
            f"{TASK}, but in order to create links the net has to have at "
            f"least one node"
        )
    check_capacity(net, n, k, TASK)
    s = check_node_state(net, config.S, TASK)
    dim = as_int(config.dim, "dim", TASK)
    if dim < 1:
        raise InvalidRequestError(f"{TASK}, but dim must be at least 1, got {dim}")
    deg = config.deg
    if not isinstance(deg, numbers.Real) or not math.isfinite(deg) or deg < 0:
        raise InvalidRequestError(
            f"{TASK}, but the mean degree must be finite and non-negative, got {deg!r}"
        )
    deg = float(deg)
    rng = resolve_rng(net, rng)

    radius = connection_radius(n, dim, deg) if n else 0.0
    positions = rng.random((n, dim))
    pairs = close_pairs(positions, radius)
    log.debug(
        "Geometric plan: n=%d, dim=%d, deg=%.3f, radius=%.6f, links=%d",
        n,
        dim,
        deg,
        radius,
        len(pairs),
    )
    if len(pairs) > k:
        raise InvalidRequestError(
            f"{TASK}, but for the given mean degree you would create "
            f"{len(pairs)} links, more than the {k} allowed"
        )
    return GeometricPlan(
        n=n,
        k=k,
        state=s,
        radius=radius,
        positions=positions,
        pairs=pairs + 1,
    )


def random_geometric_graph(
    net: Network,
    config: GeometricConfig | None = None,
    rng: np.random.Generator | None = None,
) -> Network:
    """Replace the topology of ``net`` with a random geometric graph.

    All pairs are found before ``net`` is reset, so exceeding the link
    budget leaves the previous topology in place.

    Args:
        net: Substrate to rebuild.
        config: Node count ``N``, link budget ``K``, node state ``S``,
            dimension ``dim`` and target mean degree ``deg``.
        rng: Random source; defaults to the substrate's generator.

    Returns:
        ``net`` with ``N`` nodes and at most ``K`` links.
    """
    plan = plan_random_geometric_graph(net, config, rng)

    null_graph(net)
    net.create_nodes(plan.n, plan.state)
    for i, j in plan.pairs:
        net.create_link(net.node_at(int(i)), net.node_at(int(j)))

    log.info(
        "Geometric graph built: n=%d, radius=%.6f, links=%d",
        plan.n,
        plan.radius,
        plan.n_links,
    )
    return net
