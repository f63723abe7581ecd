"""Degree-sequence partitioning for the configuration model.

Turns a probability-mass vector over degrees into integer node counts per
degree and the resulting stub total, checking the result against the
substrate's capacity.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from netbuild.errors import InvalidRequestError
from netbuild.generators.validation import check_capacity, check_node_state, resolve_count
from netbuild.network.substrate import Network

log = logging.getLogger(__name__)

# Slack for probability vectors that sum to 1 up to float rounding
_MASS_TOLERANCE = 1e-9


@dataclass(frozen=True)
class DegreeSequence:
    """Integer degree sequence derived from a degree distribution.

    Uses frozen=True but omits slots=True since it holds a numpy array.
    """

    counts: np.ndarray  # counts[k] = number of nodes with degree k, k >= 0
    total_stubs: int  # sum(k * counts[k])
    n: int  # number of nodes, counts.sum()
    state: int  # node state for the created nodes

    @property
    def n_links(self) -> int:
        return self.total_stubs // 2

    def node_degrees(self) -> np.ndarray:
        """Per-node target degrees: degree-1 nodes first, degree-0 nodes last."""
        ks = np.arange(1, len(self.counts), dtype=np.int64)
        nonzero = np.repeat(ks, self.counts[1:])
        return np.concatenate([nonzero, np.zeros(self.counts[0], dtype=np.int64)])


def _largest_remainder(n: int, probs: np.ndarray) -> np.ndarray:
    """Round ``n * probs`` to integers whose sum is ``round(n * probs.sum())``."""
    raw = n * probs
    base = np.floor(raw + _MASS_TOLERANCE).astype(np.int64)
    target = min(n, int(round(float(raw.sum()))))
    missing = max(0, target - int(base.sum()))
    if missing:
        frac = raw - base
        # Stable sort keeps lower degrees first among equal remainders
        order = np.argsort(-frac, kind="stable")
        base[order[:missing]] += 1
    return base


def partition_degree_sequence(
    net: Network,
    degreedist: Sequence[float],
    N: int | None = None,
    S: int = 1,
    task: str = "Trying to create a configuration model",
) -> DegreeSequence:
    """Compute how many nodes get each degree and the total stub count.

    Rounding to whole nodes can make the realized distribution deviate
    slightly from ``degreedist``; nodes covering unassigned mass get degree 0.
    Nothing in ``net`` is modified.

    Args:
        net: Substrate whose capacity bounds the request.
        degreedist: ``degreedist[k - 1]`` is the fraction of nodes of degree k.
        N: Number of nodes; None uses the substrate's node capacity.
        S: State for the nodes.
        task: Prefix for error messages.

    Returns:
        DegreeSequence with counts indexed by degree.

    Raises:
        InvalidRequestError: For a malformed distribution or when the nodes
            or links do not fit the substrate.
    """
    s = check_node_state(net, S, task)
    n = resolve_count(N, net.max_nodes, "N", task)

    try:
        probs = np.asarray(degreedist, dtype=np.float64).ravel()
    except (TypeError, ValueError) as e:
        raise InvalidRequestError(
            f"{task}, but the degree distribution is not a numeric vector"
        ) from e
    if not np.all(np.isfinite(probs)) or np.any(probs < 0):
        raise InvalidRequestError(
            f"{task}, but the degree distribution must contain finite, "
            f"non-negative probabilities"
        )
    mass = float(probs.sum())
    if mass > 1.0 + _MASS_TOLERANCE:
        raise InvalidRequestError(
            f"{task}, but the degree distribution sums to {mass}, more than 1"
        )

    assigned = _largest_remainder(n, probs)
    counts = np.zeros(len(probs) + 1, dtype=np.int64)
    counts[1:] = assigned
    counts[0] = n - int(assigned.sum())
    total_stubs = int(np.dot(np.arange(len(counts), dtype=np.int64), counts))

    check_capacity(net, n, total_stubs // 2, task)
    if counts[0]:
        log.debug("%d nodes take the unassigned mass at degree 0", counts[0])
    log.debug(
        "Degree sequence: n=%d, total_stubs=%d, counts=%s",
        n,
        total_stubs,
        counts.tolist(),
    )
    return DegreeSequence(counts=counts, total_stubs=total_stubs, n=n, state=s)
