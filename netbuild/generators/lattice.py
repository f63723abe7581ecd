"""Rectangular lattices in any number of dimensions.

Node positions are laid out in mixed-radix order: the first axis varies
fastest. A node's coordinate on axis j is ``(index // lowmult) % dims[j]``
where ``lowmult`` is the product of the sizes of the axes before j. Each
lattice edge is emitted once, from its lower-coordinate endpoint; on
periodic axes the last coordinate wraps back to 0.
"""

import logging
import math
import numbers
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from netbuild.config.builders import LatticeConfig
from netbuild.errors import InvalidRequestError
from netbuild.generators.reset import null_graph
from netbuild.generators.validation import as_int, check_capacity, check_node_state
from netbuild.network.substrate import Network

log = logging.getLogger(__name__)

TASK = "Trying to create a rectangular lattice"


@dataclass(frozen=True)
class LatticePlan:
    """Validated lattice shape and its edge list."""

    dims: tuple[int, ...]
    periodic: tuple[bool, ...]
    n: int
    state: int
    edges: np.ndarray  # (n_links, 2) int64 node positions, 1-based

    @property
    def n_links(self) -> int:
        return len(self.edges)


def _is_bool(x: object) -> bool:
    return isinstance(x, (bool, np.bool_))


def _normalize_dims(dims: int | Sequence[int]) -> tuple[int, ...]:
    if isinstance(dims, numbers.Real):
        dims = (dims,)
    elif not isinstance(dims, Iterable):
        raise InvalidRequestError(
            f"{TASK}, but dims must be an integer or a sequence of integers, got {dims!r}"
        )
    out = tuple(as_int(d, "dims", TASK) for d in dims)
    if not out:
        raise InvalidRequestError(f"{TASK}, but dims is empty")
    for d in out:
        if d < 1:
            raise InvalidRequestError(
                f"{TASK}, but every lattice dimension must be at least 1, got {d}"
            )
    return out


def _normalize_periodic(
    periodic: bool | Sequence[bool], nd: int
) -> tuple[bool, ...]:
    if _is_bool(periodic):
        return (bool(periodic),) * nd
    if not isinstance(periodic, Iterable):
        raise InvalidRequestError(f"{TASK}, but {periodic!r} in periodic is not of type bool")
    per = tuple(periodic)
    if len(per) != nd:
        raise InvalidRequestError(
            f"{TASK}, but the number of values passed for parameter periodic "
            f"does not agree with dims"
        )
    for x in per:
        if not _is_bool(x):
            raise InvalidRequestError(f"{TASK}, but {x!r} in periodic is not of type bool")
    return tuple(bool(x) for x in per)


def lattice_link_count(dims: Sequence[int], periodic: Sequence[bool]) -> int:
    """Edges of the lattice: n per axis, minus n / dims[j] on open axes."""
    n = math.prod(dims)
    links = 0
    for d, per in zip(dims, periodic):
        links += n
        if not per:
            links -= n // d
    return links


def lattice_edges(dims: Sequence[int], periodic: Sequence[bool]) -> np.ndarray:
    """Edge list of the lattice as 1-based position pairs.

    Rows are ordered by source position, then axis.
    """
    n = math.prod(dims)
    idx = np.arange(n, dtype=np.int64)
    srcs, dsts, axes = [], [], []
    lowmult = 1
    for axis, (d, per) in enumerate(zip(dims, periodic)):
        coord = (idx // lowmult) % d
        # Nodes on the last coordinate only link when the axis wraps
        if per:
            src = idx
            dst = np.where(coord == d - 1, idx + lowmult - d * lowmult, idx + lowmult)
        else:
            src = idx[coord != d - 1]
            dst = src + lowmult
        srcs.append(src)
        dsts.append(dst)
        axes.append(np.full(len(src), axis, dtype=np.int64))
        lowmult *= d

    src = np.concatenate(srcs)
    dst = np.concatenate(dsts)
    order = np.lexsort((np.concatenate(axes), src))
    return np.stack([src[order], dst[order]], axis=1) + 1


def plan_rect_lattice(net: Network, config: LatticeConfig) -> LatticePlan:
    """Validate a lattice request and compute its edges without touching ``net``."""
    dims = _normalize_dims(config.dims)
    periodic = _normalize_periodic(config.periodic, len(dims))
    s = check_node_state(net, config.S, TASK)
    n = math.prod(dims)
    check_capacity(net, n, lattice_link_count(dims, periodic), TASK)

    edges = lattice_edges(dims, periodic)
    log.debug(
        "Lattice plan: dims=%s, periodic=%s, n=%d, links=%d",
        dims,
        periodic,
        n,
        len(edges),
    )
    return LatticePlan(dims=dims, periodic=periodic, n=n, state=s, edges=edges)


def rect_lattice(net: Network, config: LatticeConfig) -> Network:
    """Replace the topology of ``net`` with a rectangular lattice.

    ``dims`` is either an int (a 1-D chain of that many nodes) or one size
    per axis. ``periodic`` is a single bool applied to every axis or one
    bool per axis.

    Example: ``dims=(10, 20, 10)``, ``periodic=(True, False, True)`` gives
    2000 nodes and 5900 links.
    """
    plan = plan_rect_lattice(net, config)

    null_graph(net)
    net.create_nodes(plan.n, plan.state)
    for src_pos, dst_pos in plan.edges:
        net.create_link(net.node_at(int(src_pos)), net.node_at(int(dst_pos)))

    log.info(
        "Lattice built: dims=%s, n=%d, links=%d", plan.dims, plan.n, plan.n_links
    )
    return net
