"""Import a topology from a square adjacency matrix.

Entry ``mat[i, j]`` stands for a link from node j to node i. For each
unordered pair only one link is made: if ``mat[i, j]`` is set the link runs
j -> i, otherwise if ``mat[j, i]`` is set it runs i -> j. Symmetric matrices
therefore never produce parallel links. Diagonal entries are ignored.

Node ``i`` of the matrix is the node at position ``i`` of the substrate right
after the import; its handle is not necessarily ``i``.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any

import numpy as np
import scipy.sparse

from netbuild.config.builders import AdjacencyConfig
from netbuild.errors import InvalidRequestError
from netbuild.generators.reset import null_graph
from netbuild.generators.validation import check_node_state
from netbuild.network.substrate import Network

log = logging.getLogger(__name__)

TASK = "Trying to create topology from adjacency matrix"


@dataclass(frozen=True)
class AdjacencyPlan:
    """Validated import: node count and the links to create, in order."""

    n: int
    state: int
    links: np.ndarray  # (n_links, 2) int64 (src, dst) positions, 1-based
    budgeted_links: int  # pair count checked against the link capacity

    @property
    def n_links(self) -> int:
        return len(self.links)


def _convertible(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return True
    if isinstance(value, numbers.Real):
        return not math.isnan(float(value))
    return False


def _real_dtype(dtype: np.dtype) -> bool:
    return (
        dtype == np.bool_
        or np.issubdtype(dtype, np.integer)
        or np.issubdtype(dtype, np.floating)
    )


def _not_bool_error(value: Any = None) -> InvalidRequestError:
    what = "an element" if value is None else repr(value)
    return InvalidRequestError(f"{TASK}, but was unable to convert {what} in mat to bool")


def _check_square(shape: tuple[int, ...]) -> None:
    if len(shape) != 2 or shape[0] != shape[1]:
        raise InvalidRequestError(
            f"{TASK}, but a square matrix is required and a rectangular one "
            f"was received"
        )


def _truth_matrix(mat: Any) -> np.ndarray | scipy.sparse.csr_matrix:
    """Boolean version of ``mat`` (dense or sparse), validated off-diagonal."""
    if scipy.sparse.issparse(mat):
        _check_square(mat.shape)
        coo = scipy.sparse.coo_matrix(mat)
        if not _real_dtype(coo.dtype):
            raise _not_bool_error()
        if np.issubdtype(coo.dtype, np.floating):
            if (np.isnan(coo.data) & (coo.row != coo.col)).any():
                raise _not_bool_error(float("nan"))
        truth = coo.tocsr().astype(bool)
        truth.eliminate_zeros()
        return truth

    try:
        arr = np.asarray(mat)
    except ValueError as e:
        raise InvalidRequestError(
            f"{TASK}, but a square matrix is required and a ragged one was received"
        ) from e
    _check_square(arr.shape)
    off_diag = ~np.eye(arr.shape[0], dtype=bool)
    if _real_dtype(arr.dtype):
        if np.issubdtype(arr.dtype, np.floating) and np.isnan(arr[off_diag]).any():
            raise _not_bool_error(float("nan"))
        return arr != 0
    if arr.dtype != object:
        raise _not_bool_error()
    for value in arr[off_diag]:
        if not _convertible(value):
            raise _not_bool_error(value)
    truth = np.zeros(arr.shape, dtype=bool)
    truth[off_diag] = [bool(v) for v in arr[off_diag]]
    return truth


def _upper_pairs(truth: np.ndarray | scipy.sparse.csr_matrix) -> tuple[np.ndarray, np.ndarray]:
    """Row/column indices of set entries strictly above the diagonal."""
    if scipy.sparse.issparse(truth):
        upper = scipy.sparse.triu(truth, k=1, format="coo")
        return upper.row.astype(np.int64), upper.col.astype(np.int64)
    rows, cols = np.nonzero(np.triu(truth, k=1))
    return rows.astype(np.int64), cols.astype(np.int64)


def plan_from_adjacency(
    net: Network, mat: Any, config: AdjacencyConfig | None = None
) -> AdjacencyPlan:
    """Validate an adjacency import and list its links without touching ``net``."""
    if config is None:
        config = AdjacencyConfig()
    truth = _truth_matrix(mat)
    x = truth.shape[0]
    if x > net.max_nodes:
        raise InvalidRequestError(
            f"{TASK}, but the matrix is larger than the maximum number of "
            f"nodes allowed by the network"
        )
    s = check_node_state(net, config.S, TASK)

    # Pairs set above the diagonal link j -> i
    up_i, up_j = _upper_pairs(truth)
    # Pairs set only below the diagonal link i -> j
    lo_i, lo_j = _upper_pairs(truth.T)
    upper_keys = set(zip(up_i.tolist(), up_j.tolist()))
    lower_only = np.array(
        [(i, j) not in upper_keys for i, j in zip(lo_i.tolist(), lo_j.tolist())],
        dtype=bool,
    )
    lo_i, lo_j = lo_i[lower_only], lo_j[lower_only]

    if config.count_lower_triangle:
        budgeted = len(up_i) + len(lo_i)
    else:
        budgeted = len(up_i)
    if budgeted > net.max_links:
        raise InvalidRequestError(
            f"{TASK}, but the matrix contains more links than permitted by net"
        )
    if not config.count_lower_triangle and len(lo_i):
        log.warning(
            "Link budget counted upper entries only; %d pairs set only below "
            "the diagonal were not counted",
            len(lo_i),
        )

    # Row-major pair order; sources/destinations as positions
    rows = np.concatenate([up_i, lo_i])
    cols = np.concatenate([up_j, lo_j])
    src = np.concatenate([up_j, lo_i])
    dst = np.concatenate([up_i, lo_j])
    order = np.lexsort((cols, rows))
    links = np.stack([src[order], dst[order]], axis=1) + 1
    return AdjacencyPlan(n=x, state=s, links=links, budgeted_links=budgeted)


def from_adjacency(
    net: Network, mat: Any, config: AdjacencyConfig | None = None
) -> Network:
    """Replace the topology of ``net`` with the one described by ``mat``.

    Args:
        net: Substrate to rebuild.
        mat: Square matrix (nested sequences, numpy array or scipy sparse
            matrix) of bools or real numbers; non-zero means linked.
        config: Node state and link-budget counting mode.

    Returns:
        ``net`` with one node per matrix row.

    Raises:
        InvalidRequestError: For a non-square matrix, entries that are not
            bools or real numbers, or a matrix too large for the substrate.
    """
    plan = plan_from_adjacency(net, mat, config)

    null_graph(net)
    net.create_nodes(plan.n, plan.state)
    for src_pos, dst_pos in plan.links:
        net.create_link(net.node_at(int(src_pos)), net.node_at(int(dst_pos)))

    log.info("Adjacency import built: n=%d, links=%d", plan.n, plan.n_links)
    return net
