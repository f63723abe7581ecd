"""Read-only structural summaries of a network substrate."""

import numpy as np
import scipy.sparse

from netbuild.network.substrate import Network


def degrees(net: Network) -> np.ndarray:
    """Degree of every node, indexed by position - 1.

    Each link contributes one endpoint to its source and one to its
    destination, so a self-loop adds 2 to its node.
    """
    out = np.zeros(net.node_count(), dtype=np.int64)
    for link in net.links():
        src, dst = net.link_endpoints(link)
        out[net.position_of(src) - 1] += 1
        out[net.position_of(dst) - 1] += 1
    return out


def degree_distribution(net: Network) -> np.ndarray:
    """Fraction of nodes with degree k, for k = 1..max degree.

    Entry ``k - 1`` holds the fraction of degree-k nodes; degree-0 nodes are
    counted in the denominator only, so a distribution passed to the
    configuration model is reproduced in the same layout.

    Returns:
        Float array of length max degree (empty for an empty network or one
        without links).
    """
    n = net.node_count()
    if n == 0:
        return np.zeros(0, dtype=np.float64)
    counts = np.bincount(degrees(net))
    return counts[1:].astype(np.float64) / n


def to_adjacency(net: Network) -> scipy.sparse.csr_matrix:
    """Sparse adjacency matrix over node positions.

    ``A[i, j]`` counts links from the node at position ``j + 1`` to the node
    at position ``i + 1``, the same convention ``from_adjacency`` reads.
    """
    n = net.node_count()
    rows: list[int] = []
    cols: list[int] = []
    for link in net.links():
        src, dst = net.link_endpoints(link)
        rows.append(net.position_of(dst) - 1)
        cols.append(net.position_of(src) - 1)
    data = np.ones(len(rows), dtype=np.int64)
    # Duplicate entries are summed, so parallel links show up as counts > 1
    return scipy.sparse.csr_matrix((data, (rows, cols)), shape=(n, n))


def self_loop_count(net: Network) -> int:
    count = 0
    for link in net.links():
        src, dst = net.link_endpoints(link)
        if src == dst:
            count += 1
    return count
