"""Reset a substrate to the empty graph."""

from netbuild.network.substrate import Network


def null_graph(net: Network) -> Network:
    """Remove all nodes and links from ``net``. Idempotent."""
    while net.node_count() > 0:
        net.destroy_node(net.node_at(1))
    return net
