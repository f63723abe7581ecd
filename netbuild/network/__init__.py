"""Network substrate and read-only analysis helpers."""

from netbuild.network.analysis import (
    degree_distribution,
    degrees,
    self_loop_count,
    to_adjacency,
)
from netbuild.network.substrate import Network

__all__ = [
    "Network",
    "degree_distribution",
    "degrees",
    "self_loop_count",
    "to_adjacency",
]
