"""Topology generators that rebuild a network substrate.

Every builder validates its request in a side-effect-free ``plan_*`` step
before resetting the substrate, so a rejected request leaves it untouched.
"""

from netbuild.generators.adjacency import AdjacencyPlan, from_adjacency, plan_from_adjacency
from netbuild.generators.config_model import (
    RegularGraphPlan,
    config_model,
    directed_config_model,
    plan_config_model,
    plan_regular_graph,
    regular_graph,
)
from netbuild.generators.degree_sequence import DegreeSequence, partition_degree_sequence
from netbuild.generators.geometric import (
    GeometricPlan,
    close_pairs,
    connection_radius,
    double_factorial,
    log_double_factorial,
    plan_random_geometric_graph,
    random_geometric_graph,
)
from netbuild.generators.lattice import (
    LatticePlan,
    lattice_edges,
    lattice_link_count,
    plan_rect_lattice,
    rect_lattice,
)
from netbuild.generators.random_graph import RandomGraphPlan, plan_random_graph, random_graph
from netbuild.generators.registry import GENERATORS, generate, plan
from netbuild.generators.reset import null_graph
from netbuild.generators.stubs import StubBuffer, draw_pairs, match_stubs

__all__ = [
    "GENERATORS",
    "AdjacencyPlan",
    "DegreeSequence",
    "GeometricPlan",
    "LatticePlan",
    "RandomGraphPlan",
    "RegularGraphPlan",
    "StubBuffer",
    "close_pairs",
    "config_model",
    "connection_radius",
    "directed_config_model",
    "double_factorial",
    "log_double_factorial",
    "draw_pairs",
    "from_adjacency",
    "generate",
    "lattice_edges",
    "lattice_link_count",
    "match_stubs",
    "null_graph",
    "partition_degree_sequence",
    "plan",
    "plan_config_model",
    "plan_from_adjacency",
    "plan_random_geometric_graph",
    "plan_random_graph",
    "plan_rect_lattice",
    "plan_regular_graph",
    "random_geometric_graph",
    "random_graph",
    "rect_lattice",
    "regular_graph",
]
