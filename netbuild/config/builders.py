"""Per-generator configuration dataclasses, all frozen and slotted.

``None`` for ``N`` or ``K`` means "use the substrate's capacity". ``S`` is the
state every created node is set to. Numeric fields are not range-checked
here: limits depend on the substrate, so the generators validate them.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """Capacity of the substrate a request is built into."""

    max_nodes: int
    max_links: int
    n_states: int = 2  # state 0 reserved
    seed: int | None = None


@dataclass(frozen=True, slots=True)
class NullGraphConfig:
    """Reset takes no options."""


@dataclass(frozen=True, slots=True)
class RandomGraphConfig:
    """Erdős–Rényi graph with a fixed number of links."""

    N: int | None = None  # node count
    K: int | None = None  # link count
    S: int = 1


@dataclass(frozen=True, slots=True)
class ConfigModelConfig:
    """Configuration model over a degree probability-mass vector.

    ``degreedist[k - 1]`` is the fraction of nodes with degree k; mass not
    assigned goes to degree 0.
    """

    degreedist: tuple[float, ...] = ()
    N: int | None = None
    S: int = 1

    def __post_init__(self) -> None:
        # Accept any sequence; store a tuple so the config stays hashable
        object.__setattr__(self, "degreedist", tuple(self.degreedist))


@dataclass(frozen=True, slots=True)
class RegularGraphConfig:
    """Random regular graph, every node of degree ``deg``."""

    deg: int
    N: int | None = None
    S: int = 1


@dataclass(frozen=True, slots=True)
class LatticeConfig:
    """Rectangular lattice in ``len(dims)`` dimensions."""

    dims: int | tuple[int, ...] = 1
    periodic: bool | tuple[bool, ...] = False
    S: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.dims, list):
            object.__setattr__(self, "dims", tuple(self.dims))
        if isinstance(self.periodic, list):
            object.__setattr__(self, "periodic", tuple(self.periodic))


@dataclass(frozen=True, slots=True)
class AdjacencyConfig:
    """Import options for an adjacency matrix.

    With ``count_lower_triangle`` the link budget counts every pair whose
    upper or lower entry is set. Without it only upper entries are counted,
    which undercounts pairs set only below the diagonal.
    """

    S: int = 1
    count_lower_triangle: bool = True


@dataclass(frozen=True, slots=True)
class GeometricConfig:
    """Random geometric (threshold) graph in the unit hypercube."""

    N: int | None = None
    K: int | None = None  # link budget
    S: int = 1
    dim: int = 2
    deg: float = 2.0  # target mean degree


MODEL_CONFIGS: dict[str, type] = {
    "null": NullGraphConfig,
    "random": RandomGraphConfig,
    "config_model": ConfigModelConfig,
    "regular": RegularGraphConfig,
    "lattice": LatticeConfig,
    "adjacency": AdjacencyConfig,
    "geometric": GeometricConfig,
}


@dataclass(frozen=True, slots=True)
class TopologyRequest:
    """A substrate plus one generator invocation, as read from JSON."""

    network: NetworkConfig
    model: str
    params: dict[str, Any] | None = None
    matrix: tuple[tuple[float, ...], ...] | None = None  # adjacency model only
