"""Generator configuration system with frozen, serializable dataclasses."""

from netbuild.config.builders import (
    MODEL_CONFIGS,
    AdjacencyConfig,
    ConfigModelConfig,
    GeometricConfig,
    LatticeConfig,
    NetworkConfig,
    NullGraphConfig,
    RandomGraphConfig,
    RegularGraphConfig,
    TopologyRequest,
)
from netbuild.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_json,
    params_from_dict,
)

__all__ = [
    "MODEL_CONFIGS",
    "AdjacencyConfig",
    "ConfigModelConfig",
    "GeometricConfig",
    "LatticeConfig",
    "NetworkConfig",
    "NullGraphConfig",
    "RandomGraphConfig",
    "RegularGraphConfig",
    "TopologyRequest",
    "config_from_dict",
    "config_from_json",
    "config_to_json",
    "params_from_dict",
]
