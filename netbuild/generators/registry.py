"""Dispatch generator requests by model name."""

import logging
from collections.abc import Callable
from typing import Any

import numpy as np

from netbuild.config.builders import (
    MODEL_CONFIGS,
    AdjacencyConfig,
    ConfigModelConfig,
    GeometricConfig,
    LatticeConfig,
    NullGraphConfig,
    RandomGraphConfig,
)
from netbuild.errors import InvalidRequestError
from netbuild.generators.adjacency import from_adjacency, plan_from_adjacency
from netbuild.generators.config_model import (
    config_model,
    plan_config_model,
    plan_regular_graph,
    regular_graph,
)
from netbuild.generators.geometric import plan_random_geometric_graph, random_geometric_graph
from netbuild.generators.lattice import plan_rect_lattice, rect_lattice
from netbuild.generators.random_graph import plan_random_graph, random_graph
from netbuild.generators.reset import null_graph
from netbuild.network.substrate import Network

log = logging.getLogger(__name__)


def _no_plan(net: Network, config: Any, rng: Any, matrix: Any) -> None:
    return None


# name -> (plan, build); both take (net, config, rng, matrix)
GENERATORS: dict[str, tuple[Callable[..., Any], Callable[..., Network]]] = {
    "null": (
        _no_plan,
        lambda net, config, rng, matrix: null_graph(net),
    ),
    "random": (
        lambda net, config, rng, matrix: plan_random_graph(net, config),
        lambda net, config, rng, matrix: random_graph(net, config, rng),
    ),
    "config_model": (
        lambda net, config, rng, matrix: plan_config_model(net, config),
        lambda net, config, rng, matrix: config_model(net, config, rng),
    ),
    "regular": (
        lambda net, config, rng, matrix: plan_regular_graph(net, config),
        lambda net, config, rng, matrix: regular_graph(net, config, rng),
    ),
    "lattice": (
        lambda net, config, rng, matrix: plan_rect_lattice(net, config),
        lambda net, config, rng, matrix: rect_lattice(net, config),
    ),
    "adjacency": (
        lambda net, config, rng, matrix: plan_from_adjacency(net, matrix, config),
        lambda net, config, rng, matrix: from_adjacency(net, matrix, config),
    ),
    "geometric": (
        lambda net, config, rng, matrix: plan_random_geometric_graph(net, config, rng),
        lambda net, config, rng, matrix: random_geometric_graph(net, config, rng),
    ),
}

# Default configs; "regular" has none since deg is required
_DEFAULTS: dict[str, Callable[[], Any]] = {
    "null": NullGraphConfig,
    "random": RandomGraphConfig,
    "config_model": ConfigModelConfig,
    "lattice": LatticeConfig,
    "adjacency": AdjacencyConfig,
    "geometric": GeometricConfig,
}


def _resolve(model: str, config: Any, matrix: Any) -> Any:
    if model not in GENERATORS:
        raise InvalidRequestError(
            f"Unknown model {model!r}; expected one of {sorted(GENERATORS)}"
        )
    if config is None:
        if model not in _DEFAULTS:
            raise InvalidRequestError(f"The {model} model has no default config")
        config = _DEFAULTS[model]()
    expected = MODEL_CONFIGS[model]
    if not isinstance(config, expected):
        raise InvalidRequestError(
            f"Model {model!r} expects {expected.__name__}, got {type(config).__name__}"
        )
    if model == "adjacency" and matrix is None:
        raise InvalidRequestError("The adjacency model needs a matrix")
    return config


def plan(
    net: Network,
    model: str,
    config: Any = None,
    rng: np.random.Generator | None = None,
    matrix: Any = None,
) -> Any:
    """Run only the validation phase of ``model``; ``net`` is not modified."""
    config = _resolve(model, config, matrix)
    return GENERATORS[model][0](net, config, rng, matrix)


def generate(
    net: Network,
    model: str,
    config: Any = None,
    rng: np.random.Generator | None = None,
    matrix: Any = None,
) -> Network:
    """Build ``model`` into ``net``.

    Args:
        net: Substrate to rebuild.
        model: One of the names in ``GENERATORS``.
        config: The model's config dataclass; None uses its defaults.
        rng: Random source for randomized models.
        matrix: Adjacency matrix, for the ``"adjacency"`` model only.

    Returns:
        ``net``.
    """
    config = _resolve(model, config, matrix)
    log.debug("Generating %s with %s", model, config)
    return GENERATORS[model][1](net, config, rng, matrix)
