"""Explicit randomness providers for the generators.

Generators never touch global RNG state. Each randomized generator takes an
``rng`` argument; when it is None the substrate's own generator is used, so a
substrate created with a fixed seed reproduces the same topologies.
"""

import numpy as np

from netbuild.network.substrate import Network


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create a numpy Generator from a seed (None draws fresh OS entropy)."""
    return np.random.default_rng(seed)


def resolve_rng(net: Network, rng: np.random.Generator | None) -> np.random.Generator:
    """Return ``rng`` if given, else the substrate's generator."""
    if rng is None:
        return net.rng
    return rng
