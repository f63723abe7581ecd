"""Reproducibility infrastructure: explicit random sources."""

from netbuild.reproducibility.seed import make_rng, resolve_rng

__all__ = [
    "make_rng",
    "resolve_rng",
]
