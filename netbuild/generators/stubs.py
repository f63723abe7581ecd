"""Unbiased stub (half-edge) matching shared by the configuration-model builders.

A stub buffer lists node positions with multiplicity equal to their target
degree. Matching removes stubs two at a time, uniformly at random and without
replacement, by overwriting the drawn slot with the last live entry and
shrinking the live length. Each removed pair becomes one link.

For a fixed degree sequence this draws uniformly from the stub pairings, so
self-loops and parallel links can occur; they become rare as the network
grows.
"""

import logging
from dataclasses import dataclass

import numpy as np

from netbuild.network.substrate import Network

log = logging.getLogger(__name__)


@dataclass
class StubBuffer:
    """Fixed-capacity stub array with an explicit live length.

    ``stubs[:cutoff]`` are the unmatched stubs; entries past ``cutoff`` are
    stale. The array is never resized.
    """

    stubs: np.ndarray  # int64 node positions (1-based)
    cutoff: int

    @classmethod
    def from_degrees(cls, degrees: np.ndarray) -> "StubBuffer":
        """Repeat position ``i + 1`` exactly ``degrees[i]`` times."""
        degrees = np.asarray(degrees, dtype=np.int64)
        positions = np.arange(1, len(degrees) + 1, dtype=np.int64)
        stubs = np.repeat(positions, degrees)
        return cls(stubs=stubs, cutoff=len(stubs))

    @property
    def total_stubs(self) -> int:
        return len(self.stubs)


def draw_pairs(buffer: StubBuffer, rng: np.random.Generator) -> np.ndarray:
    """Consume the buffer into an array of position pairs of shape (m, 2).

    An odd leftover stub is discarded. The buffer ends with ``cutoff`` 0 or 1.
    """
    n_pairs = buffer.cutoff // 2
    # One uniform index per draw; the live length shrinks by one per draw
    highs = np.arange(buffer.cutoff, buffer.cutoff - 2 * n_pairs, -1)
    draws = rng.integers(0, highs) if n_pairs else np.zeros(0, dtype=np.int64)

    stubs = buffer.stubs
    picked = np.empty(2 * n_pairs, dtype=np.int64)
    cutoff = buffer.cutoff
    for t in range(2 * n_pairs):
        idx = int(draws[t])
        picked[t] = stubs[idx]
        stubs[idx] = stubs[cutoff - 1]
        cutoff -= 1
    buffer.cutoff = cutoff
    return picked.reshape(n_pairs, 2)


def match_stubs(
    net: Network, buffer: StubBuffer, rng: np.random.Generator
) -> int:
    """Pair the stubs in ``buffer`` and create one link per pair in ``net``.

    Positions in the buffer are resolved through ``net.node_at``, so the
    nodes must already exist in creation order.

    Returns:
        Number of links created (``total_stubs // 2``).
    """
    pairs = draw_pairs(buffer, rng)
    for src_pos, dst_pos in pairs:
        net.create_link(net.node_at(int(src_pos)), net.node_at(int(dst_pos)))
    if buffer.cutoff:
        log.debug("Discarded %d unmatched stub", buffer.cutoff)
    return len(pairs)
