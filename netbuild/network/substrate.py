"""Capacity-bounded node/link store mutated by the topology generators.

Nodes and links are addressed by stable integer handles drawn from fixed
pools (1..max_nodes and 1..max_links). Nodes additionally have a 1-based
position: creation order, with the last node swapped into the hole when a
node is destroyed so that destruction stays O(1). Per-state membership lists
make uniform sampling of a node in a given state O(1) as well.
"""

import logging
from collections.abc import Iterator

import numpy as np

from netbuild.errors import CapacityError, InvalidRequestError

log = logging.getLogger(__name__)


class Network:
    """In-memory network substrate with hard node, link and state limits.

    Args:
        max_nodes: Maximum number of nodes alive at any time.
        max_links: Maximum number of links alive at any time.
        n_states: Number of distinct node states. State 0 is reserved, so
            valid states are 1..n_states-1.
        rng: Default random source used when a caller passes none. Either a
            numpy Generator or a seed for ``np.random.default_rng``.
    """

    def __init__(
        self,
        max_nodes: int,
        max_links: int,
        n_states: int = 2,
        rng: np.random.Generator | int | None = None,
    ) -> None:
        if max_nodes < 0 or max_links < 0:
            raise InvalidRequestError(
                f"Network capacity must be non-negative, got "
                f"max_nodes={max_nodes}, max_links={max_links}"
            )
        if n_states < 2:
            raise InvalidRequestError(
                f"Network needs at least 2 states (state 0 is reserved), "
                f"got n_states={n_states}"
            )
        self.max_nodes = max_nodes
        self.max_links = max_links
        self.n_states = n_states
        if isinstance(rng, np.random.Generator):
            self.rng = rng
        else:
            self.rng = np.random.default_rng(rng)

        # Handle pools, popped from the end so handle 1 is issued first
        self._free_nodes: list[int] = list(range(max_nodes, 0, -1))
        self._free_links: list[int] = list(range(max_links, 0, -1))

        # Node storage indexed by handle; -1 marks a dead handle
        self._nid: list[int] = []
        self._npos = np.full(max_nodes + 1, -1, dtype=np.int64)
        self._state = np.zeros(max_nodes + 1, dtype=np.int64)
        self._by_state: list[list[int]] = [[] for _ in range(n_states)]
        self._spos = np.full(max_nodes + 1, -1, dtype=np.int64)
        self._incident: dict[int, set[int]] = {}

        # Link storage indexed by handle
        self._lid: list[int] = []
        self._lpos = np.full(max_links + 1, -1, dtype=np.int64)
        self._src = np.zeros(max_links + 1, dtype=np.int64)
        self._dst = np.zeros(max_links + 1, dtype=np.int64)

    def __repr__(self) -> str:
        return f"Network of {self.node_count()} nodes and {self.link_count()} links"

    # ── Counts ───────────────────────────────────────────────────────

    def node_count(self) -> int:
        return len(self._nid)

    def link_count(self) -> int:
        return len(self._lid)

    # ── Nodes ────────────────────────────────────────────────────────

    def _check_state(self, state: int) -> None:
        if state < 1 or state > self.n_states - 1:
            raise InvalidRequestError(
                f"Node state {state} outside valid range 1..{self.n_states - 1}"
            )

    def _check_node(self, node: int) -> None:
        if node < 1 or node > self.max_nodes or self._npos[node] < 0:
            raise InvalidRequestError(f"Node {node} does not exist")

    def create_node(self, state: int = 1) -> int:
        """Create a single node in ``state`` and return its handle."""
        self._check_state(state)
        if not self._free_nodes:
            raise CapacityError(
                f"Cannot create node: network is full ({self.max_nodes} nodes)"
            )
        node = self._free_nodes.pop()
        self._npos[node] = len(self._nid)
        self._nid.append(node)
        self._state[node] = state
        members = self._by_state[state]
        self._spos[node] = len(members)
        members.append(node)
        self._incident[node] = set()
        return node

    def create_nodes(self, count: int, state: int = 1) -> list[int]:
        """Create ``count`` nodes, all in ``state``.

        Raises:
            CapacityError: If the nodes would not fit; nothing is created.
        """
        self._check_state(state)
        if count < 0:
            raise InvalidRequestError(f"Cannot create a negative number of nodes ({count})")
        if count > len(self._free_nodes):
            raise CapacityError(
                f"Cannot create {count} nodes: only {len(self._free_nodes)} "
                f"of {self.max_nodes} slots are free"
            )
        return [self.create_node(state) for _ in range(count)]

    def destroy_node(self, node: int) -> None:
        """Remove a node and every link incident to it."""
        self._check_node(node)
        for link in list(self._incident[node]):
            self.destroy_link(link)
        del self._incident[node]

        # Swap the last node into the vacated position
        idx = int(self._npos[node])
        last = self._nid[-1]
        self._nid[idx] = last
        self._npos[last] = idx
        self._nid.pop()
        self._npos[node] = -1

        members = self._by_state[int(self._state[node])]
        sidx = int(self._spos[node])
        last = members[-1]
        members[sidx] = last
        self._spos[last] = sidx
        members.pop()
        self._spos[node] = -1
        self._state[node] = 0

        self._free_nodes.append(node)

    def node_at(self, position: int) -> int:
        """Return the handle of the node at 1-based ``position``."""
        if position < 1 or position > len(self._nid):
            raise InvalidRequestError(
                f"Position {position} outside 1..{len(self._nid)}"
            )
        return self._nid[position - 1]

    def position_of(self, node: int) -> int:
        self._check_node(node)
        return int(self._npos[node]) + 1

    def nodes(self) -> Iterator[int]:
        """Iterate node handles in position order."""
        return iter(list(self._nid))

    def node_state(self, node: int) -> int:
        self._check_node(node)
        return int(self._state[node])

    def set_node_state(self, node: int, state: int) -> None:
        self._check_node(node)
        self._check_state(state)
        old = int(self._state[node])
        if old == state:
            return
        members = self._by_state[old]
        sidx = int(self._spos[node])
        last = members[-1]
        members[sidx] = last
        self._spos[last] = sidx
        members.pop()

        members = self._by_state[state]
        self._spos[node] = len(members)
        members.append(node)
        self._state[node] = state

    def state_count(self, state: int) -> int:
        self._check_state(state)
        return len(self._by_state[state])

    def random_node(
        self, state: int | None = None, rng: np.random.Generator | None = None
    ) -> int:
        """Draw a uniformly random node, optionally restricted to ``state``.

        Args:
            state: Only nodes in this state are eligible; None means any node.
            rng: Random source; defaults to the network's own generator.

        Returns:
            Handle of the drawn node.
        """
        if state is None:
            pool = self._nid
        else:
            self._check_state(state)
            pool = self._by_state[state]
        if not pool:
            where = "" if state is None else f" in state {state}"
            raise InvalidRequestError(f"Cannot draw a random node: no nodes{where}")
        if rng is None:
            rng = self.rng
        return pool[int(rng.integers(len(pool)))]

    def degree(self, node: int) -> int:
        """Number of link endpoints at ``node``; a self-loop counts twice."""
        self._check_node(node)
        deg = 0
        for link in self._incident[node]:
            deg += 2 if self._src[link] == self._dst[link] else 1
        return deg

    # ── Links ────────────────────────────────────────────────────────

    def create_link(self, src: int, dst: int) -> int:
        """Create a directed link from ``src`` to ``dst`` and return its handle.

        Raises:
            CapacityError: If the network already holds ``max_links`` links.
        """
        self._check_node(src)
        self._check_node(dst)
        if not self._free_links:
            raise CapacityError(
                f"Cannot create link: network is full ({self.max_links} links)"
            )
        link = self._free_links.pop()
        self._lpos[link] = len(self._lid)
        self._lid.append(link)
        self._src[link] = src
        self._dst[link] = dst
        self._incident[src].add(link)
        self._incident[dst].add(link)
        return link

    def destroy_link(self, link: int) -> None:
        if link < 1 or link > self.max_links or self._lpos[link] < 0:
            raise InvalidRequestError(f"Link {link} does not exist")
        src = int(self._src[link])
        dst = int(self._dst[link])
        self._incident[src].discard(link)
        self._incident[dst].discard(link)

        idx = int(self._lpos[link])
        last = self._lid[-1]
        self._lid[idx] = last
        self._lpos[last] = idx
        self._lid.pop()
        self._lpos[link] = -1

        self._free_links.append(link)

    def link_endpoints(self, link: int) -> tuple[int, int]:
        """Return ``(src, dst)`` node handles of a link."""
        if link < 1 or link > self.max_links or self._lpos[link] < 0:
            raise InvalidRequestError(f"Link {link} does not exist")
        return int(self._src[link]), int(self._dst[link])

    def links(self) -> Iterator[int]:
        return iter(list(self._lid))
