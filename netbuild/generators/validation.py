"""Argument checks shared by the generators.

Every check raises InvalidRequestError with the generator's task prefix, e.g.
"Trying to create regular graph, but ...".
"""

import math
import numbers

from netbuild.errors import InvalidRequestError
from netbuild.network.substrate import Network


def as_int(value: object, name: str, task: str) -> int:
    """Convert ``value`` to int, accepting integral floats such as 4.0."""
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and math.isfinite(value) and float(value).is_integer():
        return int(value)
    raise InvalidRequestError(f"{task}, but {name} must be an integer, got {value!r}")


def resolve_count(value: object, default: int, name: str, task: str) -> int:
    """``None`` selects ``default`` (the substrate capacity)."""
    if value is None:
        return default
    count = as_int(value, name, task)
    if count < 0:
        raise InvalidRequestError(f"{task}, but {name} must be non-negative, got {count}")
    return count


def check_node_state(net: Network, state: object, task: str) -> int:
    s = as_int(state, "S", task)
    if s < 1 or s > net.n_states - 1:
        raise InvalidRequestError(
            f"{task}, but the net only supports node states between 1 and "
            f"{net.n_states - 1}, and you are asking it to set nodes to state {s}"
        )
    return s


def check_capacity(net: Network, n: int, k: int, task: str) -> None:
    """Fail if ``n`` nodes or ``k`` links would not fit the substrate."""
    if n > net.max_nodes:
        raise InvalidRequestError(
            f"{task}, but {n} nodes exceed the maximum of {net.max_nodes} "
            f"allowed by the net"
        )
    if k > net.max_links:
        raise InvalidRequestError(
            f"{task}, but {k} links exceed the maximum of {net.max_links} "
            f"allowed by the net"
        )
