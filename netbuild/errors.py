"""Error kinds raised by the topology generators and the network substrate."""


class InvalidRequestError(ValueError):
    """Raised when a generator request cannot be satisfied.

    Every validation failure (capacity, domain, structural impossibility,
    link budget overrun) is reported with this single kind. Callers correct
    the parameters and call again.
    """


class CapacityError(InvalidRequestError):
    """Raised by the substrate when a node or link would exceed capacity."""
