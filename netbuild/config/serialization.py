"""JSON serialization and deserialization for generator configs and requests."""

import json
from dataclasses import asdict
from typing import Any

from dacite import Config as DaciteConfig
from dacite import from_dict
from dacite.exceptions import DaciteError

from netbuild.config.builders import MODEL_CONFIGS, TopologyRequest
from netbuild.errors import InvalidRequestError

# Casts JSON arrays back to tuples and JSON integers to float fields
_DACITE_CONFIG = DaciteConfig(
    cast=[tuple, float],
    check_types=True,
    strict=True,
)


def config_to_json(request: TopologyRequest) -> str:
    """Serialize a TopologyRequest to a JSON string.

    Uses sorted keys and 2-space indent for human readability and diffability.
    """
    return json.dumps(asdict(request), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> TopologyRequest:
    """Deserialize a JSON string to a TopologyRequest.

    The model name and its params are checked as well, so a request that
    loads is one the registry can dispatch.
    """
    return config_from_dict(json.loads(json_str))


def config_from_dict(d: dict[str, Any]) -> TopologyRequest:
    """Reconstruct a TopologyRequest from a plain dictionary."""
    try:
        request = from_dict(data_class=TopologyRequest, data=d, config=_DACITE_CONFIG)
    except DaciteError as e:
        raise InvalidRequestError(f"Malformed topology request: {e}") from e
    # Fail on unknown model names or params now rather than at build time
    params_from_dict(request.model, request.params or {})
    return request


def params_from_dict(model: str, params: dict[str, Any]) -> Any:
    """Build the config dataclass registered for ``model`` from ``params``.

    Raises:
        InvalidRequestError: For an unknown model or params that do not
            match its config fields.
    """
    if model not in MODEL_CONFIGS:
        raise InvalidRequestError(
            f"Unknown model {model!r}; expected one of {sorted(MODEL_CONFIGS)}"
        )
    try:
        return from_dict(
            data_class=MODEL_CONFIGS[model], data=params, config=_DACITE_CONFIG
        )
    except DaciteError as e:
        raise InvalidRequestError(f"Invalid params for model {model!r}: {e}") from e
