#!/usr/bin/env python3
"""Entry point for building a topology from a JSON request.

Creates a network substrate with the requested capacity, runs one generator
on it and prints a summary of the result.

Usage:
    python run_generator.py --config request.json
    python run_generator.py --config request.json --dry-run
    python run_generator.py --config request.json --verbose

Example request::

    {
      "network": {"max_nodes": 2000, "max_links": 6000, "n_states": 2, "seed": 42},
      "model": "lattice",
      "params": {"dims": [10, 20, 10], "periodic": [true, false, true]}
    }
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import numpy as np

from netbuild.config import TopologyRequest, config_from_json, params_from_dict
from netbuild.errors import InvalidRequestError
from netbuild.generators import generate, plan
from netbuild.network import Network, degree_distribution, self_loop_count

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_request(request: TopologyRequest, dry_run: bool = False) -> Network:
    """Create the substrate for ``request`` and build (or only plan) its model.

    Args:
        request: Loaded topology request.
        dry_run: Validate the request without building it.

    Returns:
        The substrate, empty after a dry run.
    """
    net = Network(
        request.network.max_nodes,
        request.network.max_links,
        request.network.n_states,
        rng=request.network.seed,
    )
    config = params_from_dict(request.model, request.params or {})
    matrix = np.asarray(request.matrix) if request.matrix is not None else None

    if dry_run:
        with stage_timer("Plan"):
            result = plan(net, request.model, config, matrix=matrix)
        for name in ("n", "n_links", "state"):
            if hasattr(result, name):
                print(f"  {name}: {getattr(result, name)}")
        return net

    with stage_timer(f"Generate {request.model}"):
        generate(net, request.model, config, matrix=matrix)
    return net


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Build a network topology from a JSON request"
    )
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to topology request JSON file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the request without building the topology",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)

    try:
        request = config_from_json(config_path.read_text())
        print(f"Model:    {request.model}")
        print(f"Capacity: nodes={request.network.max_nodes}, "
              f"links={request.network.max_links}, states={request.network.n_states}")
        print(f"Seed:     {request.network.seed}")
        net = run_request(request, dry_run=args.dry_run)
    except InvalidRequestError as e:
        log.error("Invalid request: %s", e)
        sys.exit(1)

    if args.dry_run:
        print("\n[dry-run] Request is valid. Exiting.")
        return

    print(f"\n{net}")
    print(f"Self-loops: {self_loop_count(net)}")
    dist = degree_distribution(net)
    for k, frac in enumerate(dist, start=1):
        if frac > 0:
            print(f"  degree {k}: {frac:.4f}")


if __name__ == "__main__":
    main()
