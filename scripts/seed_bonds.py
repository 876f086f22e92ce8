#!/usr/bin/env python3
"""Create synthetic bonds through the router.

Bonds are generated with Faker and sent as ``create_bond`` invocations,
so they go through the same validation, uniqueness check and index update
as real traffic. Store and change feed come from the environment.
"""

import argparse
import logging
import sys
import time

from bond_registry.bootstrap import initialize
from bond_registry.config import RegistryConfig
from bond_registry.generators.bond import BondGenerator
from bond_registry.logging import setup_logging
from bond_registry.service import create_registry

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the registry with synthetic bonds")
    parser.add_argument(
        "--count",
        type=int,
        default=100,
        help="Number of bonds to create (default: 100)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Reset the bond index before seeding",
    )
    args = parser.parse_args()

    config = RegistryConfig.from_env()
    setup_logging(level=config.log_level, format_type=config.log_format)
    registry = create_registry(config)

    logger.info("=" * 60)
    logger.info("Bond Registry - Seed")
    logger.info("=" * 60)
    logger.info("Bonds: %d", args.count)
    logger.info("Seed: %d", args.seed)
    logger.info("Store: %s", config.store.backend)
    logger.info("Events: %s", config.events.backend)
    logger.info("=" * 60)

    # A fresh in-memory store has no index yet
    if args.init or not registry.repository.has_index():
        initialize(registry.repository)

    generator = BondGenerator(seed=args.seed)
    created = failed = 0
    start = time.perf_counter()
    try:
        for bond in generator.generate_batch(args.count):
            response = registry.router.invoke("create_bond", BondGenerator.to_args(bond))
            if response.ok:
                created += 1
            else:
                failed += 1
                logger.warning("Skipped %s: %s", bond.real_estate_id, response.error)
    finally:
        registry.close()

    elapsed = time.perf_counter() - start
    logger.info("Created %d bonds (%d failed) in %.2fs", created, failed, elapsed)
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
