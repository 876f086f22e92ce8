#!/usr/bin/env python3
"""Run a single registry invocation against the configured store.

Store and change feed come from the environment (see
``RegistryConfig.from_env``). Examples::

    STORE_BACKEND=postgres python scripts/registry.py init
    STORE_BACKEND=postgres python scripts/registry.py invoke create_bond \\
        b1 100.1 n1 built 50 10 20 n s e w
    STORE_BACKEND=postgres python scripts/registry.py query get_bond_details 100.1

The payload is written to stdout. On error the message goes to stderr and
the exit code is 1. With the default in-memory backend, state lives only
for the duration of one command.
"""

import argparse
import logging
import sys

from bond_registry.bootstrap import initialize_from_args
from bond_registry.config import RegistryConfig
from bond_registry.exceptions import BondRegistryError
from bond_registry.logging import setup_logging
from bond_registry.service import Registry, create_registry

logger = logging.getLogger(__name__)


def run(registry: Registry, args: argparse.Namespace) -> int:
    """Execute one command and return the process exit code."""
    if args.command == "init":
        written = initialize_from_args(
            registry.repository,
            registry.directory,
            args.credentials,
            force=not args.keep_existing,
        )
        print("initialized" if written else "index already present")
        return 0

    if args.command == "reconcile":
        added = registry.repository.reconcile_index()
        for real_estate_id in added:
            print(real_estate_id)
        logger.info("Reconcile complete: %d bonds re-indexed", len(added))
        return 0

    if args.command == "invoke":
        response = registry.router.invoke(args.function, args.args)
    else:
        response = registry.router.query(args.function, args.args)

    if response.payload:
        # Raw bytes; eCerts are not necessarily UTF-8
        sys.stdout.buffer.write(response.payload + b"\n")
        sys.stdout.flush()
    if response.error is not None:
        print(f"error: {response.error}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Bond registry command line")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Write an empty bond index (destroys the existing one)")
    init.add_argument(
        "credentials",
        nargs="*",
        help="Optional name/ecert pairs to register",
    )
    init.add_argument(
        "--keep-existing",
        action="store_true",
        help="Leave an existing index untouched",
    )

    sub.add_parser("reconcile", help="Re-index bonds missing from the index")

    for command, help_text in (("invoke", "Run a mutating operation"), ("query", "Run a read-only operation")):
        p = sub.add_parser(command, help=help_text)
        p.add_argument("function", help="Operation name, e.g. create_bond")
        p.add_argument("args", nargs="*", help="Positional string arguments")

    args = parser.parse_args()

    config = RegistryConfig.from_env()
    setup_logging(level=config.log_level, format_type=config.log_format)

    try:
        registry = create_registry(config)
    except BondRegistryError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        code = run(registry, args)
    except BondRegistryError as e:
        print(f"error: {e}", file=sys.stderr)
        code = 1
    finally:
        registry.close()
    sys.exit(code)


if __name__ == "__main__":
    main()
