"""One-time ledger initialization and liveness check."""

import logging
from typing import Iterable

from bond_registry.credentials import CredentialDirectory
from bond_registry.exceptions import ArgumentError
from bond_registry.repository import BondRepository

logger = logging.getLogger(__name__)

PING_PAYLOAD = b"Hello, world!"


def initialize(
    repository: BondRepository,
    directory: CredentialDirectory | None = None,
    credentials: Iterable[tuple[str, str]] = (),
    force: bool = True,
) -> bool:
    """Write an empty bond index and register initial credentials.

    With ``force=True`` (the default) an existing index is overwritten and
    every indexed id is forgotten; the bond records themselves stay in the
    store but no longer show up in listings. Pass ``force=False`` to keep an
    existing index.

    Returns
    -------
    bool
        True if the index was (re)written.
    """
    credentials = list(credentials)
    if credentials and directory is None:
        raise ArgumentError("init: credentials given without a credential directory")

    written = True
    if not force and repository.has_index():
        logger.info("Bond index %s already present, leaving it", repository.index_key)
        written = False
    else:
        repository.reset_index()
        logger.info("Initialized empty bond index %s", repository.index_key)

    for name, ecert in credentials:
        directory.add_ecert(name, ecert)
    return written


def initialize_from_args(
    repository: BondRepository,
    directory: CredentialDirectory,
    args: list[str],
    force: bool = True,
) -> bool:
    """Initialize from a flat ``name, ecert, name, ecert, ...`` list."""
    if len(args) % 2:
        raise ArgumentError(f"init: expected name/ecert pairs, got {len(args)} arguments")
    pairs = list(zip(args[::2], args[1::2]))
    return initialize(repository, directory, pairs, force=force)


def ping() -> bytes:
    """Liveness check."""
    return PING_PAYLOAD
