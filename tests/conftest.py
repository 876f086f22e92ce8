"""Pytest configuration and fixtures."""

import pytest

from bond_registry.bootstrap import initialize
from bond_registry.credentials import CredentialDirectory
from bond_registry.repository import BondRepository
from bond_registry.router import Router
from bond_registry.store import InMemoryStore, LedgerAdapter


@pytest.fixture
def sample_args() -> list[str]:
    """create_bond arguments for bond 100.1."""
    return ["b1", "100.1", "n1", "built", "50", "10", "20", "n", "s", "e", "w"]


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh in-memory store."""
    return InMemoryStore()


@pytest.fixture
def ledger(store: InMemoryStore) -> LedgerAdapter:
    """Adapter over the in-memory store."""
    return LedgerAdapter(store)


@pytest.fixture
def repository(ledger: LedgerAdapter) -> BondRepository:
    """Repository over an initialized ledger."""
    repo = BondRepository(ledger)
    initialize(repo)
    return repo


@pytest.fixture
def directory(ledger: LedgerAdapter) -> CredentialDirectory:
    """Credential directory sharing the ledger."""
    return CredentialDirectory(ledger)


@pytest.fixture
def router(repository: BondRepository, directory: CredentialDirectory) -> Router:
    """Router over the initialized repository."""
    return Router(repository, directory)
