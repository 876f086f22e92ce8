"""Caller credential (eCert) lookup over the ledger."""

import logging

from bond_registry.codec import decode_bond
from bond_registry.exceptions import AlreadyExistsError, ArgumentError, CorruptRecordError, EntityNotFoundError
from bond_registry.repository import DEFAULT_INDEX_KEY
from bond_registry.store.base import LedgerAdapter

logger = logging.getLogger(__name__)


class CredentialDirectory:
    """Raw eCert bytes stored under the caller's name.

    Credentials share the key space with bonds and are never parsed or
    verified here. A name may not be the bond index key or the
    real_estate_id of a stored bond.
    """

    def __init__(self, ledger: LedgerAdapter, index_key: str = DEFAULT_INDEX_KEY) -> None:
        self.ledger = ledger
        self.index_key = index_key

    def get_ecert(self, name: str) -> bytes:
        """Return the stored eCert for ``name``."""
        ecert = self.ledger.get(name)
        if ecert is None:
            raise EntityNotFoundError(f"get_ecert: no ecert for user {name}")
        return ecert

    def add_ecert(self, name: str, ecert: str) -> None:
        """Store ``ecert`` under ``name``, replacing any previous eCert.

        Raises
        ------
        ArgumentError
            ``name`` is empty or is the bond index key.
        AlreadyExistsError
            A bond is stored under ``name``.
        """
        if not name:
            raise ArgumentError("add_ecert: user name must not be empty")
        if name == self.index_key:
            raise ArgumentError(f"add_ecert: user name {name} is reserved for the bond index")

        existing = self.ledger.get(name)
        if existing is not None and self._is_bond(name, existing):
            raise AlreadyExistsError(f"add_ecert: key {name} holds a bond")

        self.ledger.put(name, ecert.encode("utf-8"))
        logger.info("Stored ecert for user %s", name, extra={"key": name})

    @staticmethod
    def _is_bond(name: str, data: bytes) -> bool:
        try:
            bond = decode_bond(data)
        except CorruptRecordError:
            # Not a bond record, so an earlier eCert
            return False
        return bond.real_estate_id == name
