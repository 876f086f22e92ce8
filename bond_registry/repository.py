"""Bond repository: record and index invariants over single-key get/put."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from bond_registry.codec import (
    bond_to_dict,
    decode_bond,
    decode_index,
    encode_bond,
    encode_index,
)
from bond_registry.exceptions import (
    AlreadyExistsError,
    ArgumentError,
    BondNotFoundError,
    CorruptRecordError,
    EntityNotFoundError,
    SinkError,
)
from bond_registry.models import Bond, BondIndex, Event
from bond_registry.store.base import LedgerAdapter

logger = logging.getLogger(__name__)

DEFAULT_INDEX_KEY = "bondIDs"


class BondRepository:
    """Create, read, list and transfer bonds stored in a key/value ledger.

    Two kinds of keys are used: each bond lives under its own
    ``real_estate_id``, and the index of every created id lives under
    ``index_key``. The store offers no transactions, so:

    * The uniqueness check in :meth:`create` is a plain read followed by a
      write. Two concurrent creates of the same id can both pass it, unless
      the backend has a conditional put, which is then used for the record
      write.
    * The record and the index are written separately. If the index write
      fails the bond exists but is not listed. :meth:`reconcile_index`
      repairs this on stores that can scan keys.

    Nothing is cached between calls; every operation reads current state.
    """

    def __init__(
        self,
        ledger: LedgerAdapter,
        index_key: str = DEFAULT_INDEX_KEY,
        sink: Any | None = None,
        source: str = "bond-registry",
    ) -> None:
        """Initialize the repository.

        Parameters
        ----------
        ledger : LedgerAdapter
            Adapter over the key/value store.
        index_key : str
            Key holding the bond index.
        sink : Any | None
            Optional change feed sink with a ``publish(event)`` method.
        source : str
            ``source`` attribute of published events.
        """
        self.ledger = ledger
        self.index_key = index_key
        self.sink = sink
        self.source = source

    # Bonds
    def create(self, *fields: str) -> None:
        """Create and index a bond from the 11 positional create fields.

        Raises
        ------
        ArgumentError
            Wrong field count or empty real estate id.
        AlreadyExistsError
            A record is already stored under the real estate id.
        StoreTransportError
            A get or put failed. If it was the index write, the bond record
            is already stored and left un-indexed.
        """
        if len(fields) != Bond.FIELD_COUNT:
            raise ArgumentError(
                f"create: expected {Bond.FIELD_COUNT} fields, got {len(fields)}"
            )
        bond = Bond.from_args(list(fields))
        if not bond.real_estate_id:
            raise ArgumentError("create: real_estate_id must not be empty")

        key = bond.real_estate_id
        if self.ledger.get(key) is not None:
            raise AlreadyExistsError(f"create: bond {key} already exists")

        data = encode_bond(bond)
        if self.ledger.supports_conditional_put:
            if not self.ledger.put_if_absent(key, data):
                raise AlreadyExistsError(f"create: bond {key} already exists")
        else:
            self.ledger.put(key, data)

        index = self._load_index("create")
        index.append(key)
        self.ledger.put(self.index_key, encode_index(index))

        logger.info("Created bond %s for owner %s", key, bond.owner_national_id, extra={"key": key})
        self._publish("bond.created", bond)

    def retrieve(self, real_estate_id: str) -> Bond:
        """Load the bond stored under ``real_estate_id``.

        Raises
        ------
        BondNotFoundError
            Nothing is stored under the key.
        CorruptRecordError
            The stored bytes are not a bond record.
        """
        data = self.ledger.get(real_estate_id)
        if data is None:
            raise BondNotFoundError(f"retrieve: no bond with real_estate_id {real_estate_id}")
        logger.debug("Retrieved bond %s", real_estate_id, extra={"key": real_estate_id})
        return decode_bond(data)

    def transfer(self, bond: Bond, new_owner_national_id: str) -> Bond:
        """Set a retrieved bond's owner and rewrite the whole record."""
        bond.owner_national_id = new_owner_national_id
        self.ledger.put(bond.real_estate_id, encode_bond(bond))
        logger.info(
            "Transferred bond %s to owner %s",
            bond.real_estate_id,
            new_owner_national_id,
            extra={"key": bond.real_estate_id},
        )
        self._publish("bond.transferred", bond)
        return bond

    def transfer_ownership(self, real_estate_id: str, new_owner_national_id: str) -> Bond:
        """Change the owner of an existing bond.

        No check is made that the owner actually changes, nor on who asks
        for the transfer. A missing or corrupt bond fails before any write.
        """
        return self.transfer(self.retrieve(real_estate_id), new_owner_national_id)

    def list_all(self) -> list[Bond]:
        """Return every indexed bond in creation order.

        A single missing or corrupt entry fails the whole listing.
        """
        return [self.retrieve(real_estate_id) for real_estate_id in self._load_index("list").bond_ids]

    def check_unique(self, real_estate_id: str) -> bool:
        """Return True if no record is stored under ``real_estate_id``.

        Checks the record key directly, so un-indexed bonds still count
        as taken.
        """
        return self.ledger.get(real_estate_id) is None

    # Index
    def reset_index(self) -> None:
        """Overwrite the index with an empty one, dropping every entry."""
        self.ledger.put(self.index_key, encode_index(BondIndex()))

    def has_index(self) -> bool:
        return self.ledger.get(self.index_key) is not None

    def reconcile_index(self) -> list[str]:
        """Append stored but un-indexed bonds to the index.

        Needs a store that can scan keys. A key counts as a bond when its
        value decodes as one and names the key as its real estate id;
        anything else (credentials, for example) is skipped.

        Returns
        -------
        list[str]
            Real estate ids that were added, in key order.
        """
        index = self._load_index("reconcile")
        indexed = set(index.bond_ids)
        added = []
        for key in self.ledger.keys():
            if key == self.index_key or key in indexed:
                continue
            data = self.ledger.get(key)
            if data is None:
                continue
            try:
                bond = decode_bond(data)
            except CorruptRecordError:
                continue
            if bond.real_estate_id != key:
                continue
            index.append(key)
            indexed.add(key)
            added.append(key)

        if added:
            self.ledger.put(self.index_key, encode_index(index))
            logger.warning("Re-indexed %d orphaned bonds: %s", len(added), ", ".join(added))
        return added

    def _load_index(self, operation: str) -> BondIndex:
        data = self.ledger.get(self.index_key)
        if data is None:
            raise EntityNotFoundError(f"{operation}: bond index {self.index_key} is missing, run init first")
        return decode_index(data)

    def _publish(self, event_type: str, bond: Bond) -> None:
        if self.sink is None:
            return
        event = Event(
            event_id=uuid.uuid4().hex,
            event_type=event_type,
            event_time=datetime.now(timezone.utc),
            source=self.source,
            subject=bond.real_estate_id,
            data=bond_to_dict(bond),
        )
        try:
            self.sink.publish(event)
        except SinkError as e:
            # Ledger write already applied
            logger.error("Change feed publish failed: %s", e, extra={"key": bond.real_estate_id})
