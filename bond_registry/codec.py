"""JSON encoding of bond and index records.

Records are stored as compact UTF-8 JSON. Keys follow field declaration
order so that the same bond always encodes to the same bytes::

    {"id":"b1","real_estate_id":"100.1","owner_national_id":"n1",
     "status":"built","area":"50","coordinates":{"long":"10","lat":"20"},
     "borders":{"north":"n","south":"s","east":"e","west":"w"}}

Decoding never guesses: malformed JSON, a missing field or a non-string
value raises :class:`CorruptRecordError`.
"""

import json
from dataclasses import asdict, fields
from typing import Any

from bond_registry.exceptions import CorruptRecordError
from bond_registry.models import Bond, BondIndex, Borders, Coordinates

_SEPARATORS = (",", ":")


def bond_to_dict(bond: Bond) -> dict[str, Any]:
    """Convert a bond (including nested coordinates and borders) to a dict."""
    return asdict(bond)


def encode_bond(bond: Bond) -> bytes:
    """Serialize a bond to its stored byte form."""
    return json.dumps(bond_to_dict(bond), separators=_SEPARATORS, ensure_ascii=False).encode("utf-8")


def decode_bond(data: bytes) -> Bond:
    """Parse stored bytes into a bond.

    Raises
    ------
    CorruptRecordError
        If ``data`` is not a complete bond record.
    """
    obj = _load_object(data, "bond")
    try:
        return Bond(
            id=_string(obj, "id"),
            real_estate_id=_string(obj, "real_estate_id"),
            owner_national_id=_string(obj, "owner_national_id"),
            status=_string(obj, "status"),
            area=_string(obj, "area"),
            coordinates=Coordinates(**_strings(obj, "coordinates", Coordinates)),
            borders=Borders(**_strings(obj, "borders", Borders)),
        )
    except CorruptRecordError as e:
        raise CorruptRecordError(f"Corrupt bond record {_preview(data)}: {e}") from None


def encode_index(index: BondIndex) -> bytes:
    """Serialize the bond index."""
    return json.dumps(asdict(index), separators=_SEPARATORS, ensure_ascii=False).encode("utf-8")


def decode_index(data: bytes) -> BondIndex:
    """Parse the stored bond index.

    A ``null`` id list (as written by an index that was never appended
    to) decodes as empty. An object without ``bond_ids`` is corrupt.
    """
    obj = _load_object(data, "index")
    if "bond_ids" not in obj:
        raise CorruptRecordError(f"Corrupt bond index {_preview(data)}: field 'bond_ids' missing")
    bond_ids = obj["bond_ids"]
    if bond_ids is None:
        return BondIndex()
    if not isinstance(bond_ids, list) or not all(isinstance(i, str) for i in bond_ids):
        raise CorruptRecordError(f"Corrupt bond index {_preview(data)}: bond_ids must be a list of strings")
    return BondIndex(bond_ids=list(bond_ids))


def encode_bond_list(bonds: list[Bond]) -> bytes:
    """Render bonds as ``[`` + comma-joined encoded bonds + ``]``."""
    return b"[" + b",".join(encode_bond(b) for b in bonds) + b"]"


def _load_object(data: bytes, kind: str) -> dict[str, Any]:
    try:
        obj = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise CorruptRecordError(f"Corrupt {kind} record {_preview(data)}: {e}") from e
    if not isinstance(obj, dict):
        raise CorruptRecordError(f"Corrupt {kind} record {_preview(data)}: expected a JSON object")
    return obj


def _string(obj: dict[str, Any], key: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise CorruptRecordError(f"field {key!r} missing or not a string")
    return value


def _strings(obj: dict[str, Any], key: str, model: type) -> dict[str, str]:
    nested = obj.get(key)
    if not isinstance(nested, dict):
        raise CorruptRecordError(f"field {key!r} missing or not an object")
    return {f.name: _string(nested, f.name) for f in fields(model)}


def _preview(data: bytes, limit: int = 80) -> str:
    text = data[:limit].decode("utf-8", errors="replace")
    return repr(text + "..." if len(data) > limit else text)
