"""Tests for the record codec."""

import json

import pytest

from bond_registry.codec import (
    bond_to_dict,
    decode_bond,
    decode_index,
    encode_bond,
    encode_bond_list,
    encode_index,
)
from bond_registry.exceptions import CorruptRecordError
from bond_registry.models import Bond, BondIndex


@pytest.fixture
def bond(sample_args: list[str]) -> Bond:
    return Bond.from_args(sample_args)


class TestEncodeBond:
    """Tests for bond encoding."""

    def test_exact_bytes(self, bond: Bond) -> None:
        """Compact JSON, keys in declaration order."""
        assert encode_bond(bond) == (
            b'{"id":"b1","real_estate_id":"100.1","owner_national_id":"n1",'
            b'"status":"built","area":"50","coordinates":{"long":"10","lat":"20"},'
            b'"borders":{"north":"n","south":"s","east":"e","west":"w"}}'
        )

    def test_all_fields_present(self, bond: Bond) -> None:
        data = json.loads(encode_bond(bond))
        assert set(data) == {
            "id",
            "real_estate_id",
            "owner_national_id",
            "status",
            "area",
            "coordinates",
            "borders",
        }
        assert set(data["coordinates"]) == {"long", "lat"}
        assert set(data["borders"]) == {"north", "south", "east", "west"}

    def test_id_and_real_estate_id_kept_apart(self, bond: Bond) -> None:
        data = json.loads(encode_bond(bond))
        assert data["id"] == "b1"
        assert data["real_estate_id"] == "100.1"

    def test_non_ascii_is_utf8(self, bond: Bond) -> None:
        bond.borders.north = "Rua São João"
        assert "Rua São João".encode("utf-8") in encode_bond(bond)

    def test_bond_to_dict_nested(self, bond: Bond) -> None:
        assert bond_to_dict(bond)["coordinates"] == {"long": "10", "lat": "20"}


class TestDecodeBond:
    """Tests for bond decoding."""

    def test_decodes_encoded_bond(self, bond: Bond) -> None:
        assert decode_bond(encode_bond(bond)) == bond

    def test_ignores_unknown_keys(self, bond: Bond) -> None:
        data = bond_to_dict(bond)
        data["extra"] = "ignored"
        assert decode_bond(json.dumps(data).encode()) == bond

    @pytest.mark.parametrize(
        "raw",
        [
            b"",
            b"not json",
            b'{"id":"b1"',
            b"[]",
            b'"string"',
            b"\xff\xfe",
        ],
    )
    def test_malformed_bytes(self, raw: bytes) -> None:
        with pytest.raises(CorruptRecordError, match="Corrupt bond record"):
            decode_bond(raw)

    def test_missing_field(self, bond: Bond) -> None:
        data = bond_to_dict(bond)
        del data["owner_national_id"]
        with pytest.raises(CorruptRecordError, match="owner_national_id"):
            decode_bond(json.dumps(data).encode())

    def test_missing_nested_field(self, bond: Bond) -> None:
        data = bond_to_dict(bond)
        del data["borders"]["west"]
        with pytest.raises(CorruptRecordError, match="west"):
            decode_bond(json.dumps(data).encode())

    def test_non_string_value(self, bond: Bond) -> None:
        data = bond_to_dict(bond)
        data["area"] = 50
        with pytest.raises(CorruptRecordError, match="area"):
            decode_bond(json.dumps(data).encode())

    def test_nested_not_object(self, bond: Bond) -> None:
        data = bond_to_dict(bond)
        data["coordinates"] = ["10", "20"]
        with pytest.raises(CorruptRecordError, match="coordinates"):
            decode_bond(json.dumps(data).encode())


class TestIndexCodec:
    """Tests for index encoding and decoding."""

    def test_encode_empty(self) -> None:
        assert encode_index(BondIndex()) == b'{"bond_ids":[]}'

    def test_encode_ids(self) -> None:
        assert encode_index(BondIndex(["1.1", "2.2"])) == b'{"bond_ids":["1.1","2.2"]}'

    def test_decode_ids(self) -> None:
        assert decode_index(b'{"bond_ids":["1.1","2.2"]}').bond_ids == ["1.1", "2.2"]

    def test_decode_null_as_empty(self) -> None:
        assert decode_index(b'{"bond_ids":null}').bond_ids == []

    @pytest.mark.parametrize(
        "raw",
        [b"{}", b'{"id":"b1","real_estate_id":"100.1"}'],
    )
    def test_decode_missing_ids(self, raw: bytes) -> None:
        with pytest.raises(CorruptRecordError, match="bond_ids' missing"):
            decode_index(raw)

    @pytest.mark.parametrize(
        "raw",
        [b"garbage", b'{"bond_ids":"1.1"}', b'{"bond_ids":[1, 2]}', b"null"],
    )
    def test_decode_corrupt(self, raw: bytes) -> None:
        with pytest.raises(CorruptRecordError, match="Corrupt bond index|Corrupt index record"):
            decode_index(raw)


class TestEncodeBondList:
    """Tests for the bracketed bond listing."""

    def test_empty(self) -> None:
        assert encode_bond_list([]) == b"[]"

    def test_single(self, bond: Bond) -> None:
        assert encode_bond_list([bond]) == b"[" + encode_bond(bond) + b"]"

    def test_multiple_comma_joined(self, bond: Bond, sample_args: list[str]) -> None:
        sample_args[1] = "200.2"
        other = Bond.from_args(sample_args)

        result = encode_bond_list([bond, other])

        assert result == b"[" + encode_bond(bond) + b"," + encode_bond(other) + b"]"
        assert [b["real_estate_id"] for b in json.loads(result)] == ["100.1", "200.2"]
