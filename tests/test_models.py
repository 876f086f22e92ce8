"""Tests for domain models."""

from datetime import datetime

import pytest

from bond_registry.models import Bond, BondIndex, Borders, Coordinates, Event


class TestBond:
    """Tests for Bond model."""

    def test_from_args(self, sample_args: list[str]) -> None:
        """Create arguments map onto fields in order."""
        bond = Bond.from_args(sample_args)

        assert bond.id == "b1"
        assert bond.real_estate_id == "100.1"
        assert bond.owner_national_id == "n1"
        assert bond.status == "built"
        assert bond.area == "50"
        assert bond.coordinates == Coordinates(long="10", lat="20")
        assert bond.borders == Borders(north="n", south="s", east="e", west="w")

    def test_field_count(self, sample_args: list[str]) -> None:
        assert Bond.FIELD_COUNT == len(sample_args) == 11

    def test_status_is_free_text(self, sample_args: list[str]) -> None:
        """Status values are not validated."""
        sample_args[3] = "under construction"
        assert Bond.from_args(sample_args).status == "under construction"

    def test_equality(self, sample_args: list[str]) -> None:
        assert Bond.from_args(sample_args) == Bond.from_args(list(sample_args))


class TestBondIndex:
    """Tests for BondIndex model."""

    def test_default_empty(self) -> None:
        index = BondIndex()
        assert index.bond_ids == []
        assert len(index) == 0

    def test_append_keeps_order(self) -> None:
        index = BondIndex()
        index.append("2.1")
        index.append("1.1")

        assert index.bond_ids == ["2.1", "1.1"]
        assert "1.1" in index
        assert "3.1" not in index

    def test_append_does_not_dedup(self) -> None:
        index = BondIndex()
        index.append("1.1")
        index.append("1.1")
        assert index.bond_ids == ["1.1", "1.1"]

    def test_instances_do_not_share_list(self) -> None:
        a, b = BondIndex(), BondIndex()
        a.append("1.1")
        assert b.bond_ids == []


class TestEvent:
    """Tests for Event model."""

    def test_event_creation(self) -> None:
        now = datetime.now()
        event = Event(
            event_id="evt-001",
            event_type="bond.created",
            event_time=now,
            source="bond-registry",
            subject="100.1",
            data={"real_estate_id": "100.1"},
        )

        assert event.event_type == "bond.created"
        assert event.subject == "100.1"
        assert event.metadata == {}

    def test_metadata_not_shared(self) -> None:
        now = datetime.now()
        e1 = Event("1", "bond.created", now, "s", "1.1", {})
        e2 = Event("2", "bond.created", now, "s", "1.2", {})
        e1.metadata["x"] = 1
        assert e2.metadata == {}


@pytest.mark.parametrize("status", ["flat", "built"])
def test_known_statuses_round_trip_through_args(sample_args: list[str], status: str) -> None:
    sample_args[3] = status
    assert Bond.from_args(sample_args).status == status
