"""Tests for the synthetic bond generator."""

from bond_registry.generators.bond import BondGenerator
from bond_registry.models import Bond
from bond_registry.router import Router


class TestBondGenerator:
    """Tests for BondGenerator."""

    def test_generate(self) -> None:
        bond = BondGenerator(seed=42).generate()

        assert isinstance(bond, Bond)
        assert bond.real_estate_id
        assert bond.status in BondGenerator.STATUSES
        assert len(bond.owner_national_id) == 11
        assert int(bond.area) > 0

    def test_seeded_is_reproducible(self) -> None:
        first = list(BondGenerator(seed=7).generate_batch(10))
        second = list(BondGenerator(seed=7).generate_batch(10))

        assert first == second

    def test_unique_real_estate_ids(self) -> None:
        bonds = list(BondGenerator(seed=1).generate_batch(500))

        assert len({b.real_estate_id for b in bonds}) == 500

    def test_id_format(self) -> None:
        for bond in BondGenerator(seed=3).generate_batch(20):
            blueprint, parcel = bond.real_estate_id.split(".")
            assert 1 <= int(blueprint) <= 9999
            assert 1 <= int(parcel) <= 99

    def test_to_args(self) -> None:
        bond = BondGenerator(seed=42).generate()
        args = BondGenerator.to_args(bond)

        assert len(args) == Bond.FIELD_COUNT
        assert all(isinstance(a, str) for a in args)
        assert Bond.from_args(args) == bond

    def test_bonds_accepted_by_router(self, router: Router) -> None:
        bonds = list(BondGenerator(seed=42).generate_batch(25))
        for bond in bonds:
            router.invoke("create_bond", BondGenerator.to_args(bond)).raise_for_error()

        listed = router.query("get_bonds", []).raise_for_error()
        assert listed.startswith(b"[")
        for bond in bonds:
            assert router.query("check_unique_real_estate_id", [bond.real_estate_id]).payload == b"false"
