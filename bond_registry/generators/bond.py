"""Synthetic bond generator for seeding and load tests."""

from __future__ import annotations

from typing import Iterator

from bond_registry.generators.base import BaseGenerator
from bond_registry.models import Bond, Borders, Coordinates


class BondGenerator(BaseGenerator):
    """Generate bonds with unique ``blueprint.parcel`` real estate ids."""

    STATUSES = ["flat", "built"]
    STATUS_WEIGHTS = [0.35, 0.65]

    def __init__(self, seed: int | None = None, locale: str = "pt_BR") -> None:
        super().__init__(seed, locale)
        self._issued: set[str] = set()

    def generate(self) -> Bond:
        """Generate a single bond."""
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[Bond]:
        """Generate ``count`` bonds, all with distinct real estate ids.

        Parameters
        ----------
        count : int
            Number of bonds to generate.

        Yields
        ------
        Bond
            Generated bonds.
        """
        for _ in range(count):
            yield self._generate_one()

    @staticmethod
    def to_args(bond: Bond) -> list[str]:
        """Flatten a bond into the ``create_bond`` argument list."""
        return [
            bond.id,
            bond.real_estate_id,
            bond.owner_national_id,
            bond.status,
            bond.area,
            bond.coordinates.long,
            bond.coordinates.lat,
            bond.borders.north,
            bond.borders.south,
            bond.borders.east,
            bond.borders.west,
        ]

    def _real_estate_id(self) -> str:
        while True:
            candidate = f"{self.random.randint(1, 9999)}.{self.random.randint(1, 99)}"
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    def _generate_one(self) -> Bond:
        status = self.random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]
        # Built parcels tend to be smaller than open land
        area = self.random.randint(60, 600) if status == "built" else self.random.randint(200, 5000)
        return Bond(
            id=self.fake.uuid4(),
            real_estate_id=self._real_estate_id(),
            owner_national_id=self.fake.numerify("###########"),
            status=status,
            area=str(area),
            coordinates=Coordinates(
                long=str(self.fake.longitude()),
                lat=str(self.fake.latitude()),
            ),
            borders=Borders(
                north=self.fake.street_name(),
                south=self.fake.street_name(),
                east=self.fake.street_name(),
                west=self.fake.street_name(),
            ),
        )
