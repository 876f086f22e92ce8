"""Bond record and the index of known real estate ids."""

from dataclasses import dataclass, field


@dataclass
class Coordinates:
    """Geographic position of the parcel."""

    long: str
    lat: str


@dataclass
class Borders:
    """What the parcel borders on each side."""

    north: str
    south: str
    east: str
    west: str


@dataclass
class Bond:
    """Real-estate ownership record.

    ``real_estate_id`` doubles as the storage key and has the form
    ``blueprint.parcel`` (e.g. ``"1232.21"``). ``status`` ("flat",
    "built", ...) is free text and is not validated.
    """

    id: str
    real_estate_id: str
    owner_national_id: str
    status: str
    area: str
    coordinates: Coordinates
    borders: Borders

    # Positional argument order of the create operation
    FIELD_COUNT = 11

    @classmethod
    def from_args(cls, args: list[str]) -> "Bond":
        """Build a bond from the flat create argument list.

        Order: id, real_estate_id, owner_national_id, status, area,
        long, lat, north, south, east, west.
        """
        return cls(
            id=args[0],
            real_estate_id=args[1],
            owner_national_id=args[2],
            status=args[3],
            area=args[4],
            coordinates=Coordinates(long=args[5], lat=args[6]),
            borders=Borders(north=args[7], south=args[8], east=args[9], west=args[10]),
        )


@dataclass
class BondIndex:
    """Append-only list of every real estate id ever created."""

    bond_ids: list[str] = field(default_factory=list)

    def append(self, real_estate_id: str) -> None:
        """Record a newly created bond. Duplicates are not checked."""
        self.bond_ids.append(real_estate_id)

    def __contains__(self, real_estate_id: object) -> bool:
        return real_estate_id in self.bond_ids

    def __len__(self) -> int:
        return len(self.bond_ids)
