"""Domain models for the bond registry."""

from bond_registry.models.base import Event
from bond_registry.models.bond import Bond, BondIndex, Borders, Coordinates

__all__ = ["Bond", "BondIndex", "Borders", "Coordinates", "Event"]
