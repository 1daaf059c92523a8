"""A single square of the logical battlefield."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import Terrain
from .units import Entity


@dataclass(eq=False)
class Tile:
    terrain: Terrain
    occupant: Entity | None = None

    def is_occupied(self) -> bool:
        return self.occupant is not None

    def can_pass(self) -> bool:
        """Whether units may route through this tile."""
        return self.terrain is not Terrain.BUILDING

    def can_place(self) -> bool:
        """Whether a new unit may be put on this tile."""
        return self.terrain is not Terrain.BUILDING and not self.is_occupied()