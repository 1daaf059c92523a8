"""The logical battlefield: unit placement, target search and combat turns."""

from __future__ import annotations

from collections import deque

from .constants import FieldProperties, Terrain, terrain_for_layer
from .tile import Tile
from .units import Unit

Position = tuple[int, int]

_DIRECTIONS = ((0, 1), (0, -1), (-1, 0), (1, 0))


class PlacementError(ValueError):
    """Raised when a unit cannot be placed, moved or removed."""


class UnitManager:
    """Owns the logical field and the units of both sides."""

    def __init__(self, field_properties: FieldProperties) -> None:
        self.field_properties = field_properties
        self.player_units: list[Unit] = []
        self.enemy_units: list[Unit] = []
        self._field = self._load_logical_field()
        self._load_enemy_units()

    @property
    def width(self) -> int:
        return self.field_properties.field_dimensions[0]

    @property
    def height(self) -> int:
        return self.field_properties.field_dimensions[1]

    def _load_logical_field(self) -> list[list[Tile]]:
        width = self.width
        field = [[Tile(Terrain.EMPTY) for _ in range(width)] for _ in range(self.height)]
        for layer in self.field_properties.battlefield.tile_layers():
            terrain = terrain_for_layer(layer.name)
            if terrain is None:
                continue
            for y, row in enumerate(field):
                for x in range(width):
                    if layer.gid_at(x, y, width):
                        row[x] = Tile(terrain)
        return field

    def _load_enemy_units(self) -> None:
        corners = ((self.width - 1, self.height - 1), (self.width - 1, 0), (0, self.height - 1))
        for x, y in corners:
            try:
                self.add_unit(1, x, y)
            except PlacementError:
                continue

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"tile ({x}, {y}) is outside the field")
        return self._field[y][x]

    def add_unit(self, team: int, x: int, y: int) -> Unit:
        """Place a new unit; team 0 is the player's side."""
        if not self.in_bounds(x, y):
            raise PlacementError("invalid coordinates for unit placement")
        tile = self._field[y][x]
        if not tile.can_place():
            raise PlacementError("invalid unit placement coordinates")
        unit = Unit(team, x, y)
        tile.occupant = unit
        (self.player_units if team == 0 else self.enemy_units).append(unit)
        return unit

    def remove_unit(self, unit: Unit) -> None:
        """Take ``unit`` off the field and release everything targeting it."""
        tile = self._field[unit.y][unit.x]
        if not tile.is_occupied():
            raise PlacementError("no unit to remove at the specified coordinates")

        for attacker in unit.attacking_units:
            attacker.enemy = None
            attacker.enemy_path.clear()
        unit.attacking_units.clear()

        occupant = tile.occupant
        units = self.player_units if unit.team == 0 else self.enemy_units
        for index, candidate in enumerate(units):
            if candidate is occupant:
                del units[index]
                tile.occupant = None
                return
        raise PlacementError("could not delete unit from units list")

    def move_unit(self, src_x: int, src_y: int, dest_x: int, dest_y: int) -> bool:
        """Move the occupant of one tile to another; False if nothing moved."""
        if not self.in_bounds(src_x, src_y):
            raise PlacementError("invalid source coordinates")
        if not self.in_bounds(dest_x, dest_y):
            raise PlacementError("invalid destination coordinates")

        src = self._field[src_y][src_x]
        dest = self._field[dest_y][dest_x]
        if not src.is_occupied() or dest.is_occupied():
            return False

        unit = src.occupant
        src.occupant = None
        dest.occupant = unit
        unit.x, unit.y = dest_x, dest_y
        return True

    @staticmethod
    def _reconstruct_path(ancestors: dict[Position, Position | None], end: Position) -> list[Position]:
        path = []
        node: Position | None = end
        while node is not None:
            path.append(node)
            node = ancestors[node]
        path.reverse()
        return path

    def _find_enemy(self, unit: Unit) -> None:
        start = (unit.x, unit.y)
        frontier = deque([start])
        ancestors: dict[Position, Position | None] = {start: None}

        while frontier:
            current = frontier.popleft()
            x, y = current
            occupant = self._field[y][x].occupant
            if occupant is not None and occupant.team != unit.team:
                unit.enemy = occupant
                unit.enemy_path = self._reconstruct_path(ancestors, current)
                occupant.add_attacking_unit(unit)
                return

            for dx, dy in _DIRECTIONS:
                step = (x + dx, y + dy)
                if (
                    self.in_bounds(*step)
                    and self._field[step[1]][step[0]].can_pass()
                    and step not in ancestors
                ):
                    ancestors[step] = current
                    frontier.append(step)

    def search(self) -> None:
        """Give every idle player unit the nearest reachable enemy as target."""
        for unit in self.player_units:
            if not unit.enemy_path:
                self._find_enemy(unit)

    def update(self) -> None:
        """Advance one turn: each targeting unit attacks if in range, else steps."""
        for unit in list(self.player_units):
            if not unit.enemy_path:
                continue
            next_x, next_y = unit.enemy_path.pop(0)
            enemy = unit.enemy
            if unit.in_range(enemy):
                unit.attack(enemy)
                if enemy.is_dead():
                    self.remove_unit(enemy)
            else:
                self.move_unit(unit.x, unit.y, next_x, next_y)