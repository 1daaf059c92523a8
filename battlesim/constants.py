"""Shared enumerations and the geometry of a loaded battlefield."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from .tmx import TileMap, Tileset, TmxError


class ViewID(IntEnum):
    TITLE = 0
    GAMEMODE = 1
    URBANFIELD = 2
    RURALFIELD = 3
    UNDERGROUNDFIELD = 4


class Terrain(Enum):
    EMPTY = 0
    ROAD = 1
    SIDEWALK = 2
    TREE = 3
    BUILDING = 4


class UnitType(Enum):
    NONE = 0
    SOLDIER = 1
    DRONE = 2
    TANK = 3


_LAYER_TERRAIN = {
    "Road": Terrain.ROAD,
    "Side Walk": Terrain.SIDEWALK,
    "Tree": Terrain.TREE,
    "Building": Terrain.BUILDING,
}


def terrain_for_layer(name: str) -> Terrain | None:
    """Terrain that a map layer of this name paints, or None if it paints none."""
    return _LAYER_TERRAIN.get(name)


@dataclass
class FieldProperties:
    """A map together with its size and its placement inside a window."""

    battlefield: TileMap
    field_dimensions: tuple[int, int]
    tile_dimensions: tuple[int, int]
    field_width: float
    field_height: float
    offset_x: float
    offset_y: float
    margin: int
    spacing: int
    tileset: Tileset

    @classmethod
    def from_map(cls, battlefield: TileMap, width: int, height: int) -> FieldProperties:
        """Centre ``battlefield`` in a window of ``width`` by ``height`` pixels."""
        if not battlefield.tilesets:
            raise TmxError("no tilesets found")
        tileset = battlefield.tilesets[0]
        field_width = float(battlefield.width * battlefield.tile_width)
        field_height = float(battlefield.height * battlefield.tile_height)
        return cls(
            battlefield=battlefield,
            field_dimensions=(battlefield.width, battlefield.height),
            tile_dimensions=(battlefield.tile_width, battlefield.tile_height),
            field_width=field_width,
            field_height=field_height,
            offset_x=(width - field_width) / 2.0,
            offset_y=(height - field_height) / 2.0,
            margin=tileset.margin,
            spacing=tileset.spacing,
            tileset=tileset,
        )