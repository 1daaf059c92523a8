import pytest

from battlesim.constants import Terrain
from battlesim.tile import Tile
from battlesim.units import Entity


@pytest.mark.parametrize(
    "terrain, passable",
    [
        (Terrain.EMPTY, True),
        (Terrain.ROAD, True),
        (Terrain.SIDEWALK, True),
        (Terrain.TREE, True),
        (Terrain.BUILDING, False),
    ],
)
def test_empty_tile_pass_and_place(terrain, passable):
    tile = Tile(terrain)
    assert tile.can_pass() is passable
    assert tile.can_place() is passable
    assert not tile.is_occupied()


def test_occupied_tile_blocks_placement_but_not_passage():
    tile = Tile(Terrain.ROAD)
    tile.occupant = Entity(0, 1, 1)
    assert tile.is_occupied()
    assert not tile.can_place()
    assert tile.can_pass()


def test_clearing_occupant_frees_tile():
    tile = Tile(Terrain.TREE, Entity(1, 0, 0))
    tile.occupant = None
    assert not tile.is_occupied()
    assert tile.can_place()