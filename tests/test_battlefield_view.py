import pygame
import pytest

from battlesim.battlefield_view import ENEMY_COLOR, PLAYER_COLOR, BattlefieldView
from battlesim.constants import ViewID
from battlesim.tmx import TileLayer, TileMap, Tileset, TmxError
from battlesim.unit_manager import PlacementError
from battlesim.units import DEFAULT_DAMAGE, DEFAULT_HP

WIDTH, HEIGHT = 4, 3
TILE = 4
WINDOW = (32, 20)

TILE_ONE = pygame.Color(200, 0, 0)
TILE_TWO = pygame.Color(0, 200, 0)
TILE_THREE = pygame.Color(200, 200, 0)
TILE_FOUR = pygame.Color(0, 200, 200)


def make_tileset(margin=0, spacing=0, image_path=None):
    return Tileset(
        first_gid=1,
        name="tiles",
        tile_width=TILE,
        tile_height=TILE,
        columns=2,
        tile_count=4,
        margin=margin,
        spacing=spacing,
        image_path=image_path,
    )


def make_map(tileset=None, tilesets=None):
    road = [0] * (WIDTH * HEIGHT)
    road[1] = 2  # tile (1, 0)
    building = [0] * (WIDTH * HEIGHT)
    building[6] = 3  # tile (2, 1)
    if tilesets is None:
        tilesets = (tileset or make_tileset(),)
    return TileMap(
        width=WIDTH,
        height=HEIGHT,
        tile_width=TILE,
        tile_height=TILE,
        tilesets=tilesets,
        layers=(
            TileLayer("Road", WIDTH, HEIGHT, tuple(road)),
            TileLayer("Building", WIDTH, HEIGHT, tuple(building)),
        ),
    )


def make_image():
    image = pygame.Surface((2 * TILE, 2 * TILE))
    image.fill(TILE_ONE, pygame.Rect(0, 0, TILE, TILE))
    image.fill(TILE_TWO, pygame.Rect(TILE, 0, TILE, TILE))
    image.fill(TILE_THREE, pygame.Rect(0, TILE, TILE, TILE))
    image.fill(TILE_FOUR, pygame.Rect(TILE, TILE, TILE, TILE))
    return image


@pytest.fixture
def view():
    return BattlefieldView(
        None, ViewID.URBANFIELD, *WINDOW, battlefield=make_map(), tileset_image=make_image()
    )


def tile_centre(view, x, y):
    px, py = view.pixel_coordinates(x, y)
    return px + TILE / 2, py + TILE / 2


def test_enemies_start_in_corners(view):
    corners = {(u.x, u.y) for u in view.unit_manager.enemy_units}
    assert corners == {(3, 2), (3, 0), (0, 2)}
    assert view.unit_manager.player_units == []


def test_field_is_centred(view):
    props = view.properties
    assert view.pixel_coordinates(0, 0) == (props.offset_x, props.offset_y)
    assert props.offset_x * 2 + props.field_width == WINDOW[0]
    assert props.offset_y * 2 + props.field_height == WINDOW[1]


def test_pixel_and_tile_coordinates_round_trip(view):
    for y in range(HEIGHT):
        for x in range(WIDTH):
            assert view.tile_coordinates(*view.pixel_coordinates(x, y)) == (x, y)
            assert view.tile_coordinates(*tile_centre(view, x, y)) == (x, y)


def test_point_left_of_field_is_outside(view):
    px, py = view.pixel_coordinates(0, 0)
    tile_x, _ = view.tile_coordinates(px - 1, py)
    assert tile_x < 0
    with pytest.raises(PlacementError):
        view.add_unit(0, px - 1, py)


def test_add_unit_on_building_is_rejected(view):
    with pytest.raises(PlacementError):
        view.add_unit(0, *tile_centre(view, 2, 1))


def test_add_unit_on_free_tile(view):
    unit = view.add_unit(0, *tile_centre(view, 1, 1))
    assert (unit.x, unit.y, unit.team) == (1, 1, 0)
    assert view.unit_manager.player_units == [unit]
    assert view.unit_manager.tile_at(1, 1).occupant is unit


def test_click_places_unit_and_runs_a_turn(view):
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=tile_centre(view, 1, 1), button=1)
    assert view.handle_event(event, ViewID.URBANFIELD) == ViewID.URBANFIELD
    [unit] = view.unit_manager.player_units
    assert unit.enemy in view.unit_manager.enemy_units
    assert unit.enemy.hp == DEFAULT_HP - DEFAULT_DAMAGE
    assert unit in unit.enemy.attacking_units


def test_click_outside_field_is_ignored(view):
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(0, 0), button=1)
    assert view.handle_event(event, ViewID.URBANFIELD) == ViewID.URBANFIELD
    assert view.unit_manager.player_units == []


def test_other_events_place_nothing(view):
    event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)
    assert view.handle_event(event, ViewID.RURALFIELD) == ViewID.RURALFIELD
    assert view.unit_manager.player_units == []


def test_source_rects(view):
    assert view.source_rect(1) == pygame.Rect(0, 0, TILE, TILE)
    rects = [view.source_rect(gid) for gid in range(1, 5)]
    assert all(rect.size == (TILE, TILE) for rect in rects)
    assert len({tuple(rect) for rect in rects}) == 4


def test_source_rect_rejects_empty_gid(view):
    with pytest.raises(ValueError):
        view.source_rect(0)


def test_source_rect_honours_margin():
    tileset = make_tileset(margin=1, spacing=1)
    view = BattlefieldView(
        None,
        ViewID.URBANFIELD,
        *WINDOW,
        battlefield=make_map(tileset),
        tileset_image=make_image(),
    )
    assert view.source_rect(1).topleft == (1, 1)
    assert view.source_rect(2).left > view.source_rect(1).right


def test_draw_components(view):
    view.add_unit(0, *tile_centre(view, 1, 1))
    surface = pygame.Surface(WINDOW)
    view.draw_components(surface)

    def colour_at(x, y):
        px, py = view.pixel_coordinates(x, y)
        return surface.get_at((int(px), int(py)))

    assert colour_at(1, 0) == TILE_TWO
    assert colour_at(2, 1) == TILE_THREE
    assert colour_at(1, 1) == PLAYER_COLOR
    assert colour_at(3, 2) == ENEMY_COLOR
    assert colour_at(0, 0) == pygame.Color(0, 0, 0)


def test_missing_tileset_image_raises(tmp_path):
    tileset = make_tileset(image_path=tmp_path / "missing.bmp")
    with pytest.raises(TmxError):
        BattlefieldView(None, ViewID.URBANFIELD, *WINDOW, battlefield=make_map(tileset))


def test_map_without_tilesets_raises():
    with pytest.raises(TmxError):
        BattlefieldView(
            None,
            ViewID.URBANFIELD,
            *WINDOW,
            battlefield=make_map(tilesets=()),
            tileset_image=make_image(),
        )


def test_loads_map_and_image_from_disk(tmp_path):
    pygame.image.save(make_image(), str(tmp_path / "tiles.bmp"))
    (tmp_path / "field.tmx").write_text(
        '<map width="4" height="3" tilewidth="4" tileheight="4" infinite="0">'
        '<tileset firstgid="1" name="tiles" tilewidth="4" tileheight="4" '
        'tilecount="4" columns="2">'
        '<image source="tiles.bmp" width="8" height="8"/>'
        "</tileset>"
        '<layer name="Building" width="4" height="3">'
        '<data encoding="csv">0,0,0,0,0,0,3,0,0,0,0,0</data>'
        "</layer></map>"
    )
    view = BattlefieldView(None, ViewID.URBANFIELD, *WINDOW, tmp_path / "field.tmx")
    assert view.tileset_image.get_size() == (2 * TILE, 2 * TILE)
    with pytest.raises(PlacementError):
        view.add_unit(0, *tile_centre(view, 2, 1))


def test_missing_map_file_raises(tmp_path):
    with pytest.raises(TmxError):
        BattlefieldView(None, ViewID.URBANFIELD, *WINDOW, tmp_path / "nowhere.tmx")