"""The battlefield screen: the tile map, the units and mouse placement."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

import pygame

from .constants import FieldProperties, ViewID
from .tmx import TileMap, TmxError, load_map
from .unit_manager import PlacementError, UnitManager
from .units import Unit
from .view import View

logger = logging.getLogger(__name__)

DEFAULT_FIELD_PATH = Path("Frontend/Tilesets/Urban Field/Urban Field.tmx")
PLAYER_COLOR = pygame.Color(0, 0, 255)
ENEMY_COLOR = pygame.Color(255, 0, 0)


class BattlefieldView(View):
    """Shows a battlefield and lets the player drop units on it with the mouse."""

    def __init__(
        self,
        font: Any,
        state: ViewID,
        width: int,
        height: int,
        field_path: str | Path = DEFAULT_FIELD_PATH,
        *,
        battlefield: TileMap | None = None,
        tileset_image: pygame.Surface | None = None,
    ) -> None:
        super().__init__(font, state, width, height)
        if battlefield is None:
            battlefield = load_map(field_path)
        self.properties = FieldProperties.from_map(battlefield, width, height)
        self.tileset_image = (
            tileset_image if tileset_image is not None else self._load_tileset_image()
        )
        self.unit_manager = UnitManager(self.properties)

    def _load_tileset_image(self) -> pygame.Surface:
        path = self.properties.tileset.image_path
        if path is None:
            raise TmxError("tileset has no image")
        try:
            return pygame.image.load(str(path))
        except (pygame.error, OSError) as exc:
            raise TmxError(f"failed to load tileset texture from: {path}") from exc

    def handle_event(self, event: pygame.event.Event, curr_state: ViewID) -> ViewID:
        """Place a player unit where the mouse was pressed, then run a turn."""
        if event.type == pygame.MOUSEBUTTONDOWN:
            x, y = event.pos
            try:
                self.add_unit(0, x, y)
            except PlacementError as exc:
                logger.warning("%s", exc)
        self.process()
        return curr_state

    def draw_components(self, surface: pygame.Surface) -> None:
        self._draw_field(surface)
        self._draw_units(surface, self.unit_manager.player_units, PLAYER_COLOR)
        self._draw_units(surface, self.unit_manager.enemy_units, ENEMY_COLOR)

    def process(self) -> None:
        """Let idle units find targets, then advance one turn."""
        self.unit_manager.search()
        self.unit_manager.update()

    def add_unit(self, team: int, x: float, y: float) -> Unit:
        """Place a unit of ``team`` on the tile under pixel (x, y)."""
        tile_x, tile_y = self.tile_coordinates(x, y)
        if not self.unit_manager.in_bounds(tile_x, tile_y):
            raise PlacementError("invalid coordinates for unit placement")
        return self.unit_manager.add_unit(team, tile_x, tile_y)

    def pixel_coordinates(self, x: int, y: int) -> tuple[float, float]:
        """Top-left pixel of tile (x, y) in the window."""
        tile_w, tile_h = self.properties.tile_dimensions
        return (
            x * tile_w + self.properties.offset_x,
            y * tile_h + self.properties.offset_y,
        )

    def tile_coordinates(self, x: float, y: float) -> tuple[int, int]:
        """Tile under pixel (x, y); may lie outside the field."""
        tile_w, tile_h = self.properties.tile_dimensions
        return (
            math.floor((x - self.properties.offset_x) / tile_w),
            math.floor((y - self.properties.offset_y) / tile_h),
        )

    def source_rect(self, gid: int) -> pygame.Rect:
        """Area of the tileset image that holds the tile with global id ``gid``."""
        tileset = self.properties.tileset
        tile_id = gid - tileset.first_gid
        if gid == 0 or tile_id < 0:
            raise ValueError(f"gid {gid} does not name a tile of the tileset")
        columns = tileset.column_count()
        if columns <= 0:
            raise TmxError("tileset has no columns")
        tile_w, tile_h = self.properties.tile_dimensions
        column, row = tile_id % columns, tile_id // columns
        return pygame.Rect(
            self.properties.margin + column * (tile_w + self.properties.spacing),
            self.properties.margin + row * (tile_h + self.properties.spacing),
            tile_w,
            tile_h,
        )

    def _draw_field(self, surface: pygame.Surface) -> None:
        width, height = self.properties.field_dimensions
        for layer in self.properties.battlefield.tile_layers():
            for y in range(height):
                for x in range(width):
                    gid = layer.gid_at(x, y, width)
                    if gid == 0:
                        continue
                    px, py = self.pixel_coordinates(x, y)
                    surface.blit(self.tileset_image, (int(px), int(py)), self.source_rect(gid))

    def _draw_units(self, surface: pygame.Surface, units: list[Unit], color: pygame.Color) -> None:
        tile_w, tile_h = self.properties.tile_dimensions
        for unit in units:
            px, py = self.pixel_coordinates(unit.x, unit.y)
            pygame.draw.rect(surface, color, pygame.Rect(int(px), int(py), tile_w, tile_h))