# battlesim

A small real-time battle simulator on a tile map. The battlefield is a Tiled
`.tmx` map. Enemy units start in three corners of the field. You place your own
units by clicking on it. Each of your units finds the nearest reachable enemy
with a breadth-first search, walks towards it and attacks it once it is in
range. Buildings block movement and placement.

## Installing

```
pip install .
```

This installs `pygame` as well.

## Running

```
battlesim
```

Options:

- `--map PATH`: the TMX map to play on
  (default `Frontend/Tilesets/Urban Field/Urban Field.tmx`).
- `--font PATH`: the font file to load
  (default `Frontend/Fonts/CallOfOpsDuty.otf`).
- `--width N`, `--height N`: window size in pixels. Each one that is not given
  is taken from the size of the first desktop.

Relative paths are taken from the directory you start from. The map, the
tileset image it refers to and the font must all exist. If the font cannot be
loaded, the command prints `Failed to load font` and exits with status 1. If
the map or its tileset cannot be read, it prints the reason and exits with
status 1.

In the window:

- Pressing a mouse button over a free, non-building tile places a player unit
  (drawn blue). Enemy units are drawn red.
- Every event the window receives advances the simulation by one step. Idle
  player units search for a target. Then each unit with a target either attacks,
  if the target is within range, or takes one step along its path.
- Closing the window quits.

## Using the pieces

The simulation core can be used without opening a window:

```python
from battlesim.tmx import load_map
from battlesim.constants import FieldProperties
from battlesim.unit_manager import UnitManager

field = FieldProperties.from_map(load_map("Urban Field.tmx"), 1920, 1080)
manager = UnitManager(field)  # enemies are placed in three corners
unit = manager.add_unit(0, 2, 3)  # team 0 is the player
manager.search()
manager.update()
print(unit.x, unit.y, unit.enemy_path)
```

- `battlesim.tmx` reads finite Tiled maps: `load_map(path)` and
  `parse_map(text, base_dir)` return a `TileMap` with its `Tileset`s and
  `TileLayer`s. Layer data may be CSV, plain XML `<tile>` elements, or base64,
  uncompressed or compressed with zlib or gzip. External tilesets are
  followed, layers inside groups are collected, and flip flags are stripped
  from tile ids. Infinite maps and other encodings or compressions raise
  `TmxError`.
- `battlesim.constants` holds `Terrain`, `ViewID` and `UnitType`,
  `terrain_for_layer(name)` (layers named `Road`, `Side Walk`, `Tree` and
  `Building` paint terrain), and `FieldProperties.from_map(battlefield, width,
  height)`, which centres a map in a window of the given size. It raises
  `TmxError` if the map has no tileset.
- `battlesim.units.Unit` starts with 100 HP, attack range 5 (Manhattan
  distance) and 10 damage per attack.
- `battlesim.unit_manager.UnitManager` keeps the logical field. It has
  `add_unit`, `remove_unit`, `move_unit`, `tile_at`, `in_bounds`, `search` and
  `update`, and the lists `player_units` and `enemy_units`. `add_unit`
  raises `PlacementError` when the tile is outside the field, is a building or
  is already occupied. `move_unit` raises it for coordinates outside the field.
  It returns `False` when the source tile is empty or the destination tile is
  taken.

## What it does not do

- There is only the battlefield screen. `ViewID` names title and game-mode
  screens and rural and underground fields, but the package has no views for
  them.
- The font is loaded but no text is drawn.
- `UnitType` lists soldiers, drones and tanks, but every unit has the same
  stats.

## Tests

```
pip install .[test]
pytest
```