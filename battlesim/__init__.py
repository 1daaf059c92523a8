"""Tile-based battle simulator on Tiled maps, with a pygame battlefield screen."""

__version__ = "0.1.0"