"""Reading of Tiled TMX maps: finite maps with tile layers and tilesets."""

from __future__ import annotations

import base64
import binascii
import gzip
import re
import struct
import xml.etree.ElementTree as ET
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

# Tiled keeps flip and rotation flags in the top four bits of a gid.
GID_MASK = 0x0FFFFFFF


class TmxError(Exception):
    """Raised when a map or tileset cannot be read."""


@dataclass(frozen=True)
class Tileset:
    """A tileset referenced by a map, with the layout of its image."""

    first_gid: int
    name: str
    tile_width: int
    tile_height: int
    columns: int
    tile_count: int
    margin: int
    spacing: int
    image_path: Path | None
    image_width: int = 0
    image_height: int = 0

    def column_count(self) -> int:
        """Number of tile columns in the tileset image."""
        return self.columns


@dataclass(frozen=True)
class TileLayer:
    """A named grid of global tile ids, stored row by row."""

    name: str
    width: int
    height: int
    gids: tuple[int, ...]

    def gid_at(self, x: int, y: int, width: int) -> int:
        """Gid of the tile at (x, y) in a grid that is ``width`` tiles wide."""
        return self.gids[x + y * width]


@dataclass(frozen=True)
class TileMap:
    """A loaded map: its size in tiles, tile size, tilesets and layers."""

    width: int
    height: int
    tile_width: int
    tile_height: int
    tilesets: tuple[Tileset, ...]
    layers: tuple[TileLayer, ...]

    def tile_layers(self) -> list[TileLayer]:
        """The tile layers in drawing order."""
        return list(self.layers)


def _int_attr(elem: ET.Element, name: str, default: int | None = None) -> int:
    value = elem.get(name)
    if value is None:
        if default is None:
            raise TmxError(f"missing attribute {name!r} on <{elem.tag}>")
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise TmxError(f"attribute {name!r} on <{elem.tag}> is not a number: {value!r}") from exc


def _parse_root(data: bytes, what: str) -> ET.Element:
    try:
        return ET.fromstring(data)
    except ET.ParseError as exc:
        raise TmxError(f"malformed {what}: {exc}") from exc


def _parse_tileset(elem: ET.Element, base_dir: Path) -> Tileset:
    first_gid = _int_attr(elem, "firstgid")
    source = elem.get("source")
    if source:
        path = base_dir / source
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise TmxError(f"failed to load tileset at: {path}") from exc
        elem = _parse_root(data, "tileset")
        if elem.tag != "tileset":
            raise TmxError(f"{path} is not a tileset")
        base_dir = path.parent

    tile_width = _int_attr(elem, "tilewidth")
    tile_height = _int_attr(elem, "tileheight")
    margin = _int_attr(elem, "margin", 0)
    spacing = _int_attr(elem, "spacing", 0)

    image = elem.find("image")
    image_path = None
    image_width = image_height = 0
    if image is not None:
        if image.get("source"):
            image_path = base_dir / image.get("source")
        image_width = _int_attr(image, "width", 0)
        image_height = _int_attr(image, "height", 0)

    if elem.get("columns") is not None:
        columns = _int_attr(elem, "columns")
    elif image_width and tile_width + spacing > 0:
        columns = (image_width - 2 * margin + spacing) // (tile_width + spacing)
    else:
        columns = 0

    return Tileset(
        first_gid=first_gid,
        name=elem.get("name", ""),
        tile_width=tile_width,
        tile_height=tile_height,
        columns=columns,
        tile_count=_int_attr(elem, "tilecount", 0),
        margin=margin,
        spacing=spacing,
        image_path=image_path,
        image_width=image_width,
        image_height=image_height,
    )


def _decode_data(data: ET.Element, expected: int) -> tuple[int, ...]:
    if data.find("chunk") is not None:
        raise TmxError("infinite maps are not supported")
    encoding = data.get("encoding")
    compression = data.get("compression")

    if encoding == "csv":
        tokens = [token for token in re.split(r"[,\s]+", data.text or "") if token]
        try:
            values = [int(token) for token in tokens]
        except ValueError as exc:
            raise TmxError("invalid csv tile data") from exc
    elif encoding == "base64":
        try:
            raw = base64.b64decode((data.text or "").strip())
        except binascii.Error as exc:
            raise TmxError("invalid base64 tile data") from exc
        try:
            if compression == "zlib":
                raw = zlib.decompress(raw)
            elif compression == "gzip":
                raw = gzip.decompress(raw)
            elif compression:
                raise TmxError(f"unsupported compression: {compression}")
        except (zlib.error, OSError, EOFError) as exc:
            raise TmxError("corrupt compressed tile data") from exc
        if len(raw) % 4:
            raise TmxError("tile data is not a whole number of 32-bit ids")
        values = list(struct.unpack(f"<{len(raw) // 4}I", raw))
    elif encoding is None:
        values = [_int_attr(tile, "gid", 0) for tile in data.findall("tile")]
    else:
        raise TmxError(f"unsupported encoding: {encoding}")

    if len(values) != expected:
        raise TmxError(f"layer holds {len(values)} tiles, expected {expected}")
    return tuple(value & GID_MASK for value in values)


def _collect_layers(parent: ET.Element, width: int, height: int) -> Iterator[TileLayer]:
    for child in parent:
        if child.tag == "layer":
            layer_width = _int_attr(child, "width", width)
            layer_height = _int_attr(child, "height", height)
            data = child.find("data")
            if data is None:
                raise TmxError(f"layer {child.get('name', '')!r} has no data")
            yield TileLayer(
                name=child.get("name", ""),
                width=layer_width,
                height=layer_height,
                gids=_decode_data(data, layer_width * layer_height),
            )
        elif child.tag == "group":
            yield from _collect_layers(child, width, height)


def parse_map(text: str | bytes, base_dir: str | Path = ".") -> TileMap:
    """Parse TMX text; external files are looked up relative to ``base_dir``."""
    data = text.encode("utf-8") if isinstance(text, str) else text
    root = _parse_root(data, "map")
    if root.tag != "map":
        raise TmxError("document is not a map")
    if root.get("infinite") == "1":
        raise TmxError("infinite maps are not supported")

    base = Path(base_dir)
    width = _int_attr(root, "width")
    height = _int_attr(root, "height")
    return TileMap(
        width=width,
        height=height,
        tile_width=_int_attr(root, "tilewidth"),
        tile_height=_int_attr(root, "tileheight"),
        tilesets=tuple(_parse_tileset(elem, base) for elem in root.findall("tileset")),
        layers=tuple(_collect_layers(root, width, height)),
    )


def load_map(path: str | Path) -> TileMap:
    """Load a TMX file from disk."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise TmxError(f"failed to load map at: {path}") from exc
    return parse_map(data, path.parent)