"""NES nametables: a 32x30 grid of tile numbers plus 64 attribute bytes."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional, Sequence

from .vectors import Vector3D

WIDTH = 32
HEIGHT = 30
TILE_SIZE = 32
ATTRIBUTE_COUNT = 64

_HALF = WIDTH // 2
_ATTRIBUTE_ROWS = 2
_LINE_PREFIX = "    .byte "
_COLLISION_FROM = 128
_FIRST_TILESET = 3
_TILE_SCALE = 4.0


class MapError(ValueError):
    """Raised when a map file cannot be read or is malformed."""


def _parse_values(token: str, count: int) -> list[int]:
    """Parse a run like ``$00,$1F,...`` holding exactly ``count`` byte values."""
    parts = token.split(",")
    if parts and parts[-1] == "":
        parts.pop()
    if len(parts) != count:
        raise MapError(f"expected {count} values, found {len(parts)} in {token!r}")
    values = []
    for part in parts:
        if not part.startswith("$"):
            raise MapError(f"value {part!r} does not start with '$'")
        try:
            value = int(part[1:], 16)
        except ValueError as exc:
            raise MapError(f"bad hexadecimal value {part!r}") from exc
        if not 0 <= value <= 0xFF:
            raise MapError(f"value {part!r} does not fit in a byte")
        values.append(value)
    return values


def _read_row(tokens: Iterator[str]) -> list[int]:
    """Read one full row: two ``.byte`` lines of 16 values each."""
    row: list[int] = []
    try:
        for _ in range(2):
            next(tokens)
            row.extend(_parse_values(next(tokens), _HALF))
    except StopIteration as exc:
        raise MapError("map data ends too early") from exc
    return row


def _format_values(values: Sequence[int]) -> str:
    return _LINE_PREFIX + ",".join(f"${value:02x}" for value in values)


def _check_byte(value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"value {value} does not fit in a byte")


class TileMap:
    """A nametable with per-tile collision flags and 2-bit palette attributes."""

    def __init__(
        self,
        name: str = "map",
        tiles: Optional[Sequence[Sequence[int]]] = None,
        attributes: Optional[Sequence[int]] = None,
        collision: Optional[Sequence[Sequence[bool]]] = None,
    ) -> None:
        if not name or any(char.isspace() for char in name):
            raise ValueError("map name must be a single non-empty word")
        self.name = name

        if tiles is None:
            grid = [[0] * WIDTH for _ in range(HEIGHT)]
        else:
            grid = [list(row) for row in tiles]
        if len(grid) != HEIGHT or any(len(row) != WIDTH for row in grid):
            raise ValueError(f"tiles must form a {WIDTH}x{HEIGHT} grid")
        for row in grid:
            for value in row:
                _check_byte(value)
        self._tiles = grid

        attrs = [0] * ATTRIBUTE_COUNT if attributes is None else list(attributes)
        if len(attrs) != ATTRIBUTE_COUNT:
            raise ValueError(f"a map holds {ATTRIBUTE_COUNT} attribute bytes")
        for value in attrs:
            _check_byte(value)
        self._attributes = attrs

        if collision is None:
            flags = [[value >= _COLLISION_FROM for value in row] for row in grid]
        else:
            flags = [[bool(flag) for flag in row] for row in collision]
        if len(flags) != HEIGHT or any(len(row) != WIDTH for row in flags):
            raise ValueError(f"collision flags must form a {WIDTH}x{HEIGHT} grid")
        self._collision = flags

        self.position = Vector3D()

    @property
    def width(self) -> int:
        return WIDTH

    @property
    def height(self) -> int:
        return HEIGHT

    @property
    def tile_width(self) -> int:
        return TILE_SIZE

    @property
    def tiles(self) -> tuple[tuple[int, ...], ...]:
        """A copy of the tile grid, row by row."""
        return tuple(tuple(row) for row in self._tiles)

    @property
    def attributes(self) -> tuple[int, ...]:
        """A copy of the 64 attribute bytes."""
        return tuple(self._attributes)

    @classmethod
    def from_text(cls, text: str) -> TileMap:
        """Parse map source: a name, 30 tile rows and 2 attribute rows."""
        tokens = iter(text.split())
        name = next(tokens, None)
        if name is None:
            raise MapError("map data is empty")
        tiles = [_read_row(tokens) for _ in range(HEIGHT)]
        attributes: list[int] = []
        for _ in range(_ATTRIBUTE_ROWS):
            attributes.extend(_read_row(tokens))
        return cls(name, tiles, attributes)

    def to_text(self) -> str:
        """Map source in the form :meth:`from_text` reads."""
        lines = [self.name]
        for row in self._tiles:
            lines.append(_format_values(row[:_HALF]))
            lines.append(_format_values(row[_HALF:]))
        for start in range(0, ATTRIBUTE_COUNT, WIDTH):
            lines.append(_format_values(self._attributes[start : start + _HALF]))
            lines.append(_format_values(self._attributes[start + _HALF : start + WIDTH]))
        return "\n".join(lines) + "\n"

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> TileMap:
        """Read a map file; collision is set wherever a tile is 128 or more."""
        try:
            text = Path(path).read_text()
        except OSError as exc:
            raise MapError(f"cannot read map {path}") from exc
        return cls.from_text(text)

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the map in the same form :meth:`load` reads."""
        with open(path, "w", newline="") as handle:
            handle.write(self.to_text())

    @staticmethod
    def _inside(x: int, y: int) -> bool:
        return 0 <= x < WIDTH and 0 <= y < HEIGHT

    def tile(self, x: int, y: int) -> int:
        """Tile number at a cell, or 0 outside the map."""
        return self._tiles[y][x] if self._inside(x, y) else 0

    def set_tile(self, x: int, y: int, value: int) -> None:
        """Change a tile; cells outside the map are ignored."""
        _check_byte(value)
        if self._inside(x, y):
            self._tiles[y][x] = value

    def collides(self, x: int, y: int) -> bool:
        """Collision flag at a cell; False outside the map."""
        return self._collision[y][x] if self._inside(x, y) else False

    def set_collision(self, x: int, y: int, value: bool) -> None:
        """Change a collision flag; cells outside the map are ignored."""
        if self._inside(x, y):
            self._collision[y][x] = bool(value)

    @staticmethod
    def _attribute_slot(x: int, y: int) -> tuple[int, int]:
        """Attribute byte index and bit shift of the 2x2 block holding a cell."""
        index = (y // 4) * 8 + x // 4
        pair = ((y % 4) // 2) * 2 + (x % 4) // 2
        return index, pair * 2

    def attribute(self, x: int, y: int) -> int:
        """Palette number (0-3) used by a cell; 0 outside the map."""
        if not self._inside(x, y):
            return 0
        index, shift = self._attribute_slot(x, y)
        return (self._attributes[index] >> shift) & 3

    def set_attribute(self, x: int, y: int, value: int) -> None:
        """Set the palette of the 2x2 block holding a cell; outside cells are ignored."""
        if not 0 <= value <= 3:
            raise ValueError("attribute value must be between 0 and 3")
        if not self._inside(x, y):
            return
        index, shift = self._attribute_slot(x, y)
        mask = 3 << shift
        self._attributes[index] = (self._attributes[index] & ~mask & 0xFF) | (value << shift)

    def move(self, direction: Vector3D, distance: float) -> None:
        """Shift the map's on-screen position along ``direction``."""
        self.position = self.position + Vector3D(
            direction.x * distance, direction.y * distance, direction.z * distance
        )

    def draw(self, pics) -> None:
        """Queue every tile, taken from the tileset picture of its palette."""
        origin_x, origin_y = self.position.x, self.position.z
        for y, row in enumerate(self._tiles):
            for x, value in enumerate(row):
                pics.draw(
                    _FIRST_TILESET + self.attribute(x, y),
                    x * TILE_SIZE + origin_x,
                    y * TILE_SIZE + origin_y,
                    value,
                    True,
                    _TILE_SCALE,
                    _TILE_SCALE,
                    0.0,
                )