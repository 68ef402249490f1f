"""The interactive nametable editor: settings, input handling and drawing."""

from __future__ import annotations

import argparse
import logging
import os
import re
from dataclasses import dataclass
from typing import Collection, Optional, Sequence

import pygame

from . import layout
from .inifile import IniFile
from .palette import PaletteError, load_palette
from .sprites import draw_block, draw_text
from .textures import ImageType, PicsContainer, PicsError
from .tilemap import MapError, TileMap
from .vectors import Color, Vector3D

_log = logging.getLogger(__name__)

DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
CHR_BASEPATH = "../src/"
PICTURE_LIST = "pics/clist.txt"

_FONT_IMAGE = 0
_BUTTON_IMAGE = 1
_CROSS_IMAGE = 2
_FIRST_TILESET = 3
_TEXT_SCALE = 0.7
_MOVE_SPEED = 2.0
_FRAME_RATE = 90
_MAX_CHAR = 3

ATTRIBUTE_COLORS = (
    Color(1.0, 1.0, 0.0, 0.2),
    Color(0.0, 0.0, 1.0, 0.2),
    Color(0.0, 1.0, 0.0, 0.2),
    Color(0.0, 1.0, 1.0, 0.2),
)
_PANEL_COLOR = Color(0.0, 0.0, 1.0, 0.5)
_COLLISION_COLOR = Color(1.0, 0.0, 0.0, 0.5)
_GRID_COLOR = (255, 255, 255)

_MOVES = {
    pygame.K_UP: Vector3D(0.0, 0.0, 1.0),
    pygame.K_LEFT: Vector3D(1.0, 0.0, 0.0),
    pygame.K_DOWN: Vector3D(0.0, 0.0, -1.0),
    pygame.K_RIGHT: Vector3D(-1.0, 0.0, 0.0),
}


@dataclass
class EditorConfig:
    """Window size and the files the editor works on."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    tile_set: str = ""
    map_tiles: str = ""
    palette: str = ""


def _leading_int(text: Optional[str]) -> int:
    match = re.match(r"\s*([+-]?\d+)", text or "")
    return int(match.group(1)) if match else 0


def load_config(path: str | os.PathLike[str]) -> EditorConfig:
    """Read editor settings; missing or zero sizes fall back to 640x480."""
    ini = IniFile()
    try:
        ini.read(path)
    except FileNotFoundError:
        _log.warning("settings file %s not found", path)
    return EditorConfig(
        width=_leading_int(ini.get("width")) or DEFAULT_WIDTH,
        height=_leading_int(ini.get("height")) or DEFAULT_HEIGHT,
        tile_set=ini.get("tileSet", "") or "",
        map_tiles=ini.get("mapTiles", "") or "",
        palette=ini.get("palette", "") or "",
    )


class Editor:
    """Editor state: the map being edited, panel buttons and tool selection."""

    def __init__(
        self,
        config: EditorConfig,
        tilemap: TileMap,
        palette: Optional[Sequence[int]] = None,
        pics: Optional[PicsContainer] = None,
    ) -> None:
        self.config = config
        self.tilemap = tilemap
        self.palette = bytes(palette) if palette is not None else bytes(48)
        self.pics = pics if pics is not None else PicsContainer()
        self.buttons = layout.build_buttons(config.width)

        self.show_tiles = True
        self.select_tiles = True
        self.show_collision = True
        self.select_collision = False
        self.show_attributes = True
        self.select_attributes = False
        self.show_grid = True

        self.current_tile = 0
        self.current_char = 0
        self.first_tile = 0
        self.current_palette = 0

        self.cross = Vector3D()
        self.tile_x = 0
        self.tile_y = 0
        self.fps = 0
        self._previous_buttons: tuple[bool, ...] = (False, False, False)

    def _over(self, index: int) -> bool:
        return self.buttons[index].contains(int(self.cross.x), int(self.cross.z))

    def _click(self) -> None:
        if self._over(layout.BUTTON_SHOW_TILES):
            self.show_tiles = not self.show_tiles
        if self._over(layout.BUTTON_SHOW_GRID):
            self.show_grid = not self.show_grid
        if self._over(layout.BUTTON_SHOW_COLLISION):
            self.show_collision = not self.show_collision
        for number in range(layout.TILE_STEP):
            if self._over(layout.BUTTON_FIRST_TILE + number):
                self.current_tile = self.first_tile + number
        if self._over(layout.BUTTON_SELECT_TILES):
            self.select_tiles = not self.select_tiles
        if self._over(layout.BUTTON_SHOW_ATTRIBUTES):
            self.show_attributes = not self.show_attributes
        if self._over(layout.BUTTON_SELECT_ATTRIBUTES):
            self.select_attributes = not self.select_attributes
        for number, index in enumerate(layout.PALETTE_BUTTONS):
            if self._over(index):
                self.current_palette = number
        if self._over(layout.BUTTON_SELECT_COLLISION):
            self.select_collision = not self.select_collision
        if self._over(layout.BUTTON_TILES_DEC):
            self.first_tile = layout.page_down(self.first_tile)
        if self._over(layout.BUTTON_TILES_INC):
            self.first_tile = layout.page_up(self.first_tile)
        if self._over(layout.BUTTON_CHAR_PREVIOUS) and self.current_char > 0:
            self.current_char -= 1
        if self._over(layout.BUTTON_CHAR_NEXT) and self.current_char < _MAX_CHAR:
            self.current_char += 1
        if self._over(layout.BUTTON_SAVE):
            self.tilemap.save(self.config.map_tiles)

    def update(
        self,
        keys: Collection[int],
        mouse_pos: tuple[int, int],
        mouse_buttons: Sequence[bool],
    ) -> None:
        """Apply one frame of input: held keys, pointer position and (left, middle, right) buttons."""
        buttons = tuple(bool(b) for b in mouse_buttons[:3])
        buttons += (False,) * (3 - len(buttons))
        previous, self._previous_buttons = self._previous_buttons, buttons
        left, _middle, right = buttons

        for key, direction in _MOVES.items():
            if key in keys:
                self.tilemap.move(direction, _MOVE_SPEED)

        mx, my = mouse_pos
        position = self.tilemap.position
        if 0 < mx < self.config.width and 0 < my < self.config.height:
            self.cross = Vector3D(mx, 0.0, my)
            if self.cross.z > layout.PANEL_HEIGHT:
                self.tile_x, self.tile_y = layout.screen_to_tile(
                    self.cross.x, self.cross.z, position.x, position.z
                )

        if self.cross.z > layout.PANEL_HEIGHT:
            if left:
                if self.select_tiles:
                    self.tilemap.set_tile(self.tile_x, self.tile_y, self.current_tile)
                if self.select_attributes:
                    self.tilemap.set_attribute(self.tile_x, self.tile_y, self.current_palette)
                if self.select_collision:
                    self.tilemap.set_collision(self.tile_x, self.tile_y, True)
            if right:
                if self.select_tiles:
                    self.tilemap.set_tile(self.tile_x, self.tile_y, 0)
                if self.select_attributes:
                    self.tilemap.set_attribute(self.tile_x, self.tile_y, 0)
        elif not any(buttons) and previous[0]:
            self._click()

    def _draw_button(
        self, index: int, pic: int, frame: int = 0,
        r: float = 1.0, g: float = 1.0, b: float = 1.0,
    ) -> None:
        button = self.buttons[index]
        if pic >= 0 and self.pics.info(pic) is None:
            button.draw(self.pics, -1, 0, r, g, b)
        else:
            button.draw(self.pics, pic, frame, r, g, b)

    def _draw_toggle(self, index: int, shown: bool) -> None:
        self._draw_button(index, _BUTTON_IMAGE, 5 if shown else 4)

    def _draw_selector(self, index: int, frame: int, selected: bool) -> None:
        if selected:
            self._draw_button(index, _BUTTON_IMAGE, frame, 1.0, 0.0, 0.0)
        else:
            self._draw_button(index, _BUTTON_IMAGE, frame)

    def _draw_panel(self) -> None:
        pics = self.pics
        draw_block(pics, 0, 0, self.config.width, layout.PANEL_HEIGHT, _PANEL_COLOR, _PANEL_COLOR)
        draw_text(self.config.width - 128, 10, f"FPS: {self.fps} ", pics, _FONT_IMAGE, _TEXT_SCALE)
        draw_text(10, 10, f"tilex:{self.tile_x} tiley:{self.tile_y} ", pics, _FONT_IMAGE, _TEXT_SCALE)
        draw_text(130, 92, "Grid", pics, _FONT_IMAGE, _TEXT_SCALE)

        self._draw_toggle(layout.BUTTON_SHOW_TILES, self.show_tiles)
        self._draw_toggle(layout.BUTTON_SHOW_ATTRIBUTES, self.show_attributes)
        self._draw_toggle(layout.BUTTON_SHOW_GRID, self.show_grid)
        self._draw_toggle(layout.BUTTON_SHOW_COLLISION, self.show_collision)

        for index, color in zip(layout.PALETTE_BUTTONS, ATTRIBUTE_COLORS):
            self._draw_button(index, -1, 0, color.r, color.g, color.b)

        self._draw_selector(layout.BUTTON_SELECT_TILES, 0, self.select_tiles)
        self._draw_selector(layout.BUTTON_SELECT_ATTRIBUTES, 1, self.select_attributes)
        self._draw_selector(layout.BUTTON_SELECT_COLLISION, 3, self.select_collision)

        for number in range(layout.TILE_STEP):
            self._draw_button(
                layout.BUTTON_FIRST_TILE + number,
                _FIRST_TILESET + self.current_palette,
                self.first_tile + number,
            )
        self._draw_button(layout.BUTTON_TILES_DEC, _BUTTON_IMAGE, 6)
        self._draw_button(layout.BUTTON_TILES_INC, _BUTTON_IMAGE, 7)
        self._draw_button(layout.BUTTON_SAVE, _BUTTON_IMAGE, 9)

    def _draw_grid(self, surface: pygame.Surface, shift_x: int, shift_y: int) -> None:
        tilemap = self.tilemap
        size = tilemap.tile_width
        bottom = tilemap.height * size - shift_y
        right = tilemap.width * size - shift_x
        for column in range(tilemap.width + 1):
            x = column * size - shift_x
            pygame.draw.line(surface, _GRID_COLOR, (x, -shift_y), (x, bottom))
        for row in range(tilemap.height + 1):
            y = row * size - shift_y
            pygame.draw.line(surface, _GRID_COLOR, (-shift_x, y), (right, y))

    def render(self, surface: pygame.Surface) -> None:
        """Draw the map, its overlays, the grid and the panel onto ``surface``."""
        surface.fill((0, 0, 0))
        tilemap = self.tilemap
        origin_x = int(tilemap.position.x)
        origin_z = int(tilemap.position.z)
        size = tilemap.tile_width
        half = size // 2

        if self.show_tiles:
            tilemap.draw(self.pics)

        if self.show_attributes:
            for y in range(0, tilemap.height, 2):
                for x in range(0, tilemap.width, 2):
                    color = ATTRIBUTE_COLORS[tilemap.attribute(x, y)]
                    draw_block(
                        self.pics, origin_x - half + x * size, origin_z - half + y * size,
                        2 * size, 2 * size, color, color,
                    )

        if self.show_collision:
            for y in range(tilemap.height):
                for x in range(tilemap.width):
                    if tilemap.collides(x, y):
                        draw_block(
                            self.pics, origin_x - half + x * size, origin_z - half + y * size,
                            size, size, _COLLISION_COLOR, _COLLISION_COLOR,
                        )

        if self.show_grid:
            self.pics.draw_batch(surface)
            self._draw_grid(surface, -origin_x + half, -origin_z + half)

        self._draw_panel()
        self.pics.draw(_CROSS_IMAGE, self.cross.x, self.cross.z)
        self.pics.draw_batch(surface)

    def _load_pictures(self) -> bool:
        try:
            self.pics.load(PICTURE_LIST)
        except PicsError:
            print("Cannot find picture list!")
            return False
        for number in range(4):
            try:
                self.pics.load_file(
                    self.config.tile_set, _FIRST_TILESET + number, ImageType.CHR, 8,
                    CHR_BASEPATH, 0, self.palette, number,
                )
            except PicsError as exc:
                _log.error("tileset not loaded: %s", exc)
        return True

    def run(self) -> None:
        """Open the window and process input until it is closed or Escape is pressed."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.config.width, self.config.height))
            pygame.display.set_caption("NESED")
            pygame.mouse.set_visible(False)
            if not self._load_pictures():
                return
            clock = pygame.time.Clock()
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT or (
                        event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
                    ):
                        running = False
                pressed = pygame.key.get_pressed()
                keys = {key for key in _MOVES if pressed[key]}
                self.update(keys, pygame.mouse.get_pos(), pygame.mouse.get_pressed()[:3])
                self.render(screen)
                pygame.display.flip()
                self.fps = round(clock.get_fps())
                clock.tick(_FRAME_RATE)
        finally:
            self.pics.clear()
            pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the editor with settings from an ini file."""
    parser = argparse.ArgumentParser(prog="nesed", description="NES nametable editor")
    parser.add_argument("settings", nargs="?", default="nesed.ini", help="settings file")
    args = parser.parse_args(argv)

    config = load_config(args.settings)
    try:
        palette = load_palette(config.palette)
    except PaletteError as exc:
        print(f"ERROR LOADING PALETTE! ({exc})")
        palette = bytes(48)

    try:
        tilemap = TileMap.load(config.map_tiles)
    except MapError as exc:
        print(f"Error loading map {config.map_tiles} ! ({exc})")
        return 1

    Editor(config, tilemap, palette).run()
    return 0