"""Placement of the editor's panel buttons and screen/tile conversions."""

from __future__ import annotations

from .button import Button

MAX_BUTTON = 100
PANEL_HEIGHT = 100
TILE_STEP = 32
TILE_PIXELS = 32
TILES_PER_ROW = 16

BUTTON_SHOW_TILES = 0
BUTTON_SHOW_ATTRIBUTES = 1
BUTTON_SHOW_GRID = 2
BUTTON_SELECT_TILES = 6
BUTTON_SELECT_ATTRIBUTES = 7
BUTTON_PALETTE_0 = 8
BUTTON_SHOW_COLLISION = 11
BUTTON_SELECT_COLLISION = 12
BUTTON_PALETTE_1 = 15
BUTTON_PALETTE_2 = 16
BUTTON_PALETTE_3 = 17
BUTTON_SAVE = 18
BUTTON_TILES_DEC = 25
BUTTON_TILES_INC = 26
BUTTON_FIRST_TILE = 27

BUTTON_CHAR_PREVIOUS = BUTTON_PALETTE_1
BUTTON_CHAR_NEXT = BUTTON_PALETTE_3

PALETTE_BUTTONS = (BUTTON_PALETTE_0, BUTTON_PALETTE_1, BUTTON_PALETTE_2, BUTTON_PALETTE_3)

TILE_BUTTONS_ORIGIN_X = 300

_BUTTON_SIZE = 32
_TILE_BUTTON_PITCH = 34
_HALF_TILE = TILE_PIXELS // 2

_FIXED_PLACES = {
    BUTTON_SHOW_TILES: (10, 20),
    BUTTON_SHOW_ATTRIBUTES: (46, 20),
    BUTTON_SHOW_GRID: (130, 55),
    BUTTON_SHOW_COLLISION: (82, 20),
    13: (154, 20),
    BUTTON_SELECT_TILES: (10, 55),
    BUTTON_SELECT_ATTRIBUTES: (46, 55),
    14: (154, 55),
    BUTTON_PALETTE_0: (130, 20),
    BUTTON_PALETTE_1: (166, 20),
    BUTTON_PALETTE_2: (202, 20),
    BUTTON_PALETTE_3: (238, 20),
    19: (460, 20),
    20: (496, 20),
    21: (532, 20),
    22: (460, 55),
    23: (496, 55),
    24: (532, 55),
    BUTTON_TILES_DEC: (TILE_BUTTONS_ORIGIN_X, 55),
    BUTTON_TILES_INC: (TILE_BUTTONS_ORIGIN_X + 48 + TILES_PER_ROW * _TILE_BUTTON_PITCH, 55),
}


def build_buttons(screen_width: int) -> list[Button]:
    """All panel buttons; slots without a place are empty rectangles at the origin."""
    buttons = [Button(0, 0, 0, 0) for _ in range(MAX_BUTTON)]
    for index, (x, y) in _FIXED_PLACES.items():
        buttons[index].place(x, y, _BUTTON_SIZE, _BUTTON_SIZE)
    buttons[BUTTON_SAVE].place(screen_width - 42, 20, _BUTTON_SIZE, _BUTTON_SIZE)
    for number in range(TILE_STEP):
        row, column = divmod(number, TILES_PER_ROW)
        buttons[BUTTON_FIRST_TILE + number].place(
            TILE_BUTTONS_ORIGIN_X + 40 + column * _TILE_BUTTON_PITCH,
            10 + row * _TILE_BUTTON_PITCH,
            _BUTTON_SIZE,
            _BUTTON_SIZE,
        )
    return buttons


def page_down(first_tile: int) -> int:
    """First tile of the previous page of the tile picker, never below 0."""
    if first_tile < TILE_STEP:
        return 0
    return first_tile - TILE_STEP


def page_up(first_tile: int) -> int:
    """First tile of the next page of the tile picker, staying within a byte."""
    if first_tile + TILE_STEP <= 0xFF:
        return first_tile + TILE_STEP
    return first_tile


def _divide_toward_zero(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def screen_to_tile(x: float, y: float, map_x: float, map_z: float) -> tuple[int, int]:
    """Map cell under a screen point, given the map's on-screen offset."""
    return (
        _divide_toward_zero(int(x - map_x) + _HALF_TILE, TILE_PIXELS),
        _divide_toward_zero(int(y - map_z) + _HALF_TILE, TILE_PIXELS),
    )