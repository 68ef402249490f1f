import pytest

from nesed.layout import (
    BUTTON_FIRST_TILE,
    BUTTON_SAVE,
    BUTTON_TILES_INC,
    MAX_BUTTON,
    TILE_STEP,
    build_buttons,
    page_down,
    page_up,
    screen_to_tile,
)


def test_build_buttons_count():
    assert len(build_buttons(640)) == MAX_BUTTON


def test_save_button_follows_screen_width():
    narrow = build_buttons(640)[BUTTON_SAVE]
    wide = build_buttons(1000)[BUTTON_SAVE]
    assert wide.x - narrow.x == 360
    assert wide.y == narrow.y


def test_tile_buttons_form_two_rows():
    buttons = build_buttons(640)
    first = buttons[BUTTON_FIRST_TILE]
    second = buttons[BUTTON_FIRST_TILE + 1]
    below = buttons[BUTTON_FIRST_TILE + 16]
    pitch = second.x - first.x
    assert below.x == first.x
    assert below.y - first.y == pitch
    positions = {(b.x, b.y) for b in buttons[BUTTON_FIRST_TILE:BUTTON_FIRST_TILE + TILE_STEP]}
    assert len(positions) == TILE_STEP


def test_tile_buttons_do_not_overlap_neighbours():
    buttons = build_buttons(640)
    first = buttons[BUTTON_FIRST_TILE]
    second = buttons[BUTTON_FIRST_TILE + 1]
    assert first.x + first.width < second.x


def test_unplaced_button_contains_nothing():
    buttons = build_buttons(640)
    assert not buttons[3].contains(0, 0)
    assert buttons[3].width == 0


def test_tiles_inc_button_lies_right_of_tile_row():
    buttons = build_buttons(640)
    last_in_row = buttons[BUTTON_FIRST_TILE + 15]
    assert buttons[BUTTON_TILES_INC].x > last_in_row.x


@pytest.mark.parametrize("first", [0, 5, 31])
def test_page_down_clamps_at_zero(first):
    assert page_down(first) == 0


def test_page_down_steps_back():
    assert page_down(64) == 32


def test_page_up_stops_within_byte():
    assert page_up(224) == 224
    assert page_up(0) == TILE_STEP


@pytest.mark.parametrize("first", [0, 32, 64, 192])
def test_page_round_trip(first):
    assert page_down(page_up(first)) == first


def test_screen_to_tile_cells_span_tile_size():
    cells = {screen_to_tile(x, 200, 0, 0)[0] for x in range(16, 48)}
    assert cells == {1}
    assert screen_to_tile(48, 200, 0, 0)[0] == 2


def test_screen_to_tile_follows_map_offset():
    assert screen_to_tile(100, 150, 0, 0) == screen_to_tile(110, 170, 10, 20)


def test_screen_to_tile_truncates_toward_zero():
    assert screen_to_tile(0, 0, 20, 20) == (0, 0)