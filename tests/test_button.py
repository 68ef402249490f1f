from dataclasses import dataclass

import pytest

from nesed.button import Button
from nesed.vectors import Color


@dataclass
class FakeInfo:
    twidth: int
    theight: int


class FakePics:
    def __init__(self, infos):
        self.infos = infos
        self.calls = []

    def info(self, index):
        return self.infos.get(index)

    def draw(self, *args):
        self.calls.append(args)


def test_default_button_geometry():
    button = Button()
    assert (button.x, button.y, button.width, button.height) == (0, 0, 50, 50)
    assert button.pressed is False
    assert button.contains(25, 25)


def test_contains_is_strict():
    button = Button(10, 20, 32, 32)
    assert button.contains(11, 21)
    assert button.contains(41, 51)
    assert not button.contains(10, 30)
    assert not button.contains(42, 30)
    assert not button.contains(20, 52)


def test_toggle_flips_state():
    button = Button()
    button.toggle()
    assert button.pressed is True
    button.toggle()
    assert button.pressed is False


def test_place_keeps_pressed_state():
    button = Button(pressed=True)
    button.place(5, 6, 7, 8)
    assert (button.x, button.y, button.width, button.height) == (5, 6, 7, 8)
    assert button.pressed is True
    assert button.contains(6, 7)
    assert not button.contains(1, 1)


def test_draw_picture_centres_and_scales():
    pics = FakePics({1: FakeInfo(8, 8)})
    Button(10, 20, 32, 32).draw(pics, 1, 5)
    assert pics.calls == [
        (1, 26, 36, 5, True, 4, 4, 0.0, Color(1, 1, 1, 1), Color())
    ]


def test_draw_block_uses_translucent_tint():
    pics = FakePics({})
    Button(10, 20, 32, 32).draw(pics, -1, 0, 0.0, 1.0, 0.0)
    tint = Color(0.0, 1.0, 0.0, 0.8)
    assert pics.calls == [(-1, 10, 20, 0, False, 32, 32, 0.0, tint, tint)]


def test_draw_missing_picture_raises():
    with pytest.raises(IndexError):
        Button().draw(FakePics({}), 3)