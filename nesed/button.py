"""Rectangular clickable panel buttons."""

from __future__ import annotations

from dataclasses import dataclass

from .vectors import Color

_BLOCK_ALPHA = 0.8


@dataclass
class Button:
    """A screen rectangle that can be clicked and toggled."""

    x: int = 0
    y: int = 0
    width: int = 50
    height: int = 50
    pressed: bool = False

    def place(self, x: int, y: int, width: int, height: int) -> None:
        """Move and resize the button, keeping its pressed state."""
        self.x, self.y, self.width, self.height = x, y, width, height

    def contains(self, px: int, py: int) -> bool:
        """True when the point lies strictly inside the button."""
        return self.x < px < self.x + self.width and self.y < py < self.y + self.height

    def toggle(self) -> None:
        """Flip the pressed state."""
        self.pressed = not self.pressed

    def draw(
        self,
        pics,
        pic_index: int,
        frame: int = 0,
        r: float = 1.0,
        g: float = 1.0,
        b: float = 1.0,
    ) -> None:
        """Queue the button: a picture frame stretched over it, or a tinted block."""
        if pic_index >= 0:
            info = pics.info(pic_index)
            if info is None:
                raise IndexError(f"no picture at index {pic_index}")
            pics.draw(
                pic_index,
                self.x + self.width // 2,
                self.y + self.height // 2,
                frame,
                True,
                self.width // info.twidth,
                self.height // info.theight,
                0.0,
                Color(r, g, b, 1.0),
                Color(),
            )
        else:
            tint = Color(r, g, b, _BLOCK_ALPHA)
            pics.draw(
                pic_index, self.x, self.y, 0, False,
                self.width, self.height, 0.0, tint, tint,
            )