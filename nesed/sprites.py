"""Sprite batches: quad geometry, texture frames and drawing onto surfaces."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, Sequence

import pygame

from .utils import round_half_away
from .vectors import Color

_DEGREES_TO_RADIANS = 0.0174532925
_ROTATION_OFFSET = 3.14
_V_EPSILON = 0.0001
_TEXT_ADVANCE = 12

Vertex = tuple[float, float]


class _Pic(Protocol):
    """What a loaded picture must expose for drawing."""

    width: int
    height: int
    twidth: int
    theight: int
    hframes: int
    surface: Optional[pygame.Surface]


class _PicSource(Protocol):
    def info(self, index: int) -> Optional[_Pic]: ...


class _Drawer(Protocol):
    def draw(
        self,
        texture_index: int,
        x: float,
        y: float,
        frame: int = 0,
        use_center: bool = False,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
        rotation_angle: float = 0.0,
        up_color: Color = Color(),
        down_color: Color = Color(),
    ) -> None: ...


@dataclass
class SpriteBatchItem:
    """One queued sprite; a negative texture index draws a plain coloured quad."""

    x: float = 0.0
    y: float = 0.0
    texture_index: int = 0
    frame: int = 0
    use_center: bool = False
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation_angle: float = 0.0
    up_color: Color = field(default_factory=Color)
    down_color: Color = field(default_factory=Color)


def _frame_origin(pic: _Pic, frame: int) -> tuple[int, int]:
    if frame < 0:
        raise ValueError("frame must not be negative")
    if pic.hframes <= 0:
        raise ValueError("picture holds no frames")
    row = frame // pic.hframes
    return (frame - pic.hframes * row) * pic.twidth, row * pic.theight


def calc_uvs(pic: _Pic, frame: int) -> tuple[float, float, float, float]:
    """Texture coordinates ``(u1, u2, v1, v2)`` of a frame in a bottom-up texture."""
    start_x, start_y = _frame_origin(pic, frame)
    return (
        start_x / pic.width,
        (start_x + pic.twidth) / pic.width,
        (pic.height - start_y) / pic.height - _V_EPSILON,
        (pic.height - start_y - pic.theight) / pic.height,
    )


def _frame_rect(pic: _Pic, frame: int) -> pygame.Rect:
    start_x, start_y = _frame_origin(pic, frame)
    return pygame.Rect(start_x, start_y, pic.twidth, pic.theight)


def quad_vertices(item: SpriteBatchItem, pic: Optional[_Pic] = None) -> list[Vertex]:
    """Corners of the sprite's quad: two top corners, then two bottom corners.

    Without a picture the quad is a unit square scaled by the item's scale.
    """
    if pic is None:
        tile_width, tile_height = 1.0, 1.0
    else:
        tile_width, tile_height = float(pic.twidth), float(pic.theight)
    half_width = tile_width / 2.0 * item.scale_x
    half_height = tile_height / 2.0 * item.scale_y
    x, y = item.x, item.y

    if item.rotation_angle != 0.0:
        angle = item.rotation_angle * _DEGREES_TO_RADIANS + _ROTATION_OFFSET
        cos_w = math.cos(angle) * half_width
        cos_h = math.cos(angle) * half_height
        sin_w = math.sin(angle) * half_width
        sin_h = math.sin(angle) * half_height
        return [
            (x - cos_w - sin_h, y - sin_w + cos_h),
            (x + cos_w - sin_h, y + sin_w + cos_h),
            (x + cos_w + sin_h, y + sin_w - cos_h),
            (x - cos_w + sin_h, y - sin_w - cos_h),
        ]
    if item.use_center:
        return [
            (x - half_width, y - half_height),
            (x + half_width, y - half_height),
            (x + half_width, y + half_height),
            (x - half_width, y + half_height),
        ]
    right = x + tile_width * item.scale_x
    bottom = y + tile_height * item.scale_y
    return [(x, y), (right, y), (right, bottom), (x, bottom)]


def _rgba(color: Color) -> tuple[int, int, int, int]:
    return tuple(max(0, min(255, round_half_away(c * 255))) for c in color)  # type: ignore[return-value]


def _gradient(size: tuple[int, int], up: Color, down: Color) -> pygame.Surface:
    """A surface shading row by row from ``up`` at the top to ``down`` at the bottom."""
    width, height = size
    layer = pygame.Surface(size, pygame.SRCALPHA)
    top, bottom = _rgba(up), _rgba(down)
    for row in range(height):
        t = row / (height - 1) if height > 1 else 0.0
        shade = tuple(round_half_away(a + (b - a) * t) for a, b in zip(top, bottom))
        layer.fill(shade, pygame.Rect(0, row, width, 1))
    return layer


def _fill_quad(target: pygame.Surface, item: SpriteBatchItem, vertices: Sequence[Vertex]) -> None:
    xs = [vx for vx, _ in vertices]
    ys = [vy for _, vy in vertices]
    left, right = round_half_away(min(xs)), round_half_away(max(xs))
    top, bottom = round_half_away(min(ys)), round_half_away(max(ys))
    width, height = right - left, bottom - top
    if width <= 0 or height <= 0:
        return
    if item.rotation_angle == 0.0:
        layer = _gradient((width, height), item.up_color, item.down_color)
    else:
        layer = pygame.Surface((width, height), pygame.SRCALPHA)
        pygame.draw.polygon(
            layer, _rgba(item.up_color), [(vx - left, vy - top) for vx, vy in vertices]
        )
    target.blit(layer, (left, top))


def _blit_sprite(
    target: pygame.Surface, item: SpriteBatchItem, pic: _Pic, surface: pygame.Surface
) -> None:
    rect = _frame_rect(pic, item.frame).clip(surface.get_rect())
    if rect.width == 0 or rect.height == 0:
        return
    width = round_half_away(abs(rect.width * item.scale_x))
    height = round_half_away(abs(rect.height * item.scale_y))
    if width == 0 or height == 0:
        return

    image = pygame.transform.scale(surface.subsurface(rect), (width, height))
    if item.scale_x < 0 or item.scale_y < 0:
        image = pygame.transform.flip(image, item.scale_x < 0, item.scale_y < 0)

    if image.get_flags() & pygame.SRCALPHA:
        layer = image.copy()
    else:
        layer = pygame.Surface((width, height), pygame.SRCALPHA)
        layer.fill((0, 0, 0, 255))
        layer.blit(image, (0, 0))

    white = Color()
    if item.up_color != white or item.down_color != white:
        layer.blit(
            _gradient((width, height), item.up_color, item.down_color),
            (0, 0),
            special_flags=pygame.BLEND_RGBA_MULT,
        )

    position = (round_half_away(item.x), round_half_away(item.y))
    if item.rotation_angle != 0.0:
        layer = pygame.transform.rotate(layer, -item.rotation_angle)
        destination = layer.get_rect(center=position)
    elif item.use_center:
        destination = layer.get_rect(center=position)
    else:
        destination = layer.get_rect(topleft=position)
    target.blit(layer, destination)


def render_batch(
    pics: _PicSource, items: Iterable[SpriteBatchItem], target: pygame.Surface
) -> None:
    """Draw queued sprites onto ``target`` in order.

    Items whose picture is missing or has no surface are drawn as plain
    coloured quads, shaded from the up colour to the down colour.
    """
    for item in items:
        pic = pics.info(item.texture_index) if item.texture_index >= 0 else None
        surface = getattr(pic, "surface", None) if pic is not None else None
        if pic is None or surface is None:
            _fill_quad(target, item, quad_vertices(item, pic))
        else:
            _blit_sprite(target, item, pic, surface)


def draw_text(
    x: float,
    y: float,
    text: str,
    pics: _Drawer,
    image_index: int,
    scale: float = 1.0,
    color: Color = Color(),
) -> None:
    """Queue one centred glyph per character from a font sheet starting at space."""
    for position, char in enumerate(text):
        frame = ord(char) - 32
        if frame < 0:
            raise ValueError(f"character {char!r} has no glyph")
        pics.draw(
            image_index,
            x + position * (_TEXT_ADVANCE * scale),
            y,
            frame,
            True,
            scale,
            scale,
            0.0,
            color,
            color,
        )


def draw_block(
    pics: _Drawer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color = Color(0.0, 0.0, 0.0, 1.0),
    color2: Color = Color(0.0, 0.0, 0.0, 0.0),
) -> None:
    """Queue an untextured rectangle shaded from ``color`` to ``color2``."""
    pics.draw(-1, x, y, 0, False, width, height, 0.0, color, color2)