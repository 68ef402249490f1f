"""A container of loaded pictures plus a queue of sprites waiting to be drawn."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Optional, Sequence

import pygame

from .image import Image, ImageError
from .sprites import SpriteBatchItem, render_batch
from .vectors import Color

_log = logging.getLogger(__name__)

_FALLBACK_DIR = "base/pics/"
_FIELDS_PER_ENTRY = 5


class PicsError(Exception):
    """Raised when a picture list or a picture file cannot be loaded."""


class ImageType(IntEnum):
    """Kinds of picture file the container can load."""

    TGA = 0
    CHR = 1


@dataclass
class PicData:
    """Description of one picture: its tile grid and the decoded surface."""

    name: str = ""
    twidth: int = 0
    theight: int = 0
    width: int = 0
    height: int = 0
    filter: int = 0
    type: int = ImageType.TGA
    htilew: float = 0.0
    htileh: float = 0.0
    vframes: int = 0
    hframes: int = 0
    palette: Optional[Sequence[int]] = None
    surface: Optional[pygame.Surface] = None

    def _apply(self, image: Optional[Image]) -> None:
        """Take size and pixels from ``image``; ``None`` leaves an empty picture."""
        self.width = image.width if image is not None else 0
        self.height = image.height if image is not None else 0
        self.htilew = self.twidth / 2.0
        self.htileh = self.theight / 2.0
        self.vframes = self.height // self.theight
        self.hframes = self.width // self.twidth
        self.surface = _to_surface(image) if image is not None else None


def _to_surface(image: Image) -> Optional[pygame.Surface]:
    """Turn bottom-up pixel rows into an upright surface."""
    if image.width == 0 or image.height == 0:
        return None
    fmt = "RGBA" if image.bits == 32 else "RGB"
    raw = pygame.image.frombuffer(image.data, (image.width, image.height), fmt)
    return pygame.transform.flip(raw, False, True)


def _read_image(
    path: str,
    image_type: int,
    palette: Optional[Sequence[int]],
    palette_index: int,
) -> Image:
    if image_type == ImageType.TGA:
        return Image.load_tga(path)
    if palette is None:
        raise ValueError("a palette is needed to load CHR data")
    return Image.load_chr(path, palette, palette_index)


def _last_component(path: str) -> str:
    parts = [part for part in path.split("/") if part]
    return parts[-1] if parts else ""


class PicsContainer:
    """Loaded pictures, addressed by index, and a batch of queued sprites."""

    def __init__(self) -> None:
        self._pics: list[PicData] = []
        self._batch: list[SpriteBatchItem] = []

    def __len__(self) -> int:
        return len(self._pics)

    @property
    def batch(self) -> tuple[SpriteBatchItem, ...]:
        """Sprites queued since the last :meth:`draw_batch`."""
        return tuple(self._batch)

    def init_container(self, list_path: str | os.PathLike[str]) -> None:
        """Append the entries of a picture list without loading any pixels.

        Each entry is a file name followed by tile height, tile width,
        filter flag and image type.
        """
        try:
            text = Path(list_path).read_text()
        except OSError as exc:
            raise PicsError(f"cannot read picture list {list_path}") from exc
        tokens = text.split()
        if not tokens:
            raise PicsError(f"picture list {list_path} is empty")
        if len(tokens) % _FIELDS_PER_ENTRY:
            raise PicsError(f"picture list {list_path} ends with an incomplete entry")

        entries = []
        for start in range(0, len(tokens), _FIELDS_PER_ENTRY):
            name, *numbers = tokens[start : start + _FIELDS_PER_ENTRY]
            try:
                theight, twidth, filter_flag, image_type = (int(n) for n in numbers)
            except ValueError as exc:
                raise PicsError(f"bad numbers for {name} in {list_path}") from exc
            if theight <= 0 or twidth <= 0:
                raise PicsError(f"tile size of {name} must be positive")
            entries.append(
                PicData(
                    name=name,
                    twidth=twidth,
                    theight=theight,
                    filter=filter_flag,
                    type=image_type,
                )
            )
        self._pics.extend(entries)

    def load(self, list_path: str | os.PathLike[str]) -> None:
        """Read a picture list and load every picture it names.

        A picture that cannot be read is kept as an empty entry.
        """
        self.init_container(list_path)
        for pic in self._pics:
            try:
                image = _read_image(pic.name, pic.type, pic.palette, 0)
            except (OSError, ValueError) as exc:
                _log.warning("%s not loaded: %s", pic.name, exc)
                image = None
            pic._apply(image)

    def _load_direct(
        self,
        path: str,
        index: int,
        image_type: int,
        tile_size: int,
        filter: int,
        palette: Optional[Sequence[int]],
        palette_index: int,
    ) -> None:
        try:
            image = _read_image(path, image_type, palette, palette_index)
        except (OSError, ImageError) as exc:
            raise PicsError(f"{path} not found or corrupted") from exc

        if index >= len(self._pics):
            self._pics.extend(
                PicData(twidth=tile_size, theight=tile_size, filter=filter, type=image_type)
                for _ in range(index + 1 - len(self._pics))
            )
        pic = self._pics[index]
        pic.twidth = tile_size
        pic.theight = tile_size
        pic.filter = filter
        pic.name = _last_component(path)
        pic._apply(image)

    def load_file(
        self,
        path: str | os.PathLike[str],
        index: int,
        image_type: int = ImageType.TGA,
        tile_size: int = 8,
        base_path: Optional[str] = None,
        filter: int = 0,
        palette: Optional[Sequence[int]] = None,
        palette_index: int = 0,
    ) -> None:
        """Load one picture into slot ``index``, growing the container if needed.

        With ``base_path`` the file is looked up under that prefix first and
        under ``base/pics/`` second.
        """
        if index < 0:
            raise IndexError("picture index must not be negative")
        if tile_size <= 0:
            raise ValueError("tile size must be positive")
        file = os.fspath(path)
        args = (index, image_type, tile_size, filter, palette, palette_index)
        if base_path is None:
            self._load_direct(file, *args)
            return
        try:
            self._load_direct(f"{base_path}{file}", *args)
        except PicsError:
            _log.info("retrying %s under %s", file, _FALLBACK_DIR)
            self._load_direct(f"{_FALLBACK_DIR}{file}", *args)

    def info(self, index: int) -> Optional[PicData]:
        """The picture at ``index``, or ``None`` when there is none."""
        if 0 <= index < len(self._pics):
            return self._pics[index]
        return None

    def find_by_name(self, name: str) -> Optional[int]:
        """Index of the first picture called ``name``, or ``None``."""
        return next(
            (index for index, pic in enumerate(self._pics) if pic.name == name), None
        )

    def remove(self, index: int) -> None:
        """Drop the picture at ``index``; an index out of range is ignored."""
        if 0 <= index < len(self._pics):
            del self._pics[index]

    def clear(self) -> None:
        """Forget every picture and every queued sprite."""
        self._pics.clear()
        self._batch.clear()

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
    ) -> None:
        """Queue a sprite for the next :meth:`draw_batch`."""
        self._batch.append(
            SpriteBatchItem(
                x=x,
                y=y,
                texture_index=texture_index,
                frame=frame,
                use_center=use_center,
                scale_x=scale_x,
                scale_y=scale_y,
                rotation_angle=rotation_angle,
                up_color=up_color,
                down_color=down_color,
            )
        )

    def draw_batch(self, target: pygame.Surface) -> None:
        """Draw every queued sprite onto ``target`` in order and empty the queue."""
        try:
            render_batch(self, self._batch, target)
        finally:
            self._batch.clear()