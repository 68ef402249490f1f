"""Loading and saving of TGA images and NES CHR pattern tables."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

_HEADER = struct.Struct("<BBBHHBHHHHBB")

_UNCOMPRESSED = 2
_RLE = 10

CHR_SIZE = 128
_CHR_TILE_BYTES = 16
_CHR_TILE_WIDTH = 8
_CHR_TABLE_OFFSET = 4096
_CHR_TABLE_BYTES = 4096


class ImageError(ValueError):
    """Raised when image data is malformed or unsupported."""


def _swap_red_blue(pixels: bytes, channels: int) -> bytes:
    """Swap the first and third byte of every pixel (BGR <-> RGB)."""
    swapped = bytearray(pixels)
    swapped[0::channels] = pixels[2::channels]
    swapped[2::channels] = pixels[0::channels]
    return bytes(swapped)


def _take(raw: bytes, start: int, length: int) -> bytes:
    chunk = raw[start : start + length]
    if len(chunk) < length:
        raise ImageError("unexpected end of TGA data")
    return chunk


@dataclass(frozen=True)
class Image:
    """Pixel data stored row by row as RGB (24 bits) or RGBA (32 bits)."""

    width: int
    height: int
    data: bytes
    bits: int = 24

    def __post_init__(self) -> None:
        if self.bits not in (24, 32):
            raise ValueError(f"unsupported pixel depth: {self.bits}")
        expected = self.width * self.height * self.channels
        if len(self.data) != expected:
            raise ValueError(
                f"pixel data holds {len(self.data)} bytes, expected {expected}"
            )
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def channels(self) -> int:
        return self.bits // 8

    @classmethod
    def load_tga(cls, path: str | os.PathLike[str]) -> Image:
        """Read an uncompressed or RLE-compressed true-colour TGA file."""
        raw = Path(path).read_bytes()
        if len(raw) < _HEADER.size:
            raise ImageError("truncated TGA header")
        (
            id_length,
            _map_type,
            image_type,
            _map_first,
            map_length,
            _map_entry,
            _x_origin,
            _y_origin,
            width,
            height,
            bits,
            _descriptor,
        ) = _HEADER.unpack_from(raw)

        if image_type not in (_UNCOMPRESSED, _RLE):
            raise ImageError(f"unsupported TGA image type: {image_type}")
        if bits not in (24, 32):
            raise ImageError(f"unsupported TGA pixel depth: {bits}")

        channels = bits // 8
        offset = _HEADER.size + id_length + map_length * channels
        total = width * height

        if image_type == _UNCOMPRESSED:
            if total == 0:
                raise ImageError("TGA image holds no pixel data")
            pixels = _take(raw, offset, total * channels)
            return cls(width, height, _swap_red_blue(pixels, channels), bits)

        data = bytearray(total * channels)
        written = 0
        position = offset
        while written < total:
            header = _take(raw, position, 1)[0]
            count = (header & 0x7F) + 1
            if written + count > total:
                raise ImageError("RLE packet runs past the end of the image")
            start = written * channels
            end = (written + count) * channels
            if header & 0x80:
                pixel = _take(raw, position + 1, channels)
                data[start:end] = _swap_red_blue(pixel, channels) * count
                position += 1 + channels
            else:
                chunk = _take(raw, position + 1, count * channels)
                data[start:end] = _swap_red_blue(chunk, channels)
                position += 1 + count * channels
            written += count
        return cls(width, height, bytes(data), bits)

    def save_tga(self, path: str | os.PathLike[str]) -> None:
        """Write the image as an uncompressed 32-bit TGA file.

        24-bit images are written with a fully opaque alpha channel.
        """
        if self.bits == 32:
            rgba = self.data
        else:
            expanded = bytearray(self.width * self.height * 4)
            for channel in range(3):
                expanded[channel::4] = self.data[channel::3]
            expanded[3::4] = b"\xff" * (self.width * self.height)
            rgba = bytes(expanded)
        try:
            header = _HEADER.pack(
                0, 0, _UNCOMPRESSED, 0, 0, 0, 0, 0, self.width, self.height, 32, 0
            )
        except struct.error as exc:
            raise ImageError("image is too large for a TGA file") from exc
        with open(path, "wb") as handle:
            handle.write(header)
            handle.write(_swap_red_blue(rgba, 4))

    @classmethod
    def load_chr(
        cls,
        path: str | os.PathLike[str],
        palette: Sequence[int],
        palette_index: int = 0,
    ) -> Image:
        """Decode the second pattern table of a CHR file into a 128x128 RGB image.

        ``palette`` holds four RGB triplets per sub-palette; ``palette_index``
        picks the sub-palette. Rows are stored bottom-up.
        """
        if palette_index < 0:
            raise ValueError("palette index must not be negative")
        base = 12 * palette_index
        colours = [bytes(palette[base + 3 * value : base + 3 * value + 3]) for value in range(4)]
        if any(len(colour) != 3 for colour in colours):
            raise ValueError("palette is too short for the requested sub-palette")

        raw = Path(path).read_bytes()
        table = raw[_CHR_TABLE_OFFSET : _CHR_TABLE_OFFSET + _CHR_TABLE_BYTES]
        if len(table) < _CHR_TABLE_BYTES:
            raise ImageError("CHR file is too short to hold the second pattern table")

        tiles_per_row = CHR_SIZE // _CHR_TILE_WIDTH
        data = bytearray(CHR_SIZE * CHR_SIZE * 3)
        for tile_number in range(len(table) // _CHR_TILE_BYTES):
            tile = table[tile_number * _CHR_TILE_BYTES : (tile_number + 1) * _CHR_TILE_BYTES]
            low_plane = tile[:_CHR_TILE_WIDTH]
            high_plane = tile[_CHR_TILE_WIDTH:]
            left = (tile_number % tiles_per_row) * _CHR_TILE_WIDTH
            top = CHR_SIZE - 1 - (tile_number // tiles_per_row) * _CHR_TILE_WIDTH
            for row_offset, (low, high) in enumerate(zip(low_plane, high_plane)):
                row = top - row_offset
                for column in range(_CHR_TILE_WIDTH):
                    shift = 7 - column
                    value = ((low >> shift) & 1) | (((high >> shift) & 1) << 1)
                    index = (row * CHR_SIZE + left + column) * 3
                    data[index : index + 3] = colours[value]
        return cls(CHR_SIZE, CHR_SIZE, bytes(data), 24)