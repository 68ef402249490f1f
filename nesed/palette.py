"""The NES master palette and loading of four-colour sub-palettes."""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType

RGB = tuple[int, int, int]

NES_COLORS = MappingProxyType(
    {
        0x00: (124, 124, 124), 0x01: (0, 0, 252), 0x02: (0, 0, 188),
        0x03: (68, 40, 188), 0x04: (148, 0, 132), 0x05: (168, 0, 32),
        0x06: (168, 16, 0), 0x07: (136, 20, 0), 0x08: (80, 48, 0),
        0x09: (0, 120, 0), 0x0A: (0, 104, 0), 0x0B: (0, 88, 0),
        0x0C: (0, 64, 88), 0x0F: (0, 0, 0),
        0x10: (188, 188, 188), 0x11: (0, 120, 248), 0x12: (0, 88, 248),
        0x13: (104, 68, 252), 0x14: (216, 0, 204), 0x15: (228, 0, 88),
        0x16: (248, 56, 0), 0x17: (228, 92, 16), 0x18: (172, 124, 0),
        0x19: (0, 184, 0), 0x1A: (0, 168, 0), 0x1B: (0, 168, 68),
        0x1C: (0, 136, 136),
        0x20: (248, 248, 248), 0x21: (60, 188, 252), 0x22: (104, 136, 252),
        0x23: (152, 120, 248), 0x24: (248, 120, 248), 0x25: (248, 88, 152),
        0x26: (248, 120, 88), 0x27: (252, 160, 68), 0x28: (248, 184, 0),
        0x29: (184, 248, 24), 0x2A: (88, 216, 84), 0x2B: (88, 248, 152),
        0x2C: (0, 232, 216), 0x2D: (120, 120, 120),
        0x30: (252, 252, 252), 0x31: (164, 228, 252), 0x32: (184, 184, 248),
        0x33: (216, 184, 248), 0x34: (248, 184, 248), 0x35: (248, 164, 192),
        0x36: (240, 208, 176), 0x37: (252, 224, 168), 0x38: (248, 216, 120),
        0x39: (216, 248, 120), 0x3A: (184, 248, 184), 0x3B: (184, 248, 216),
        0x3C: (0, 252, 252), 0x3D: (248, 216, 248),
    }
)

SUB_PALETTES = 4
COLORS_PER_PALETTE = 4
_CODE_COUNT = SUB_PALETTES * COLORS_PER_PALETTE


class PaletteError(ValueError):
    """Raised when a palette file cannot be read or is malformed."""


def color_for(code: int) -> RGB:
    """RGB value of a NES colour code."""
    try:
        return NES_COLORS[code]
    except KeyError:
        raise PaletteError(f"unknown NES colour code {code:#04x}") from None


def _parse_code(part: str) -> int:
    if not part.startswith("$"):
        raise PaletteError(f"colour {part!r} does not start with '$'")
    try:
        return int(part[1:], 16)
    except ValueError as exc:
        raise PaletteError(f"bad hexadecimal colour {part!r}") from exc


def parse_palette(text: str) -> bytes:
    """Turn palette source into 48 RGB bytes: four sub-palettes of four colours.

    The source is a name, a directive and a run of 16 ``$XX`` colour codes.
    Codes without a colour in the NES table come out black.
    """
    tokens = text.split()
    if len(tokens) < 3:
        raise PaletteError("palette data ends too early")
    parts = tokens[2].split(",")
    if len(parts) < _CODE_COUNT:
        raise PaletteError(f"palette holds fewer than {_CODE_COUNT} colours")
    codes = [_parse_code(part) for part in parts[:_CODE_COUNT]]

    result = bytearray(_CODE_COUNT * 3)
    for slot, code in enumerate(codes):
        rgb = NES_COLORS.get(code)
        if rgb is not None:
            result[slot * 3 : slot * 3 + 3] = bytes(rgb)
    return bytes(result)


def load_palette(path: str | os.PathLike[str]) -> bytes:
    """Read a palette file; see :func:`parse_palette`."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise PaletteError(f"cannot read palette {path}") from exc
    return parse_palette(text)