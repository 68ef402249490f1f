# nesed

A small graphical editor for NES background screens. It opens a 32×30
name table written as assembler `.byte` rows, draws it with tiles taken
from a CHR pattern file coloured by a four-colour background palette, and
lets you paint tiles, attribute (palette) quadrants and collision marks
with the mouse before saving the screen back in the same text form.

## Installing

```
pip install .
```

The editor window uses `pygame`. For the test suite:

```
pip install .[test]
pytest
```

## Running

```
nesed [SETTINGS]
```

`SETTINGS` is a plain `name=value` file and defaults to `nesed.ini` in
the current directory:

```
width=640
height=480
tileSet=chr/main_bg_tiles.chr
mapTiles=../src/data/maps/level1.asm
palette=../src/data/palette.asm
```

- `width`, `height` — window size (640×480 when missing or zero).
- `tileSet` — CHR file, looked up as `../src/<tileSet>` and then as
  `base/pics/<tileSet>`; tiles come from its second pattern table, loaded
  once per sub-palette.
- `mapTiles` — the screen to edit; the save button writes back to this path.
- `palette` — a palette source file: a name, a directive such as `.byte`,
  then sixteen comma-separated `$xx` NES colour codes (four palettes of
  four colours). Codes not in the NES colour table come out black. If the
  palette cannot be read the editor carries on with an all-black one.

The editor also reads a picture list from `pics/clist.txt` (relative to
the working directory). Each entry is a file name followed by tile
height, tile width, a filter flag and an image type (0 = TGA, 1 = CHR).
Pictures 0, 1 and 2 are the font, the button icons and the cursor.

### Controls

The panel along the top holds toggles for showing the tile layer,
attributes, collisions and the grid; toggles for which layers the mouse
edits (tiles, attributes, collision); four palette selectors; a strip of
32 tiles with page buttons; and a save button. Panel buttons react when
the left mouse button is released over them.

Below the panel, the left mouse button paints the current tile, the
current palette into the 2×2 attribute quadrant, and/or a collision mark,
depending on the selected layers. The right mouse button sets the tile
and the attribute back to 0. Arrow keys scroll the map; Escape or closing
the window quits.

## Map file format

```
level1
    .byte $00,$01,...   ; 16 values, left half of row 0
    .byte $00,$00,...   ; 16 values, right half of row 0
    ...                 ; 30 rows in all
    .byte ...           ; then 64 attribute bytes as four lines of 16
```

`TileMap.load` / `TileMap.from_text` read this; `TileMap.save` /
`TileMap.to_text` write it with lower-case two-digit hex values.

## Using the pieces from Python

```python
from nesed.tilemap import TileMap
from nesed.palette import load_palette
from nesed.image import Image

screen = TileMap.load("level1.asm")
screen.set_tile(3, 4, 0x21)
screen.set_attribute(3, 4, 2)
print(screen.tile(3, 4), screen.attribute(3, 4), screen.collides(3, 4))
screen.save("level1.asm")

palette = load_palette("palette.asm")
tiles = Image.load_chr("main_bg_tiles.chr", palette, 0)
tiles.save_tga("tiles.tga")
```

Modules:

- `nesed.tilemap` — `TileMap`, `MapError`.
- `nesed.palette` — `NES_COLORS`, `color_for`, `parse_palette`,
  `load_palette`, `PaletteError`.
- `nesed.image` — `Image` (`load_tga`, `save_tga`, `load_chr`), `ImageError`.
- `nesed.textures` — `PicsContainer`, `PicData`, `ImageType`, `PicsError`.
- `nesed.sprites` — `SpriteBatchItem`, `calc_uvs`, `quad_vertices`,
  `render_batch`, `draw_text`, `draw_block`.
- `nesed.vectors` — `Vector3D`, `Color`, `rotation_y`, `rotation_axis`.
- `nesed.inifile` — `IniFile`.
- `nesed.utils` — `Point`, `round_half_away`, `circles_collide`, `line`.
- `nesed.button`, `nesed.layout` — the panel buttons and their placement.
- `nesed.editor` — `Editor`, `EditorConfig`, `load_config`, `main`.

## What it does not do

- Collision marks are not stored in the map file. On loading, every tile
  numbered 128 or above is marked as colliding; marks painted in the
  editor are lost on save. The mouse can add marks but not remove them.
- The palette is only read, never edited or saved.
- Only the second pattern table of a CHR file is shown, and only
  uncompressed or RLE true-colour (24/32-bit) TGA files are read.