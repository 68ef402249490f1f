import pytest

from nesed.tilemap import ATTRIBUTE_COUNT, HEIGHT, WIDTH, MapError, TileMap
from nesed.vectors import Vector3D


def _grid():
    return [[(x * 7 + y * 13) % 256 for x in range(WIDTH)] for y in range(HEIGHT)]


def _half(values):
    return "    .byte " + ",".join("$%02X" % v for v in values)


def _map_text(name="level", tiles=None, attributes=None):
    tiles = _grid() if tiles is None else tiles
    attributes = list(range(ATTRIBUTE_COUNT)) if attributes is None else attributes
    lines = [name]
    for row in tiles:
        lines.append(_half(row[:16]))
        lines.append(_half(row[16:]))
    for start in (0, 32):
        lines.append(_half(attributes[start : start + 16]))
        lines.append(_half(attributes[start + 16 : start + 32]))
    return "\n".join(lines) + "\n"


class _Recorder:
    def __init__(self):
        self.calls = []

    def draw(self, *args):
        self.calls.append(args)


def test_load_reads_name_tiles_and_attributes(tmp_path):
    path = tmp_path / "level.asm"
    path.write_text(_map_text())
    grid = _grid()
    m = TileMap.load(path)
    assert m.name == "level"
    assert m.tiles == tuple(tuple(row) for row in grid)
    assert m.attributes == tuple(range(ATTRIBUTE_COUNT))
    assert m.tile(5, 3) == grid[3][5]


def test_collision_follows_high_tiles_on_load():
    m = TileMap.from_text(_map_text())
    grid = _grid()
    for y in range(HEIGHT):
        for x in range(WIDTH):
            assert m.collides(x, y) == (grid[y][x] >= 128)


def test_save_and_load_round_trip(tmp_path):
    m = TileMap.from_text(_map_text())
    m.set_tile(1, 1, 0xAB)
    m.set_attribute(4, 4, 2)
    path = tmp_path / "out.asm"
    m.save(path)
    again = TileMap.load(path)
    assert again.name == m.name
    assert again.tiles == m.tiles
    assert again.attributes == m.attributes
    assert path.read_text() == m.to_text()


def test_saved_layout():
    text = TileMap.from_text(_map_text()).to_text()
    lines = text.splitlines()
    assert lines[0] == "level"
    assert len(lines) == 65
    assert all(line.startswith("    .byte $") for line in lines[1:])
    assert lines[1].split(" ")[-1].split(",")[0] == "$00"


def test_attribute_bit_pairs():
    attributes = [0] * ATTRIBUTE_COUNT
    attributes[0] = 0xE4
    m = TileMap(attributes=attributes)
    assert [m.attribute(0, 0), m.attribute(2, 0), m.attribute(0, 2), m.attribute(2, 2)] == [0, 1, 2, 3]
    assert m.attribute(1, 1) == m.attribute(0, 0)


def test_set_attribute_round_trip_leaves_neighbours():
    m = TileMap()
    for value in range(4):
        m.set_attribute(6, 10, value)
        assert m.attribute(6, 10) == value
        assert m.attribute(7, 11) == value
        assert m.attribute(4, 10) == 0
        assert m.attribute(6, 8) == 0


def test_set_attribute_rejects_bad_value():
    with pytest.raises(ValueError):
        TileMap().set_attribute(0, 0, 4)


def test_out_of_range_cells():
    m = TileMap.from_text(_map_text())
    before = m.tiles
    m.set_tile(WIDTH, 0, 5)
    m.set_tile(-1, 0, 5)
    m.set_collision(0, HEIGHT, True)
    assert m.tiles == before
    assert m.tile(WIDTH, 0) == 0
    assert m.collides(-1, 3) is False
    assert m.attribute(0, HEIGHT) == 0


def test_set_tile_keeps_collision_separate():
    m = TileMap()
    m.set_tile(3, 4, 200)
    assert m.tile(3, 4) == 200
    assert m.collides(3, 4) is False
    m.set_collision(3, 4, True)
    assert m.collides(3, 4) is True


def test_set_tile_rejects_non_byte():
    with pytest.raises(ValueError):
        TileMap().set_tile(0, 0, 256)


def test_move_accumulates():
    m = TileMap()
    m.move(Vector3D(1.0, 0.0, 0.0), 2.0)
    m.move(Vector3D(0.0, 0.0, -1.0), 2.0)
    assert m.position == Vector3D(2.0, 0.0, -2.0)


def test_draw_queues_every_tile():
    m = TileMap.from_text(_map_text())
    m.move(Vector3D(1.0, 0.0, 1.0), 2.0)
    pics = _Recorder()
    m.draw(pics)
    assert len(pics.calls) == WIDTH * HEIGHT
    pos = m.position
    assert pics.calls[0] == (3 + m.attribute(0, 0), pos.x, pos.z, m.tile(0, 0), True, 4.0, 4.0, 0.0)
    last = pics.calls[-1]
    assert last[0] == 3 + m.attribute(WIDTH - 1, HEIGHT - 1)
    assert last[1] == (WIDTH - 1) * m.tile_width + pos.x
    assert last[3] == m.tile(WIDTH - 1, HEIGHT - 1)


def test_truncated_map_fails():
    text = _map_text()
    with pytest.raises(MapError):
        TileMap.from_text(text[: len(text) // 2])


def test_bad_value_fails():
    with pytest.raises(MapError):
        TileMap.from_text(_map_text().replace("$00", "$ZZ", 1))


def test_wrong_value_count_fails():
    text = _map_text().replace(",$07", "", 1)
    with pytest.raises(MapError):
        TileMap.from_text(text)


def test_missing_file_fails(tmp_path):
    with pytest.raises(MapError):
        TileMap.load(tmp_path / "absent.asm")