import pytest

from nesed.palette import PaletteError, color_for, load_palette, parse_palette

CODES = [0x0F, 0x30, 0x16, 0x27, 0x0F, 0x01, 0x11, 0x21,
         0x0F, 0x09, 0x19, 0x29, 0x0F, 0x00, 0x10, 0x20]


def _text(codes=CODES):
    return "palette:\n    .byte " + ",".join("$%02X" % c for c in codes) + "\n"


def test_color_for_table_entries():
    assert color_for(0x0F) == (0, 0, 0)
    assert color_for(0x30) == (252, 252, 252)
    assert color_for(0x2D) == (120, 120, 120)


def test_color_for_unknown_code():
    with pytest.raises(PaletteError):
        color_for(0x0D)


def test_parse_palette_places_colours_in_order():
    data = parse_palette(_text())
    assert len(data) == 48
    for slot, code in enumerate(CODES):
        assert tuple(data[slot * 3 : slot * 3 + 3]) == color_for(code)


def test_unknown_code_comes_out_black():
    codes = list(CODES)
    codes[5] = 0x0E
    data = parse_palette(_text(codes))
    assert data[15:18] == b"\x00\x00\x00"
    assert tuple(data[18:21]) == color_for(codes[6])


def test_extra_colours_are_ignored():
    assert parse_palette(_text(CODES + [0x30, 0x31])) == parse_palette(_text())


def test_too_few_colours_fails():
    with pytest.raises(PaletteError):
        parse_palette(_text(CODES[:10]))


def test_missing_directive_fails():
    with pytest.raises(PaletteError):
        parse_palette("palette:")


def test_bad_code_fails():
    with pytest.raises(PaletteError):
        parse_palette(_text().replace("$30", "30", 1))


def test_load_palette_matches_parse(tmp_path):
    path = tmp_path / "pal.asm"
    path.write_text(_text())
    assert load_palette(path) == parse_palette(_text())


def test_load_palette_missing_file(tmp_path):
    with pytest.raises(PaletteError):
        load_palette(tmp_path / "absent.asm")