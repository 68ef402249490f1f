import pytest

from nesed.inifile import IniFile


def test_write_format(tmp_path):
    ini = IniFile()
    ini.set("width", "640")
    ini.set("height", "480")
    path = tmp_path / "out.ini"
    ini.write(path)
    assert path.read_text(encoding="utf-8") == "width=640\nheight=480\n"


def test_round_trip(tmp_path):
    ini = IniFile()
    ini.set("tileSet", "chr/main_bg_tiles.chr")
    ini.set("mapTiles", "data/maps/map1.asm")
    path = tmp_path / "nesed.ini"
    ini.write(path)
    loaded = IniFile()
    loaded.read(path)
    assert list(loaded) == ["tileSet", "mapTiles"]
    assert loaded.get("mapTiles") == "data/maps/map1.asm"


def test_read_handles_crlf_and_equals_in_value(tmp_path):
    path = tmp_path / "a.ini"
    path.write_bytes(b"palette=a=b.asm\r\nwidth=800\r\n")
    ini = IniFile()
    ini.read(path)
    assert ini.get("palette") == "a=b.asm"
    assert ini.get("width") == "800"


def test_lines_without_value_are_skipped(tmp_path):
    path = tmp_path / "a.ini"
    path.write_text("junk\nempty=\nname=ok\n", encoding="utf-8")
    ini = IniFile()
    ini.read(path)
    assert len(ini) == 1
    assert "empty" not in ini
    assert ini.get("name") == "ok"


def test_first_duplicate_wins(tmp_path):
    path = tmp_path / "a.ini"
    path.write_text("key=first\nkey=second\n", encoding="utf-8")
    ini = IniFile()
    ini.read(path)
    assert ini.get("key") == "first"


def test_get_default_when_missing():
    ini = IniFile()
    assert ini.get("missing", "fallback") == "fallback"
    assert ini.get("missing") is None


def test_set_replaces_existing_in_place():
    ini = IniFile()
    ini.set("a", "1")
    ini.set("b", "2")
    ini.set("a", "3")
    assert list(ini) == ["a", "b"]
    assert ini.get("a") == "3"


def test_unicode_round_trip(tmp_path):
    ini = IniFile()
    ini.set("vardas", "žaidimas")
    path = tmp_path / "u.ini"
    ini.write(path)
    loaded = IniFile()
    loaded.read(path)
    assert loaded.get("vardas") == "žaidimas"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        IniFile().read(tmp_path / "absent.ini")