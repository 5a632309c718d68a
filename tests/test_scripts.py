from __future__ import annotations

import pytest
from PIL import Image

import civ6_chunk_dump
import civ6_decompress
import civ6_map_to_png
from civ6map.tiles import MAP_MARKER

from savebuilder import make_container, make_map_stream, make_record, minimal_map_stream


@pytest.fixture
def save_file(tmp_path):
    records = [make_record()] * 1144
    records[0] = make_record(1, 0, 0x40, owner=7)
    path = tmp_path / "dev_solo.Civ6Save"
    path.write_bytes(make_container([b"\x07 other state " * 100, make_map_stream(records)]))
    return path


def test_decompress_writes_map_stream(save_file, tmp_path, capsys):
    log = tmp_path / "candidates.txt"
    assert civ6_decompress.main([str(save_file), "--candidate-log", str(log)]) == 0
    output = tmp_path / "dev_solo.Civ6Save.bin"
    assert MAP_MARKER in output.read_bytes()
    lines = log.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert "map=no" in lines[0] and "map=yes" in lines[1]
    assert "Skipped 1 block(s)" in capsys.readouterr().out


def test_decompress_all_blocks(save_file, tmp_path):
    output = tmp_path / "out.bin"
    assert civ6_decompress.main([str(save_file), "-o", str(output), "--all-blocks"]) == 0
    assert (tmp_path / "out.0.bin").read_bytes() == b"\x07 other state " * 100
    assert MAP_MARKER in (tmp_path / "out.1.bin").read_bytes()


def test_decompress_reports_bad_magic(tmp_path):
    path = tmp_path / "broken.Civ6Save"
    path.write_bytes(b"XXXX" + b"\x00" * 32)
    with pytest.raises(SystemExit) as excinfo:
        civ6_decompress.main([str(path)])
    assert "Not a Civilization VI save" in str(excinfo.value)


def test_map_to_png_from_save(save_file, tmp_path):
    output = tmp_path / "map.png"
    tile_log = tmp_path / "tiles.txt"
    assert civ6_map_to_png.main([str(save_file), "-o", str(output), "--tile-log", str(tile_log)]) == 0
    with Image.open(output) as image:
        assert image.size == (900, 540)
        # Tile 0 sits on the bottom row (y=25, odd, not shifted).
        assert image.getpixel((8, 25 * 20 + 13)) == (255, 0, 0)
        assert image.getpixel((18, 13)) == (128, 128, 128)
    lines = tile_log.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1144
    assert "owner=7" in lines[0]


def test_map_to_png_from_decompressed_stream(tmp_path):
    stream = tmp_path / "game.bin"
    stream.write_bytes(minimal_map_stream())
    output = tmp_path / "map.png"
    assert civ6_map_to_png.main([str(stream), "-o", str(output)]) == 0
    assert output.exists()


def test_map_to_png_reports_truncation(tmp_path):
    stream = tmp_path / "game.bin"
    stream.write_bytes(minimal_map_stream()[:-10])
    with pytest.raises(SystemExit) as excinfo:
        civ6_map_to_png.main([str(stream), "-o", str(tmp_path / "map.png")])
    assert "truncated" in str(excinfo.value)
    assert not (tmp_path / "map.png").exists()


def test_chunk_dump(save_file, capsys):
    assert civ6_chunk_dump.main([str(save_file), "--bytes"]) == 0
    out = capsys.readouterr().out
    assert "kind=version" in out
    assert "kind=compressed" in out
