from __future__ import annotations

import struct

import pytest

from civ6map.errors import MapNotFound, TruncatedRecord
from civ6map.fog import decode_fog, find_fog_table
from civ6map.tiles import read_map_header

from savebuilder import make_map_stream, make_record


def _fog_stream(fog: bytes) -> bytes:
    return struct.pack("<I", 1144) + fog + make_map_stream([make_record()] * 1144)


def test_fog_table_follows_first_tile_count():
    fog = bytes([1]) + bytes(1142) + bytes([1])
    stream = _fog_stream(fog)
    header = read_map_header(stream)
    assert find_fog_table(stream, header) == 4
    revealed = decode_fog(stream, header)
    assert revealed[25][0] is True
    assert revealed[0][43] is True
    assert revealed[25][1] is False
    assert sum(cell for row in revealed for cell in row) == 2


def test_fog_table_running_past_end():
    stream = make_map_stream([make_record()] * 1144)
    tail = struct.pack("<I", 1144) + b"\x01" * 10
    header = read_map_header(stream + tail)
    with pytest.raises(TruncatedRecord):
        decode_fog(stream + tail, header, start=len(stream))


def test_missing_fog_table():
    stream = make_map_stream([make_record()] * 1144)
    header = read_map_header(stream)
    with pytest.raises(MapNotFound):
        decode_fog(stream, header, start=header.records_offset)
