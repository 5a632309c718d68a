from __future__ import annotations

import struct
from typing import List

from .entities import MapHeader
from .errors import MapNotFound, TruncatedRecord
from .search import find_marker
from .tiles import tile_xy


def find_fog_table(blob: bytes, header: MapHeader, start: int = 0) -> int:
    """
    The revealed-tiles table is prefixed by the same u32 tile count as the map
    table; its first copy in the stream marks where the table begins.
    """

    pos = find_marker(blob, struct.pack("<I", header.tile_count), start)
    if pos is None:
        raise MapNotFound()
    return pos + 4


def decode_fog(blob: bytes, header: MapHeader, start: int = 0) -> List[List[bool]]:
    """Return ``revealed[y][x]`` for every tile of the map."""

    table = find_fog_table(blob, header, start)
    if table + header.tile_count > len(blob):
        raise TruncatedRecord(None, table, header.tile_count, len(blob) - table)
    revealed = [[False] * header.width for _ in range(header.height)]
    for index in range(header.tile_count):
        x, y = tile_xy(index, header.width, header.height)
        revealed[y][x] = blob[table + index] != 0
    return revealed
