"""
Decoder for the tile table inside a decompressed Civ6 game-state stream.

The table starts right after the last copy of ``MAP_MARKER``: a u32 tile
count followed by one variable-length record per tile. Record length is
driven by three flag bytes at fixed offsets:

    +49  f3   bit 6 -> 17 trailing bytes holding the owner index
    +51  f1   bit 0 -> 24 extra bytes (and f2 bit 0 -> 20 more)
              bit 1 -> 44 extra bytes
    +75  f2   only meaningful when f1 bit 0 is set

Rows are stored bottom-to-top, so tile ``n`` lands on image row
``height - n // width - 1``.
"""

from __future__ import annotations

import struct
from typing import Callable, Dict, List, Tuple

from .entities import RGB, DecodedMap, DecodedTile, MapHeader, TileAttributes
from .errors import MapNotFound, TruncatedRecord, UnrecognizedMapSize
from .search import find_marker

MAP_MARKER = bytes.fromhex("0E000000 0F000000 06000000")

MAP_SIZES: Dict[int, Tuple[int, int]] = {
    1144: (44, 26),
    2280: (60, 38),
    3404: (74, 46),
    4536: (84, 54),
    5760: (96, 60),
    6996: (106, 66),
}

RECORD_BASE_LENGTH = 55
F3_OFFSET = 49
F1_OFFSET = 51
F2_OFFSET = 75
OWNER_TAIL_OFFSET = 5

F1_SHORT_EXTENSION = 0x01
F1_LONG_EXTENSION = 0x02
F2_EXTENSION = 0x01
F3_OWNED = 0x40

NEUTRAL_COLOR: RGB = (128, 128, 128)
UNKNOWN_OWNER_COLOR: RGB = (255, 255, 255)
OWNER_COLORS: Dict[int, RGB] = {
    7: (255, 0, 0),
    0: (0, 0, 255),
    1: (0, 255, 0),
}

RecordDecoder = Callable[[bytes, int, int], Tuple[int, TileAttributes]]


def tiles_number_to_max_xy(tile_count: int) -> Tuple[int, int]:
    try:
        return MAP_SIZES[tile_count]
    except KeyError:
        raise UnrecognizedMapSize(tile_count) from None


def record_length(f1: int, f2: int, f3: int) -> int:
    length = RECORD_BASE_LENGTH
    if f1 & F1_SHORT_EXTENSION:
        length += 24
        if f2 & F2_EXTENSION:
            length += 20
    elif f1 & F1_LONG_EXTENSION:
        length += 44
    if f3 & F3_OWNED:
        length += 17
    return length


def owner_color(owner: int | None) -> RGB:
    if owner is None:
        return NEUTRAL_COLOR
    # Only 0, 1 and 7 have been observed with stable colours.
    return OWNER_COLORS.get(owner, UNKNOWN_OWNER_COLOR)


def tile_xy(index: int, width: int, height: int) -> Tuple[int, int]:
    row, x = divmod(index, width)
    return x, height - row - 1


def _byte_at(blob: bytes, offset: int, record_offset: int, index: int) -> int:
    if offset >= len(blob):
        raise TruncatedRecord(index, record_offset, offset - record_offset + 1, len(blob) - record_offset)
    return blob[offset]


def decode_tile_record(blob: bytes, offset: int, index: int = 0) -> Tuple[int, TileAttributes]:
    """
    Decode the record starting at ``offset`` and return ``(length, attributes)``.

    The whole record must fit inside ``blob``; nothing is clamped.
    """

    f3 = _byte_at(blob, offset + F3_OFFSET, offset, index)
    f1 = _byte_at(blob, offset + F1_OFFSET, offset, index)
    f2 = _byte_at(blob, offset + F2_OFFSET, offset, index) if f1 & F1_SHORT_EXTENSION else 0
    length = record_length(f1, f2, f3)
    available = len(blob) - offset
    if length > available:
        raise TruncatedRecord(index, offset, length, available)
    owner = blob[offset + length - OWNER_TAIL_OFFSET] if f3 & F3_OWNED else None
    return length, TileAttributes(f1=f1, f2=f2, f3=f3, owner=owner, color=owner_color(owner))


def read_map_header(blob: bytes) -> MapHeader:
    marker_offset = find_marker(blob, MAP_MARKER, last=True)
    if marker_offset is None:
        raise MapNotFound()
    count_offset = marker_offset + len(MAP_MARKER)
    if count_offset + 4 > len(blob):
        raise TruncatedRecord(None, count_offset, 4, len(blob) - count_offset)
    (tile_count,) = struct.unpack_from("<I", blob, count_offset)
    width, height = tiles_number_to_max_xy(tile_count)
    return MapHeader(marker_offset=marker_offset, tile_count=tile_count, width=width, height=height)


def decode_map(
    blob: bytes,
    *,
    record_decoder: RecordDecoder = decode_tile_record,
    record_logger=None,
) -> DecodedMap:
    header = read_map_header(blob)
    colors: List[List[RGB]] = [[NEUTRAL_COLOR] * header.width for _ in range(header.height)]
    tiles: List[DecodedTile] = []
    cursor = header.records_offset
    for index in range(header.tile_count):
        length, attributes = record_decoder(blob, cursor, index)
        x, y = tile_xy(index, header.width, header.height)
        colors[y][x] = attributes.color
        tile = DecodedTile(index=index, offset=cursor, length=length, x=x, y=y, attributes=attributes)
        tiles.append(tile)
        if record_logger is not None:
            record_logger.record(tile)
        cursor += length
    return DecodedMap(header=header, colors=colors, tiles=tiles)
