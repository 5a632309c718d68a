from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class FramedBlock:
    """Offsets of a start marker and the stop marker that closes it."""

    start: int
    stop: int

    @property
    def payload_start(self) -> int:
        # Skip the 4 framing bytes, keep the 2-byte zlib header.
        return self.start + 4

    @property
    def payload_stop(self) -> int:
        # The sync-flush marker stays part of the deflate data.
        return self.stop + 4

    @property
    def payload_length(self) -> int:
        return self.payload_stop - self.payload_start


@dataclass(frozen=True)
class InflateResult:
    data: bytes
    consumed: int
    complete: bool
    error: str | None = None


@dataclass(frozen=True)
class BlockAttempt:
    block: FramedBlock
    compressed_size: int
    decompressed_size: int
    has_map: bool
    error: str | None = None


@dataclass(frozen=True)
class TileAttributes:
    f1: int
    f2: int
    f3: int
    owner: int | None
    color: RGB


@dataclass(frozen=True)
class MapHeader:
    marker_offset: int
    tile_count: int
    width: int
    height: int

    @property
    def records_offset(self) -> int:
        return self.marker_offset + 16


@dataclass(frozen=True)
class DecodedTile:
    index: int
    offset: int
    length: int
    x: int
    y: int
    attributes: TileAttributes


@dataclass
class DecodedMap:
    header: MapHeader
    colors: List[List[RGB]]
    tiles: List[DecodedTile] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height


@dataclass(frozen=True)
class ContainerChunk:
    offset: int
    kind: str
    title: str | None
    payload: bytes
