"""
Civilization VI save decoding utilities split into modules for reuse.
"""

from .chunks import iter_container_chunks
from .container import (
    BLOCK_START,
    BLOCK_STOP,
    FRAME_GAP,
    FRAME_PAYLOAD,
    MAGIC,
    check_magic,
    deframe,
    deframed_length,
    extract_compressed_buffer,
    find_framed_block,
    iter_framed_blocks,
)
from .deflate_io import (
    DEFAULT_OUTPUT_STEP,
    ExtractionState,
    MapStreamExtractor,
    extract_map_stream,
    has_map_marker,
    inflate_all_blocks,
    inflate_sync_flushed,
)
from .entities import (
    BlockAttempt,
    ContainerChunk,
    DecodedMap,
    DecodedTile,
    FramedBlock,
    InflateResult,
    MapHeader,
    TileAttributes,
)
from .errors import (
    BadMagic,
    Civ6SaveError,
    MapNotFound,
    NoCompressedBlockFound,
    NoMapInAnyBlock,
    TruncatedRecord,
    UnrecognizedMapSize,
)
from .fog import decode_fog, find_fog_table
from .logging import TileRecordLogger, log_candidate_blocks
from .render import canvas_size, rasterize, rasterize_fog, save_png
from .search import find_marker, iter_markers
from .tiles import (
    MAP_MARKER,
    MAP_SIZES,
    decode_map,
    decode_tile_record,
    owner_color,
    read_map_header,
    record_length,
    tile_xy,
    tiles_number_to_max_xy,
)

__all__ = [
    "iter_container_chunks",
    "BLOCK_START",
    "BLOCK_STOP",
    "FRAME_GAP",
    "FRAME_PAYLOAD",
    "MAGIC",
    "check_magic",
    "deframe",
    "deframed_length",
    "extract_compressed_buffer",
    "find_framed_block",
    "iter_framed_blocks",
    "DEFAULT_OUTPUT_STEP",
    "ExtractionState",
    "MapStreamExtractor",
    "extract_map_stream",
    "has_map_marker",
    "inflate_all_blocks",
    "inflate_sync_flushed",
    "BlockAttempt",
    "ContainerChunk",
    "DecodedMap",
    "DecodedTile",
    "FramedBlock",
    "InflateResult",
    "MapHeader",
    "TileAttributes",
    "BadMagic",
    "Civ6SaveError",
    "MapNotFound",
    "NoCompressedBlockFound",
    "NoMapInAnyBlock",
    "TruncatedRecord",
    "UnrecognizedMapSize",
    "decode_fog",
    "find_fog_table",
    "TileRecordLogger",
    "log_candidate_blocks",
    "canvas_size",
    "rasterize",
    "rasterize_fog",
    "save_png",
    "find_marker",
    "iter_markers",
    "MAP_MARKER",
    "MAP_SIZES",
    "decode_map",
    "decode_tile_record",
    "owner_color",
    "read_map_header",
    "record_length",
    "tile_xy",
    "tiles_number_to_max_xy",
]
