from __future__ import annotations

from typing import Iterator

from .entities import FramedBlock
from .errors import BadMagic
from .search import find_marker

MAGIC = b"CIV6"
ZLIB_HEADER = b"\x78\x9c"
BLOCK_START = b"\x00\x00\x01\x00" + ZLIB_HEADER
BLOCK_STOP = b"\x00\x00\xff\xff"

# The encoder interleaves 4 stray bytes after every 64 KiB of payload.
FRAME_PAYLOAD = 65536
FRAME_GAP = 4
FRAME_STRIDE = FRAME_PAYLOAD + FRAME_GAP


def check_magic(blob: bytes) -> None:
    if blob[: len(MAGIC)] != MAGIC:
        raise BadMagic(bytes(blob[: len(MAGIC)]), MAGIC)


def find_framed_block(blob: bytes, offset: int = 0) -> FramedBlock | None:
    """
    Locate the next start/stop marker pair at or after ``offset``. A missing
    marker is not an error here; the caller decides whether running out of
    blocks is fatal.
    """

    start = find_marker(blob, BLOCK_START, offset)
    if start is None:
        return None
    stop = find_marker(blob, BLOCK_STOP, start)
    if stop is None:
        return None
    return FramedBlock(start=start, stop=stop)


def iter_framed_blocks(blob: bytes, offset: int = 0) -> Iterator[FramedBlock]:
    while True:
        block = find_framed_block(blob, offset)
        if block is None:
            return
        yield block
        offset = block.stop


def deframe(payload: bytes) -> bytes:
    """Drop the 4 framing bytes that follow every 65536 payload bytes."""

    mv = memoryview(payload)
    return b"".join(mv[pos : pos + FRAME_PAYLOAD] for pos in range(0, len(payload), FRAME_STRIDE))


def deframed_length(length: int) -> int:
    full, rest = divmod(length, FRAME_STRIDE)
    return full * FRAME_PAYLOAD + min(rest, FRAME_PAYLOAD)


def extract_compressed_buffer(blob: bytes, block: FramedBlock) -> bytes:
    return deframe(blob[block.payload_start : block.payload_stop])
