from __future__ import annotations

import enum
import zlib
from typing import Iterator, List, Tuple

from .container import FRAME_PAYLOAD, check_magic, extract_compressed_buffer, find_framed_block, iter_framed_blocks
from .entities import BlockAttempt, FramedBlock, InflateResult
from .errors import NoCompressedBlockFound, NoMapInAnyBlock
from .search import find_marker
from .tiles import MAP_MARKER

# Output is grown 1 MiB at a time, input is fed one frame at a time.
DEFAULT_OUTPUT_STEP = 1024 * 1024
INPUT_STEP = FRAME_PAYLOAD


def _drain(obj, chunk: bytes, output_step: int) -> bytes:
    out = bytearray()
    pending = chunk
    while pending and not obj.eof:
        out += obj.decompress(pending, output_step)
        pending = obj.unconsumed_tail
    return bytes(out)


def _salvage(obj, chunk: bytes) -> tuple[bytes, int]:
    # Replay byte by byte so output decoded before the bad bits survives.
    out = bytearray()
    used = 0
    for pos in range(len(chunk)):
        try:
            out += obj.decompress(chunk[pos : pos + 1])
        except zlib.error:
            break
        used += 1
        if obj.eof:
            break
    return bytes(out), used


def inflate_sync_flushed(buffer: bytes, *, output_step: int = DEFAULT_OUTPUT_STEP) -> InflateResult:
    """
    Inflate a zlib-headed stream that was written as a run of sync-flushed
    blocks. Civ6 never finishes the stream, so there is no adler32 trailer to
    check; we keep pulling output until the input is exhausted or the stream
    reports its end. A corrupt block stops the attempt but whatever was
    already recovered is returned alongside the error.
    """

    if output_step <= 0:
        raise ValueError("output_step must be positive")
    obj = zlib.decompressobj(zlib.MAX_WBITS)
    out = bytearray()
    consumed = 0
    error: str | None = None
    while consumed < len(buffer) and not obj.eof:
        chunk = bytes(buffer[consumed : consumed + INPUT_STEP])
        checkpoint = obj.copy()
        try:
            out += _drain(obj, chunk, output_step)
        except zlib.error as exc:
            error = str(exc)
            obj = checkpoint
            salvaged, used = _salvage(obj, chunk)
            out += salvaged
            consumed += used
            break
        consumed += len(chunk)
    if error is None:
        out += obj.flush()
    if obj.eof:
        consumed -= len(obj.unused_data)
    return InflateResult(data=bytes(out), consumed=consumed, complete=obj.eof, error=error)


def has_map_marker(data: bytes) -> bool:
    return find_marker(data, MAP_MARKER, last=True) is not None


class ExtractionState(enum.Enum):
    SEARCHING = "searching"
    DECOMPRESSING = "decompressing"
    VERIFYING = "verifying"
    FOUND = "found"


class MapStreamExtractor:
    """
    Walk the framed blocks of a save one at a time until one inflates to a
    stream carrying the map marker.

    Each call to :meth:`step` performs a single transition::

        SEARCHING -> DECOMPRESSING -> VERIFYING -> FOUND
                                               \\-> SEARCHING

    Running out of blocks raises ``NoCompressedBlockFound`` when nothing was
    found at all and ``NoMapInAnyBlock`` once at least one candidate failed.
    """

    def __init__(self, blob: bytes, *, output_step: int = DEFAULT_OUTPUT_STEP) -> None:
        self.blob = blob
        self.output_step = output_step
        self.state = ExtractionState.SEARCHING
        self.offset = 0
        self.attempts: List[BlockAttempt] = []
        self.block: FramedBlock | None = None
        self.result: InflateResult | None = None
        self._compressed_size = 0

    @property
    def data(self) -> bytes | None:
        if self.state is not ExtractionState.FOUND or self.result is None:
            return None
        return self.result.data

    def step(self) -> ExtractionState:
        if self.state is ExtractionState.SEARCHING:
            self.block = find_framed_block(self.blob, self.offset)
            if self.block is None:
                if not self.attempts:
                    raise NoCompressedBlockFound()
                raise NoMapInAnyBlock(len(self.attempts))
            self.state = ExtractionState.DECOMPRESSING
        elif self.state is ExtractionState.DECOMPRESSING:
            assert self.block is not None
            compressed = extract_compressed_buffer(self.blob, self.block)
            self._compressed_size = len(compressed)
            self.result = inflate_sync_flushed(compressed, output_step=self.output_step)
            self.state = ExtractionState.VERIFYING
        elif self.state is ExtractionState.VERIFYING:
            assert self.block is not None and self.result is not None
            found = has_map_marker(self.result.data)
            self.attempts.append(
                BlockAttempt(
                    block=self.block,
                    compressed_size=self._compressed_size,
                    decompressed_size=len(self.result.data),
                    has_map=found,
                    error=self.result.error,
                )
            )
            if found:
                self.state = ExtractionState.FOUND
            else:
                # Resume at this block's stop marker, past its start marker.
                self.offset = self.block.stop
                self.state = ExtractionState.SEARCHING
        return self.state

    def run(self) -> bytes:
        while self.state is not ExtractionState.FOUND:
            self.step()
        assert self.result is not None
        return self.result.data


def extract_map_stream(raw: bytes, *, output_step: int = DEFAULT_OUTPUT_STEP) -> bytes:
    check_magic(raw)
    return MapStreamExtractor(raw, output_step=output_step).run()


def inflate_all_blocks(
    raw: bytes,
    *,
    output_step: int = DEFAULT_OUTPUT_STEP,
) -> Iterator[Tuple[FramedBlock, InflateResult]]:
    """Yield every framed block in file order together with its inflated data."""

    check_magic(raw)
    for block in iter_framed_blocks(raw):
        compressed = extract_compressed_buffer(raw, block)
        yield block, inflate_sync_flushed(compressed, output_step=output_step)
