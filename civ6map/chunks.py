"""
Walk the uncompressed header chunks that sit between the ``CIV6`` magic and
the first framed compressed block.

The layout is only partially understood. The header is read as little-endian
32-bit words:

    01 00 00 00   chunk separator
    20 00 00 00   opens a word list running up to the next separator
                  (looks like version data)
    02 00 00 00   followed by one 8-byte value
    anything else starts a NUL-terminated ASCII title, followed by words
                  up to the next separator

Reaching the compressed block start marker ends the walk.
"""

from __future__ import annotations

from typing import Iterator

from .container import BLOCK_START, MAGIC, check_magic
from .entities import ContainerChunk

SEPARATOR = b"\x01\x00\x00\x00"
VERSION_TAG = b"\x20\x00\x00\x00"
VALUE_TAG = b"\x02\x00\x00\x00"
VALUE_SIZE = 8
WORD = 4


def _at_block(blob: bytes, pos: int) -> bool:
    return blob.startswith(BLOCK_START, pos)


def _read_words(blob: bytes, pos: int) -> tuple[bytes, int]:
    start = pos
    while pos + WORD <= len(blob) and blob[pos : pos + WORD] != SEPARATOR and not _at_block(blob, pos):
        pos += WORD
    return blob[start:pos], pos


def iter_container_chunks(blob: bytes) -> Iterator[ContainerChunk]:
    check_magic(blob)
    pos = len(MAGIC)
    while pos + WORD <= len(blob):
        if _at_block(blob, pos):
            yield ContainerChunk(offset=pos, kind="compressed", title=None, payload=b"")
            return
        word = blob[pos : pos + WORD]
        if word == SEPARATOR:
            pos += WORD
            continue
        if word == VERSION_TAG:
            payload, end = _read_words(blob, pos + WORD)
            yield ContainerChunk(offset=pos, kind="version", title=None, payload=payload)
            pos = end
        elif word == VALUE_TAG:
            payload = blob[pos + WORD : pos + WORD + VALUE_SIZE]
            yield ContainerChunk(offset=pos, kind="value", title=None, payload=payload)
            pos += WORD + VALUE_SIZE
        else:
            nul = blob.find(b"\x00", pos)
            if nul == -1:
                yield ContainerChunk(offset=pos, kind="raw", title=None, payload=blob[pos:])
                return
            title = blob[pos:nul].decode("ascii", errors="replace")
            payload, end = _read_words(blob, nul + 1)
            yield ContainerChunk(offset=pos, kind="named", title=title, payload=payload)
            pos = end
