from __future__ import annotations

import pytest

from civ6map.chunks import iter_container_chunks
from civ6map.container import BLOCK_START
from civ6map.errors import BadMagic

SEP = b"\x01\x00\x00\x00"


def _header() -> bytes:
    return (
        b"CIV6"
        + b"\x20\x00\x00\x00" + b"\x05\x00\x00\x00\x06\x00\x00\x00" + SEP
        + b"\x02\x00\x00\x00" + b"\x10\x00\x00\x00\x20\x00\x00\x00" + SEP
        + b"TITLE\x00" + b"\x2a\x00\x00\x00" + SEP
        + BLOCK_START + b"compressed bytes"
    )


def test_walks_chunks_up_to_compressed_block():
    chunks = list(iter_container_chunks(_header()))
    assert [(c.offset, c.kind, c.title) for c in chunks] == [
        (4, "version", None),
        (20, "value", None),
        (36, "named", "TITLE"),
        (50, "compressed", None),
    ]
    assert chunks[0].payload == b"\x05\x00\x00\x00\x06\x00\x00\x00"
    assert chunks[1].payload == b"\x10\x00\x00\x00\x20\x00\x00\x00"
    assert chunks[2].payload == b"\x2a\x00\x00\x00"


def test_unterminated_title_is_reported_raw():
    chunks = list(iter_container_chunks(b"CIV6" + SEP + b"ABCDEFGH"))
    assert [(c.kind, c.payload) for c in chunks] == [("raw", b"ABCDEFGH")]


def test_requires_magic():
    with pytest.raises(BadMagic):
        list(iter_container_chunks(b"NOPE" + SEP))
