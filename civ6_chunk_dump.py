#!/usr/bin/env python3
"""
Dump the uncompressed header chunks of a .Civ6Save file.

Everything before the first framed zlib block is a sequence of 32-bit words:
separators, a version-like word list, short 8-byte values and titled
sections. This prints one line per chunk so the fields can be compared across saves.
"""

from __future__ import annotations

import argparse
import itertools
import sys
from pathlib import Path
from typing import Sequence

from civ6map.chunks import iter_container_chunks
from civ6map.entities import ContainerChunk
from civ6map.errors import Civ6SaveError


def describe_chunk(chunk: ContainerChunk, *, show_bytes: bool = False, max_bytes: int = 32) -> str:
    parts = [f"off=0x{chunk.offset:06X}", f"kind={chunk.kind:<10}", f"size={len(chunk.payload)}"]
    if chunk.title is not None:
        parts.append(f"title={chunk.title!r}")
    if show_bytes and chunk.payload:
        sample = chunk.payload[:max_bytes].hex(" ").upper()
        if len(chunk.payload) > max_bytes:
            sample += " …"
        parts.append(f"bytes={sample}")
    return " | ".join(parts)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump header chunks from a .Civ6Save file.")
    parser.add_argument("input", type=Path, help="Path to the .Civ6Save file")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of chunks to print (default: no limit)",
    )
    parser.add_argument("--bytes", action="store_true", help="Include a short hex dump of each payload")
    parser.add_argument(
        "--max-bytes",
        type=lambda x: int(x, 0),
        default=32,
        help="Payload bytes shown per chunk with --bytes (default 32)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    blob = args.input.read_bytes()
    chunks = iter_container_chunks(blob)
    if args.limit is not None:
        chunks = itertools.islice(chunks, args.limit)
    count = 0
    try:
        for chunk in chunks:
            print(describe_chunk(chunk, show_bytes=args.bytes, max_bytes=args.max_bytes))
            count += 1
    except Civ6SaveError as exc:
        raise SystemExit(str(exc)) from exc
    if count == 0:
        print("No header chunks discovered.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
