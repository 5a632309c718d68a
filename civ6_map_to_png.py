#!/usr/bin/env python3
"""
Render the world map of a Civilization VI save to PNG.

Accepts either the original .Civ6Save (the compressed stream is recovered
first) or a stream already written by civ6_decompress.py. Example:

    python civ6_map_to_png.py dev_solo.Civ6Save -o map.png
    python civ6_map_to_png.py medicis.Civ6Save.bin --fog -o fog.png
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from civ6map.container import MAGIC
from civ6map.deflate_io import extract_map_stream
from civ6map.errors import Civ6SaveError
from civ6map.fog import decode_fog
from civ6map.logging import TileRecordLogger
from civ6map.render import rasterize, rasterize_fog, save_png
from civ6map.tiles import decode_map, read_map_header


def load_stream(path: Path) -> bytes:
    data = path.read_bytes()
    if data.startswith(MAGIC):
        return extract_map_stream(data)
    return data


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a Civ6 save's world map to PNG.")
    parser.add_argument("input", type=Path, help="Source .Civ6Save or decompressed .bin stream")
    parser.add_argument("-o", "--output", type=Path, default=Path("map.png"), help="PNG destination (default map.png)")
    parser.add_argument("--fog", action="store_true", help="Render the revealed-tiles table instead of ownership")
    parser.add_argument("--tile-log", type=Path, help="Write one line per decoded tile record to this path")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        stream = load_stream(args.input)
        if args.fog:
            header = read_map_header(stream)
            pixels = rasterize_fog(decode_fog(stream, header))
        else:
            tile_logger = TileRecordLogger(args.tile_log) if args.tile_log else None
            decoded = decode_map(stream, record_logger=tile_logger)
            if tile_logger:
                tile_logger.flush()
            header = decoded.header
            pixels = rasterize(decoded.colors)
    except Civ6SaveError as exc:
        raise SystemExit(str(exc)) from exc

    print(f"[+] {header.tile_count} tiles ({header.width} x {header.height})")
    save_png(pixels, args.output)
    print(f"[+] PNG written to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
