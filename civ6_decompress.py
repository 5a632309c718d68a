#!/usr/bin/env python3
"""
Recover the compressed game-state stream from a Civilization VI save.

Civ6 hides a zlib stream inside its .Civ6Save container, chopped into 64 KiB
frames with 4 stray bytes between them. This tool finds the framed block(s),
glues the frames back together, inflates them and writes the stream that
carries the world map to ``<input>.bin``:

    python civ6_decompress.py dev_solo.Civ6Save
    python civ6_decompress.py dev_solo.Civ6Save --all-blocks
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from civ6map.deflate_io import DEFAULT_OUTPUT_STEP, MapStreamExtractor, inflate_all_blocks
from civ6map.container import check_magic
from civ6map.errors import Civ6SaveError
from civ6map.logging import log_candidate_blocks


def default_output(source: Path) -> Path:
    return source.with_name(source.name + ".bin")


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract the decompressed game-state stream from a .Civ6Save file."
    )
    parser.add_argument("input", type=Path, help="Path to the source .Civ6Save file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Optional destination (defaults to <input>.bin)",
    )
    parser.add_argument(
        "--all-blocks",
        action="store_true",
        help="Write every framed block's inflated data to <output stem>.<n>.bin",
    )
    parser.add_argument(
        "--candidate-log",
        type=Path,
        help="Write one line per candidate block tried while searching for the map",
    )
    parser.add_argument(
        "--output-step",
        type=int,
        default=DEFAULT_OUTPUT_STEP,
        help="Bytes of output requested from zlib per step",
    )
    return parser.parse_args(argv)


def write_all_blocks(blob: bytes, output: Path, output_step: int) -> int:
    written = 0
    for idx, (block, result) in enumerate(inflate_all_blocks(blob, output_step=output_step)):
        target = output.with_name(f"{output.stem}.{idx}{output.suffix}")
        target.write_bytes(result.data)
        note = f" (stopped early: {result.error})" if result.error else ""
        print(f"[+] Block {idx} at 0x{block.start:X}: {len(result.data)} bytes -> {target}{note}")
        written += 1
    return written


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    blob = args.input.read_bytes()
    output = args.output or default_output(args.input)
    print(f"[+] Loaded {args.input} ({len(blob)} bytes)")

    try:
        if args.all_blocks:
            if write_all_blocks(blob, output, args.output_step) == 0:
                raise SystemExit("No framed compressed block found (start/stop markers missing).")
            return 0
        check_magic(blob)
        extractor = MapStreamExtractor(blob, output_step=args.output_step)
        try:
            data = extractor.run()
        finally:
            if args.candidate_log:
                log_candidate_blocks(extractor.attempts, args.candidate_log)
    except Civ6SaveError as exc:
        raise SystemExit(str(exc)) from exc

    block = extractor.block
    assert block is not None
    print(f"[+] Map stream found in block at 0x{block.start:X} (payload {block.payload_length} bytes)")
    skipped = len(extractor.attempts) - 1
    if skipped:
        print(f"[i] Skipped {skipped} block(s) without a map")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    print(f"[+] Decompressed {len(data)} bytes written to {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
