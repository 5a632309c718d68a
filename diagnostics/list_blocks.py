#!/usr/bin/env python3
"""
List every framed compressed block of a .Civ6Save and whether it carries a map.
Read-only; prints a short report.
"""

from __future__ import annotations

import sys
from pathlib import Path

from civ6map.deflate_io import has_map_marker, inflate_all_blocks


def report(path: Path) -> None:
    blob = path.read_bytes()
    print(f"{path.name}: size={len(blob)} bytes")
    found = 0
    for idx, (block, result) in enumerate(inflate_all_blocks(blob)):
        found += 1
        status = "map" if has_map_marker(result.data) else "no map"
        print(
            f"  block {idx}: 0x{block.start:X}..0x{block.stop:X} "
            f"payload={block.payload_length} inflated={len(result.data)} ({status})"
        )
        if result.error:
            print(f"    inflate stopped early: {result.error}")
    if not found:
        print("  no framed blocks")


def main() -> None:
    targets = [Path(arg) for arg in sys.argv[1:]]
    if not targets:
        raise SystemExit("usage: list_blocks.py SAVE [SAVE ...]")
    for t in targets:
        if t.exists():
            report(t)
        else:
            print(f"{t} missing")


if __name__ == "__main__":
    main()
