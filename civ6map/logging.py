from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from .entities import BlockAttempt, DecodedTile


def log_candidate_blocks(attempts: Sequence[BlockAttempt], destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    lines: List[str] = []
    for idx, attempt in enumerate(attempts, start=1):
        block = attempt.block
        line = (
            f"#{idx:03d} start=0x{block.start:08X} stop=0x{block.stop:08X} "
            f"compressed={attempt.compressed_size} decompressed={attempt.decompressed_size} "
            f"map={'yes' if attempt.has_map else 'no'}"
        )
        if attempt.error:
            line += f" | error: {attempt.error}"
        lines.append(line)
    destination.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")


@dataclass
class TileRecordLogger:
    destination: Path

    def __post_init__(self) -> None:
        self._lines: List[str] = []

    def record(self, tile: DecodedTile) -> None:
        attrs = tile.attributes
        owner = "-" if attrs.owner is None else str(attrs.owner)
        self._lines.append(
            f"tile[{tile.index:05d}] off=0x{tile.offset:08X} len={tile.length:<3} "
            f"f1=0x{attrs.f1:02X} f2=0x{attrs.f2:02X} f3=0x{attrs.f3:02X} "
            f"owner={owner:<3} xy=({tile.x},{tile.y})"
        )

    def flush(self) -> None:
        if not self._lines:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        text = "\n".join(self._lines) + "\n"
        self.destination.write_text(text, encoding="utf-8")
