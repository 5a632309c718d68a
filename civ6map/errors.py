from __future__ import annotations


class Civ6SaveError(RuntimeError):
    """Base class for every fatal decoding failure."""


class BadMagic(Civ6SaveError, ValueError):
    def __init__(self, found: bytes, expected: bytes) -> None:
        super().__init__(f"Not a Civilization VI save: expected magic {expected!r}, found {found!r}.")
        self.found = found
        self.expected = expected


class NoCompressedBlockFound(Civ6SaveError):
    def __init__(self) -> None:
        super().__init__("No framed compressed block found (start/stop markers missing).")


class NoMapInAnyBlock(Civ6SaveError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f"None of the {attempts} compressed block(s) contained a map.")
        self.attempts = attempts


class UnrecognizedMapSize(Civ6SaveError, ValueError):
    def __init__(self, tile_count: int) -> None:
        super().__init__(f"Unrecognized map size: {tile_count} tiles.")
        self.tile_count = tile_count


class MapNotFound(Civ6SaveError, ValueError):
    def __init__(self) -> None:
        super().__init__("Could not find a map in this stream.")


class TruncatedRecord(Civ6SaveError, IndexError):
    def __init__(self, index: int | None, offset: int, needed: int, available: int) -> None:
        what = "Map header" if index is None else f"Tile record #{index}"
        super().__init__(
            f"{what} at 0x{offset:X} is truncated "
            f"(needs {needed} bytes, {max(available, 0)} left in the stream)."
        )
        self.index = index
        self.offset = offset
        self.needed = needed
        self.available = available
