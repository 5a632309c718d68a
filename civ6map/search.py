from __future__ import annotations

from typing import Iterator


def find_marker(blob: bytes, marker: bytes, start: int = 0, *, last: bool = False) -> int | None:
    """
    Return the offset of ``marker`` inside ``blob`` at or after ``start``.

    With ``last=True`` the final occurrence is returned instead of the first;
    the map table, for instance, is always the last copy of its marker.
    """

    if not marker:
        raise ValueError("marker must not be empty")
    pos = blob.rfind(marker, start) if last else blob.find(marker, start)
    return None if pos == -1 else pos


def iter_markers(blob: bytes, marker: bytes, start: int = 0) -> Iterator[int]:
    offset = start
    while True:
        pos = find_marker(blob, marker, offset)
        if pos is None:
            return
        yield pos
        offset = pos + 1
