from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from .entities import RGB

BLOCK_SIZE = 20
BLOCK_INSET = 3
BLOCK_INNER_END = 17
ROW_SHIFT = 10
MARGIN_X = 5
MARGIN_Y = 10
BACKGROUND: RGB = (0, 0, 0)

REVEALED: RGB = (255, 255, 255)
HIDDEN: RGB = (0, 0, 0)


def canvas_size(width: int, height: int) -> tuple[int, int]:
    return width * BLOCK_SIZE + BLOCK_SIZE, height * BLOCK_SIZE + BLOCK_SIZE


def block_origin(x: int, y: int) -> tuple[int, int]:
    """Top-left pixel of the filled part of tile ``(x, y)``."""

    # Even rows are pushed right by half a block to mimic the hex layout.
    shift = ROW_SHIFT if y % 2 == 0 else 0
    px = x * BLOCK_SIZE + MARGIN_X + shift + BLOCK_INSET
    py = y * BLOCK_SIZE + MARGIN_Y + BLOCK_INSET
    return px, py


def rasterize(colors: Sequence[Sequence[RGB]]) -> np.ndarray:
    """Return an ``(H, W, 3)`` uint8 pixel grid for ``colors[y][x]``."""

    height = len(colors)
    width = len(colors[0]) if height else 0
    canvas_w, canvas_h = canvas_size(width, height)
    pixels = np.zeros((canvas_h, canvas_w, 3), dtype=np.uint8)
    pixels[:, :] = BACKGROUND
    inner = BLOCK_INNER_END - BLOCK_INSET
    for y, row in enumerate(colors):
        for x, color in enumerate(row):
            px, py = block_origin(x, y)
            pixels[py : py + inner, px : px + inner] = color
    return pixels


def rasterize_fog(revealed: Sequence[Sequence[bool]]) -> np.ndarray:
    height = len(revealed)
    width = len(revealed[0]) if height else 0
    pixels = np.zeros((height * BLOCK_SIZE, width * BLOCK_SIZE, 3), dtype=np.uint8)
    for y, row in enumerate(revealed):
        for x, seen in enumerate(row):
            px, py = x * BLOCK_SIZE, y * BLOCK_SIZE
            pixels[py : py + BLOCK_SIZE, px : px + BLOCK_SIZE] = REVEALED if seen else HIDDEN
    return pixels


def save_png(pixels: np.ndarray, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(pixels, "RGB").save(destination)
