from __future__ import annotations

import numpy as np
from PIL import Image

from civ6map.render import block_origin, canvas_size, rasterize, rasterize_fog, save_png
from civ6map.tiles import decode_map

from savebuilder import minimal_map_stream

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def _px(pixels, x, y):
    return tuple(int(v) for v in pixels[y, x])


def test_canvas_size_has_one_block_margin():
    assert canvas_size(44, 26) == (900, 540)


def test_even_rows_are_shifted_half_a_block():
    assert block_origin(0, 0) == (18, 13)
    assert block_origin(0, 1) == (8, 33)
    assert block_origin(3, 2) == (78, 53)


def test_rasterize_fills_inset_blocks():
    pixels = rasterize([[RED, GREEN], [BLUE, WHITE]])
    assert pixels.shape == (60, 60, 3)
    assert pixels.dtype == np.uint8
    assert _px(pixels, 18, 13) == RED
    assert _px(pixels, 31, 26) == RED
    assert _px(pixels, 17, 13) == BLACK
    assert _px(pixels, 18, 27) == BLACK
    assert _px(pixels, 38, 13) == GREEN
    assert _px(pixels, 8, 33) == BLUE
    assert _px(pixels, 28, 46) == WHITE
    assert _px(pixels, 0, 0) == BLACK


def test_rasterize_decoded_map():
    decoded = decode_map(minimal_map_stream())
    pixels = rasterize(decoded.colors)
    assert pixels.shape == (540, 900, 3)
    assert _px(pixels, 18, 13) == (128, 128, 128)


def test_rasterize_fog_uses_full_blocks():
    pixels = rasterize_fog([[True, False]])
    assert pixels.shape == (20, 40, 3)
    assert _px(pixels, 0, 0) == WHITE
    assert _px(pixels, 19, 19) == WHITE
    assert _px(pixels, 20, 0) == BLACK


def test_save_png(tmp_path):
    destination = tmp_path / "out" / "map.png"
    save_png(rasterize([[RED]]), destination)
    with Image.open(destination) as image:
        assert image.size == (40, 40)
        assert image.mode == "RGB"
        assert image.getpixel((18, 13)) == RED
