"""Test the RGBA pixel buffer.

Tests for src.raster_engine.pixel_buffer:
    - Byte layout: offset(x, y) = (y * W + x) * 4, R,G,B,A order
    - set/get roundtrip in bounds
    - Out-of-bounds writes are silent no-ops, reads return None
    - fill_span clipping
    - clear / copy / presentation image

Run:
    pytest tests/test_pixel_buffer.py -v
"""

import numpy as np
import pytest

from src.raster_engine.pixel_buffer import PixelBuffer
from src.utils.color import PALETTE, TRANSPARENT, Color

RED = PALETTE['red']


@pytest.fixture
def buffer():
    return PixelBuffer(10, 8)


def test_initial_layout(buffer):
    assert buffer.width == 10 and buffer.height == 8
    assert buffer.data.shape == (10 * 8 * 4,)
    assert buffer.data.dtype == np.uint8
    assert not buffer.data.any(), "Default background must be transparent black"


def test_background_fill():
    buf = PixelBuffer(3, 2, background="white")
    assert buf.get(2, 1) == PALETTE['white']
    assert buf.count_painted(PALETTE['white']) == 6


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
def test_invalid_size_raises(width, height):
    with pytest.raises(ValueError):
        PixelBuffer(width, height)


@pytest.mark.parametrize("x,y", [(0, 0), (9, 0), (0, 7), (9, 7), (4, 3)])
def test_set_get_roundtrip(buffer, x, y):
    color = Color(12, 34, 56, 78)
    buffer.set(x, y, color)
    assert buffer.get(x, y) == color


def test_offset_matches_flat_layout(buffer):
    color = Color(1, 2, 3, 4)
    buffer.set(3, 2, color)

    off = buffer.offset(3, 2)
    assert off == (2 * 10 + 3) * 4
    assert list(buffer.data[off:off + 4]) == [1, 2, 3, 4]
    assert buffer.count_painted(color) == 1


def test_data_view_shares_storage(buffer):
    buffer.data[0:4] = [255, 0, 0, 255]
    assert buffer.get(0, 0) == RED


@pytest.mark.parametrize("x,y", [(-1, 0), (10, 0), (0, -1), (0, 8), (-100, 100), (10, 8)])
def test_out_of_bounds_set_is_noop(buffer, x, y):
    before = buffer.tobytes()
    buffer.set(x, y, RED)
    assert buffer.tobytes() == before


@pytest.mark.parametrize("x,y", [(-1, 0), (10, 0), (0, -1), (0, 8)])
def test_out_of_bounds_get_returns_none(buffer, x, y):
    assert buffer.get(x, y) is None
    assert not buffer.in_bounds(x, y)


def test_fill_span_clips_both_ends(buffer):
    buffer.fill_span(-5, 3, 1, RED)
    assert [buffer.get(x, 1) == RED for x in range(10)] == [True] * 4 + [False] * 6

    buffer.fill_span(20, 8, 2, RED)  # reversed and overhanging
    assert buffer.get(7, 2) == TRANSPARENT
    assert buffer.get(8, 2) == RED and buffer.get(9, 2) == RED


def test_fill_span_outside_rows_is_noop(buffer):
    before = buffer.tobytes()
    buffer.fill_span(0, 9, -1, RED)
    buffer.fill_span(0, 9, 8, RED)
    buffer.fill_span(11, 15, 3, RED)
    assert buffer.tobytes() == before


def test_clear_and_copy(buffer):
    buffer.set(1, 1, RED)
    snapshot = buffer.copy()

    buffer.clear()
    assert buffer.get(1, 1) == TRANSPARENT
    assert snapshot.get(1, 1) == RED, "copy() must not share storage"

    buffer.clear("red")
    assert buffer.count_painted(RED) == 80


def test_to_image(buffer):
    buffer.set(2, 5, RED)
    img = buffer.to_image()
    assert img.mode == "RGBA"
    assert img.size == (10, 8)
    assert img.getpixel((2, 5)) == (255, 0, 0, 255)

    # Presentation copy is detached from the live buffer
    buffer.set(2, 5, TRANSPARENT)
    assert img.getpixel((2, 5)) == (255, 0, 0, 255)
