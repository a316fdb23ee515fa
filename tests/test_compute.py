"""Test device ↔ buffer coordinate conversions.

Tests for src.utils.compute:
    - surface_size_px rounds scaled sizes
    - device_to_buffer scales, subtracts origin and truncates toward zero
    - Invalid ratios / empty surfaces raise

Run:
    pytest tests/test_compute.py -v
"""

import pytest

from src.utils import compute


def test_surface_size_identity():
    assert compute.surface_size_px(400, 300) == (400, 300)


def test_surface_size_rounds():
    assert compute.surface_size_px(400.4, 300.6, 1.5) == (601, 451)
    assert compute.surface_size_px(100, 50, 2.0) == (200, 100)


@pytest.mark.parametrize("width,height,dpr", [(100, 100, 0.0), (100, 100, -1.0), (0.2, 100, 1.0)])
def test_surface_size_invalid(width, height, dpr):
    with pytest.raises(ValueError):
        compute.surface_size_px(width, height, dpr)


def test_device_to_buffer_scales_and_offsets():
    assert compute.device_to_buffer(10, 20) == (10, 20)
    assert compute.device_to_buffer(10, 20, 2.0) == (20, 40)
    assert compute.device_to_buffer(10, 20, 2.0, (5.0, 8.0)) == (15, 32)


def test_device_to_buffer_truncates():
    assert compute.device_to_buffer(10.7, 3.2, 2.0, (1.0, 0.0)) == (20, 6)
    assert compute.device_to_buffer(-0.3, 0.9) == (0, 0)
    assert compute.device_to_buffer(-1.7, 2.5) == (-1, 2)


def test_device_to_buffer_returns_ints():
    x, y = compute.device_to_buffer(3.999, 7.5, 1.25)
    assert isinstance(x, int) and isinstance(y, int)
