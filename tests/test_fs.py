"""Test atomic filesystem operations and hashing.

Tests for src.utils.fs and src.utils.hashing:
    - YAML roundtrip preserves structure and order
    - Atomic writes leave no temporary files behind
    - Image export keeps RGBA pixels exactly
    - SHA-256 of files and arrays

Run:
    pytest tests/test_fs.py -v
"""

import numpy as np
import pytest
from PIL import Image

from src.utils import fs, hashing


def test_ensure_dir(tmp_path):
    target = fs.ensure_dir(tmp_path / "a" / "b")
    assert target.is_dir()
    assert fs.ensure_dir(target) == target


def test_yaml_roundtrip(tmp_path):
    data = {'schema': 'events.v1', 'events': [{'type': 'press', 'x': 1.5, 'y': 2}], 'z': None}
    path = tmp_path / "out" / "data.yaml"
    fs.atomic_yaml_dump(data, path)

    assert fs.load_yaml(path) == data
    assert list(fs.load_yaml(path).keys()) == ['schema', 'events', 'z']


def test_atomic_write_bytes_no_tmp_left(tmp_path):
    path = tmp_path / "blob.bin"
    fs.atomic_write_bytes(path, b"first")
    fs.atomic_write_bytes(path, b"second")

    assert path.read_bytes() == b"second"
    assert [p.name for p in tmp_path.iterdir()] == ["blob.bin"]


def test_load_yaml_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        fs.load_yaml(tmp_path / "missing.yaml")


def test_atomic_save_image_rgba(tmp_path):
    pixels = np.zeros((6, 8, 4), dtype=np.uint8)
    pixels[2, 3] = (255, 0, 0, 255)
    pixels[5, 7] = (1, 2, 3, 4)
    path = tmp_path / "img.png"

    fs.atomic_save_image(pixels, path)

    with Image.open(path) as img:
        assert img.mode == "RGBA"
        assert img.size == (8, 6)
        np.testing.assert_array_equal(np.asarray(img), pixels)
    assert not (tmp_path / "img.tmp.png").exists()


def test_atomic_save_image_clips_non_uint8(tmp_path):
    gray = np.array([[-5.0, 300.0]])
    path = tmp_path / "gray.png"
    fs.atomic_save_image(gray, path)
    with Image.open(path) as img:
        assert list(np.asarray(img).ravel()) == [0, 255]


def test_sha256_file(tmp_path):
    path = tmp_path / "abc.txt"
    path.write_bytes(b"abc")
    assert hashing.sha256_file(path) == \
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    with pytest.raises(FileNotFoundError):
        hashing.sha256_file(tmp_path / "missing")


def test_sha256_array():
    a = np.zeros((4, 4, 4), dtype=np.uint8)
    b = a.copy()
    assert hashing.sha256_array(a) == hashing.sha256_array(b)

    b[1, 1, 0] = 1
    assert hashing.sha256_array(a) != hashing.sha256_array(b)

    # Same bytes, different shape
    assert hashing.sha256_array(a) != hashing.sha256_array(a.reshape(8, 8))


def test_atomic_save_image_failure_cleans_up(tmp_path):
    pixels = np.zeros((2, 2, 4), dtype=np.uint8)
    path = tmp_path / "img.unknownext"

    with pytest.raises(RuntimeError, match="atomically"):
        fs.atomic_save_image(pixels, path)
    assert list(tmp_path.iterdir()) == []
