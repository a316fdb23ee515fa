"""Filesystem helpers for replay exports.

The replay CLI writes a PNG of the final buffer, optional frame PNGs and a
metadata YAML. Exports go through a sibling temporary file that is renamed
over the target, so a viewer polling the output directory never opens a
half-written PNG.

Usage:
    from src.utils import fs
    fs.atomic_save_image(buffer.pixels, out_dir / "replay.png")
    fs.atomic_yaml_dump(metadata, out_dir / "replay_metadata.yaml")
"""

import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import numpy as np
import yaml
from PIL import Image


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory (and parents) if missing, return it as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _replace_atomically(path: Path, tmp_path: Path, write: Callable[[Path], None]) -> None:
    # tmp_path must live in path's directory for the rename to be atomic
    ensure_dir(path.parent)
    try:
        write(tmp_path)
        tmp_path.replace(path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_write_bytes(path: Union[str, Path], data: bytes) -> None:
    """Write bytes through ``<name>.tmp``, fsync, then rename over ``path``.

    Raises
    ------
    RuntimeError
        If writing or renaming fails; the temporary file is removed
    """
    path = Path(path)

    def write(tmp: Path) -> None:
        with open(tmp, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

    _replace_atomically(path, path.with_suffix(path.suffix + ".tmp"), write)


def atomic_save_image(
    img: np.ndarray,
    path: Union[str, Path],
    pil_kwargs: Optional[Dict[str, Any]] = None
) -> None:
    """Export a pixel array as an image file.

    Parameters
    ----------
    img : np.ndarray
        (H, W, 4) RGBA buffer pixels, (H, W, 3) RGB or (H, W) grayscale.
        Non-uint8 input is clipped to [0, 255].
    path : Union[str, Path]
        Target file; the extension selects the Pillow format
    pil_kwargs : Optional[Dict[str, Any]]
        Extra arguments for ``PIL.Image.Image.save``

    Raises
    ------
    RuntimeError
        If Pillow cannot write the file
    """
    path = Path(path)
    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img.squeeze(2)

    pil_img = Image.fromarray(np.ascontiguousarray(img))

    # "replay.tmp.png" keeps the real suffix last for format detection
    tmp_path = path.with_name(path.stem + ".tmp" + path.suffix)
    _replace_atomically(path, tmp_path, lambda tmp: pil_img.save(tmp, **(pil_kwargs or {})))


def atomic_yaml_dump(obj: Any, path: Union[str, Path]) -> None:
    """Write plain data (dicts, lists, scalars) as block-style YAML, keys in insertion order."""
    text = yaml.safe_dump(obj, default_flow_style=False, sort_keys=False, allow_unicode=True)
    atomic_write_bytes(path, text.encode('utf-8'))


def load_yaml(path: Union[str, Path]) -> Any:
    """Parse a YAML file with ``yaml.safe_load`` (None for an empty file).

    Raises FileNotFoundError for a missing file; parse errors propagate as
    ``yaml.YAMLError``, which the config loaders turn into ValueError.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)
