"""SHA-256 hashing for render provenance.

Provides:
    - sha256_file(): hash file contents (event logs, configs, exported PNGs)
    - sha256_array(): hash raw array bytes (pixel buffers)

Recorded in replay metadata so two renders of the same event log can be
compared without diffing images. Results are 64-char hex strings.

Note: Module named `hashing.py` to avoid shadowing builtin `hash()`.
"""

import hashlib
from pathlib import Path
from typing import Union

import numpy as np


def sha256_file(path: Union[str, Path], chunk_size: int = 1 << 20) -> str:
    """Compute SHA-256 hash of file contents.

    Parameters
    ----------
    path : Union[str, Path]
        File path
    chunk_size : int
        Read chunk size in bytes, default 1 MB

    Returns
    -------
    str
        SHA-256 hex digest

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256 = hashlib.sha256()
    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            sha256.update(chunk)

    return sha256.hexdigest()


def sha256_array(arr: np.ndarray) -> str:
    """Compute SHA-256 hash of array bytes.

    Hash covers values in C order; it is NOT invariant to dtype or shape
    changes that keep the same bytes, so shape is mixed into the digest.
    """
    sha256 = hashlib.sha256()
    sha256.update(str(arr.shape).encode('utf-8'))
    sha256.update(np.ascontiguousarray(arr).tobytes())
    return sha256.hexdigest()
