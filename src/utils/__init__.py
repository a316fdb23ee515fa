"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - RGBA colors and the brush palette (color)
    - Device → buffer coordinate transforms (compute)
    - Atomic I/O and YAML (fs)
    - Hashing for render provenance (hashing)
    - Unified logging (logging_config)
    - Wall-clock profiling (profiler)
    - Config validation (validators)

No module in utils/ may import from upper layers (raster_engine, scripts).

Convenience imports:
    from src.utils import fs, compute, color, validators
    from src.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import compute
from . import fs
from . import hashing
from . import logging_config
from . import profiler
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'compute',
    'fs',
    'hashing',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
