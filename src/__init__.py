"""Pixel Paint: raster paint surface with circular brush strokes.

This package contains a fixed-size RGBA pixel buffer, the brush
rasterization engine that paints into it, and the stroke session layer that
turns pointer events into engine calls.

Architecture layers (strict one-way dependency):
    scripts/ → src/raster_engine/ → src/utils/

Key invariants:
    - Engine works in integer buffer space; device → buffer conversion
      happens at the input boundary only (utils.compute)
    - Writes outside the buffer are dropped, never raised
    - The engine holds no state between calls; sessions own the last point
    - YAML-only configs, validated by pydantic
"""

__version__ = "0.1.0"
