"""Raster paint engine.

Pixel buffer, brush rasterization and the stroke session state machine:
    - pixel_buffer: fixed-size RGBA surface with bounds-tolerant access
    - rasterizer: midpoint-circle disc stamps and axis-adaptive strokes
    - session: press / move / release state machine owning the last point
    - replay: event loop feeding recorded device-space events to a session

Invariants:
    - The rasterizer is stateless and never raises on in-range numeric input
    - Writes outside the buffer are silently dropped
    - Only the session remembers the last drawn point

Used by:
    - scripts/replay_strokes.py: offline replay of recorded pointer sessions
"""

from .pixel_buffer import PixelBuffer, Point
from .rasterizer import AXIS_DETECT_THRESHOLD, draw_disc, draw_stroke
from .session import Brush, SessionState, StrokeSession

__all__ = [
    'AXIS_DETECT_THRESHOLD',
    'Brush',
    'PixelBuffer',
    'Point',
    'SessionState',
    'StrokeSession',
    'draw_disc',
    'draw_stroke',
]
