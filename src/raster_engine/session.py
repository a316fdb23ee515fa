"""Interactive stroke session: the press / move / release state machine.

The raster engine holds no state between calls. Continuity of a stroke
depends on the caller remembering the last drawn point, which is what a
StrokeSession does:

    IDLE --press--> FIRST_POINT --move--> DRAWING --move*--> ... --release--> IDLE

    press    stamp a disc at the press location, remember it
    move     draw_stroke(last_point, point), remember point
             (moves while IDLE are hover events and draw nothing)
    release  forget the last point

With ``Brush.interpolate`` disabled the session behaves like a pencil:
press and every move write a single pixel and no segment is interpolated.

Each session owns its own state, so several sessions (multi-touch, tests)
may run side by side. They must not mutate the same buffer concurrently;
PixelBuffer has no locking.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from src.raster_engine.pixel_buffer import PixelBuffer, Point
from src.raster_engine.rasterizer import draw_disc, draw_stroke
from src.utils.color import PALETTE, Color

logger = logging.getLogger(__name__)

DEFAULT_BRUSH_RADIUS = 8


class SessionState(Enum):
    IDLE = "idle"
    FIRST_POINT = "first_point"
    DRAWING = "drawing"


@dataclass
class Brush:
    """Brush settings applied to every stamp of a session."""
    radius: int = DEFAULT_BRUSH_RADIUS
    color: Color = PALETTE['red']
    interpolate: bool = True

    def __post_init__(self):
        if self.radius < 0:
            raise ValueError(f"Brush radius must be >= 0, got {self.radius}")
        self.color = Color.parse(self.color)


@dataclass
class StrokeSession:
    """Drawing session bound to one buffer and one pointer.

    Attributes
    ----------
    buffer : PixelBuffer
        Surface the session paints into
    brush : Brush
        Active radius, color and interpolation mode
    state : SessionState
        Current state machine position
    last_point : Point or None
        Last point drawn in the current stroke; None while IDLE
    strokes : int
        Completed press/release cycles
    stamps : int
        Disc stamps (or pencil pixels) written by this session
    """
    buffer: PixelBuffer
    brush: Brush = field(default_factory=Brush)
    state: SessionState = SessionState.IDLE
    last_point: Optional[Point] = None
    strokes: int = 0
    stamps: int = 0

    @property
    def is_drawing(self) -> bool:
        return self.state is not SessionState.IDLE

    def press(self, point: Sequence[int]) -> None:
        """Pointer down: stamp the first point of a new stroke."""
        point = Point(*point)
        if self.is_drawing:
            logger.debug(f"press at {point} while {self.state.value}; restarting stroke")

        self._stamp(point)
        self.last_point = point
        self.state = SessionState.FIRST_POINT

    def move(self, point: Sequence[int]) -> int:
        """Pointer moved: extend the stroke to ``point``.

        Returns
        -------
        int
            Stamps written for this event (0 for hover moves)
        """
        if not self.is_drawing:
            return 0

        point = Point(*point)
        before = self.stamps
        if not self.brush.interpolate or point == self.last_point:
            self._stamp(point)
        else:
            self.stamps += draw_stroke(
                self.buffer, self.last_point, point, self.brush.radius, self.brush.color
            )

        self.last_point = point
        self.state = SessionState.DRAWING
        return self.stamps - before

    def release(self) -> None:
        """Pointer up: end the stroke."""
        if self.is_drawing:
            self.strokes += 1
            logger.debug(f"stroke {self.strokes} finished at {self.last_point}")
        self.last_point = None
        self.state = SessionState.IDLE

    def set_color(self, color) -> None:
        self.brush.color = Color.parse(color)

    def set_radius(self, radius: int) -> None:
        if radius < 0:
            raise ValueError(f"Brush radius must be >= 0, got {radius}")
        self.brush.radius = radius

    def _stamp(self, point: Point) -> None:
        if self.brush.interpolate:
            draw_disc(self.buffer, point, self.brush.radius, self.brush.color)
        else:
            self.buffer.set(point.x, point.y, self.brush.color)
        self.stamps += 1
