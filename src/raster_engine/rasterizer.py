"""Brush rasterization: midpoint-circle disc stamps and gap-free strokes.

Two pure operations over a PixelBuffer:
    - draw_disc(): one filled circular brush stamp (integer-only arithmetic)
    - draw_stroke(): disc stamps placed along a straight segment, one per
      main-axis pixel, so consecutive stamps overlap

Disc algorithm:
    Concentric rings from radius r down to 1, each walked with the midpoint
    (Bresenham) circle recurrence over one octant and mirrored 8 ways:
        x = 0, y = r, d = 3 - 2r
        while y >= x:
            emit (±x, ±y), (±y, ±x)
            if d > 0: y -= 1; d += 4(x - y) + 10
            else:     d += 4x + 6
            x += 1
    Mirrored points sharing a row are joined by a horizontal span, so the
    centre and the diagonal pixels between integer rings are covered too.

Stroke algorithm (axis-adaptive DDA):
    1. Main axis = Y when |dy| / |dx| > AXIS_DETECT_THRESHOLD, else X.
       The threshold sits above 1.0 so near-diagonal segments do not flip
       axis from one pointer event to the next.
    2. Endpoints are ordered so the main coordinate increases.
    3. Secondary coordinate advances by floor(d_secondary / d_main) per step.
       Truncation drifts toward lower secondary values on long segments;
       this is the established rendering and is kept as-is.
    4. The walk stops once the main coordinate is within 1 of the target:
       the caller stamps the first point of a stroke, and the next segment
       (which starts at this segment's end) continues the line.

All operations are total: zero radius and zero-length segments draw
nothing, and pixels outside the buffer are clipped by PixelBuffer.
"""

import math
from typing import Iterator, Sequence, Tuple

from src.raster_engine.pixel_buffer import PixelBuffer, Point
from src.utils.color import Color

AXIS_DETECT_THRESHOLD = 1.1

AXIS_X = 'x'
AXIS_Y = 'y'


def ring_octant(radius: int) -> Iterator[Tuple[int, int]]:
    """Yield the (x, y) offsets of one midpoint-circle octant (x <= y).

    Parameters
    ----------
    radius : int
        Ring radius in pixels; nothing is yielded for radius <= 0

    Yields
    ------
    Tuple[int, int]
        Offsets from the centre, starting at (0, radius)
    """
    if radius <= 0:
        return

    x = 0
    y = radius
    d = 3 - 2 * radius

    while y >= x:
        yield x, y
        if d > 0:
            y -= 1
            d += 4 * (x - y) + 10
        else:
            d += 4 * x + 6
        x += 1


def ring_points(radius: int) -> Iterator[Tuple[int, int]]:
    """Yield all 8 mirrored offsets of a midpoint ring (duplicates included)."""
    for x, y in ring_octant(radius):
        yield x, y
        yield -x, y
        yield x, -y
        yield -x, -y
        yield y, x
        yield -y, x
        yield y, -x
        yield -y, -x


def draw_disc(
    buffer: PixelBuffer,
    center: Sequence[int],
    radius: int,
    color: Color
) -> None:
    """Stamp a filled disc of ``radius`` pixels centred on ``center``.

    Parameters
    ----------
    buffer : PixelBuffer
        Target surface (mutated in place)
    center : Sequence[int]
        (xc, yc) in buffer space; may lie outside the buffer
    radius : int
        Brush radius; <= 0 draws nothing
    color : Color
        Solid fill color, written without blending
    """
    xc, yc = center
    r = radius

    while r > 0:
        for x, y in ring_octant(r):
            buffer.fill_span(xc - x, xc + x, yc + y, color)
            buffer.fill_span(xc - x, xc + x, yc - y, color)
            buffer.fill_span(xc - y, xc + y, yc + x, color)
            buffer.fill_span(xc - y, xc + y, yc - x, color)
        r -= 1


def select_main_axis(dx: int, dy: int) -> str:
    """Pick the axis a segment is walked along.

    Parameters
    ----------
    dx, dy : int
        Segment deltas (sign ignored)

    Returns
    -------
    str
        AXIS_Y if |dy| / |dx| > AXIS_DETECT_THRESHOLD, else AXIS_X.
        A vertical segment (dx == 0, dy != 0) selects AXIS_Y; a zero-length
        segment selects AXIS_X.
    """
    dx = abs(dx)
    dy = abs(dy)
    if dx == 0:
        return AXIS_Y if dy > 0 else AXIS_X
    return AXIS_Y if dy / dx > AXIS_DETECT_THRESHOLD else AXIS_X


def stroke_stamp_centers(start: Sequence[int], end: Sequence[int]) -> Iterator[Point]:
    """Yield the disc centres draw_stroke() stamps between two endpoints.

    The endpoints themselves are not yielded; a zero-length segment yields
    nothing.
    """
    from_x, from_y = start
    to_x, to_y = end

    main_is_x = select_main_axis(to_x - from_x, to_y - from_y) == AXIS_X
    if main_is_x:
        from_m, from_s, to_m, to_s = from_x, from_y, to_x, to_y
    else:
        from_m, from_s, to_m, to_s = from_y, from_x, to_y, to_x

    if to_m < from_m:
        from_m, from_s, to_m, to_s = to_m, to_s, from_m, from_s

    delta_m = to_m - from_m
    if delta_m == 0:
        return
    step_s = math.floor((to_s - from_s) / delta_m)

    m = from_m
    s = from_s
    while abs(m - to_m) > 1:
        m += 1
        s += step_s
        yield Point(m, s) if main_is_x else Point(s, m)


def draw_stroke(
    buffer: PixelBuffer,
    start: Sequence[int],
    end: Sequence[int],
    radius: int,
    color: Color
) -> int:
    """Stamp discs along the segment start → end.

    Parameters
    ----------
    buffer : PixelBuffer
        Target surface (mutated in place)
    start, end : Sequence[int]
        Segment endpoints in buffer space
    radius : int
        Brush radius passed to every stamp
    color : Color
        Brush color

    Returns
    -------
    int
        Number of disc stamps placed

    Notes
    -----
    Neither endpoint is stamped here. The first point of a stroke is
    stamped with draw_disc() when the pointer goes down; every later
    segment starts where the previous one ended.
    """
    stamps = 0
    for center in stroke_stamp_centers(start, end):
        draw_disc(buffer, center, radius, color)
        stamps += 1
    return stamps
