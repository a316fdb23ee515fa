"""Replay recorded pointer events through a StrokeSession.

This is the caller-owned event loop the raster engine expects: each
device-space event is converted to buffer space, dispatched to the session
state machine, and the buffer is presented after every mutating event.

Usage:
    from src.raster_engine.replay import create_buffer, replay_events
    from src.utils import validators

    cfg = validators.load_paint_config("configs/paint.v1.yaml")
    log = validators.load_event_log("configs/examples/zigzag.events.v1.yaml")
    buffer = create_buffer(cfg)
    stats = replay_events(buffer, log.events, cfg)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from src.raster_engine.pixel_buffer import PixelBuffer
from src.raster_engine.session import Brush, StrokeSession
from src.utils import compute
from src.utils.validators import PaintConfigV1, PointerEvent

logger = logging.getLogger(__name__)

PresentFn = Callable[[PixelBuffer], None]


@dataclass
class ReplayStats:
    """Counters gathered while replaying an event log."""
    events: int = 0
    presses: int = 0
    moves: int = 0
    hover_moves: int = 0
    releases: int = 0
    stamps: int = 0
    presents: int = 0

    def as_dict(self) -> dict:
        return dict(self.__dict__)


def create_buffer(cfg: PaintConfigV1) -> PixelBuffer:
    """Allocate a buffer sized to the configured surface at its DPR."""
    surface = cfg.surface
    width, height = compute.surface_size_px(
        surface.width, surface.height, surface.device_pixel_ratio
    )
    return PixelBuffer(width, height, cfg.resolve_color(cfg.background))


def create_session(buffer: PixelBuffer, cfg: PaintConfigV1) -> StrokeSession:
    """Session with the configured initial brush."""
    brush = Brush(
        radius=cfg.brush.radius,
        color=cfg.resolve_color(cfg.brush.color),
        interpolate=cfg.brush.interpolate,
    )
    return StrokeSession(buffer=buffer, brush=brush)


def replay_events(
    buffer: PixelBuffer,
    events: Iterable[PointerEvent],
    cfg: PaintConfigV1,
    session: Optional[StrokeSession] = None,
    present: Optional[PresentFn] = None,
) -> ReplayStats:
    """Dispatch events in order to a session painting into ``buffer``.

    Parameters
    ----------
    buffer : PixelBuffer
        Target surface
    events : Iterable[PointerEvent]
        Device-space events, processed strictly in order
    cfg : PaintConfigV1
        Surface transform, palette and initial brush
    session : StrokeSession, optional
        Existing session to continue; a new one is created if None
    present : callable, optional
        Called with the buffer after every event that painted something

    Returns
    -------
    ReplayStats
        Event and stamp counters
    """
    if session is None:
        session = create_session(buffer, cfg)
    elif session.buffer is not buffer:
        raise ValueError("Session is bound to a different buffer")

    surface = cfg.surface
    stats = ReplayStats()

    for event in events:
        stats.events += 1

        if event.color is not None:
            session.set_color(cfg.resolve_color(event.color))
        if event.radius is not None:
            session.set_radius(event.radius)

        before = session.stamps
        if event.type == "release":
            session.release()
            stats.releases += 1
        else:
            point = compute.device_to_buffer(
                event.x, event.y, surface.device_pixel_ratio, surface.origin
            )
            if event.type == "press":
                session.press(point)
                stats.presses += 1
            elif session.is_drawing:
                session.move(point)
                stats.moves += 1
            else:
                stats.hover_moves += 1

        painted = session.stamps - before
        stats.stamps += painted
        if painted and present is not None:
            present(buffer)
            stats.presents += 1

    logger.info(
        f"Replayed {stats.events} events: {stats.presses} press, {stats.moves} move, "
        f"{stats.releases} release, {stats.stamps} stamps"
    )
    return stats
