#!/usr/bin/env python3
"""Replay a recorded pointer session onto a pixel buffer.

CLI tool that feeds a device-space event log (events.v1.yaml) through a
stroke session, presents the buffer after every painting event, and writes
the final buffer as a PNG preview.

Usage:
    # Default config
    python scripts/replay_strokes.py --events configs/examples/zigzag.events.v1.yaml

    # Thinner blue brush, pencil mode, per-event frames
    python scripts/replay_strokes.py --events session.yaml \
        --radius 2 --color "#0000ff" --pencil \
        --frames_dir outputs/replay/frames

Outputs:
    - <prefix>.png: final buffer (RGBA)
    - <prefix>_metadata.yaml: event counters, timings, buffer SHA-256
    - <frames_dir>/frame_NNNNN.png: presented buffer after each painting event
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.raster_engine.pixel_buffer import PixelBuffer
from src.raster_engine.replay import create_buffer, create_session, replay_events
from src.utils import fs, hashing, logging_config, profiler, validators

DEFAULT_CONFIG = Path(__file__).parent.parent / "configs" / "paint.v1.yaml"


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Replay recorded pointer events onto a pixel buffer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--events',
        type=str,
        required=True,
        help='Path to events.v1 YAML file'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=str(DEFAULT_CONFIG),
        help='Path to paint.v1 YAML config, default: configs/paint.v1.yaml'
    )

    # Brush overrides
    parser.add_argument('--radius', type=int, help='Override brush radius (px)')
    parser.add_argument('--color', type=str, help='Override brush color (name or hex)')
    parser.add_argument(
        '--pencil',
        action='store_true',
        help='Single-pixel stamps without segment interpolation'
    )

    # Output settings
    parser.add_argument(
        '--output_dir',
        type=str,
        default='outputs/replay',
        help='Output directory, default: outputs/replay'
    )
    parser.add_argument(
        '--prefix',
        type=str,
        default='replay',
        help='Output filename prefix, default: replay'
    )
    parser.add_argument(
        '--frames_dir',
        type=str,
        default=None,
        help='Also save every presented frame into this directory'
    )

    # Logging
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--log_file', type=str, default=None, help='Also log to this file')

    return parser.parse_args(argv)


def apply_overrides(cfg: validators.PaintConfigV1, args) -> validators.PaintConfigV1:
    """Return a config with CLI brush overrides applied and re-validated."""
    data = cfg.model_dump(by_alias=True)
    if args.radius is not None:
        data['brush']['radius'] = args.radius
    if args.color is not None:
        data['brush']['color'] = args.color
    if args.pencil:
        data['brush']['interpolate'] = False
    return validators.PaintConfigV1(**data)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    cfg = validators.load_paint_config(args.config)
    log_cfg = cfg.logging
    logging_config.setup_logging(
        log_level="DEBUG" if args.verbose else log_cfg.log_level,
        log_file=args.log_file or log_cfg.log_file,
        json=log_cfg.format == "json",
        color=log_cfg.color,
        rotate=log_cfg.rotate.model_dump() if log_cfg.rotate else None,
        tz=log_cfg.tz,
        quiet_libs=["PIL"],
        context={"app": "replay"},
    )
    logging_config.install_excepthook()
    logger = logging.getLogger(__name__)

    try:
        cfg = apply_overrides(cfg, args)
        event_log = validators.load_event_log(args.events)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    logging_config.push_context(events=Path(args.events).name)
    try:
        return _replay_and_save(args, cfg, event_log, logger)
    finally:
        logging_config.pop_context(keys=["events"])


def _replay_and_save(args, cfg: validators.PaintConfigV1, event_log: validators.EventLogV1,
                     logger: logging.Logger) -> int:
    """Replay the event log and write the PNG, frames and metadata."""
    output_dir = fs.ensure_dir(args.output_dir)
    frames_dir = fs.ensure_dir(args.frames_dir) if args.frames_dir else None

    buffer = create_buffer(cfg)
    session = create_session(buffer, cfg)
    logger.info(
        f"Buffer {buffer.width}x{buffer.height} px, brush radius={session.brush.radius} "
        f"color={session.brush.color.to_hex()} interpolate={session.brush.interpolate}"
    )

    present_timer = profiler.TimerAccumulator("present")
    frame_index = 0

    def present(buf: PixelBuffer) -> None:
        nonlocal frame_index
        with present_timer.measure():
            frame = buf.to_image()
            if frames_dir is not None:
                frame.save(frames_dir / f"frame_{frame_index:05d}.png")
        frame_index += 1

    timings = {}
    with profiler.timer("replay", sink=lambda name, t: timings.__setitem__(name, t)):
        stats = replay_events(buffer, event_log.events, cfg, session=session, present=present)

    logger.info(
        f"Replay completed in {timings['replay']:.3f}s "
        f"({stats.presents} presents, mean {present_timer.mean() * 1000:.2f} ms)"
    )

    metadata = {
        'events_file': str(args.events),
        'events_sha256': hashing.sha256_file(args.events),
        'buffer_size_px': [buffer.width, buffer.height],
        'brush': {
            'radius': session.brush.radius,
            'color': session.brush.color.to_hex(),
            'interpolate': session.brush.interpolate,
        },
        'stats': stats.as_dict(),
        'strokes': session.strokes,
        'replay_time_s': float(timings['replay']),
        'present_mean_s': float(present_timer.mean()),
        'buffer_sha256': hashing.sha256_array(buffer.pixels),
    }

    image_path = output_dir / f"{args.prefix}.png"
    metadata_path = output_dir / f"{args.prefix}_metadata.yaml"
    try:
        fs.atomic_save_image(buffer.pixels, image_path)
        logger.info(f"Saved buffer: {image_path}")
        fs.atomic_yaml_dump(metadata, metadata_path)
        logger.info(f"Saved metadata: {metadata_path}")
    except RuntimeError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == '__main__':
    exit_code = main()
    logging_config.shutdown()
    sys.exit(exit_code)
