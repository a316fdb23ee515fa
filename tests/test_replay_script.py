"""End-to-end test of scripts/replay_strokes.py.

Replays the shipped zigzag event log and checks:
    - Exit code, PNG and metadata outputs
    - Event counters and presented frames
    - Brush overrides and pencil mode
    - Error exit for a missing event log or a failed save
    - Rotating log file configured from paint.v1.yaml

Run:
    pytest tests/test_replay_script.py -v
"""

import json
import logging
import logging.handlers
import sys
from pathlib import Path

import pytest
from PIL import Image

from scripts import replay_strokes
from src.utils import fs, logging_config

PROJECT_ROOT = Path(__file__).parent.parent
EVENTS = PROJECT_ROOT / "configs" / "examples" / "zigzag.events.v1.yaml"


@pytest.fixture(autouse=True)
def isolate_process_state(monkeypatch):
    """Undo the CLI's global logging and excepthook changes."""
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging_config.pop_context()


@pytest.mark.integration
def test_replay_writes_outputs(tmp_path):
    out_dir = tmp_path / "replay"
    frames_dir = tmp_path / "frames"

    code = replay_strokes.main([
        "--events", str(EVENTS),
        "--output_dir", str(out_dir),
        "--frames_dir", str(frames_dir),
    ])
    assert code == 0

    with Image.open(out_dir / "replay.png") as img:
        assert img.size == (400, 300)
        assert img.mode == "RGBA"
        assert img.getpixel((40, 40)) == (255, 0, 0, 255)
        assert img.getpixel((60, 120)) == (0, 128, 128, 255)
        assert img.getpixel((5, 295)) == (0, 0, 0, 0)

    meta = fs.load_yaml(out_dir / "replay_metadata.yaml")
    stats = meta["stats"]
    assert stats["events"] == 14
    assert stats["presses"] == 3 and stats["releases"] == 3
    assert stats["moves"] == 7 and stats["hover_moves"] == 1
    assert stats["presents"] == 10
    assert meta["strokes"] == 3
    assert meta["buffer_size_px"] == [400, 300]
    assert len(meta["buffer_sha256"]) == 64

    assert len(list(frames_dir.glob("frame_*.png"))) == 10


@pytest.mark.integration
def test_replay_is_deterministic(tmp_path):
    for name in ("a", "b"):
        assert replay_strokes.main([
            "--events", str(EVENTS), "--output_dir", str(tmp_path), "--prefix", name,
        ]) == 0

    meta_a = fs.load_yaml(tmp_path / "a_metadata.yaml")
    meta_b = fs.load_yaml(tmp_path / "b_metadata.yaml")
    assert meta_a["buffer_sha256"] == meta_b["buffer_sha256"]


@pytest.mark.integration
def test_replay_pencil_override(tmp_path):
    code = replay_strokes.main([
        "--events", str(EVENTS),
        "--output_dir", str(tmp_path),
        "--pencil", "--color", "#0000ff", "--radius", "3",
    ])
    assert code == 0

    meta = fs.load_yaml(tmp_path / "replay_metadata.yaml")
    assert meta["brush"]["interpolate"] is False
    assert meta["brush"]["radius"] == 12, "Per-event radius switches still apply"

    with Image.open(tmp_path / "replay.png") as img:
        # First press is a single blue pixel
        assert img.getpixel((40, 40)) == (0, 0, 255, 255)
        assert img.getpixel((41, 40)) == (0, 0, 0, 0)


def test_replay_missing_events(tmp_path):
    code = replay_strokes.main([
        "--events", str(tmp_path / "missing.yaml"),
        "--output_dir", str(tmp_path),
    ])
    assert code == 1
    assert not (tmp_path / "replay.png").exists()


def _context_fields():
    formatter = logging_config.ContextFormatter("json", use_color=False)
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "context", (), None)
    return json.loads(formatter.format(record))


def test_replay_save_failure_returns_error(tmp_path, monkeypatch):
    def failing_save(img, path, pil_kwargs=None):
        raise RuntimeError(f"Failed to save image {path} atomically: disk full")

    monkeypatch.setattr(fs, "atomic_save_image", failing_save)
    log_path = tmp_path / "replay.log"

    code = replay_strokes.main([
        "--events", str(EVENTS), "--output_dir", str(tmp_path), "--log_file", str(log_path),
    ])

    assert code == 1
    assert "disk full" in log_path.read_text()
    assert not (tmp_path / "replay_metadata.yaml").exists()
    assert "events" not in _context_fields(), "Events context must be cleared on failure"


def test_replay_rotating_log_from_config(tmp_path):
    cfg = fs.load_yaml(PROJECT_ROOT / "configs" / "paint.v1.yaml")
    log_path = tmp_path / "logs" / "replay.log"
    cfg['logging'].update({
        'log_file': str(log_path),
        'format': 'json',
        'rotate': {'mode': 'size', 'max_bytes': 1_000_000, 'backup_count': 2},
    })
    cfg_path = tmp_path / "paint.yaml"
    fs.atomic_yaml_dump(cfg, cfg_path)

    code = replay_strokes.main([
        "--events", str(EVENTS), "--config", str(cfg_path), "--output_dir", str(tmp_path),
    ])
    assert code == 0

    handlers = [h for h in logging.getLogger().handlers
                if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(handlers) == 1 and handlers[0].backupCount == 2

    records = [json.loads(line) for line in log_path.read_text().splitlines()]
    assert any(r['msg'].startswith("Replayed 14 events") for r in records)
    assert all(r['app'] == "replay" for r in records)
