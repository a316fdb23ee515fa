"""Unified logging configuration for entrypoints.

Provides consistent logging for the replay CLI and any embedding app:
    - Console handler (optionally colored) and file handler with rotation
    - JSON-lines output mode for log ingestion
    - Contextual fields (app, session, events file) attached to every record
    - Warning capture (Python warnings → logging)
    - Uncaught exception logging

Public API:
    setup_logging(log_level="INFO", context={"app": "replay"})
    get_logger(name)
    push_context(session=3)
    pop_context(keys=["session"])
    install_excepthook()

Format examples:
    Human: 2026-10-19T13:45:12.345Z | INFO     | app=replay | Replayed 42 events
    JSON:  {"t":"2026-10-19T13:45:12.345+00:00","lvl":"INFO","app":"replay","msg":"..."}

Context lives in a contextvar, so concurrent sessions do not share fields.
Idempotent: repeated setup_logging() calls replace handlers, never duplicate.
"""

import contextvars
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var = contextvars.ContextVar('logging_context', default={})

_configured = False

_LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}
_RESET = '\033[0m'


class ContextFormatter(logging.Formatter):
    """Formatter emitting human lines or JSON lines with context fields."""

    def __init__(self, fmt_mode: str = "human", use_color: bool = True, tz: str = "UTC"):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()
        self.tz = tz

    def _timestamp(self, record: logging.LogRecord) -> datetime:
        if self.tz == "UTC":
            return datetime.fromtimestamp(record.created, tz=timezone.utc)
        return datetime.fromtimestamp(record.created)

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})
        ts = self._timestamp(record)

        if self.fmt_mode == "json":
            payload = {
                't': ts.isoformat(),
                'lvl': record.levelname,
                'name': record.name,
                'pid': os.getpid(),
                'msg': record.getMessage(),
            }
            payload.update(context)
            if record.exc_info:
                payload['exc'] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"

        stamp = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + ('Z' if self.tz == "UTC" else '')
        parts = [stamp, '|', level, '|']
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()) + ' |')
        parts.append(record.getMessage())

        line = ' '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Configure the root logger (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Log file path; None disables file logging
    json : bool
        JSON-lines format for the file handler, default False
    color : bool
        ANSI colors on the console (only when stderr is a TTY)
    to_stderr : bool
        Log to stderr, default True
    rotate : dict, optional
        {"mode": "size", "max_bytes": ..., "backup_count": ...} or
        {"mode": "time", "when": "D", "interval": 1, "backup_count": ...}
    tz : str
        "UTC" (default) or "local"
    capture_warnings : bool
        Route Python warnings into logging
    quiet_libs : list[str], optional
        Logger names forced to WARNING (e.g. ["PIL"])
    context : dict, optional
        Initial context fields, e.g. {"app": "replay"}

    Returns
    -------
    dict
        {"handlers": [...]} for callers that want to inspect them
    """
    global _configured

    root = logging.getLogger()
    if _configured:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

    root.setLevel(getattr(logging, log_level.upper()))

    handlers = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", color, tz))
        handlers.append(console)
    if log_file:
        handlers.append(_create_file_handler(log_file, rotate, json, tz))

    for handler in handlers:
        root.addHandler(handler)

    if context:
        push_context(**context)

    for lib in quiet_libs or []:
        logging.getLogger(lib).setLevel(logging.WARNING)

    if capture_warnings:
        logging.captureWarnings(True)

    _configured = True
    return {'handlers': handlers}


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
    json_format: bool,
    tz: str
) -> logging.Handler:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    mode = rotate.get('mode', 'size') if rotate else None
    if mode is None:
        handler = logging.FileHandler(log_file)
    elif mode == 'size':
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=rotate.get('max_bytes', 10_000_000),
            backupCount=rotate.get('backup_count', 5)
        )
    elif mode == 'time':
        handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when=rotate.get('when', 'D'),
            interval=rotate.get('interval', 1),
            backupCount=rotate.get('backup_count', 7)
        )
    else:
        raise ValueError(f"Unknown rotation mode: {mode}. Use 'size' or 'time'.")

    handler.setFormatter(ContextFormatter("json" if json_format else "human", use_color=False, tz=tz))
    return handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Change the root logger level at runtime."""
    logging.getLogger().setLevel(getattr(logging, level.upper()))


def push_context(**kwargs) -> None:
    """Add fields to every subsequent record in this context.

    Examples
    --------
    >>> push_context(app="replay")
    >>> push_context(events="zigzag.events.v1.yaml")
    >>> logger.info("Started")  # → "... | app=replay events=zigzag.events.v1.yaml | Started"
    """
    _context_var.set({**_context_var.get({}), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove the given context fields, or all of them when keys is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get({}))
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)


def install_excepthook() -> None:
    """Log uncaught exceptions (except Ctrl+C) before the interpreter exits."""
    def log_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logging.getLogger(__name__).critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = log_exception


def shutdown() -> None:
    """Flush and close all handlers; call at the end of main()."""
    logging.shutdown()
