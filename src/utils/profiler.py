"""Lightweight wall-clock profiling.

Provides:
    - timer(): context manager timing one block, with optional sink
    - TimerAccumulator: mean time over many measurements

Used to measure:
    - Whole event-log replay
    - Per-event buffer mutation (press / move / release dispatch)

No heavy dependencies (no cProfile overhead in the event loop).
"""

import time
from contextlib import contextmanager
from typing import Callable, Optional


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Context manager for wall-clock timing.

    Parameters
    ----------
    name : str
        Timer name (for logging/display)
    sink : Optional[Callable[[str, float], None]]
        Optional callback(name, elapsed_seconds); prints to stdout if None

    Examples
    --------
    >>> with timer("replay", sink=lambda n, t: logger.info(f"{n}: {t:.3f} s")):
    ...     replay_events(buffer, events, cfg)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if sink is not None:
            sink(name, elapsed)
        else:
            print(f"{name}: {elapsed:.3f} s")


class TimerAccumulator:
    """Accumulate timing measurements for averaging.

    Examples
    --------
    >>> event_timer = TimerAccumulator("event")
    >>> for event in events:
    ...     with event_timer.measure():
    ...         dispatch(event)
    >>> event_timer.mean()
    """

    def __init__(self, name: str):
        self.name = name
        self.total_time = 0.0
        self.count = 0

    @contextmanager
    def measure(self):
        start = time.perf_counter()
        try:
            yield
        finally:
            self.total_time += time.perf_counter() - start
            self.count += 1

    def mean(self) -> float:
        """Mean seconds per measurement, 0.0 before the first one."""
        return self.total_time / self.count if self.count > 0 else 0.0

    def reset(self) -> None:
        self.total_time = 0.0
        self.count = 0

    def __repr__(self) -> str:
        return f"TimerAccumulator({self.name}, mean={self.mean():.4f}s, count={self.count})"
