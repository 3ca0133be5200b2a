"""Shared helpers for the sensor computations: windows, rounding, path noise."""

import math
import time
from dataclasses import dataclass

DAY_MS = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class TimeWindow:
    """Half-open millisecond range [start_ms, end_ms)."""

    start_ms: int
    end_ms: int

    def contains(self, ts: int) -> bool:
        return self.start_ms <= ts < self.end_ms


def now_ms() -> int:
    return int(time.time() * 1000)


def build_windows(timeframe_days: int, now: int) -> tuple[TimeWindow, TimeWindow]:
    """Return (current, previous) windows of equal length ending at `now`.

    The current window is closed at `now` (its end is now + 1 so an event
    stamped exactly now is included); the previous one ends where the current
    one starts.
    """
    current_start = now - timeframe_days * DAY_MS
    previous_start = now - 2 * timeframe_days * DAY_MS
    return (
        TimeWindow(start_ms=current_start, end_ms=now + 1),
        TimeWindow(start_ms=previous_start, end_ms=current_start),
    )


def round_half_up(value: float) -> int:
    """Round .5 upwards, unlike Python's banker's rounding (round(2.5) == 2)."""
    return math.floor(value + 0.5)


def is_time_sink_noise(path: str) -> bool:
    """Lock files, build output and source maps say nothing about rework."""
    return path.endswith(".lock") or "dist/" in path or path.endswith(".map")


def is_truck_factor_noise(path: str) -> bool:
    """Lock files, build output and vendored dependencies have no real owner."""
    return path.endswith(".lock") or "dist/" in path or "node_modules/" in path
