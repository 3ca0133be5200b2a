"""
Pulse: development cadence from the share of days with any activity.
"""

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime

from app.models.event import Event
from app.schemas.sensors import DailyActivity, PulseResult, PulseStatus
from app.services.sensors.common import DAY_MS

# (exclusive upper bound on active ratio, status, score); anything above is High Cadence
PULSE_BANDS: list[tuple[float, PulseStatus, int]] = [
    (0.2, PulseStatus.LOW_ACTIVITY, 20),
    (0.5, PulseStatus.SPORADIC, 50),
    (0.8, PulseStatus.CONSISTENT, 80),
]


def utc_day(ts: int) -> str:
    """ISO calendar date (UTC) of a millisecond timestamp."""
    return datetime.fromtimestamp(ts / 1000, tz=UTC).date().isoformat()


def activity_by_day(events: Iterable[Event]) -> Counter[str]:
    return Counter(utc_day(e.ts) for e in events)


def classify_pulse(active_days: int, timeframe_days: int) -> tuple[PulseStatus, int]:
    """Map the active-day ratio onto a (status, score) band."""
    ratio = active_days / timeframe_days if timeframe_days > 0 else 0
    if ratio == 0:
        return PulseStatus.STAGNANT, 0
    for upper, status, score in PULSE_BANDS:
        if ratio < upper:
            return status, score
    return PulseStatus.HIGH_CADENCE, 100


def daily_series(activity: Counter[str], timeframe_days: int, now: int) -> list[DailyActivity]:
    """One entry per day for the last `timeframe_days` days, oldest first, zero-filled."""
    return [
        DailyActivity(date=day, count=activity.get(day, 0))
        for day in (utc_day(now - i * DAY_MS) for i in range(timeframe_days - 1, -1, -1))
    ]


def compute_pulse(
    current_events: Iterable[Event],
    previous_events: Iterable[Event],
    timeframe_days: int,
    now: int,
) -> PulseResult:
    """Pulse for the current window, with the previous window's score for trend."""
    current_activity = activity_by_day(current_events)
    previous_activity = activity_by_day(previous_events)

    status, score = classify_pulse(len(current_activity), timeframe_days)
    _, previous_score = classify_pulse(len(previous_activity), timeframe_days)

    return PulseResult(
        score=score,
        previous_score=previous_score,
        status=status,
        daily_activity=daily_series(current_activity, timeframe_days, now),
    )
