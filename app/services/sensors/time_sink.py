"""
Time Sink: the share of file touches that are rework.

A touch is rework when the file was already touched earlier in the window by
a different pull request. A high score means the same files keep being
reopened across PRs.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from app.models.event import Event, EventType
from app.schemas.sensors import ChurnFile, TimeSinkResult
from app.services.sensors.common import is_time_sink_noise, round_half_up

CHURN_FILES_LIMIT = 5


@dataclass
class TimeSinkMetrics:
    """Time Sink figures for a single window."""

    score: int = 0
    total_touches: int = 0
    rework_touches: int = 0
    churn_files: list[ChurnFile] = field(default_factory=list)


def calculate_time_sink(events: Iterable[Event]) -> TimeSinkMetrics:
    """Compute Time Sink over one window of events."""
    file_events = sorted(
        (e for e in events if e.type == EventType.FILE_CHANGE),
        key=lambda e: e.ts,
    )

    # file -> distinct PR ids seen so far, in first-touch order
    file_history: dict[str, set[int | None]] = {}
    total = 0
    rework = 0

    for event in file_events:
        path = event.file
        if not path or is_time_sink_noise(path):
            continue

        pr_id = event.pr_id
        seen = file_history.setdefault(path, set())
        total += 1
        if seen and pr_id not in seen:
            rework += 1
        seen.add(pr_id)

    score = round_half_up(100 * rework / total) if total else 0

    # sorted() is stable, so ties keep first-touch order
    churn = sorted(
        (
            ChurnFile(file=path, pr_count=len(prs))
            for path, prs in file_history.items()
            if len(prs) > 1
        ),
        key=lambda c: c.pr_count,
        reverse=True,
    )

    return TimeSinkMetrics(
        score=score,
        total_touches=total,
        rework_touches=rework,
        churn_files=churn[:CHURN_FILES_LIMIT],
    )


def compute_time_sink(
    current_events: Iterable[Event],
    previous_events: Iterable[Event],
) -> TimeSinkResult:
    """Time Sink for the current window, with the previous window's score for trend."""
    current = calculate_time_sink(current_events)
    previous = calculate_time_sink(previous_events)
    return TimeSinkResult(
        score=current.score,
        previous_score=previous.score,
        total_touches=current.total_touches,
        rework_touches=current.rework_touches,
        churn_files=current.churn_files,
    )
