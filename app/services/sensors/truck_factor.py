"""
Truck Factor: knowledge-silo risk from "hero files".

A hero file is a file with at least three attributed touches where a single
author made more than 70% of them. The risk score doubles the hero share so
that half the significant files being hero files already reads as maximum
risk.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from app.models.event import Event, EventType
from app.schemas.sensors import Hero, TruckFactorResult
from app.services.sensors.common import is_truck_factor_noise, round_half_up

MIN_TOUCHES_FOR_SIGNIFICANCE = 3
DOMINANCE_THRESHOLD = 0.7
HERO_TOP_FILES_LIMIT = 5


@dataclass
class TruckFactorMetrics:
    """Truck Factor figures for a single window."""

    risk_score: int = 0
    significant_files: int = 0
    hero_files: int = 0
    heroes: list[Hero] = field(default_factory=list)


def build_pr_authors(events: Iterable[Event]) -> dict[int, str]:
    """Map PR id to the merging author, from merge events."""
    authors: dict[int, str] = {}
    for event in events:
        if event.type == EventType.PR_MERGED and event.pr_id and event.author:
            authors[event.pr_id] = event.author
    return authors


def calculate_truck_factor(events: Iterable[Event]) -> TruckFactorMetrics:
    """Compute Truck Factor over one window of events."""
    events = list(events)
    pr_authors = build_pr_authors(events)

    # file -> author -> touches, files in first-touch order
    file_authors: dict[str, dict[str, int]] = {}
    for event in sorted(events, key=lambda e: e.ts):
        if event.type != EventType.FILE_CHANGE:
            continue
        path = event.file
        pr_id = event.pr_id
        if not path or not pr_id or is_truck_factor_noise(path):
            continue

        author = pr_authors.get(pr_id)
        if not author:
            # Merge event fell outside the window; unattributable
            continue

        counts = file_authors.setdefault(path, {})
        counts[author] = counts.get(author, 0) + 1

    significant = 0
    hero_files = 0
    hero_paths: dict[str, list[str]] = defaultdict(list)
    hero_counts: dict[str, int] = defaultdict(int)

    for path, counts in file_authors.items():
        total = sum(counts.values())
        if total < MIN_TOUCHES_FOR_SIGNIFICANCE:
            continue
        significant += 1

        # Only one author can pass 70%; sorting keeps the scan reproducible.
        dominant = next(
            (a for a in sorted(counts) if counts[a] / total > DOMINANCE_THRESHOLD),
            None,
        )
        if dominant is None:
            continue

        hero_files += 1
        hero_counts[dominant] += 1
        if len(hero_paths[dominant]) < HERO_TOP_FILES_LIMIT:
            hero_paths[dominant].append(path)

    risk = min(100, round_half_up(200 * hero_files / significant)) if significant else 0

    heroes = [
        Hero(author=author, file_count=count, top_files=hero_paths[author])
        for author, count in sorted(hero_counts.items(), key=lambda item: (-item[1], item[0]))
    ]

    return TruckFactorMetrics(
        risk_score=risk,
        significant_files=significant,
        hero_files=hero_files,
        heroes=heroes,
    )


def compute_truck_factor(
    current_events: Iterable[Event],
    previous_events: Iterable[Event],
) -> TruckFactorResult:
    """Truck Factor for the current window, with the previous window's risk for trend."""
    current = calculate_truck_factor(current_events)
    previous = calculate_truck_factor(previous_events)
    return TruckFactorResult(
        risk_score=current.risk_score,
        previous_risk_score=previous.risk_score,
        heroes=current.heroes,
        total_files=current.significant_files,
    )
