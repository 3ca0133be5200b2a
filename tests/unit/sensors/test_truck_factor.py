"""Unit tests for the Truck Factor sensor (pure functions over events)."""

from __future__ import annotations

from app.services.sensors.truck_factor import (
    HERO_TOP_FILES_LIMIT,
    build_pr_authors,
    calculate_truck_factor,
    compute_truck_factor,
)
from tests.helpers.mock_factories import authored_pr, file_change, pr_merged

# ═══════════════════════════════════════════════════════════════════════════
# build_pr_authors
# ═══════════════════════════════════════════════════════════════════════════


class TestBuildPrAuthors:
    def test_maps_pr_to_author(self):
        events = [pr_merged(1, "alice"), pr_merged(2, "bob"), file_change(1, "a.ts")]

        assert build_pr_authors(events) == {1: "alice", 2: "bob"}


# ═══════════════════════════════════════════════════════════════════════════
# calculate_truck_factor
# ═══════════════════════════════════════════════════════════════════════════


class TestCalculateTruckFactor:
    """Tests for knowledge concentration within one window."""

    def test_no_events_scores_zero(self):
        metrics = calculate_truck_factor([])

        assert metrics.risk_score == 0
        assert metrics.significant_files == 0
        assert metrics.heroes == []

    def test_single_author_owning_only_significant_file_is_max_risk(self):
        events = []
        for pr in range(1, 5):
            events.extend(authored_pr(pr, "alice", ["src/core.ts"]))

        metrics = calculate_truck_factor(events)

        assert metrics.risk_score == 100
        assert metrics.significant_files == 1
        assert len(metrics.heroes) == 1
        assert metrics.heroes[0].author == "alice"
        assert metrics.heroes[0].file_count == 1
        assert metrics.heroes[0].top_files == ["src/core.ts"]

    def test_file_touched_twice_is_not_significant(self):
        events = authored_pr(1, "alice", ["src/a.ts"]) + authored_pr(2, "alice", ["src/a.ts"])

        metrics = calculate_truck_factor(events)

        assert metrics.significant_files == 0
        assert metrics.risk_score == 0

    def test_shared_file_has_no_hero(self):
        # alice 2/4, bob 2/4: nobody above 70%
        events = []
        for pr, author in enumerate(["alice", "bob", "alice", "bob"], start=1):
            events.extend(authored_pr(pr, author, ["src/shared.ts"]))

        metrics = calculate_truck_factor(events)

        assert metrics.significant_files == 1
        assert metrics.hero_files == 0
        assert metrics.risk_score == 0

    def test_exactly_seventy_percent_is_not_dominant(self):
        # alice 7/10 is not strictly above the threshold
        authors = ["alice"] * 7 + ["bob"] * 3
        events = []
        for pr, author in enumerate(authors, start=1):
            events.extend(authored_pr(pr, author, ["src/x.ts"]))

        metrics = calculate_truck_factor(events)

        assert metrics.hero_files == 0

    def test_risk_is_doubled_hero_ratio(self):
        # One of four significant files is dominated: 25% * 2 = 50
        events = []
        pr = 0
        for path, authors in [
            ("src/owned.ts", ["alice", "alice", "alice"]),
            ("src/a.ts", ["alice", "bob", "carol"]),
            ("src/b.ts", ["alice", "bob", "carol"]),
            ("src/c.ts", ["alice", "bob", "carol"]),
        ]:
            for author in authors:
                pr += 1
                events.extend(authored_pr(pr, author, [path]))

        metrics = calculate_truck_factor(events)

        assert metrics.significant_files == 4
        assert metrics.hero_files == 1
        assert metrics.risk_score == 50

    def test_file_changes_without_merge_event_are_unattributed(self):
        events = [file_change(pr, "src/a.ts") for pr in range(1, 5)]

        metrics = calculate_truck_factor(events)

        assert metrics.significant_files == 0

    def test_noise_paths_are_ignored(self):
        events = []
        for pr in range(1, 5):
            events.extend(
                authored_pr(pr, "alice", ["package-lock.lock", "dist/app.js", "node_modules/x/index.js"])
            )

        metrics = calculate_truck_factor(events)

        assert metrics.significant_files == 0

    def test_heroes_sorted_by_file_count_then_name(self):
        events = []
        pr = 0
        for path, author in [
            ("src/b1.ts", "bob"),
            ("src/a1.ts", "alice"),
            ("src/a2.ts", "alice"),
            ("src/c1.ts", "carol"),
        ]:
            for _ in range(3):
                pr += 1
                events.extend(authored_pr(pr, author, [path]))

        metrics = calculate_truck_factor(events)

        assert [(h.author, h.file_count) for h in metrics.heroes] == [
            ("alice", 2),
            ("bob", 1),
            ("carol", 1),
        ]
        assert metrics.heroes[0].top_files == ["src/a1.ts", "src/a2.ts"]

    def test_top_files_capped(self):
        files = [f"src/f{i}.ts" for i in range(HERO_TOP_FILES_LIMIT + 3)]
        events = []
        for pr in range(1, 4):
            events.extend(authored_pr(pr, "alice", files))

        metrics = calculate_truck_factor(events)

        assert metrics.heroes[0].file_count == len(files)
        assert len(metrics.heroes[0].top_files) == HERO_TOP_FILES_LIMIT


# ═══════════════════════════════════════════════════════════════════════════
# compute_truck_factor
# ═══════════════════════════════════════════════════════════════════════════


class TestComputeTruckFactor:
    def test_total_files_counts_significant_files(self):
        current = []
        for pr in range(1, 4):
            current.extend(authored_pr(pr, "alice", ["src/a.ts", "src/b.ts"]))
        current.extend(authored_pr(9, "bob", ["src/rare.ts"]))

        result = compute_truck_factor(current, [])

        assert result.total_files == 2
        assert result.risk_score == 100
        assert result.previous_risk_score == 0

    def test_result_bounds(self):
        events = []
        for pr in range(1, 10):
            events.extend(authored_pr(pr, "alice" if pr % 2 else "bob", ["src/a.ts", "src/b.ts"]))

        result = compute_truck_factor(events, events)

        assert 0 <= result.risk_score <= 100
        assert 0 <= result.previous_risk_score <= 100
