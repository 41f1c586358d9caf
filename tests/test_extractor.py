import pandas as pd

from schemas.schedule.generate import HistoricalStats
from scheduler.builder import build_roster, generate_schedule
from scheduler.extractor import (
    daily_distribution_to_frame,
    schedule_to_frame,
    summary_to_frame,
    to_historical_stats,
    trailing_rest,
)
from tests.utils import NoShuffle, make_config


def stats_by_person(analytics):
    return {s.person: s for s in analytics.person_stats}


def test_trailing_rest() -> None:
    assert trailing_rest({30}, 30) == 0
    assert trailing_rest({3, 28}, 30) == 2
    assert trailing_rest(set(), 30) == 30
    assert trailing_rest(set(), 30, carried=3) == 33
    assert trailing_rest({29}, 30, carried=3) == 1


def test_month_totals() -> None:
    _, analytics = build_roster(make_config(), rng=NoShuffle())

    assert analytics.total_persons == 74
    assert analytics.total_shifts_assigned == 480
    assert analytics.average_shifts_per_person == 6.5
    assert analytics.post_distribution == {
        "DUTY OFFICER": 30,
        "GUARD COMMANDER": 30,
        "SENTINELS": 90,
        "BARRACKS WATCH": 90,
        "OPERATIONS ROOM": 90,
        "KITCHEN": 150,
    }


def test_per_person_breakdown_adds_up() -> None:
    _, analytics = build_roster(make_config(ignoredDays=[15]), rng=NoShuffle())

    for s in analytics.person_stats:
        assert sum(s.post_breakdown.values()) == s.shifts
        assert s.days_off == 29 - s.shifts
        assert s.accumulated_shifts == s.shifts
    assert stats_by_person(analytics)["1"].group == "A"
    assert stats_by_person(analytics)["74"].group == "C"


def test_daily_group_distribution_skips_excluded_days() -> None:
    _, analytics = build_roster(make_config(ignoredDays=[15]), rng=NoShuffle())

    assert 15 not in analytics.daily_group_distribution
    assert len(analytics.daily_group_distribution) == 29
    for counts in analytics.daily_group_distribution.values():
        assert set(counts) == {"A", "B", "C"}
        assert sum(counts.values()) == 16


def test_history_is_added_to_accumulated_totals() -> None:
    history = [
        HistoricalStats(studentId="01", accumulatedServices=10, accumulatedPostCounts={"kitchen": 2}),
    ]
    _, analytics = build_roster(make_config(), history, rng=NoShuffle())
    first = stats_by_person(analytics)["1"]

    assert first.accumulated_shifts == 10 + first.shifts
    assert first.accumulated_post_counts["KITCHEN"] == 2 + first.post_breakdown["KITCHEN"]


def test_frames() -> None:
    result, analytics = build_roster(make_config(), rng=NoShuffle())

    grid = schedule_to_frame(result)
    assert grid.shape == (len(result.post_rows), 30)
    assert grid.loc["DUTY OFFICER", 1] == result.grid["DUTY OFFICER"][1].person

    summary = summary_to_frame(analytics)
    assert len(summary) == 74
    assert {"Student", "Group", "Shifts", "Days Off", "Trailing Rest", "KITCHEN"} <= set(summary.columns)
    assert summary["Shifts"].sum() == 480

    daily = daily_distribution_to_frame(analytics)
    assert daily.index.name == "Day"
    pd.testing.assert_series_equal(
        daily.sum(axis=1), pd.Series(16, index=daily.index), check_names=False, check_dtype=False
    )


def test_next_month_starts_from_carried_stats() -> None:
    june, june_analytics = build_roster(make_config(), rng=NoShuffle())
    history = to_historical_stats(june_analytics)
    rest_in = {h.studentId: h.trailingRest for h in history}

    july, july_analytics = build_roster(make_config(month=7), history, rng=NoShuffle())

    assert july.title == "JULY / 2025"
    for label in july.post_rows:
        person = july.grid[label][1].person
        assert rest_in[person] >= 3

    june_shifts = {s.person: s.shifts for s in june_analytics.person_stats}
    for s in july_analytics.person_stats:
        assert s.accumulated_shifts == june_shifts[s.person] + s.shifts
