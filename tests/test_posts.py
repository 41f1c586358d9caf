from scheduler.posts import (
    active_rows,
    build_post_definitions,
    daily_fill_order,
    expand_posts,
    interleave_rows,
    is_reduced_day,
)


def test_expand_posts_one_row_per_slot() -> None:
    definitions = build_post_definitions(["Duty Officer", " sentinels ", "Spare"], [1, 3, 0])

    rows = expand_posts(definitions)

    assert [r.label for r in rows] == [
        "DUTY OFFICER",
        "SENTINELS - 1",
        "SENTINELS - 2",
        "SENTINELS - 3",
    ]
    assert {r.base for r in rows} == {"DUTY OFFICER", "SENTINELS"}
    assert [r.index for r in rows] == [1, 1, 2, 3]
    assert not rows[0].flexible
    assert all(r.flexible for r in rows[1:])


def test_restricted_flag_is_copied_to_rows() -> None:
    definitions = build_post_definitions(["Gate", "Kitchen"], [1, 2], restricted_posts=["gate"])

    rows = expand_posts(definitions)

    assert [r.restricted for r in rows] == [True, False, False]


def test_reduction_cycle_has_period_five_with_two_reduced_days() -> None:
    reduced = [d for d in range(1, 16) if is_reduced_day(d)]

    assert reduced == [4, 5, 9, 10, 14, 15]


def test_active_rows_drop_cycle_post_on_reduced_days_only() -> None:
    rows = expand_posts(build_post_definitions(["Gate", "Kitchen"], [1, 2]))

    assert [r.label for r in active_rows(rows, 4, "KITCHEN")] == ["GATE"]
    assert len(active_rows(rows, 1, "KITCHEN")) == 3
    assert len(active_rows(rows, 4, None)) == 3


def test_interleave_rows_round_robin_across_posts() -> None:
    rows = expand_posts(build_post_definitions(["A", "B", "C"], [1, 3, 2]))

    ordered = interleave_rows(rows)

    assert [r.label for r in ordered] == ["A", "B - 1", "C - 1", "B - 2", "C - 2", "B - 3"]


def test_daily_fill_order_restricted_first_and_cut_target_last() -> None:
    rows = interleave_rows(
        expand_posts(build_post_definitions(["Desk", "Patrol", "Kitchen"], [1, 2, 2], restricted_posts=["Patrol"]))
    )

    normal = daily_fill_order(rows, "KITCHEN", short_staffed=False)
    short = daily_fill_order(rows, "KITCHEN", short_staffed=True)

    assert [r.label for r in normal] == ["PATROL - 1", "PATROL - 2", "DESK", "KITCHEN - 1", "KITCHEN - 2"]
    assert [r.label for r in short][-2:] == ["KITCHEN - 1", "KITCHEN - 2"]
    assert [r.label for r in short][:3] == ["PATROL - 1", "PATROL - 2", "DESK"]
