from typing import Dict, List

from schemas.schedule.generate import HistoricalStats
from scheduler.builder import generate_schedule
from scheduler.group_rotation import infer_start_pointer
from tests.utils import NoShuffle, assignments_by_day, make_group_config, rows_of

GROUPS: Dict[str, List[str]] = {
    "Alpha": [str(i) for i in range(1, 7)],
    "Bravo": [str(i) for i in range(7, 13)],
    "Charlie": [str(i) for i in range(13, 16)],
}
GROUP_LIST = list(GROUPS.items())


def rested_history(trailing: Dict[str, int]) -> List[HistoricalStats]:
    return [HistoricalStats(studentId=sid, trailingRest=rest) for sid, rest in trailing.items()]


def group_of(person: str) -> str:
    return next(name for name, members in GROUPS.items() if person in members)


def test_start_pointer_without_history() -> None:
    assert infer_start_pointer(GROUP_LIST, {}) == 0


def test_start_pointer_follows_the_group_that_worked_last() -> None:
    history = {h.studentId: h for h in rested_history({"7": 0, "1": 2})}

    assert infer_start_pointer(GROUP_LIST, history) == 2


def test_start_pointer_wraps_and_last_match_wins() -> None:
    history = {h.studentId: h for h in rested_history({"2": 0, "14": 0})}

    assert infer_start_pointer(GROUP_LIST, history) == 0


def test_one_group_per_day_in_cyclic_order() -> None:
    config = make_group_config(GROUPS, isCycleEnabled=True, cyclePostToRemove="Kitchen")
    result = generate_schedule(config, rng=NoShuffle())

    expected = ["Alpha", "Bravo", "Charlie"]
    for day, people in assignments_by_day(result).items():
        assert {group_of(p) for p in people} == {expected[(day - 1) % 3]}
        assert len(set(people)) == len(people)
    assert result.rotation_pointer == 0


def test_small_group_leaves_the_cut_post_uncovered() -> None:
    config = make_group_config(GROUPS, isCycleEnabled=True, cyclePostToRemove="Kitchen")
    result = generate_schedule(config, rng=NoShuffle())

    assert len(result.warnings) == 10
    assert result.warnings[0] == (
        "Day 3: group 'Charlie' has 3 available members for 6 posts; KITCHEN is left uncovered first."
    )
    for day in range(3, 31, 3):
        assert all(result.grid[label][day].person is None for label in rows_of(result, "KITCHEN"))
        assert result.grid["DESK"][day].person
        assert all(result.grid[label][day].person for label in rows_of(result, "PATROL"))
    for day in (1, 2, 4, 5):
        assert len(assignments_by_day(result)[day]) == 6


def test_population_is_the_union_of_groups() -> None:
    groups = {"Alpha": ["1", "2", "3"], "Bravo": ["03", "4", "5", "6", "7", "8"]}
    config = make_group_config(groups)
    result = generate_schedule(config, rng=NoShuffle())

    assert result.population == ["1", "2", "3", "4", "5", "6", "7", "8"]
    # "03" counts as a member of Alpha, which lists it first
    assert result.rotation_queues["Alpha"] == ["1", "2", "3"]


def test_history_picks_the_next_group() -> None:
    config = make_group_config(GROUPS)
    history = rested_history({"1": 0, "7": 1, "13": 2})
    result = generate_schedule(config, history, rng=NoShuffle())

    assert {group_of(p) for p in assignments_by_day(result)[1]} == {"Bravo"}


def test_unrested_group_is_skipped_on_the_first_day() -> None:
    config = make_group_config(GROUPS)
    history = rested_history({"7": 0, "13": 1, "14": 1, "15": 1})
    result = generate_schedule(config, history, rng=NoShuffle())

    assert {group_of(p) for p in assignments_by_day(result)[1]} == {"Alpha"}
    assert {group_of(p) for p in assignments_by_day(result)[2]} == {"Bravo"}
