from collections import Counter
from typing import Dict, Optional, Sequence, Set

from core.constraint_manager import ConstraintManager
from core.relaxation import RelaxationLevel
from core.state import DutyRow, FairnessState, ScheduleState, SelectionContext
from scheduler.rules import *
from utils.person_utils import id_sort_key


def build_filters(state: ScheduleState, context: SelectionContext) -> ConstraintManager:
    """Candidate filter pipeline, in evaluation order."""
    manager = ConstraintManager(state, context)
    manager.add_rule(restriction_rule)
    manager.add_rule(one_duty_per_day_rule)
    manager.add_rule(shift_ceiling_rule)
    manager.add_rule(min_rest_rule)
    manager.add_rule(post_variety_rule, condition=context.enforce_post_variety)
    return manager


def rank_key(
    candidate: FairnessState,
    row: DutyRow,
    group_today: Counter,
    rotation_rank: Dict[str, int],
):
    """
    Sort key, lowest first:
    just worked this post, duties on this post, duties this run, own group's
    duties today, lifetime duties, rotation order of the group, identifier.
    """
    return (
        candidate.last_post == row.base,
        candidate.post_count(row.base),
        candidate.run_total,
        group_today[candidate.group],
        candidate.total,
        rotation_rank.get(candidate.group, len(rotation_rank)),
        id_sort_key(candidate.person),
    )


def select_candidate(
    state: ScheduleState,
    row: DutyRow,
    day: int,
    pool: Sequence[FairnessState],
    assigned_today: Set[str],
    levels: Sequence[RelaxationLevel],
    group_today: Optional[Counter] = None,
    rotation_rank: Optional[Dict[str, int]] = None,
    is_weekend: bool = False,
    enforce_post_variety: bool = True,
) -> Optional[FairnessState]:
    """
    Pick the best candidate for one row on one day.

    Levels are tried in order; the first level that admits anyone decides, and
    the best-ranked admitted student wins. Returns None when every level comes
    up empty, leaving the row unfilled.
    """
    group_today = group_today if group_today is not None else Counter()
    rotation_rank = rotation_rank or {}

    for level in levels:
        context = SelectionContext(
            row=row,
            day=day,
            level=level,
            assigned_today=assigned_today,
            is_weekend=is_weekend,
            enforce_post_variety=enforce_post_variety,
        )
        filters = build_filters(state, context)
        eligible = [c for c in pool if filters.admits(c)]
        if eligible:
            return min(eligible, key=lambda c: rank_key(c, row, group_today, rotation_rank))
    return None


def assign(
    state: ScheduleState,
    row: DutyRow,
    day: int,
    candidate: FairnessState,
    assigned_today: Set[str],
    group_today: Counter,
) -> None:
    """Write the student into the grid and update today's bookkeeping."""
    state.grid[row.label][day].person = candidate.person
    candidate.record(row.base)
    assigned_today.add(candidate.key)
    group_today[candidate.group] += 1


def close_day(state: ScheduleState, assigned_today: Set[str], baseline: Optional[int] = None, limit: int = 0) -> None:
    """Reset rest for today's duty students and add a rest day for everyone else."""
    for person in state.people.values():
        person.close_day(person.key in assigned_today, baseline, limit)
