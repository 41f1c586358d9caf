from collections import Counter
from typing import List, Set

from core.relaxation import RELAXATION_LEVELS, preference_levels
from core.state import DutyRow, ScheduleState
from scheduler.posts import active_rows, is_reduced_day
from scheduler.selection import assign, close_day, select_candidate
from utils.constants import REST_BALANCE_LIMIT, RESTRICTED_LEVEL_LIMIT
from utils.day_utils import active_days, is_weekend
from utils.logger import get_logger
from utils.person_utils import id_sort_key

logger = get_logger(__name__)


def rotated_order(labels: List[str], start: int) -> List[str]:
    """Class order for a day: the base order rotated left by `start` positions."""
    if not labels:
        return []
    start %= len(labels)
    return labels[start:] + labels[:start]


def restricted_daily_cap(state: ScheduleState) -> int:
    """
    Most restricted students placed by the preference pass on one day.

    Their proportional share of the month's slots, spread over the active days,
    floored, plus one.
    """
    days = len(active_days(state.year, state.month, state.excluded_days))
    population = len(state.population)
    if not days or not population:
        return 0
    restricted = len(state.restricted & set(state.population))
    return restricted * state.total_slots // (population * days) + 1


def mark_reduced(state: ScheduleState, rows: List[DutyRow], open_rows: List[DutyRow], day: int) -> None:
    open_labels = {r.label for r in open_rows}
    for row in rows:
        if row.label not in open_labels:
            state.grid[row.label][day].is_reduced = True


def generate_standard(state: ScheduleState, rng) -> int:
    """
    Fill the grid day by day with rotating class priority.

    Each active day: drop the cycle post on reduced days, give restricted
    students their share of the posts open to them, fill every remaining row
    from the whole population, then close the day. Returns the rotation pointer
    for the following day.
    """
    restricted_pool_keys: Set[str] = state.restricted & set(state.population)
    cap = restricted_daily_cap(state) if restricted_pool_keys else 0
    restricted_levels = preference_levels(RELAXATION_LEVELS, RESTRICTED_LEVEL_LIMIT)
    pointer = 0

    logger.info(
        f"📋 Class rotation: {len(state.population)} students, {len(state.rows)} rows, "
        f"ceiling {state.strict_ceiling}/{state.shift_ceiling}, min rest {state.min_rest}"
    )

    for day in range(1, state.num_days + 1):
        if day in state.excluded_days:
            close_day(state, set())
            continue

        weekend = is_weekend(state.year, state.month, day)
        rows = active_rows(state.rows, day, state.cycle_post)
        if state.cycle_post is not None and is_reduced_day(day):
            mark_reduced(state, state.rows, rows, day)

        order = rotated_order(state.groups, pointer)
        rotation_rank = {label: i for i, label in enumerate(order)}
        pool = sorted(
            state.ordered_people(),
            key=lambda p: (rotation_rank.get(p.group, len(order)), id_sort_key(p.person)),
        )

        assigned_today: Set[str] = set()
        group_today: Counter = Counter()
        filled: Set[str] = set()

        if restricted_pool_keys:
            open_to_restricted = [r for r in rows if not r.restricted]
            rng.shuffle(open_to_restricted)
            restricted_pool = [p for p in pool if p.key in restricted_pool_keys]
            placed = 0
            for row in open_to_restricted:
                if placed >= cap:
                    break
                chosen = select_candidate(
                    state, row, day, restricted_pool, assigned_today, restricted_levels,
                    group_today, rotation_rank, weekend,
                )
                if chosen is not None:
                    assign(state, row, day, chosen, assigned_today, group_today)
                    filled.add(row.label)
                    placed += 1

        remaining = [r for r in rows if r.label not in filled]
        rng.shuffle(remaining)
        unfilled = []
        for row in remaining:
            chosen = select_candidate(
                state, row, day, pool, assigned_today, RELAXATION_LEVELS,
                group_today, rotation_rank, weekend,
            )
            if chosen is None:
                unfilled.append(row.label)
                continue
            assign(state, row, day, chosen, assigned_today, group_today)

        if unfilled:
            message = f"Day {day}: no eligible student for {', '.join(sorted(unfilled))}."
            state.warnings.append(message)
            logger.warning(f"⚠️ {message}")

        close_day(state, assigned_today, baseline=state.min_rest, limit=REST_BALANCE_LIMIT)
        pointer = (pointer + 1) % len(order) if order else 0

    return pointer
