from collections import Counter
from typing import Dict, Optional, Sequence, Set, Tuple

from core.relaxation import GROUP_LEVEL
from core.state import ScheduleState
from schemas.schedule.generate import HistoricalStats
from scheduler.posts import daily_fill_order, interleave_rows
from scheduler.selection import assign, close_day, select_candidate
from utils.day_utils import is_weekend
from utils.logger import get_logger
from utils.person_utils import normalize_id

logger = get_logger(__name__)


def infer_start_pointer(
    groups: Sequence[Tuple[str, Sequence[str]]],
    history: Dict[str, HistoricalStats],
) -> int:
    """
    Index of the group that should be on duty on day 1.

    A group with any member at zero trailing rest worked the last day of the
    previous period, so duty continues with the group after it. When several
    groups qualify the last one found wins. Without history the rotation starts
    at group 0.
    """
    yesterday: Optional[int] = None
    for index, (_, members) in enumerate(groups):
        for member in members:
            past = history.get(normalize_id(member))
            if past is not None and past.trailingRest == 0:
                yesterday = index
                break
    if yesterday is None or not groups:
        return 0
    return (yesterday + 1) % len(groups)


def generate_group_rotation(state: ScheduleState, history: Dict[str, HistoricalStats]) -> int:
    """
    One manual group on duty per active day, groups taken in cyclic order.

    Rows are filled in interleaved order from the rested members of the group on
    duty, least-assigned first. When the group cannot cover every row, the cut
    target is filled last and a warning is recorded. Returns the pointer of the
    group due on the next day.
    """
    groups = [(label, state.members.get(label, [])) for label in state.groups]
    pointer = infer_start_pointer(groups, history)
    rows = interleave_rows(state.rows)
    first_active_day = True

    logger.info(
        f"📋 Group rotation: {len(groups)} groups, {len(rows)} rows, "
        f"starting with {groups[pointer][0]!r}, min rest {state.min_rest}"
    )

    for day in range(1, state.num_days + 1):
        if day in state.excluded_days:
            close_day(state, set())
            continue

        label, members = groups[pointer]
        rested = [state.people[k] for k in members if state.people[k].rest >= state.min_rest]

        if first_active_day and not rested:
            pointer = (pointer + 1) % len(groups)
            label, members = groups[pointer]
            rested = [state.people[k] for k in members if state.people[k].rest >= state.min_rest]
            logger.info(f"⏭ Day {day}: no rested members, starting with group {label!r} instead")
        first_active_day = False

        short_staffed = len(rested) < len(rows)
        if short_staffed:
            message = (
                f"Day {day}: group {label!r} has {len(rested)} available members "
                f"for {len(rows)} posts"
            )
            if state.cycle_post is not None:
                message += f"; {state.cycle_post} is left uncovered first"
            message += "."
            state.warnings.append(message)
            logger.warning(f"⚠️ {message}")

        assigned_today: Set[str] = set()
        group_today: Counter = Counter()
        unfilled = []
        weekend = is_weekend(state.year, state.month, day)
        for row in daily_fill_order(rows, state.cycle_post, short_staffed):
            chosen = select_candidate(
                state, row, day, rested, assigned_today, [GROUP_LEVEL],
                group_today, is_weekend=weekend, enforce_post_variety=False,
            )
            if chosen is None:
                unfilled.append(row.label)
                continue
            assign(state, row, day, chosen, assigned_today, group_today)

        if unfilled and not short_staffed:
            message = f"Day {day}: no eligible student for {', '.join(sorted(unfilled))}."
            state.warnings.append(message)
            logger.warning(f"⚠️ {message}")

        close_day(state, assigned_today)
        pointer = (pointer + 1) % len(groups)

    return pointer

