from typing import Dict, List, Optional, Sequence, Tuple

from core.state import FairnessState, ScheduleCell, ScheduleState
from schemas.schedule.generate import GenerationConfig, HistoricalStats
from scheduler.grouping import build_grouping, members_by_group
from scheduler.posts import (
    active_rows,
    build_post_definitions,
    expand_posts,
    normalize_post_name,
)
from utils.constants import MIN_REST_FLOOR
from utils.day_utils import active_days, days_in_month, is_weekend
from utils.person_utils import dedupe_ids, normalize_id, to_key_set


def resolve_population(config: GenerationConfig) -> List[str]:
    """
    The students to schedule, de-duplicated by normalized id.

    Group mode takes the union of the manual group members. Otherwise the explicit
    id list is used, or the range 1..studentCount when no ids are given.
    Excluded students are removed in both cases.
    """
    if config.isGroupMode:
        ids = [m for g in config.manualGroups for m in g.students]
    elif config.students:
        ids = list(config.students)
    else:
        ids = [str(i) for i in range(1, (config.studentCount or 0) + 1)]

    excluded = to_key_set(config.excludedStudents)
    return [p for p in dedupe_ids(ids) if normalize_id(p) not in excluded]


def index_history(history: Optional[Sequence[HistoricalStats]]) -> Dict[str, HistoricalStats]:
    """Historical stats keyed by normalized student id; later entries win."""
    return {normalize_id(h.studentId): h for h in history or []}


def resolve_cycle_post(config: GenerationConfig) -> Optional[str]:
    if not config.isCycleEnabled:
        return None
    return normalize_post_name(config.cyclePostToRemove)


def seed_fairness(
    population: Sequence[str],
    grouping,
    history: Dict[str, HistoricalStats],
    default_rest: int,
) -> Dict[str, FairnessState]:
    """
    Fresh counters for every student, seeded from historical stats when present.

    Students without a known trailing rest start fully rested.
    """
    people = {}
    for person in population:
        key = normalize_id(person)
        past = history.get(key)
        state = FairnessState(key=key, person=person, group=grouping.classify(person), rest=default_rest)
        if past is not None:
            state.carried_total = past.accumulatedServices
            state.carried_post_counts = {
                normalize_post_name(post): count
                for post, count in past.accumulatedPostCounts.items()
            }
            if past.trailingRest is not None:
                state.rest = past.trailingRest
        people[key] = state
    return people


def compute_targets(state: ScheduleState) -> None:
    """
    Fill the run targets: total slots, shift ceilings and minimum rest.

    ceiling = ceil(total slots / population), strict = floor of the same;
    min rest = floor(population / average daily slots), at least MIN_REST_FLOOR.
    Group mode rests every student for one full turn of the other groups.
    """
    days = active_days(state.year, state.month, state.excluded_days)
    cycle_post = None if state.group_mode else state.cycle_post
    total = sum(len(active_rows(state.rows, d, cycle_post)) for d in days)
    size = len(state.population)

    state.total_slots = total
    state.strict_ceiling = total // size if size else 0
    state.shift_ceiling = -(-total // size) if size else 0
    state.absolute_cap = state.num_days

    if state.group_mode:
        state.min_rest = max(0, len(state.groups) - 1)
    elif total:
        state.min_rest = max(MIN_REST_FLOOR, size * len(days) // total)
    else:
        state.min_rest = MIN_REST_FLOOR


def init_grid(state: ScheduleState) -> None:
    """An empty cell for every row and day; excluded days are flagged up front."""
    state.grid = {
        row.label: {
            day: ScheduleCell(
                person=None,
                is_weekend=is_weekend(state.year, state.month, day),
                is_excluded=day in state.excluded_days,
            )
            for day in range(1, state.num_days + 1)
        }
        for row in state.rows
    }


def setup_state(
    config: GenerationConfig,
    history: Optional[Sequence[HistoricalStats]] = None,
) -> Tuple[ScheduleState, object]:
    """
    Build the run state for a validated configuration.

    Returns the state and the active grouping scheme.
    """
    population = resolve_population(config)
    grouping = build_grouping(config, population)
    definitions = build_post_definitions(
        config.servicePosts, config.slots, config.restrictedPosts, config.postLabels
    )
    num_days = days_in_month(config.year, config.month)

    members = {
        label: [normalize_id(p) for p in ids]
        for label, ids in members_by_group(grouping, population).items()
    }

    state = ScheduleState(
        year=config.year,
        month=config.month,
        num_days=num_days,
        rows=expand_posts(definitions),
        people={},
        population=[normalize_id(p) for p in population],
        groups=list(grouping.labels),
        members=members,
        restricted=to_key_set(config.restrictedStudents),
        restricted_posts={normalize_post_name(p) for p in config.restrictedPosts},
        excluded_days={d for d in config.ignoredDays if 1 <= d <= num_days},
        cycle_post=resolve_cycle_post(config),
        group_mode=config.isGroupMode,
    )
    compute_targets(state)
    state.people = seed_fairness(population, grouping, index_history(history), state.min_rest)
    init_grid(state)
    return state, grouping
