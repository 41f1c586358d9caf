import random
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from core.state import AnalyticsResult, GenerationResult, ScheduleDay, ScheduleState
from schemas.schedule.generate import GenerationConfig, HistoricalStats
from scheduler.extractor import compute_analytics
from scheduler.group_rotation import generate_group_rotation
from scheduler.grouping import build_grouping
from scheduler.setup import index_history, resolve_population, setup_state
from scheduler.standard import generate_standard
from utils.day_utils import schedule_title, weekday_initial
from utils.logger import get_logger
from utils.person_utils import id_sort_key
from utils.validate import validate_config

logger = get_logger(__name__)


def build_days(year: int, month: int, num_days: int) -> List[ScheduleDay]:
    return [
        ScheduleDay(day=d, weekday=date(year, month, d).weekday(), initial=weekday_initial(year, month, d))
        for d in range(1, num_days + 1)
    ]


def rotation_queues(state: ScheduleState) -> Dict[str, List[str]]:
    """Members of each rotation label, least-loaded first, to seed next month's order."""
    queues = {}
    for label in state.groups:
        people = [state.people[k] for k in state.members.get(label, [])]
        people.sort(key=lambda p: (p.total, id_sort_key(p.person)))
        queues[label] = [p.person for p in people]
    return queues


# == Generate Schedule ==
def generate_schedule(
    config: GenerationConfig,
    history: Optional[Sequence[HistoricalStats]] = None,
    rng: Optional[random.Random] = None,
) -> GenerationResult:
    """
    Builds a month of duty assignments for the configured posts.

    Args:
        config (GenerationConfig): Students, posts, month and rotation settings.
        history (Optional[Sequence[HistoricalStats]]): Carry-over stats from the
            previous period, used to seed fairness counters and rest.
        rng (Optional[random.Random]): Source for the row-order shuffles; any
            object with a ``shuffle(list)`` method. Defaults to a fresh
            ``random.Random()``.

    Returns:
        GenerationResult: the grid, row list, day metadata, rotation queues and
        the non-fatal warnings collected along the way.

    Raises:
        ConfigurationError: a subclass naming the failed check, before any day is generated.
    """
    # === Validate inputs ===
    population = resolve_population(config)
    validate_config(config, population, build_grouping(config, population))

    # === Run setup ===
    logger.info(f"📋 Building roster for {schedule_title(config.year, config.month)}...")
    state, _ = setup_state(config, history)
    rng = rng if rng is not None else random.Random()

    # === Generate ===
    if state.group_mode:
        pointer = generate_group_rotation(state, index_history(history))
    else:
        pointer = generate_standard(state, rng)

    filled = sum(1 for cells in state.grid.values() for c in cells.values() if c.person)
    logger.info(f"✅ Roster ready: {filled}/{state.total_slots} slots filled, {len(state.warnings)} warnings")

    return GenerationResult(
        grid=state.grid,
        rows=state.rows,
        post_rows=[r.label for r in state.rows],
        title=schedule_title(state.year, state.month),
        num_days=state.num_days,
        days=build_days(state.year, state.month, state.num_days),
        excluded_days=set(state.excluded_days),
        population=[p.person for p in state.ordered_people()],
        group_mode=state.group_mode,
        rotation_queues=rotation_queues(state),
        rotation_pointer=pointer,
        warnings=list(state.warnings),
    )


def build_roster(
    config: GenerationConfig,
    history: Optional[Sequence[HistoricalStats]] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[GenerationResult, AnalyticsResult]:
    """Generate the month and aggregate its analytics in one call."""
    result = generate_schedule(config, history, rng)
    analytics = compute_analytics(result, config, history)
    return result, analytics
