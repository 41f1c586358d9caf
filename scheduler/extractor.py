import pandas as pd
from typing import Dict, List, Optional, Sequence, Set

from core.state import AnalyticsResult, GenerationResult, PersonStats
from schemas.schedule.generate import GenerationConfig, HistoricalStats
from scheduler.grouping import build_grouping
from scheduler.posts import normalize_post_name
from scheduler.setup import index_history
from utils.logger import get_logger
from utils.person_utils import normalize_id

logger = get_logger(__name__)


def worked_days_by_person(result: GenerationResult) -> Dict[str, Set[int]]:
    """Normalized id -> days with a duty, over every row."""
    worked: Dict[str, Set[int]] = {}
    for cells in result.grid.values():
        for day, cell in cells.items():
            if cell.person and not cell.is_excluded:
                worked.setdefault(normalize_id(cell.person), set()).add(day)
    return worked


def trailing_rest(worked: Set[int], num_days: int, carried: Optional[int] = None) -> int:
    """
    Days off in a row ending on the last day of the month.

    Excluded days count as rest. A student who never worked this month keeps
    resting on top of the carried trailing rest, when known.
    """
    count = 0
    for day in range(num_days, 0, -1):
        if day in worked:
            return count
        count += 1
    return count + (carried or 0)


def compute_analytics(
    result: GenerationResult,
    config: GenerationConfig,
    history: Optional[Sequence[HistoricalStats]] = None,
) -> AnalyticsResult:
    """
    Aggregate a finished roster.

    Per student: duties this month, post breakdown, days off, accumulated totals
    including history and trailing rest. Overall: duties per group per day, duties
    per post, total duties and the average per student (one decimal).
    """
    grouping = build_grouping(config, result.population)
    past = index_history(history)
    working_days = result.num_days - len(result.excluded_days)
    posts = list(dict.fromkeys(normalize_post_name(p) for p in config.servicePosts))
    base_of = {row.label: row.base for row in result.rows}

    shifts: Dict[str, int] = {normalize_id(p): 0 for p in result.population}
    breakdown: Dict[str, Dict[str, int]] = {
        normalize_id(p): {post: 0 for post in posts} for p in result.population
    }
    post_distribution = {post: 0 for post in posts}
    daily: Dict[int, Dict[str, int]] = {
        day: {label: 0 for label in grouping.labels}
        for day in range(1, result.num_days + 1)
        if day not in result.excluded_days
    }
    total_assigned = 0

    for label in result.post_rows:
        base = base_of[label]
        for day, cell in result.grid[label].items():
            if cell.is_excluded or not cell.person:
                continue
            key = normalize_id(cell.person)
            if key not in shifts:
                continue
            shifts[key] += 1
            total_assigned += 1
            breakdown[key][base] = breakdown[key].get(base, 0) + 1
            post_distribution[base] = post_distribution.get(base, 0) + 1
            group = grouping.classify(cell.person)
            daily[day][group] = daily[day].get(group, 0) + 1

    worked = worked_days_by_person(result)
    stats = []
    for person in result.population:
        key = normalize_id(person)
        carried = past.get(key)
        accumulated_posts = dict(breakdown[key])
        carried_total = 0
        carried_rest = None
        if carried is not None:
            carried_total = carried.accumulatedServices
            carried_rest = carried.trailingRest
            for post, count in carried.accumulatedPostCounts.items():
                name = normalize_post_name(post)
                accumulated_posts[name] = accumulated_posts.get(name, 0) + count
        stats.append(
            PersonStats(
                person=person,
                group=grouping.classify(person),
                shifts=shifts[key],
                days_off=working_days - shifts[key],
                post_breakdown=breakdown[key],
                accumulated_shifts=carried_total + shifts[key],
                accumulated_post_counts=accumulated_posts,
                trailing_rest=trailing_rest(worked.get(key, set()), result.num_days, carried_rest),
            )
        )

    total_persons = len(result.population)
    average = round(total_assigned / total_persons, 1) if total_persons else 0.0
    logger.info(f"📊 Analytics: {total_assigned} duties over {total_persons} students, average {average}")

    return AnalyticsResult(
        person_stats=stats,
        daily_group_distribution=daily,
        post_distribution=post_distribution,
        total_persons=total_persons,
        total_shifts_assigned=total_assigned,
        average_shifts_per_person=average,
    )


def to_historical_stats(analytics: AnalyticsResult) -> List[HistoricalStats]:
    """Carry-over stats to feed into next month's run."""
    return [
        HistoricalStats(
            studentId=s.person,
            accumulatedServices=s.accumulated_shifts,
            accumulatedPostCounts=dict(s.accumulated_post_counts),
            trailingRest=s.trailing_rest,
        )
        for s in analytics.person_stats
    ]


def schedule_to_frame(result: GenerationResult) -> pd.DataFrame:
    """Grid as a DataFrame: one row per duty row, one column per day, empty cells as None."""
    data = {
        day: [result.grid[label][day].person for label in result.post_rows]
        for day in range(1, result.num_days + 1)
    }
    return pd.DataFrame(data, index=result.post_rows)


def summary_to_frame(analytics: AnalyticsResult) -> pd.DataFrame:
    """Per-student summary, one column per post for this month's breakdown."""
    records = []
    for s in analytics.person_stats:
        record = {
            "Student": s.person,
            "Group": s.group,
            "Shifts": s.shifts,
            "Days Off": s.days_off,
            "Accumulated": s.accumulated_shifts,
            "Trailing Rest": s.trailing_rest,
        }
        record.update(s.post_breakdown)
        records.append(record)
    return pd.DataFrame.from_records(records)


def daily_distribution_to_frame(analytics: AnalyticsResult) -> pd.DataFrame:
    """Duties per group (columns) for each active day (index)."""
    df = pd.DataFrame.from_dict(analytics.daily_group_distribution, orient="index")
    df.index.name = "Day"
    return df.fillna(0).astype(int)
