from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from core.relaxation import RelaxationLevel


@dataclass(frozen=True)
class PostDefinition:
    """A configured service post before it is split into duty rows."""

    name: str
    """Upper-cased post name, shared by every row of the post."""
    slots: int
    """Number of people the post needs each day."""
    restricted: bool = False
    """True if the post is closed to the restricted population."""
    short_label: Optional[str] = None
    """Display abbreviation, carried for export layers only."""


@dataclass(frozen=True)
class DutyRow:
    """A single fillable slot of a post, one cell per day in the grid."""

    label: str
    """Row name in the grid, e.g. "SENTINELS - 2"."""
    base: str
    """Name of the post the row belongs to."""
    index: int
    """Slot number, 1..slot_count."""
    slot_count: int
    """Total slots of the base post."""
    restricted: bool = False
    """Copied from the post definition."""

    @property
    def flexible(self) -> bool:
        """Rows of multi-slot posts are interchangeable, so repeating the post is allowed."""
        return self.slot_count > 1


@dataclass
class ScheduleCell:
    person: Optional[str] = None
    """Display id of the assigned student, None if the cell is empty."""
    is_weekend: bool = False
    is_excluded: bool = False
    """The whole day was skipped."""
    is_reduced: bool = False
    """The row was dropped by the reduction cycle on this day."""


@dataclass(frozen=True)
class ScheduleDay:
    day: int
    weekday: int
    """0 = Monday ... 6 = Sunday."""
    initial: str


@dataclass
class FairnessState:
    """
    Running counters for one student during a generation run.

    Carried values come from historical stats and are never changed; run values
    grow with each assignment made by this run.
    """

    key: str
    """Normalized identifier used for matching."""
    person: str
    """Identifier as written in the population, used in the grid."""
    group: str
    """Rotation class or manual group label."""
    carried_total: int = 0
    carried_post_counts: Dict[str, int] = field(default_factory=dict)
    run_total: int = 0
    run_post_counts: Dict[str, int] = field(default_factory=dict)
    rest: int = 0
    """Consecutive days without duty."""
    last_post: Optional[str] = None
    rest_balance: int = 0
    """Bounded accumulator; positive after resting longer than the baseline."""

    @property
    def total(self) -> int:
        return self.carried_total + self.run_total

    def post_count(self, base: str) -> int:
        return self.carried_post_counts.get(base, 0) + self.run_post_counts.get(base, 0)

    def record(self, base: str) -> None:
        self.run_total += 1
        self.run_post_counts[base] = self.run_post_counts.get(base, 0) + 1
        self.last_post = base

    def close_day(self, worked: bool, baseline: Optional[int] = None, limit: int = 0) -> None:
        """Advance the rest counter; on a worked day fold the rest taken into the balance."""
        if worked:
            if baseline is not None:
                deviation = self.rest - baseline
                self.rest_balance = max(-limit, min(limit, self.rest_balance + deviation))
            self.rest = 0
        else:
            self.rest += 1


@dataclass
class ScheduleState:
    """
    A dataclass to hold all the state of one generation run.
    """

    # run inputs
    year: int
    month: int
    num_days: int
    """Days in the month."""
    rows: List[DutyRow]
    """All duty rows in configuration order."""
    people: Dict[str, FairnessState]
    """Fairness counters keyed by normalized id."""
    population: List[str]
    """Normalized ids in population order."""
    groups: List[str]
    """Rotation labels in base order."""
    members: Dict[str, List[str]]
    """Normalized ids per rotation label."""
    restricted: Set[str]
    """Normalized ids of the restricted population."""
    restricted_posts: Set[str]
    excluded_days: Set[int]
    cycle_post: Optional[str]
    """Post removed on reduced days / cut first when short-staffed; None when the cycle is off."""
    group_mode: bool

    # run targets
    total_slots: int = 0
    """Slots over every active day of the month."""
    strict_ceiling: int = 0
    shift_ceiling: int = 0
    absolute_cap: int = 0
    min_rest: int = 0

    # collections to fill
    grid: Dict[str, Dict[int, ScheduleCell]] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def ordered_people(self) -> List[FairnessState]:
        return [self.people[k] for k in self.population]


@dataclass
class GenerationResult:
    grid: Dict[str, Dict[int, ScheduleCell]]
    """Cells keyed by row label, then day."""
    rows: List[DutyRow]
    post_rows: List[str]
    """Row labels in grid order."""
    title: str
    num_days: int
    days: List[ScheduleDay]
    excluded_days: Set[int]
    population: List[str]
    """Display ids of everyone scheduled."""
    group_mode: bool
    rotation_queues: Dict[str, List[str]]
    """Per rotation label, members ordered least-loaded first for next month."""
    rotation_pointer: int
    """Index of the rotation label that would start the next day."""
    warnings: List[str]


@dataclass
class PersonStats:
    person: str
    group: str
    shifts: int
    """Duties in this run."""
    days_off: int
    post_breakdown: Dict[str, int]
    accumulated_shifts: int
    """Carried plus this run."""
    accumulated_post_counts: Dict[str, int]
    trailing_rest: int
    """Days off in a row at the end of the month."""


@dataclass
class AnalyticsResult:
    person_stats: List[PersonStats]
    daily_group_distribution: Dict[int, Dict[str, int]]
    post_distribution: Dict[str, int]
    total_persons: int
    total_shifts_assigned: int
    average_shifts_per_person: float


@dataclass
class SelectionContext:
    """What the filter rules need to know about the slot being filled."""

    row: DutyRow
    day: int
    level: RelaxationLevel
    assigned_today: Set[str]
    """Normalized ids already on duty today."""
    is_weekend: bool = False
    enforce_post_variety: bool = True
    """Forbid repeating yesterday's post; off in group mode."""
