"""Fixtures and helpers for roster tests."""
from __future__ import annotations

from typing import Dict, List, Sequence

from core.state import GenerationResult
from schemas.schedule.generate import GenerationConfig, ManualGroup

POSTS: Sequence[str] = (
    "Duty Officer",
    "Guard Commander",
    "Sentinels",
    "Barracks Watch",
    "Operations Room",
    "Kitchen",
)
SLOTS: Sequence[int] = (1, 1, 3, 3, 3, 5)

# June 2025: 30 days, June 1st is a Sunday.
YEAR = 2025
MONTH = 6


class NoShuffle:
    """Stand-in random source that keeps row order as given."""

    def shuffle(self, items: List) -> None:
        return None


def make_config(**overrides) -> GenerationConfig:
    """74 students in classes A/B/C and six posts (16 slots a day) unless overridden."""
    base = {
        "studentCount": 74,
        "classCount": 3,
        "servicePosts": list(POSTS),
        "slots": list(SLOTS),
        "month": MONTH,
        "year": YEAR,
    }
    base.update(overrides)
    return GenerationConfig(**base)


def make_group_config(groups: Dict[str, Sequence[str]], **overrides) -> GenerationConfig:
    base = {
        "isGroupMode": True,
        "manualGroups": [
            ManualGroup(id=str(i), name=name, students=list(members))
            for i, (name, members) in enumerate(groups.items())
        ],
        "servicePosts": ["Desk", "Patrol", "Kitchen"],
        "slots": [1, 2, 3],
        "month": MONTH,
        "year": YEAR,
    }
    base.update(overrides)
    return GenerationConfig(**base)


def assignments_by_day(result: GenerationResult) -> Dict[int, List[str]]:
    """Day -> students on duty that day (one entry per filled row)."""
    days: Dict[int, List[str]] = {d: [] for d in range(1, result.num_days + 1)}
    for label in result.post_rows:
        for day, cell in result.grid[label].items():
            if cell.person:
                days[day].append(cell.person)
    return days


def rows_of(result: GenerationResult, base: str) -> List[str]:
    return [r.label for r in result.rows if r.base == base]
