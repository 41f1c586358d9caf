from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class Ceiling(Enum):
    STRICT = "strict"
    """Floor of the average shifts per person."""
    AVERAGE = "average"
    """Ceiling of the average shifts per person."""
    CAP = "cap"
    """One duty per day, i.e. the number of days in the month."""


@dataclass(frozen=True)
class RelaxationLevel:
    name: str
    rest_reduction: Optional[int]
    """Days taken off the minimum rest; None ignores rest entirely."""
    ceiling: Ceiling
    compensation: bool
    """Shift the rest requirement by the student's rest balance."""

    @property
    def relaxes_rest(self) -> bool:
        return self.rest_reduction != 0


def define_relaxation_levels() -> List[RelaxationLevel]:
    """Search order, strictest first. The last level ignores rest and only caps at one duty a day."""
    return [
        RelaxationLevel("strict", 0, Ceiling.STRICT, True),
        RelaxationLevel("average", 0, Ceiling.AVERAGE, True),
        RelaxationLevel("short rest", 1, Ceiling.AVERAGE, False),
        RelaxationLevel("short rest, capped", 1, Ceiling.CAP, False),
        RelaxationLevel("no rest", None, Ceiling.AVERAGE, False),
        RelaxationLevel("last resort", None, Ceiling.CAP, False),
    ]


RELAXATION_LEVELS = define_relaxation_levels()


def preference_levels(levels: List[RelaxationLevel], limit: int) -> List[RelaxationLevel]:
    """
    Levels for the restricted-student preference pass.

    The first `limit` levels, minus those capped only at one duty a day, so the
    pass never lifts a restricted student past the average ceiling.
    """
    return [level for level in levels[:limit] if level.ceiling is not Ceiling.CAP]


# Group mode fills from one rested group, so the only rule that matters is rest.
GROUP_LEVEL = RelaxationLevel("group duty", 0, Ceiling.CAP, False)
