from core.relaxation import Ceiling
from core.state import FairnessState, ScheduleState, SelectionContext
from utils.constants import FINAL_DAYS_WINDOW


"""
This module contains the rules whose strength depends on the relaxation level.
"""


def level_ceiling(state: ScheduleState, ceiling: Ceiling) -> int:
    if ceiling is Ceiling.STRICT:
        return state.strict_ceiling
    if ceiling is Ceiling.AVERAGE:
        return state.shift_ceiling
    return state.absolute_cap


def shift_ceiling_rule(state: ScheduleState, context: SelectionContext, candidate: FairnessState) -> bool:
    """The duty being filled must not push the student's run total over the level's ceiling."""
    return candidate.run_total + 1 <= level_ceiling(state, context.level.ceiling)


def required_rest(state: ScheduleState, context: SelectionContext, candidate: FairnessState) -> int:
    level = context.level
    required = state.min_rest - level.rest_reduction
    if level.compensation:
        # negative balance (under-rested lately) raises the bar
        required -= candidate.rest_balance
    return max(0, required)


def min_rest_rule(state: ScheduleState, context: SelectionContext, candidate: FairnessState) -> bool:
    """Consecutive rest days must reach the level's minimum; ignored at the no-rest levels."""
    if context.level.rest_reduction is None:
        return True
    return candidate.rest >= required_rest(state, context, candidate)


def is_emergency(state: ScheduleState, context: SelectionContext) -> bool:
    """Rest already relaxed, the last days of the month, or a weekend."""
    return (
        context.level.relaxes_rest
        or context.day > state.num_days - FINAL_DAYS_WINDOW
        or context.is_weekend
    )


def post_variety_rule(state: ScheduleState, context: SelectionContext, candidate: FairnessState) -> bool:
    """No two duties in a row on the same single-slot post, unless in an emergency."""
    if candidate.last_post != context.row.base:
        return True
    return context.row.flexible or is_emergency(state, context)
