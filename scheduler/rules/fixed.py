from core.state import FairnessState, ScheduleState, SelectionContext

"""
This module contains the rules that never relax.
"""


def restriction_rule(state: ScheduleState, context: SelectionContext, candidate: FairnessState) -> bool:
    """Restricted students cannot take a post closed to them."""
    return not (context.row.restricted and candidate.key in state.restricted)


def one_duty_per_day_rule(state: ScheduleState, context: SelectionContext, candidate: FairnessState) -> bool:
    """A student already on duty today cannot take a second row."""
    return candidate.key not in context.assigned_today
