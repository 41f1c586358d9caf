from typing import Any, Callable

from core.state import FairnessState, ScheduleState


class ConstraintManager:
    def __init__(self, state: ScheduleState, context: Any):
        self.state = state
        self.context = context
        self.rules: list[Callable] = []

    def add_rule(self, rule_func: Callable, condition: bool = True):
        """Register a rule with optional enablement condition."""
        if condition:
            self.rules.append(rule_func)

    def admits(self, candidate: FairnessState) -> bool:
        """Apply all registered rules in order; the first failing rule rejects the candidate."""
        for rule in self.rules:
            if not rule(self.state, self.context, candidate):
                return False
        return True
