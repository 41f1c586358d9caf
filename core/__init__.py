"""
core
----

Core roster engine components:

- ScheduleState, FairnessState & the grid types:
  Encapsulate all inputs, targets and per-student counters of one generation run.

- RelaxationLevel & define_relaxation_levels:
  The ordered list of constraint relaxations tried when no strict candidate exists.

- ConstraintManager:
  Register candidate filter rules and apply them in a controlled sequence.
"""
