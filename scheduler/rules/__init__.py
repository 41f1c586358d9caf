"""
scheduler.rules
---------------

Exposes all candidate filter rules by importing from:

- `fixed`: Rules that hold at every relaxation level (restricted posts, one duty per day).
- `relaxable`: Rules loosened level by level (shift ceiling, minimum rest, post variety).

Every rule has the signature ``rule(state, context, candidate) -> bool``.
"""
from .fixed import *
from .relaxable import *
