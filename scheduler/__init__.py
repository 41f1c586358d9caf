"""
scheduler
---------

Main scheduling module. Initializes key components:

- `builder`: Validation, run setup and dispatch to the active generator.
- `standard` / `group_rotation`: The two daily assignment loops.
- `extractor`: Analytics and tabular views of a finished roster.

Provides high-level access to core scheduling functionality.
"""
from . import builder, extractor
