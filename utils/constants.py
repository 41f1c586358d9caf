import json
from pathlib import Path

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

# Build the path to the JSON config file
CONSTANTS_PATH = Path(__file__).parent.parent / "config" / "constants.json"

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Expose constants as variables
DEFAULT_CLASS_COUNT = _constants["DEFAULT_CLASS_COUNT"]

MIN_REST_FLOOR = _constants["MIN_REST_FLOOR"]
REST_BALANCE_LIMIT = _constants["REST_BALANCE_LIMIT"]
FINAL_DAYS_WINDOW = _constants["FINAL_DAYS_WINDOW"]
RESTRICTED_LEVEL_LIMIT = _constants["RESTRICTED_LEVEL_LIMIT"]

CYCLE_LENGTH = _constants["CYCLE_LENGTH"]
CYCLE_REDUCED_POSITIONS = frozenset(_constants["CYCLE_REDUCED_POSITIONS"])

ROW_SEPARATOR = _constants["ROW_SEPARATOR"]

UNCLASSIFIED_LABEL = _constants["UNCLASSIFIED_LABEL"]
INVALID_CLASS_LABEL = _constants["INVALID_CLASS_LABEL"]
UNGROUPED_LABEL = _constants["UNGROUPED_LABEL"]
MAX_CLASS_INDEX = _constants["MAX_CLASS_INDEX"]

MONTH_NAMES = _constants["MONTH_NAMES"]
DAY_INITIALS = _constants["DAY_INITIALS"]
