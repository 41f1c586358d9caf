from pydantic import BaseModel, model_validator, Field, ConfigDict
from typing import Any, Dict, List, Optional
import re
from utils.constants import DEFAULT_CLASS_COUNT

_DELIMITERS = re.compile(r"[,;\n]+")


def split_delimited(value: Any) -> Any:
    """Split "1, 2; 3" style text into a list of stripped, non-empty items; lists pass through."""
    if isinstance(value, str):
        return [part.strip() for part in _DELIMITERS.split(value) if part.strip()]
    return value


def split_ids(value: Any) -> Any:
    """Like split_delimited, with numeric ids such as 7 turned into "7"."""
    value = split_delimited(value)
    if isinstance(value, (list, tuple)):
        return [str(v) if isinstance(v, int) and not isinstance(v, bool) else v for v in value]
    return value


# Define data models
class ManualGroup(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = ""
    name: str
    students: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def split_students(cls, values: Any) -> Any:
        """Members may be pasted as one delimited string."""
        if isinstance(values, dict) and "students" in values:
            values["students"] = split_ids(values["students"])
        return values


class HistoricalStats(BaseModel):
    model_config = ConfigDict(extra="allow")

    studentId: str
    accumulatedServices: int = 0
    accumulatedPostCounts: Dict[str, int] = Field(default_factory=dict)
    # consecutive days off at the end of the previous period; None if unknown
    trailingRest: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def stringify_id(cls, values: Any) -> Any:
        if isinstance(values, dict) and isinstance(values.get("studentId"), int):
            values["studentId"] = str(values["studentId"])
        return values

    @model_validator(mode="after")
    def check_counts(self) -> "HistoricalStats":
        if self.accumulatedServices < 0:
            raise ValueError(
                f"accumulatedServices for {self.studentId} cannot be negative."
            )
        if any(v < 0 for v in self.accumulatedPostCounts.values()):
            raise ValueError(
                f"accumulatedPostCounts for {self.studentId} cannot contain negative counts."
            )
        if self.trailingRest is not None and self.trailingRest < 0:
            raise ValueError(
                f"trailingRest for {self.studentId} cannot be negative."
            )
        return self


class GenerationConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    # explicit ids; when empty, 1..studentCount is used
    students: List[str] = Field(default_factory=list)
    studentCount: Optional[int] = Field(default=None, ge=0)
    excludedStudents: List[str] = Field(default_factory=list)
    classCount: int = Field(default=DEFAULT_CLASS_COUNT, ge=1)

    servicePosts: List[str]
    slots: List[int]
    postLabels: List[str] = Field(default_factory=list)
    restrictedPosts: List[str] = Field(default_factory=list)
    restrictedStudents: List[str] = Field(default_factory=list)

    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1)
    ignoredDays: List[int] = Field(default_factory=list)

    isCycleEnabled: bool = False
    cyclePostToRemove: str = ""

    isGroupMode: bool = False
    manualGroups: List[ManualGroup] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def split_text_lists(cls, values: Any) -> Any:
        """
        Accept list fields as delimited text, the way they are typed into a form.

        "1, 2, 3" or "Gate;Patrol" become lists; commas, semicolons and newlines
        all separate items. Integer ids in the student lists become strings.
        """
        if not isinstance(values, dict):
            return values
        for key in ("students", "excludedStudents", "restrictedStudents"):
            if key in values:
                values[key] = split_ids(values[key])
        for key in ("servicePosts", "slots", "postLabels", "restrictedPosts", "ignoredDays"):
            if key in values:
                values[key] = split_delimited(values[key])
        return values

    @model_validator(mode="after")
    def validate_manual_groups(self) -> "GenerationConfig":
        seen_names = set()

        for group in self.manualGroups:
            name = group.name.strip()

            # Check 1: every group needs a name
            if not name:
                raise ValueError("Manual groups must have a non-empty name.")

            # Check 2: no duplicate group names
            if name in seen_names:
                raise ValueError(f"Duplicate manual group name {name!r}")
            seen_names.add(name)

        return self
