from typing import Dict, List, Optional, Sequence, Tuple

from schemas.schedule.generate import GenerationConfig
from utils.constants import MAX_CLASS_INDEX, UNCLASSIFIED_LABEL, UNGROUPED_LABEL
from utils.person_utils import normalize_id, parse_numeric_id


class ClassGrouping:
    """
    Rotation classes A, B, C... over the numeric id range 1..student_count.

    The range is cut into min(class_count, student_count) partitions as evenly
    as possible; the first `remainder` partitions hold one extra student.
    With 74 students and 3 classes: A = 1-25, B = 26-50, C = 51-74.
    """

    def __init__(self, student_count: int, class_count: int):
        self.student_count = student_count
        self.class_count = class_count

    @property
    def num_classes(self) -> int:
        if self.student_count <= 0 or self.class_count <= 0:
            return 0
        return min(self.class_count, self.student_count, MAX_CLASS_INDEX + 1)

    @property
    def labels(self) -> List[str]:
        return [chr(65 + i) for i in range(self.num_classes)]

    def classify(self, person_id) -> str:
        num = parse_numeric_id(person_id)
        if num is None or num <= 0 or num > self.student_count:
            return UNCLASSIFIED_LABEL
        if self.num_classes == 0:
            return UNCLASSIFIED_LABEL

        base_size, remainder = divmod(self.student_count, self.num_classes)
        large_size = base_size + 1
        large_total = large_size * remainder

        if num <= large_total:
            class_index = (num - 1) // large_size
        else:
            class_index = (num - large_total - 1) // base_size + remainder

        if class_index < 0 or class_index > MAX_CLASS_INDEX:
            return UNCLASSIFIED_LABEL
        return chr(65 + class_index)


class ManualGrouping:
    """Named groups with explicit member lists; the first group listing an id wins."""

    def __init__(self, groups: Sequence[Tuple[str, Sequence[str]]]):
        self.groups = [
            (name.strip(), [normalize_id(m) for m in members if str(m).strip()])
            for name, members in groups
        ]

    @property
    def labels(self) -> List[str]:
        return [name for name, _ in self.groups]

    def classify(self, person_id) -> str:
        key = normalize_id(person_id)
        for name, members in self.groups:
            if key in members:
                return name
        return UNGROUPED_LABEL


def class_range_size(config: GenerationConfig, population: Sequence[str]) -> int:
    """Size of the numeric range split into classes."""
    if config.studentCount:
        return config.studentCount
    numbers = [n for n in (parse_numeric_id(p) for p in population) if n is not None]
    return max(numbers, default=0)


def build_grouping(config: GenerationConfig, population: Optional[Sequence[str]] = None):
    """Return the active grouping scheme for a configuration."""
    if config.isGroupMode:
        return ManualGrouping([(g.name, g.students) for g in config.manualGroups])
    return ClassGrouping(class_range_size(config, population or []), config.classCount)


def members_by_group(grouping, population: Sequence[str]) -> Dict[str, List[str]]:
    """Population ids (as given) per rotation label, in population order."""
    members: Dict[str, List[str]] = {label: [] for label in grouping.labels}
    for person in population:
        label = grouping.classify(person)
        members.setdefault(label, []).append(person)
    return members
