from typing import Sequence

from exceptions.custom_errors import (
    CyclePostNotFoundError,
    EmptyPopulationError,
    EmptyPostListError,
    InsufficientPopulationError,
    InvalidGroupConfigError,
    InvalidSlotCountError,
    MissingGroupMembersError,
    PostSlotMismatchError,
    UnclassifiedStudentError,
)
from schemas.schedule.generate import GenerationConfig
from utils.constants import INVALID_CLASS_LABEL, UNCLASSIFIED_LABEL
from utils.person_utils import id_sort_key


def validate_config(config: GenerationConfig, population: Sequence[str], grouping) -> None:
    """
    Check a configuration before any day is generated.

    Args:
        config (GenerationConfig): The run configuration.
        population (Sequence[str]): Students left after exclusions.
        grouping: The active grouping scheme (classes or manual groups).

    Raises:
        InvalidGroupConfigError: Group mode without any manual group.
        EmptyPopulationError: No students to schedule.
        EmptyPostListError: No service posts.
        PostSlotMismatchError: Posts and slot counts differ in length.
        InvalidSlotCountError: A slot count is negative.
        CyclePostNotFoundError: The reduction cycle targets an unknown post.
        UnclassifiedStudentError: Class mode with ids outside the class range.
        MissingGroupMembersError: Class mode with an empty class.
        InsufficientPopulationError: Class mode with more daily slots than students.
    """
    if config.isGroupMode and not config.manualGroups:
        raise InvalidGroupConfigError(
            "Group mode is active but no manual groups are defined. Add groups or switch group mode off."
        )

    if not population:
        raise EmptyPopulationError(
            "The student list is empty. Add students or reduce the exclusion list."
        )

    if not config.servicePosts:
        raise EmptyPostListError("The service post list cannot be empty.")

    if len(config.servicePosts) != len(config.slots):
        raise PostSlotMismatchError(
            f"The number of posts ({len(config.servicePosts)}) must match "
            f"the number of slot counts ({len(config.slots)})."
        )

    negative = [
        f"{post} ({count})"
        for post, count in zip(config.servicePosts, config.slots)
        if count < 0
    ]
    if negative:
        raise InvalidSlotCountError(
            f"Slot counts cannot be negative: {', '.join(negative)}."
        )

    if config.isCycleEnabled:
        target = config.cyclePostToRemove.strip().upper()
        posts = [p.strip().upper() for p in config.servicePosts]
        if target not in posts:
            raise CyclePostNotFoundError(
                f"The reduction cycle post {config.cyclePostToRemove!r} does not match any "
                f"configured post ({', '.join(posts)})."
            )

    if config.isGroupMode:
        return

    unclassified = [p for p in population if grouping.classify(p) == UNCLASSIFIED_LABEL]
    if unclassified:
        listed = ", ".join(sorted(unclassified, key=id_sort_key))
        raise UnclassifiedStudentError(
            f"Class {INVALID_CLASS_LABEL} for students that are not numeric or are outside "
            f"the range 1-{grouping.student_count}: {listed}."
        )

    classified = {grouping.classify(p) for p in population}
    missing = [label for label in grouping.labels if label not in classified]
    if missing:
        raise MissingGroupMembersError(
            f"The student list must contain members of every class "
            f"({', '.join(grouping.labels)}); no students in: {', '.join(missing)}."
        )

    daily_slots = sum(config.slots)
    if daily_slots > len(population):
        raise InsufficientPopulationError(
            f"Posts need {daily_slots} students per day but only {len(population)} "
            f"are available. Reduce the slots or add students."
        )
