class ConfigurationError(Exception):
    """Raised when the roster configuration cannot produce a schedule. Checked before generation starts."""

    pass


class EmptyPopulationError(ConfigurationError):
    """Raised when no students are left to schedule."""

    pass


class EmptyPostListError(ConfigurationError):
    """Raised when no service posts are configured."""

    pass


class PostSlotMismatchError(ConfigurationError):
    """Raised when the number of posts and the number of slot counts differ."""

    pass


class InvalidSlotCountError(ConfigurationError):
    """Raised when a post declares a negative slot count."""

    pass


class InsufficientPopulationError(ConfigurationError):
    """Raised when a day needs more people than the population holds (class-rotation mode)."""

    pass


class CyclePostNotFoundError(ConfigurationError):
    """Raised when the reduction cycle targets a post that is not configured."""

    pass


class MissingGroupMembersError(ConfigurationError):
    """Raised when a rotation class has no members in the population."""

    pass


class UnclassifiedStudentError(ConfigurationError):
    """Raised when students cannot be placed in any rotation class."""


class InvalidGroupConfigError(ConfigurationError):
    """Raised when group mode is active without usable manual groups."""
