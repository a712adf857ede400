"""Domain error taxonomy."""


class VietcardsError(Exception):
    """Base class for all domain errors."""

    pass


class LoadError(VietcardsError):
    """Raised when the initial card or tip fetch fails.

    The store is left empty and no selection may run against it.
    """

    pass


class ValidationError(VietcardsError):
    """Raised when a draft or patch is missing required fields."""

    pass


class RepositoryError(VietcardsError):
    """Backend create/read/update/delete failed."""

    pass


class NotFoundError(RepositoryError):
    """Raised when an id does not exist in the backend."""

    pass


class InvalidTransitionError(VietcardsError, ValueError):
    """Raised when a session action is not valid in the current state."""

    pass
