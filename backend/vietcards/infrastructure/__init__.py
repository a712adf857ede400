"""Infrastructure layer - retry and scheduling utilities."""

from .retry import PermanentError, TransientError, with_retry
from .scheduler import PeriodicTask

__all__ = [
    "PeriodicTask",
    "PermanentError",
    "TransientError",
    "with_retry",
]
