"""Domain value objects - immutable objects without identity."""

from .background_image import BackgroundImage
from .operation_result import ErrorCode, OperationResult
from .session_state import SessionState

__all__ = [
    "BackgroundImage",
    "ErrorCode",
    "OperationResult",
    "SessionState",
]
