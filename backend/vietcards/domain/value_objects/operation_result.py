"""Operation result value object for store mutations."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCode(StrEnum):
    """Why a store operation failed."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Success/failure of a create, update or delete.

    Validation and persistence failures are returned, not raised, so the
    caller decides how to present them.

    Attributes:
        success: Whether the operation succeeded
        data: Resulting entity on success (None for deletes)
        error: Human-readable failure message
        code: Failure category
    """

    success: bool
    data: T | None = None
    error: str | None = None
    code: ErrorCode | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: ErrorCode, error: str) -> "OperationResult[T]":
        return cls(success=False, error=error, code=code)
