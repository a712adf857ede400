"""Mapping of domain outcomes to HTTP errors.

All errors use the envelope {"error": {"code": ..., "message": ...}}.
"""

from fastapi import HTTPException, status

from vietcards.domain.value_objects.operation_result import ErrorCode, OperationResult

_STATUS_BY_CODE = {
    ErrorCode.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PERSISTENCE: status.HTTP_502_BAD_GATEWAY,
}


def api_error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"error": {"code": code, "message": message}},
    )


def raise_for_result(result: OperationResult) -> None:
    """Raise the HTTP error matching a failed store operation."""
    if result.success:
        return
    code = result.code or ErrorCode.PERSISTENCE
    raise api_error(_STATUS_BY_CODE[code], code.value.upper(), result.error or "Operation failed")


def raise_for_load_error(load_error: str | None, what: str) -> None:
    """Raise 503 if a store failed its initial load."""
    if load_error is not None:
        raise api_error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "LOAD_FAILED",
            f"Could not load {what}: {load_error}",
        )
