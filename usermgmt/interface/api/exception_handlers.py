"""Exception handlers for the FastAPI application.

Domain errors are mapped to HTTP responses by their error code, with a
consistent body:

    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }
"""

import logging
import math

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from usermgmt.domain.error import DomainError, ErrorCode, VoteCooldownError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_CODE = "REQUEST_TIMEOUT"
INTERNAL_ERROR_CODE = "INTERNAL_ERROR"

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NO_RECORD_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EMAIL_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.VOTE_COOLDOWN: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.INSERTION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.STORAGE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_error_response(
    status_code: int,
    message: str,
    code: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance
    """

    @app.exception_handler(DomainError)
    async def domain_exception_handler(
        request: Request,
        exc: DomainError,
    ) -> JSONResponse:
        """Render a domain error with the status mapped from its code."""
        status_code = ERROR_CODE_TO_STATUS.get(
            exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
        )

        log = logger.error if status_code >= 500 else logger.warning
        log(
            "Domain error on %s %s: %s (code=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
        )

        headers = None
        if isinstance(exc, VoteCooldownError):
            retry_after = max(math.ceil(exc.retry_after.total_seconds()), 1)
            headers = {"Retry-After": str(retry_after)}

        return create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for anything the domain handler did not render."""
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An unexpected error occurred",
            code=INTERNAL_ERROR_CODE,
        )
