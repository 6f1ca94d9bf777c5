"""HTTP error mapping

Use case errors travel to the client as ``{"error": {"code", "message"}}``.
"""

import logging
from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from src.libs.result import Error

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({
    "LESSON_NOT_FOUND",
    "USER_NOT_FOUND",
    "CUSTOMER_NOT_FOUND",
    "INVOICE_NOT_FOUND",
    "WORKSPACE_NOT_FOUND",
})

CONFLICT_CODES = frozenset({
    "CANCELLATION_TOO_LATE",
    "CANCELLATION_NOT_LATE",
    "INVALID_STATUS_TRANSITION",
    "LESSON_NOT_BILLABLE",
    "LESSON_ALREADY_INVOICED",
    "DUPLICATE_INVOICE_NUMBER",
    "INVOICE_NOT_DRAFT",
    "INVOICE_NUMBER_CONFLICT",
})


def status_code_for(error: Error) -> int:
    if error.code in NOT_FOUND_CODES:
        return status.HTTP_404_NOT_FOUND
    if error.code in CONFLICT_CODES:
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


class ClientError(Exception):
    """Raised by routes to return a use case error to the client"""

    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_code_for(error)


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500 or exc.error.code.endswith("_FAILED"):
        logger.error(
            f"{request.method} {request.url.path} failed with {exc.error.code}: {exc.error.reason}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )
