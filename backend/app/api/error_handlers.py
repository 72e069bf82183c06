"""Error Handlers — turn exceptions into the {"error": {...}} envelope.

Invariants:
    - BloodBondError → its own http_status and to_response() body
    - RequestValidationError (bad JSON, unknown patch key, wrong type) → 400
      VALIDATION_ERROR listing each offending field by its wire name
    - Anything else → 500 INTERNAL_ERROR; no message, trace or id leaks out

Design Decisions:
    - Handlers are module functions registered with add_exception_handler, so
      main.py only calls register_error_handlers(app)
    - 4xx logged at WARNING, 5xx at ERROR with the traceback
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import BloodBondError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BloodBondError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)


async def handle_domain_error(request: Request, exc: BloodBondError) -> JSONResponse:
    if exc.context.operation is None:
        exc.context.operation = f"{request.method} {request.url.path}"
    if exc.http_status >= 500:
        logger.error(
            exc.message, extra={"error_code": exc.code, "path": request.url.path},
        )
    else:
        logger.warning(
            exc.message, extra={"error_code": exc.code, "path": request.url.path},
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_describe(e) for e in exc.errors()]
    logger.warning(
        f"Rejected payload: {details}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "field": details[0]["field"] if details else None,
                "details": details,
            },
        },
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _describe(error: dict) -> dict:
    # loc is ("body", "requesterEmail") or ("query", "limit"); drop the source.
    location = [str(part) for part in error.get("loc", ())]
    if len(location) > 1 and location[0] in ("body", "query", "path"):
        location = location[1:]
    return {
        "field": ".".join(location),
        "message": error.get("msg", ""),
        "type": error.get("type", ""),
    }
