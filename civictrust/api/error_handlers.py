"""Error Handlers — map ledger rejections, bad requests and crashes to one JSON envelope.

Invariants:
    - Every error body has the shape {"error": {code, message, category, severity, ...}}
    - LedgerError keeps its own http_status (404/403/409/400 domain, 503/500 infrastructure)
    - Request validation failures are 400 with per-field details
    - Unhandled exceptions return 500 and never echo internal details

Design Decisions:
    - Handlers are module-level coroutines registered by register_error_handlers(),
      so main.py only wires them
    - Rejections log at WARNING (INFO for info-severity kinds); 5xx logs at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from civictrust.core.errors import ErrorSeverity, LedgerError

logger = logging.getLogger(__name__)


def _envelope(code: str, message: str, category: str, severity: ErrorSeverity, **extra) -> dict:
    body = {
        "code": code,
        "message": message,
        "category": category,
        "severity": severity.value,
    }
    body.update(extra)
    return {"error": body}


async def handle_ledger_error(request: Request, exc: LedgerError) -> JSONResponse:
    if exc.http_status >= 500:
        level = logging.ERROR
    elif exc.severity == ErrorSeverity.INFO:
        level = logging.INFO
    else:
        level = logging.WARNING
    logger.log(
        level,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "sequence": exc.context.sequence,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected malformed request on {request.url.path}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data", "validation",
            ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred", "internal",
            ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LedgerError, handle_ledger_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
