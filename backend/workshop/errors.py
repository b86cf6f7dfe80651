"""Error taxonomy and the handlers that turn it into JSON responses.

Every failure raised inside an endpoint is mapped at the application boundary
to ``{"error": "<short message>"}`` plus a status code. Details and stack
traces are logged server-side only.

    ValidationError     400  missing or malformed request fields
    NotFoundError       404  unknown id or no matching row
    ConflictError       409  write-once field already set
    SessionClosedError  403  no open session accepts submissions
    EvaluationError     500  the model call failed or returned unusable output
    PersistenceError    500  a database write failed (strict persistence mode only)
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WorkshopError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(WorkshopError):
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(WorkshopError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(WorkshopError):
    status_code = 409
    default_message = "Resource already updated"


class SessionClosedError(WorkshopError):
    status_code = 403
    default_message = "No active session. Submissions are currently closed."


class EvaluationError(WorkshopError):
    status_code = 500
    default_message = "Failed to generate evaluation. Please try again."


class PersistenceError(WorkshopError):
    status_code = 500
    default_message = "Failed to save submission"


async def workshop_error_handler(request: Request, exc: WorkshopError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Report the first problem only, in the same shape as every other error
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = first.get("msg", "invalid value")
        message = f"{location}: {detail}" if location else detail
    return JSONResponse(status_code=400, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WorkshopError, workshop_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
