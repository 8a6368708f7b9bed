"""
Shared Router Helpers - Audition Judging Platform
judging/routers/common.py

Error responses, the request validation handler and the mapping from
repository exceptions to HTTP errors.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from judging.core.exceptions import (
    CrossTenantAccessException,
    DatabaseConnectionException,
    EntityNotFoundException,
    InvalidStatusTransitionException,
    RepositoryException,
    ScoreAlreadySubmittedException,
    ScoringClosedException,
    TransferFailedException,
)
from judging.models.common import ErrorResponse

logger = structlog.get_logger(__name__)


#  Validation Error Messages


FIELD_MESSAGES = {
    "name": {
        "missing": "Name is required",
        "string_too_short": "Name cannot be empty",
        "string_too_long": "Name must not exceed 255 characters",
        "value_error": "Name must not be blank",
    },
    "date": {
        "missing": "Event date is required",
        "date_from_datetime_parsing": "Event date must be a valid date (YYYY-MM-DD)",
        "date_parsing": "Event date must be a valid date (YYYY-MM-DD)",
        "date_type": "Event date must be a valid date (YYYY-MM-DD)",
    },
    "audition_number": {
        "missing": "Audition number is required",
        "greater_than_equal": "Audition number must not be negative",
        "int_parsing": "Audition number must be a whole number",
        "int_type": "Audition number must be a whole number",
    },
    "status": {
        "enum": "Status must be one of: draft, active, completed, archived",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "string_type": "Field '{field}' must be a string",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "bool_parsing": "Field '{field}' must be true or false",
    "enum": "Field '{field}' has an unsupported value",
    "json_invalid": "Malformed JSON request body",
}


def get_validation_message(field: str, error_type: str) -> str:
    leaf = field.rsplit(".", 1)[-1]
    if leaf in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[leaf]:
            if key in error_type:
                return FIELD_MESSAGES[leaf][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


def _error_content(error_code: str, message: str, details=None) -> dict:
    return ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_content("VALIDATION_ERROR", "Request validation failed"),
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_content("INVALID_REQUEST", "Malformed JSON request body"),
        )
    if loc and loc[0] == "header":
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_content(
                "INVALID_REQUEST",
                f"Missing or invalid header '{loc[-1]}'",
                {"header": str(loc[-1]), "type": error_type},
            ),
        )
    field = ".".join(str(l) for l in loc if l not in ("body", "query", "path"))
    message = get_validation_message(field, error_type)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_content(
            "VALIDATION_ERROR",
            message,
            {"field": field, "type": error_type} if field else None,
        ),
    )


def _not_found_code(entity_type: str) -> str:
    return "_".join(entity_type.upper().split()) + "_NOT_FOUND"


async def repository_exception_handler(request: Request, exc: RepositoryException):
    """Map domain and storage exceptions to ErrorResponse bodies."""
    if isinstance(exc, EntityNotFoundException):
        code, error_code = status.HTTP_404_NOT_FOUND, _not_found_code(exc.entity_type)
        details = {"id": exc.entity_id}
    elif isinstance(exc, CrossTenantAccessException):
        code, error_code = status.HTTP_403_FORBIDDEN, "ACCESS_DENIED"
        details = None
    elif isinstance(exc, ScoreAlreadySubmittedException):
        code, error_code = status.HTTP_409_CONFLICT, "SCORE_ALREADY_SUBMITTED"
        details = {"candidate_id": exc.candidate_id}
    elif isinstance(exc, InvalidStatusTransitionException):
        code, error_code = status.HTTP_409_CONFLICT, "INVALID_STATUS_TRANSITION"
        details = {"current": exc.current, "requested": exc.requested}
    elif isinstance(exc, ScoringClosedException):
        code, error_code = status.HTTP_409_CONFLICT, "SCORING_CLOSED"
        details = {"event_id": exc.event_id, "status": exc.status}
    elif isinstance(exc, TransferFailedException):
        code, error_code = status.HTTP_500_INTERNAL_SERVER_ERROR, "TRANSFER_FAILED"
        details = {"event_id": exc.event_id, "candidate_id": exc.candidate_id}
    elif isinstance(exc, DatabaseConnectionException):
        code, error_code = status.HTTP_503_SERVICE_UNAVAILABLE, "DATABASE_UNAVAILABLE"
        details = None
    else:
        code, error_code = status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR"
        details = None

    log = logger.warning if code < 500 else logger.error
    log(
        "request_failed",
        path=request.url.path,
        status_code=code,
        error_code=error_code,
        error=str(exc),
    )
    return JSONResponse(status_code=code, content=_error_content(error_code, str(exc), details))
