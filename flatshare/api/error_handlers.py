"""Global exception handlers.

Every error leaves the API as ``{statusCode, message, error, timestamp, path}``.
Messages come from the catalog in flatshare.errors for the configured locale.
"""

import logging
from http import HTTPStatus
from typing import Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from flatshare.config import settings
from flatshare.database import is_missing_table_error
from flatshare.errors import DomainError, ErrorCode, message_for
from flatshare.utils.dates import utcnow

logger = logging.getLogger(__name__)

_KNOWN_CODES = {code.value: code for code in ErrorCode}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        logger.warning("%s on %s %s", exc.code.name, request.method, request.url.path)
        return error_response(request, exc.http_status, message_for(exc.code, settings.locale))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = validation_details(exc.errors())
        logger.warning("Validation error on %s: %s", request.url.path, details)
        messages = list(dict.fromkeys(d["message"] for d in details))
        return error_response(request, status.HTTP_400_BAD_REQUEST, messages, details=details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(request, exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        if is_missing_table_error(exc):
            logger.error("Missing table on %s: %s", request.url.path, exc)
            code = ErrorCode.SERVER_SCHEMA_MISSING
        else:
            logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
            code = ErrorCode.SERVER_INTERNAL_ERROR
        return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message_for(code, settings.locale))


def error_response(
    request: Request,
    status_code: int,
    message: Union[str, list[str]],
    details: list[dict] | None = None,
) -> JSONResponse:
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        phrase = "Error"
    content = {
        "statusCode": status_code,
        "message": message,
        "error": phrase,
        "timestamp": utcnow().isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "path": request.url.path,
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _code_for(error: dict) -> ErrorCode:
    error_type = error.get("type", "")
    if error_type in _KNOWN_CODES:
        return _KNOWN_CODES[error_type]
    if error_type.startswith(("datetime", "date")):
        return ErrorCode.VALIDATION_DATE_INVALID
    return ErrorCode.VALIDATION_FIELD_REQUIRED


def validation_details(errors) -> list[dict]:
    """One entry per failing field, with the catalog message for its error."""
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({
            "field": ".".join(loc),
            "message": message_for(_code_for(error), settings.locale),
        })
    return details
