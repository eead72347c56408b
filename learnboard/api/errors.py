"""JSON error envelopes shared by every router.

The dashboard front-end reads `status` on every response:

  {"status": "success", ...}                   — 2xx
  {"status": "fail", "message": "..."}         — 4xx, the client sent bad input
  {"status": "error", "message": "..."}        — 5xx, something broke here

FastAPI's defaults (422 with a `detail` list) do not fit that contract,
so request validation failures are reported as 400 "fail" responses.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

COURSE_IDS_MESSAGE = "courseIds must be a non-empty array"
USER_ID_REQUIRED_MESSAGE = "User ID is required"
INVALID_USER_ID_MESSAGE = "userId must be a positive integer"

# Fields whose validation message is fixed by the API contract.
_FIELD_MESSAGES = {
    "courseIds": COURSE_IDS_MESSAGE,
}


def fail(message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "fail", "message": message},
    )


def _describe(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query")]
        field = loc[0] if loc else ""
        if field in _FIELD_MESSAGES:
            return _FIELD_MESSAGES[field]
        # Missing or non-object body: the only body-taking route is /courses/details.
        if not field and error.get("loc", ())[:1] == ("body",):
            return COURSE_IDS_MESSAGE
        parts.append(f"{'.'.join(loc) or 'request'}: {error.get('msg', 'invalid')}")
    return "; ".join(parts) or "Invalid request"


async def _validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe(exc)
    logger.warning("Rejected request: %s", message)
    return fail(message)


async def _http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        body = {"status": "error", "message": INTERNAL_ERROR_MESSAGE}
    else:
        body = {"status": "fail", "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


async def _unhandled_error(_request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "message": INTERNAL_ERROR_MESSAGE},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error)
