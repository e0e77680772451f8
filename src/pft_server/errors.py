"""Exception handlers installed on the PFT API.

The engine does not raise for incomplete or garbled measurements, so these
handlers only see request-level problems: batch size checks raise
``ValueError`` and grading table lookups raise ``KeyError``.  Clients get a
fixed message per status code; the original message goes to the log.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# (fragment of the ValueError message, status); first match wins, else 400
_BATCH_ERROR_STATUS: list[tuple[str, int]] = [
    ("exceeds limit", 413),
    ("no records", 400),
]

_CLIENT_DETAIL: dict[int, str] = {
    400: "Invalid request",
    404: "Resource not found",
    413: "Too many records in batch",
    500: "Internal server error",
}


def _status_for(message: str) -> int:
    lowered = message.lower()
    for fragment, status in _BATCH_ERROR_STATUS:
        if fragment in lowered:
            return status
    return 400


def _error_response(status: int) -> JSONResponse:
    return JSONResponse(status_code=status, content={"detail": _CLIENT_DETAIL[status]})


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """``ValueError`` -> 400, or 413 when a batch is over the size limit."""
    status = _status_for(str(exc))
    logger.warning("Rejected %s %s [%d]: %s", request.method, request.url.path, status, exc)
    return _error_response(status)


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Unknown grading table name -> 404."""
    logger.warning("Lookup failed for %s: %s", request.url.path, exc)
    return _error_response(404)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500)
