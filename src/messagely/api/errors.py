"""Failure → HTTP response mapping.

Learn: The only place a FailureKind becomes a status code. Route
handlers just let MessagelyError propagate.
"""

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from messagely.errors import STATUS_BY_KIND, FailureKind, MessagelyError

logger = structlog.get_logger()


async def messagely_error_handler(request: Request, exc: MessagelyError) -> JSONResponse:
    status_code = STATUS_BY_KIND[exc.kind]
    headers = None
    if exc.kind is FailureKind.UNAUTHENTICATED:
        headers = {"WWW-Authenticate": "Bearer"}
    if status_code >= 500:
        logger.error("request.failed", kind=exc.kind.value, path=request.url.path)
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)
