"""
Exception handlers for FastAPI.

Every failure is rendered as {"error": ..., "message": ...} so the client
can show the server-reported message.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from issueforge.errors import IssueForgeError, StoreError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "owner")


def _validation_message(errors) -> str:
    """Condense pydantic errors into a single human readable message."""
    fields = {str(err["loc"][-1]) for err in errors if err.get("loc")}
    if fields & set(REQUIRED_FIELDS):
        return "Title and Owner are required fields"

    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        parts.append(f"{'.'.join(loc)}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(IssueForgeError)
    async def issueforge_exception_handler(request: Request, exc: IssueForgeError):
        if isinstance(exc, StoreError):
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError(_validation_message(exc.errors()))
        logger.warning(f"{request.method} {request.url.path} rejected: {error.message}")
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        error = IssueForgeError(str(exc) or type(exc).__name__)
        logger.exception(f"{request.method} {request.url.path} failed unexpectedly")
        return JSONResponse(status_code=error.status_code, content=error.to_payload())
