"""Map pinbox errors to HTTP responses without leaking upstream details."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pinbox.exceptions import (
    NotFoundError,
    PinboxError,
    PinServiceError,
    StorageIOError,
    UpstreamError,
    ValidationError,
)

log = logging.getLogger("pinbox")


async def pinbox_exception_handler(request: Request, exc: PinboxError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        content = {"error": exc.message}
        content.update(exc.details)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    if isinstance(exc, NotFoundError):
        log.info("not_found path=%s", exc.details.get("path"))
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": exc.message})

    if isinstance(exc, UpstreamError):
        log.error("upload_failed upstream status=%s body=%r", exc.status_code, exc.body)
        message = "upload failed"
    elif isinstance(exc, PinServiceError):
        log.error("upload_failed %s: %s details=%s", type(exc).__name__, exc.message, exc.details)
        message = "upload failed"
    elif isinstance(exc, StorageIOError):
        log.error("storage_error %s details=%s", exc.message, exc.details)
        message = "storage error"
    else:
        log.error("unhandled %s: %s", type(exc).__name__, exc.message)
        message = "internal error"

    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # The default 422 body echoes the submitted input; answer with a short 400 instead.
    fields = [str(err.get("loc", ())[-1]) for err in exc.errors() if err.get("loc")]
    log.info("request_invalid path=%s fields=%s", request.url.path, ",".join(fields) or "-")
    message = "file is required" if "file" in fields else "invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PinboxError, pinbox_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
