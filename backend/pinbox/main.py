from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, File, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from pinbox.config import get_settings
from pinbox.deps import get_pinning_gateway
from pinbox.exception_handlers import register_exception_handlers
from pinbox.exceptions import ValidationError
from pinbox.middleware.logging_filter import configure_logging
from pinbox.middleware.request_id import RequestIdMiddleware
from pinbox.schemas import FetchLinkResponse, HealthResponse, UploadResponse
from pinbox.storage import get_gateway
from pinbox.storage.address import LocalFile
from pinbox.storage.gateway import PinningGateway


settings = get_settings()
log = configure_logging(settings.log_level)

app = FastAPI(title="Pinbox API", version="0.1.0")

app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
register_exception_handlers(app)


@app.on_event("startup")
def _startup() -> None:
    settings.ensure_dirs()
    log.info("startup storage=%s upload_dir=%s", get_gateway().backend_name, settings.upload_dir)


@app.on_event("shutdown")
def _shutdown() -> None:
    get_gateway().close()


@app.get("/health", response_model=HealthResponse)
def health(gateway: PinningGateway = Depends(get_pinning_gateway)):
    return HealthResponse(storage=gateway.backend_name)


def _upload_size(file: UploadFile) -> int:
    if file.size is not None:
        return int(file.size)
    fh = file.file
    pos = fh.tell()
    fh.seek(0, os.SEEK_END)
    size = fh.tell()
    fh.seek(pos)
    return size


@app.post("/api/pinata/upload", response_model=UploadResponse)
def upload(
    file: UploadFile | None = File(None),
    gateway: PinningGateway = Depends(get_pinning_gateway),
):
    if file is None or not file.filename:
        raise ValidationError("file is required")

    size = _upload_size(file)
    log.info("upload_received filename=%s size=%s", file.filename, size)
    if size > settings.max_upload_bytes:
        log.info("upload_rejected too_large size=%s max=%s", size, settings.max_upload_bytes)
        raise ValidationError("file too large", {"maxSize": f"{settings.max_upload_bytes // (1024 * 1024)}MB"})

    address = gateway.store(file.filename, file.file)
    log.info(
        "upload_stored backend=%s filename=%s size=%s address=%s",
        gateway.backend_name,
        file.filename,
        size,
        address,
    )
    return UploadResponse(result=str(address), filename=file.filename, size=size)


@app.get("/api/pinata/fetchHash", response_model=FetchLinkResponse)
def fetch_hash(
    address: str | None = Query(None, alias="hash"),
    gateway: PinningGateway = Depends(get_pinning_gateway),
):
    location = gateway.resolve(address or "")
    if isinstance(location, LocalFile):
        return FileResponse(location.path, filename=os.path.basename(location.path))
    return FetchLinkResponse(link=location.url)
