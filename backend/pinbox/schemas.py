from __future__ import annotations

from pydantic import BaseModel


class UploadResponse(BaseModel):
    result: str
    filename: str
    size: int


class FetchLinkResponse(BaseModel):
    link: str


class HealthResponse(BaseModel):
    status: str = "OK"
    message: str = "Server is running"
    storage: str
