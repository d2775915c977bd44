"""API response models."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "partitura"
    version: str = "0.1.0"


class ConvertResponse(BaseModel):
    pdf_base64: str
    mime_type: str = "application/pdf"
    size_bytes: int
    message: str = ""
