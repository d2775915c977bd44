"""Caller-supplied document options."""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_TITLE = "Music Sheet"
DEFAULT_AUTHOR = "Unknown"


class DocumentOptions(BaseModel):
    model_config = {"frozen": True}

    title: str | None = None
    composer: str | None = None
