"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from partitura.models.options import DocumentOptions


class ConvertRequest(BaseModel):
    abc_notation: str = Field(..., min_length=1, description="The ABC notation string to convert to PDF")
    title: str | None = Field(default=None, description="Optional title for the PDF document")
    composer: str | None = Field(default=None, description="Optional composer name for the PDF document")

    def to_options(self) -> DocumentOptions:
        return DocumentOptions(title=self.title, composer=self.composer)
