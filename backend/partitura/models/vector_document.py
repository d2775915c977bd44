"""Parsed vector document model: canvas record plus typed drawable primitives."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

DEFAULT_CANVAS_WIDTH = 600.0
DEFAULT_CANVAS_HEIGHT = 800.0


class CanvasMetadata(BaseModel):
    """Declared canvas box of the source SVG. Never drawn."""

    model_config = {"frozen": True}

    view_box: str | None = None
    width: float = DEFAULT_CANVAS_WIDTH
    height: float = DEFAULT_CANVAS_HEIGHT


class PathPrimitive(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["path"] = "path"
    commands: str
    stroke_color: str = "#000000"
    stroke_width: float = Field(default=1.0, ge=0)
    fill_color: str = "none"


class TextPrimitive(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["text"] = "text"
    content: str
    x: float = 0.0
    y: float = 0.0
    font_size: float = Field(default=12.0, gt=0)
    font_family: str = "Arial"


VectorPrimitive = Annotated[Union[PathPrimitive, TextPrimitive], Field(discriminator="kind")]


class VectorDocument(BaseModel):
    """Immutable result of one parse; primitives are in paint order."""

    model_config = {"frozen": True}

    canvas: CanvasMetadata = Field(default_factory=CanvasMetadata)
    primitives: tuple[VectorPrimitive, ...] = ()

    def records(self) -> Iterator[CanvasMetadata | PathPrimitive | TextPrimitive]:
        """Yield the canvas record first, then every primitive in parse order."""
        yield self.canvas
        yield from self.primitives

    @property
    def path_count(self) -> int:
        return sum(1 for p in self.primitives if isinstance(p, PathPrimitive))

    @property
    def text_count(self) -> int:
        return sum(1 for p in self.primitives if isinstance(p, TextPrimitive))
