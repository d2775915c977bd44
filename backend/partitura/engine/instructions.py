"""Draw instructions handed from the composer to the page engine.

Coordinates are PDF points with a top-left origin and y growing downward.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union


@dataclass(frozen=True)
class SetDocumentInfo:
    title: str
    author: str
    subject: str
    keywords: str


@dataclass(frozen=True)
class DrawText:
    text: str
    x: float
    y: float
    font_size: float
    font_family: str
    align: Literal["left", "center"] = "left"
    # "top": y is the top edge of the line box; "baseline": y is the SVG baseline
    anchor: Literal["top", "baseline"] = "baseline"


@dataclass(frozen=True)
class PushTransform:
    """Translate by (offset_x, offset_y), then scale uniformly."""

    offset_x: float
    offset_y: float
    scale: float


@dataclass(frozen=True)
class DrawPath:
    commands: str
    # None means the paint is not applied
    fill: str | None
    stroke: str | None
    stroke_width: float = 1.0


@dataclass(frozen=True)
class PopTransform:
    pass


Instruction = Union[SetDocumentInfo, DrawText, PushTransform, DrawPath, PopTransform]
