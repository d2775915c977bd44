"""Scale-to-fit and centering of the source canvas inside the drawable area."""

from __future__ import annotations

from dataclasses import dataclass

from partitura.engine.layout import A4_LAYOUT, PageLayout
from partitura.models.vector_document import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    CanvasMetadata,
)


@dataclass(frozen=True)
class DrawableArea:
    width: float
    height: float


@dataclass(frozen=True)
class PageGeometry:
    """Uniform scale in (0, 1] plus the top-left origin of the scaled score."""

    scale: float
    offset_x: float
    offset_y: float


def drawable_area(layout: PageLayout = A4_LAYOUT) -> DrawableArea:
    """Page area left after margins and the reserved header height."""
    return DrawableArea(
        width=layout.page_width - 2 * layout.margin,
        height=layout.page_height - 2 * layout.margin - layout.header_height,
    )


def normalize(
    canvas: CanvasMetadata,
    drawable: DrawableArea,
    consumed_height: float = 0.0,
    layout: PageLayout = A4_LAYOUT,
) -> PageGeometry:
    """Fit ``canvas`` into ``drawable`` without ever magnifying it.

    ``consumed_height`` is the vertical space already taken by title and
    composer blocks; the score starts right below them.
    """
    width = canvas.width if canvas.width > 0 else DEFAULT_CANVAS_WIDTH
    height = canvas.height if canvas.height > 0 else DEFAULT_CANVAS_HEIGHT

    scale = min(drawable.width / width, drawable.height / height, 1.0)

    return PageGeometry(
        scale=scale,
        offset_x=layout.margin + (drawable.width - width * scale) / 2,
        offset_y=layout.margin + consumed_height,
    )
