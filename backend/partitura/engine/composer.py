"""Page composer — lays out metadata blocks, the scaled score and the footer.

Output is an ordered list of draw instructions; nothing is validated here.
Malformed path data goes through verbatim and fails in the page engine.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import assert_never

from partitura.engine.geometry import PageGeometry, drawable_area, normalize
from partitura.engine.instructions import (
    DrawPath,
    DrawText,
    Instruction,
    PopTransform,
    PushTransform,
    SetDocumentInfo,
)
from partitura.engine.layout import A4_LAYOUT, PageLayout
from partitura.models.options import DEFAULT_AUTHOR, DEFAULT_TITLE, DocumentOptions
from partitura.models.vector_document import PathPrimitive, TextPrimitive, VectorDocument

logger = logging.getLogger(__name__)

SUBJECT = "Sheet Music generated from ABC notation"
KEYWORDS = "music, abc notation, sheet music"


def compose(
    doc: VectorDocument,
    geometry: PageGeometry,
    options: DocumentOptions,
    layout: PageLayout = A4_LAYOUT,
    now: datetime | None = None,
) -> list[Instruction]:
    """Build the draw-instruction sequence for one page.

    `geometry` is the first-pass placement; the score transform comes from
    re-running the normalizer with the height taken by the metadata blocks.
    """
    instructions: list[Instruction] = [
        SetDocumentInfo(
            title=options.title or DEFAULT_TITLE,
            author=options.composer or DEFAULT_AUTHOR,
            subject=SUBJECT,
            keywords=KEYWORDS,
        )
    ]
    center_x = layout.page_width / 2
    consumed = 0.0

    if options.title:
        size = layout.title_font_size
        instructions.append(_block(options.title, center_x, layout.margin + consumed, size, layout))
        consumed += layout.line_height(size) * 1.5

    if options.composer:
        size = layout.composer_font_size
        instructions.append(
            _block(f"Composer: {options.composer}", center_x, layout.margin + consumed, size, layout)
        )
        consumed += layout.line_height(size) * 2

    # Second pass: the score starts right below the metadata blocks
    geometry = normalize(doc.canvas, drawable_area(layout), consumed, layout)

    instructions.append(PushTransform(geometry.offset_x, geometry.offset_y, geometry.scale))
    for primitive in doc.primitives:
        instructions.append(_primitive_instruction(primitive))
    instructions.append(PopTransform())

    stamp = (now or datetime.now()).strftime("%m/%d/%Y, %I:%M:%S %p")
    instructions.append(
        _block(
            f"Generated on {stamp}",
            center_x,
            layout.page_height - layout.margin + layout.footer_offset,
            layout.footer_font_size,
            layout,
        )
    )

    logger.debug(
        "Composed %d instructions (scale=%.3f, offset=(%.1f, %.1f))",
        len(instructions),
        geometry.scale,
        geometry.offset_x,
        geometry.offset_y,
    )
    return instructions


def _block(text: str, x: float, top: float, size: float, layout: PageLayout) -> DrawText:
    return DrawText(
        text=text,
        x=x,
        y=top,
        font_size=size,
        font_family=layout.block_font,
        align="center",
        anchor="top",
    )


def _primitive_instruction(primitive: PathPrimitive | TextPrimitive) -> Instruction:
    if isinstance(primitive, PathPrimitive):
        return DrawPath(
            commands=primitive.commands,
            fill=None if primitive.fill_color == "none" else primitive.fill_color,
            stroke=None if primitive.stroke_color == "none" else primitive.stroke_color,
            stroke_width=primitive.stroke_width,
        )
    if isinstance(primitive, TextPrimitive):
        return DrawText(
            text=primitive.content,
            x=primitive.x,
            y=primitive.y,
            font_size=primitive.font_size,
            font_family=primitive.font_family,
        )
    assert_never(primitive)
