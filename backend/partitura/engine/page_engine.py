"""Page engine — replays draw instructions onto a reportlab canvas.

The canvas runs top-down (``bottomup=0``) so instruction coordinates map
directly; reportlab keeps text upright in that mode. ``invariant=1`` pins
creation date and document ID so identical instructions give identical bytes.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence

import numpy as np
from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas
from svgpathtools import Arc, CubicBezier, Line, QuadraticBezier, parse_path

from partitura.engine.instructions import (
    DrawPath,
    DrawText,
    Instruction,
    PopTransform,
    PushTransform,
    SetDocumentInfo,
)
from partitura.engine.layout import A4_LAYOUT, PageLayout
from partitura.errors import RenderError

logger = logging.getLogger(__name__)

# Arcs are flattened to this many line segments
_ARC_SAMPLES = 16

_FONT_ALIASES = {
    "arial": "Helvetica",
    "helvetica": "Helvetica",
    "verdana": "Helvetica",
    "sans-serif": "Helvetica",
    "times": "Times-Roman",
    "times new roman": "Times-Roman",
    "georgia": "Times-Roman",
    "serif": "Times-Roman",
    "courier": "Courier",
    "courier new": "Courier",
    "monospace": "Courier",
}
_STANDARD_FONTS = {name.lower(): name for name in pdfmetrics.standardFonts}


def resolve_font(family: str) -> str:
    """Map a CSS font-family list onto one of the standard PDF fonts."""
    for name in family.split(","):
        key = name.strip().strip("'\"").lower()
        if key in _STANDARD_FONTS:
            return _STANDARD_FONTS[key]
        if key in _FONT_ALIASES:
            return _FONT_ALIASES[key]
    return "Helvetica"


def resolve_color(value: str) -> colors.Color:
    if value.strip().lower() == "currentcolor":
        return colors.black
    return colors.toColor(value)


class PageEngine:
    """Turns an instruction sequence into a single-page PDF."""

    def render(self, instructions: Sequence[Instruction], layout: PageLayout = A4_LAYOUT) -> bytes:
        buffer = io.BytesIO()
        pdf = canvas.Canvas(
            buffer,
            pagesize=(layout.page_width, layout.page_height),
            bottomup=0,
            invariant=1,
        )
        depth = 0
        try:
            for ins in instructions:
                if isinstance(ins, PushTransform):
                    pdf.saveState()
                    pdf.translate(ins.offset_x, ins.offset_y)
                    pdf.scale(ins.scale, ins.scale)
                    depth += 1
                elif isinstance(ins, PopTransform):
                    if depth == 0:
                        raise RenderError("Transform restored without a matching save")
                    pdf.restoreState()
                    depth -= 1
                elif isinstance(ins, DrawPath):
                    _draw_path(pdf, ins)
                elif isinstance(ins, DrawText):
                    _draw_text(pdf, ins)
                elif isinstance(ins, SetDocumentInfo):
                    pdf.setTitle(ins.title)
                    pdf.setAuthor(ins.author)
                    pdf.setSubject(ins.subject)
                    pdf.setKeywords(ins.keywords)
                else:
                    raise RenderError(f"Unsupported draw instruction: {type(ins).__name__}")
            if depth:
                raise RenderError("Transform left open at end of page")
            pdf.showPage()
            pdf.save()
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(str(e) or type(e).__name__) from e

        data = buffer.getvalue()
        logger.debug("Page engine wrote %d bytes from %d instructions", len(data), len(instructions))
        return data


def _draw_path(pdf: canvas.Canvas, ins: DrawPath) -> None:
    path = _build_path(pdf, ins.commands)
    if ins.fill is not None:
        pdf.setFillColor(resolve_color(ins.fill))
    if ins.stroke is not None:
        pdf.setLineWidth(ins.stroke_width)
        pdf.setStrokeColor(resolve_color(ins.stroke))
    # fill=0, stroke=0 still ends the path with a no-paint operator
    pdf.drawPath(path, stroke=int(ins.stroke is not None), fill=int(ins.fill is not None))


def _build_path(pdf: canvas.Canvas, commands: str):
    """Replay SVG path data as PDF path operators."""
    svg_path = parse_path(commands)
    p = pdf.beginPath()
    for sub in svg_path.continuous_subpaths():
        if len(sub) == 0:
            continue
        p.moveTo(sub.start.real, sub.start.imag)
        for seg in sub:
            if isinstance(seg, Line):
                p.lineTo(seg.end.real, seg.end.imag)
            elif isinstance(seg, CubicBezier):
                p.curveTo(
                    seg.control1.real, seg.control1.imag,
                    seg.control2.real, seg.control2.imag,
                    seg.end.real, seg.end.imag,
                )
            elif isinstance(seg, QuadraticBezier):
                # Degree elevation: quadratic → cubic
                c1 = seg.start + 2 / 3 * (seg.control - seg.start)
                c2 = seg.end + 2 / 3 * (seg.control - seg.end)
                p.curveTo(c1.real, c1.imag, c2.real, c2.imag, seg.end.real, seg.end.imag)
            elif isinstance(seg, Arc):
                for t in np.linspace(0, 1, _ARC_SAMPLES + 1)[1:]:
                    pt = seg.point(t)
                    p.lineTo(pt.real, pt.imag)
            else:
                raise RenderError(f"Unsupported path segment: {type(seg).__name__}")
        if sub.isclosed():
            p.close()
    return p


def _draw_text(pdf: canvas.Canvas, ins: DrawText) -> None:
    font = resolve_font(ins.font_family)
    pdf.setFillColor(colors.black)
    pdf.setFont(font, ins.font_size)
    y = ins.y
    if ins.anchor == "top":
        y += pdfmetrics.getAscent(font, ins.font_size)
    if ins.align == "center":
        pdf.drawCentredString(ins.x, y, ins.text)
    else:
        pdf.drawString(ins.x, y, ins.text)
