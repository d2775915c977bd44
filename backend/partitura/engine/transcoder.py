"""Transcoder façade — ABC notation in, finished PDF bytes out.

validate → render → parse → normalize → compose → page engine, strictly in
sequence. Validation errors surface as-is; any later failure is wrapped in a
single ConversionError naming the stage. A document is returned whole or not
at all.
"""

from __future__ import annotations

import base64
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from partitura.engine.composer import compose
from partitura.engine.geometry import drawable_area, normalize
from partitura.engine.layout import A4_LAYOUT, PageLayout
from partitura.engine.page_engine import PageEngine
from partitura.errors import ConversionError
from partitura.models.options import DocumentOptions
from partitura.notation.renderer import NotationRenderer, VerovioRenderer
from partitura.notation.validator import validate_notation
from partitura.svg.parser import parse_svg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscodeResult:
    pdf: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.pdf)


class Transcoder:
    """Single entry point for one ABC → PDF conversion."""

    def __init__(
        self,
        renderer: NotationRenderer | None = None,
        engine: PageEngine | None = None,
        layout: PageLayout = A4_LAYOUT,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.renderer = renderer or VerovioRenderer()
        self.engine = engine or PageEngine()
        self.layout = layout
        self.clock = clock

    def transcode(self, notation: str, options: DocumentOptions | None = None) -> bytes:
        validate_notation(notation)
        options = options or DocumentOptions()
        logger.info("Transcoding %d chars of notation", len(notation))

        svg = self._stage("render", self.renderer.render, notation)
        doc = self._stage("parse", parse_svg, svg)
        # First pass: nothing placed above the score yet
        geometry = self._stage("normalize", normalize, doc.canvas, drawable_area(self.layout), 0.0, self.layout)
        now = self.clock() if self.clock else None
        instructions = self._stage("compose", compose, doc, geometry, options, self.layout, now)
        pdf = self._stage("finalize", self.engine.render, instructions, self.layout)

        logger.info("Generated PDF: %d bytes, %d primitives", len(pdf), len(doc.primitives))
        return pdf

    def transcode_to_result(self, notation: str, options: DocumentOptions | None = None) -> TranscodeResult:
        return TranscodeResult(pdf=self.transcode(notation, options))

    def _stage(self, stage: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except Exception as e:
            logger.warning("Stage %s failed: %s", stage, e)
            raise ConversionError(stage, str(e)) from e


def pdf_to_base64(pdf: bytes) -> str:
    return base64.b64encode(pdf).decode("ascii")


_default_transcoder: Transcoder | None = None
_default_lock = threading.Lock()


def transcode(notation: str, options: DocumentOptions | None = None) -> bytes:
    """Convert with a shared default Transcoder (verovio + reportlab)."""
    global _default_transcoder
    with _default_lock:
        if _default_transcoder is None:
            _default_transcoder = Transcoder()
    return _default_transcoder.transcode(notation, options)
