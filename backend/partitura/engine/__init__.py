"""Partitura vector-to-page transcoding engine."""

from partitura.engine.composer import compose
from partitura.engine.geometry import DrawableArea, PageGeometry, drawable_area, normalize
from partitura.engine.layout import A4_LAYOUT, PageLayout
from partitura.engine.page_engine import PageEngine
from partitura.engine.transcoder import TranscodeResult, Transcoder, pdf_to_base64, transcode

__all__ = [
    "compose",
    "DrawableArea",
    "PageGeometry",
    "drawable_area",
    "normalize",
    "A4_LAYOUT",
    "PageLayout",
    "PageEngine",
    "TranscodeResult",
    "Transcoder",
    "pdf_to_base64",
    "transcode",
]
