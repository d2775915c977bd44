"""Error kinds raised along the ABC → SVG → PDF pipeline.

All errors are request-scoped. Messages never echo the notation text back.
"""

from __future__ import annotations


class TranscoderError(Exception):
    """Base class for every error raised by the transcoder."""


class ValidationError(TranscoderError):
    """Notation is empty or contains unsafe content. Never retried."""


class RenderError(TranscoderError):
    """The notation renderer or the page engine could not draw its input."""


class ParseError(TranscoderError):
    """The vector document has no recognizable ``<svg>`` root."""


class ConversionError(TranscoderError):
    """A pipeline stage failed; carries the stage name and the cause's message."""

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"Failed to generate PDF: {message}")
        self.stage = stage
        self.reason = message
