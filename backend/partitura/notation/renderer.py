"""Notation renderer — ABC text → SVG text via the verovio toolkit.

A verovio toolkit holds the loaded score as process-wide state, so each
render runs inside ``session()``: one lock-guarded toolkit at a time, torn
down on every exit path.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

import verovio

from partitura.config import Settings, settings
from partitura.errors import RenderError

logger = logging.getLogger(__name__)

_CONTEXT_LOCK = threading.Lock()


class NotationRenderer(Protocol):
    def render(self, notation: str) -> str:
        """Return the SVG text for the first page of ``notation``."""
        ...


class VerovioRenderer:
    """Default renderer. Only the first page is rendered."""

    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or settings

    @property
    def options(self) -> dict[str, Any]:
        return {
            "inputFrom": "abc",
            "pageWidth": self.config.renderer_page_width,
            "scale": self.config.renderer_scale,
            "adjustPageHeight": True,
            "header": "none",
            "footer": "none",
        }

    @contextmanager
    def session(self) -> Iterator[Any]:
        """Acquire an exclusive, configured toolkit; always released."""
        with _CONTEXT_LOCK:
            toolkit = verovio.toolkit()
            try:
                toolkit.setOptions(self.options)
                yield toolkit
            finally:
                del toolkit

    def render(self, notation: str) -> str:
        try:
            with self.session() as toolkit:
                if not toolkit.loadData(notation):
                    raise RenderError("Failed to render ABC notation")
                svg = toolkit.renderToSVG(1)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Failed to convert ABC to SVG: {e}") from e

        if not svg or "<svg" not in svg:
            raise RenderError("No SVG element generated from ABC notation")

        logger.debug("Rendered %d chars of notation into %d chars of SVG", len(notation), len(svg))
        return svg
