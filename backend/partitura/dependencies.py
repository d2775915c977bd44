"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from partitura.config import settings
from partitura.engine.transcoder import Transcoder
from partitura.notation.renderer import VerovioRenderer


@lru_cache(maxsize=1)
def get_transcoder() -> Transcoder:
    return Transcoder(renderer=VerovioRenderer(settings))
