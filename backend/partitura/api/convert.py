"""POST /api/convert — ABC notation → PDF sheet music."""

from __future__ import annotations

import re

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from partitura.dependencies import get_transcoder
from partitura.engine.transcoder import Transcoder, pdf_to_base64
from partitura.errors import ConversionError, ValidationError
from partitura.models.requests import ConvertRequest
from partitura.models.responses import ConvertResponse

router = APIRouter()

_FILENAME_UNSAFE_RE = re.compile(r"[^A-Za-z0-9._-]+")


def _run(req: ConvertRequest, transcoder: Transcoder) -> bytes:
    try:
        return transcoder.transcode(req.abc_notation, req.to_options())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Error: {e}") from e
    except ConversionError as e:
        raise HTTPException(status_code=422, detail=f"Error: {e}") from e


@router.post("/convert", response_model=ConvertResponse)
def convert(req: ConvertRequest, transcoder: Transcoder = Depends(get_transcoder)) -> ConvertResponse:
    pdf = _run(req, transcoder)
    return ConvertResponse(
        pdf_base64=pdf_to_base64(pdf),
        size_bytes=len(pdf),
        message=f"Successfully generated PDF from ABC notation. Size: {round(len(pdf) / 1024)}KB",
    )


@router.post("/convert/pdf")
def convert_pdf(req: ConvertRequest, transcoder: Transcoder = Depends(get_transcoder)) -> Response:
    pdf = _run(req, transcoder)
    filename = _FILENAME_UNSAFE_RE.sub("_", req.title or "").strip("_") or "music-sheet"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}.pdf"'},
    )
