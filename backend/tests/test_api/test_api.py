"""Tests for API endpoints (verovio replaced by a fake renderer)."""

from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient

from partitura.dependencies import get_transcoder
from partitura.engine.transcoder import Transcoder
from partitura.main import app
from tests.conftest import FIXED_NOW, SCALE_ABC, FakeRenderer


@pytest.fixture
def client():
    renderer = FakeRenderer()
    app.dependency_overrides[get_transcoder] = lambda: Transcoder(renderer=renderer, clock=lambda: FIXED_NOW)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "partitura"


def test_convert(client):
    response = client.post(
        "/api/convert",
        json={"abc_notation": SCALE_ABC, "title": "Scale", "composer": "Bach"},
    )
    assert response.status_code == 200
    data = response.json()
    pdf = base64.b64decode(data["pdf_base64"])
    assert pdf.startswith(b"%PDF-")
    assert data["size_bytes"] == len(pdf)
    assert data["mime_type"] == "application/pdf"
    assert data["message"].startswith("Successfully generated PDF from ABC notation. Size: ")


def test_convert_pdf_bytes(client):
    response = client.post("/api/convert/pdf", json={"abc_notation": SCALE_ABC, "title": "My Scale!"})
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="My_Scale.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF-")


def test_convert_pdf_default_filename(client):
    response = client.post("/api/convert/pdf", json={"abc_notation": SCALE_ABC})
    assert 'filename="music-sheet.pdf"' in response.headers["content-disposition"]


def test_empty_notation_rejected_by_schema(client):
    response = client.post("/api/convert", json={"abc_notation": ""})
    assert response.status_code == 422


def test_whitespace_notation_is_a_validation_error(client):
    response = client.post("/api/convert", json={"abc_notation": "   "})
    assert response.status_code == 400
    assert response.json()["detail"] == "Error: ABC notation cannot be empty"


def test_unsafe_notation(client):
    response = client.post("/api/convert", json={"abc_notation": "javascript:alert(1)"})
    assert response.status_code == 400
    assert "unsafe content" in response.json()["detail"]


def test_conversion_failure(client):
    app.dependency_overrides[get_transcoder] = lambda: Transcoder(renderer=FakeRenderer("<html/>"))
    response = client.post("/api/convert", json={"abc_notation": SCALE_ABC})
    assert response.status_code == 422
    assert response.json()["detail"] == "Error: Failed to generate PDF: Invalid SVG content"
