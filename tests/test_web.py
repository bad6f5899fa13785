from __future__ import annotations

import io
import zipfile

import pytest
from fastapi.testclient import TestClient

from svgpack import messages
from svgpack.web import app

from .conftest import PNG_DATA_URL, svg_document


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_status(client):
    response = client.get("/api/status")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_extract_text(client, mixed_svg):
    response = client.post("/api/extract/text", json={"svg": mixed_svg})

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 3
    assert data["message"] == "Successfully extracted 3 images"
    assert [img["index"] for img in data["images"]] == [0, 1, 2]
    assert data["images"][0]["data_url"] == PNG_DATA_URL


def test_extract_text_without_images(client):
    response = client.post("/api/extract/text", json={"svg": svg_document("<rect/>")})
    assert response.json()["message"] == messages.NO_IMAGES_FOUND


def test_extract_text_validation_error(client):
    response = client.post("/api/extract/text", json={"svg": "   "})
    assert response.status_code == 400
    assert response.json()["detail"] == "SVG content is empty"


def test_extract_text_parse_error(client):
    response = client.post("/api/extract/text", json={"svg": "<svg><oops></svg>"})
    assert response.status_code == 400
    assert response.json()["detail"] == messages.PARSE_ERROR


def test_extract_file(client, mixed_svg):
    response = client.post(
        "/api/extract/file",
        files={"file": ("drawing.svg", mixed_svg.encode(), "image/svg+xml")},
    )
    assert response.status_code == 200
    assert response.json()["count"] == 3


def test_extract_file_wrong_type(client):
    response = client.post(
        "/api/extract/file",
        files={"file": ("photo.png", b"\x89PNG", "image/png")},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "File must be an SVG file"


def test_extract_url_invalid(client):
    response = client.post("/api/extract/url", json={"url": "not-a-url"})
    assert response.status_code == 400
    assert response.json()["detail"] == messages.INVALID_URL


def test_extract_url(client, mixed_svg, monkeypatch):
    calls = {}

    async def fake_fetch(url, **kwargs):
        calls["url"] = url
        calls.update(kwargs)
        return mixed_svg

    monkeypatch.setattr("svgpack.web.fetch_svg_from_url", fake_fetch)
    response = client.post("/api/extract/url", json={"url": "https://example.com/a.svg", "retries": 2})

    assert response.status_code == 200
    assert response.json()["count"] == 3
    assert calls["retries"] == 2
    assert calls["timeout_ms"] == 30_000


def test_extract_url_fetch_error(client, monkeypatch):
    from svgpack.errors import FetchError

    async def failing_fetch(url, **kwargs):
        raise FetchError("Request timeout", url)

    monkeypatch.setattr("svgpack.web.fetch_svg_from_url", failing_fetch)
    response = client.post("/api/extract/url", json={"url": "https://example.com/a.svg"})

    assert response.status_code == 502
    assert "timed out" in response.json()["detail"]


def test_extract_url_redirect_loop(client, monkeypatch):
    import httpx

    from svgpack.ingest import fetch_svg_from_url

    def handler(request):
        return httpx.Response(302, headers={"Location": str(request.url)})

    async def looping_fetch(url, **kwargs):
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport, follow_redirects=True) as http:
            return await fetch_svg_from_url(url, client=http, timeout_ms=kwargs["timeout_ms"])

    monkeypatch.setattr("svgpack.web.fetch_svg_from_url", looping_fetch)
    response = client.post("/api/extract/url", json={"url": "https://example.com/a.svg"})

    assert response.status_code == 502
    assert response.json()["detail"] == messages.NETWORK_ERROR


def test_extraction_runs_in_worker_thread(client, mixed_svg, monkeypatch):
    import asyncio

    offloaded = []
    to_thread = asyncio.to_thread

    async def recording_to_thread(func, *args, **kwargs):
        offloaded.append(func.__name__)
        return await to_thread(func, *args, **kwargs)

    monkeypatch.setattr("svgpack.web.asyncio.to_thread", recording_to_thread)
    response = client.post("/api/extract/text", json={"svg": mixed_svg})

    assert response.status_code == 200
    assert offloaded == ["_extract_response"]


def test_archive(client, mixed_svg):
    images = client.post("/api/extract/text", json={"svg": mixed_svg}).json()["images"]

    response = client.post("/api/archive", json={"images": images, "name": "drawing.zip"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert 'filename="drawing.zip"' in response.headers["content-disposition"]
    with zipfile.ZipFile(io.BytesIO(response.content)) as zf:
        assert zf.namelist() == ["image-1.png", "image-2.jpeg", "image-3.gif"]


def test_archive_without_images(client):
    response = client.post("/api/archive", json={"images": []})
    assert response.status_code == 422
    assert response.json()["detail"] == messages.NO_IMAGES_PROVIDED
