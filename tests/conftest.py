"""Shared fixtures: small SVG documents and image payloads."""

from __future__ import annotations

import base64

import pytest

from svgpack import runtime

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

# 1x1 transparent PNG
PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
# 1x1 GIF
GIF_B64 = "R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7"

PNG_DATA_URL = f"data:image/png;base64,{PNG_B64}"
GIF_DATA_URL = f"data:image/gif;base64,{GIF_B64}"
JPEG_DATA_URL = "data:image/jpeg;base64," + base64.b64encode(b"\xff\xd8\xff\xe0fake-jpeg").decode()


def svg_document(*body: str) -> str:
    """Wrap elements in an <svg> root that declares the SVG and xlink namespaces."""
    return (
        f'<svg xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}" width="100" height="100">'
        + "".join(body)
        + "</svg>"
    )


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch):
    """Keep SVGPACK_* variables and the global config from leaking between tests."""
    for name in list(runtime.ENV_OVERRIDES) + ["SVGPACK_ARCHIVE_NAME"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(runtime, "_global_config", None)
    yield


@pytest.fixture
def mixed_svg():
    """Three embedded images interleaved with two external references."""
    return svg_document(
        f'<image href="{PNG_DATA_URL}" width="10" height="10"/>',
        '<image href="https://example.com/remote.png"/>',
        f'<g><image xlink:href="{JPEG_DATA_URL}"/></g>',
        '<image xlink:href="local/file.png"/>',
        f'<image href="{GIF_DATA_URL}"/>',
    )


@pytest.fixture
def svg_file(tmp_path, mixed_svg):
    path = tmp_path / "drawing.svg"
    path.write_text(mixed_svg, encoding="utf-8")
    return path
