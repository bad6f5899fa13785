"""
Svgpack web server.

A FastAPI server exposing extraction and packaging over HTTP. SVG input can
be uploaded, fetched from a URL, or posted as text; extracted images can be
posted back to receive a ZIP archive.

Usage:
    svgpack web                    # Start server on localhost:8000
    svgpack web -p 3000            # Custom port
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from svgpack import __version__, messages
from svgpack.errors import (
    ArchiveError,
    FetchError,
    ParseError,
    SvgpackError,
    ValidationError,
    translate,
)
from svgpack.extract import ImageRecord, extract_images
from svgpack.ingest import FileHandle, fetch_svg_from_url, read_svg_file
from svgpack.package import generate_archive
from svgpack.runtime import get_global_config

logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Models
# =============================================================================


class ImageModel(BaseModel):
    """An extracted image."""

    data_url: str
    format: str
    index: int
    size: int
    id: str

    @classmethod
    def from_record(cls, record: ImageRecord) -> "ImageModel":
        return cls(**record.to_dict())

    def to_record(self) -> ImageRecord:
        return ImageRecord(
            data_url=self.data_url,
            format=self.format,
            index=self.index,
            size=self.size,
            id=self.id,
        )


class ExtractResponse(BaseModel):
    """Images found in an SVG."""

    count: int
    images: list[ImageModel]
    message: str


class UrlRequest(BaseModel):
    """Fetch an SVG from a URL."""

    url: str
    retries: int | None = None
    timeout_ms: int | None = None


class TextRequest(BaseModel):
    """SVG markup posted as text."""

    svg: str


class ArchiveRequest(BaseModel):
    """Images to bundle into a ZIP archive."""

    images: list[ImageModel]
    name: str | None = None


# =============================================================================
# FastAPI App
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """App lifespan handler for startup/shutdown."""
    logger.info("Svgpack server starting...")
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="Svgpack",
    description="Extract embedded images from SVG files",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error kind -> HTTP status
ERROR_STATUS: list[tuple[type[SvgpackError], int]] = [
    (ValidationError, 400),
    (ParseError, 400),
    (FetchError, 502),
    (ArchiveError, 422),
]


@app.exception_handler(SvgpackError)
async def svgpack_error_handler(request: Request, exc: SvgpackError) -> JSONResponse:
    """Translate pipeline errors into user-facing JSON responses."""
    status = next((code for kind, code in ERROR_STATUS if isinstance(exc, kind)), 500)
    return JSONResponse(status_code=status, content={"detail": translate(exc)})


def _extract_response(svg_text: str) -> ExtractResponse:
    images = extract_images(svg_text)
    return ExtractResponse(
        count=len(images),
        images=[ImageModel.from_record(image) for image in images],
        message=messages.images_extracted(len(images)) if images else messages.NO_IMAGES_FOUND,
    )


# =============================================================================
# API Routes
# =============================================================================


@app.get("/api/status")
async def get_status():
    """Get current server status."""
    return {"status": "ok", "version": __version__}


@app.post("/api/extract/file", response_model=ExtractResponse)
async def extract_from_file(file: UploadFile):
    """Extract images from an uploaded SVG file."""
    config = get_global_config()
    data = await file.read()
    handle = FileHandle.from_bytes(file.filename or "", data, file.content_type)
    svg_text = await asyncio.to_thread(read_svg_file, handle, max_size=config.max_file_size)
    return await asyncio.to_thread(_extract_response, svg_text)


@app.post("/api/extract/url", response_model=ExtractResponse)
async def extract_from_url(request: UrlRequest):
    """Fetch an SVG from a URL and extract its images."""
    config = get_global_config()
    svg_text = await fetch_svg_from_url(
        request.url,
        timeout_ms=request.timeout_ms or config.fetch_timeout_ms,
        retries=request.retries if request.retries is not None else config.fetch_retries,
        backoff_ms=config.retry_backoff_ms,
    )
    return await asyncio.to_thread(_extract_response, svg_text)


@app.post("/api/extract/text", response_model=ExtractResponse)
async def extract_from_text(request: TextRequest):
    """Extract images from SVG markup."""
    return await asyncio.to_thread(_extract_response, request.svg)


@app.post("/api/archive")
async def create_archive(request: ArchiveRequest):
    """Bundle images into a ZIP archive and return it as a download."""
    config = get_global_config()
    records = [image.to_record() for image in request.images]

    blob = await asyncio.to_thread(
        generate_archive,
        records,
        compression_level=config.compression_level,
    )

    name = (request.name or config.archive_name).replace("\"", "").replace("\n", "")
    return Response(
        content=blob.data,
        media_type=blob.content_type,
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )


def run_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    """
    Run the web server.

    Args:
        host: Host to bind to
        port: Port to bind to
    """
    import uvicorn

    print(f"Starting Svgpack at http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="warning")
