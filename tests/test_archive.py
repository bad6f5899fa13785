from __future__ import annotations

import base64
import io
import logging
import zipfile

import pytest

from svgpack import messages
from svgpack.errors import ArchiveError
from svgpack.extract import ImageRecord, extract_images
from svgpack.package import ZIP_CONTENT_TYPE, generate_archive

from .conftest import GIF_B64, PNG_B64, PNG_DATA_URL


def record(data_url, format="image/png", index=0):
    return ImageRecord(data_url=data_url, format=format, index=index, size=0, id=f"img-{index}")


def entries(blob):
    with zipfile.ZipFile(io.BytesIO(blob.data)) as zf:
        return {info.filename: (zf.read(info.filename), info.compress_type) for info in zf.infolist()}


@pytest.mark.parametrize("images", [[], None])
def test_rejects_missing_input(images):
    with pytest.raises(ArchiveError) as exc_info:
        generate_archive(images)
    assert exc_info.value.message == "No images provided for ZIP generation"


def test_single_image():
    progress = []
    blob = generate_archive([record(PNG_DATA_URL)], progress.append)

    assert blob.content_type == ZIP_CONTENT_TYPE == "application/zip"
    assert blob.size > 0
    assert progress and progress[-1] == 100

    files = entries(blob)
    assert list(files) == ["image-1.png"]
    data, compress_type = files["image-1.png"]
    assert data == base64.b64decode(PNG_B64)
    assert compress_type == zipfile.ZIP_DEFLATED


def test_progress_is_monotonic(mixed_svg):
    progress = []
    generate_archive(extract_images(mixed_svg), progress.append)

    assert progress == sorted(progress)
    assert progress[-1] == 100
    assert all(isinstance(p, int) for p in progress)


def test_records_without_payload_are_dropped_and_renumbered(caplog):
    images = [
        record("data:image/png;base64,", index=0),
        record(f"data:image/gif;base64,{GIF_B64}", format="image/gif", index=1),
        record("data:image/png;base64", index=2),
        record(PNG_DATA_URL, index=3),
    ]
    with caplog.at_level(logging.WARNING, logger="svgpack.package.archive"):
        blob = generate_archive(images)

    assert sorted(entries(blob)) == ["image-1.gif", "image-2.png"]
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2


def test_only_empty_payloads():
    with pytest.raises(ArchiveError) as exc_info:
        generate_archive([record("data:image/png;base64,")])
    assert exc_info.value.message == messages.NO_VALID_IMAGES


def test_accepts_mappings():
    blob = generate_archive([{"data_url": PNG_DATA_URL, "format": "image/png"}])
    assert list(entries(blob)) == ["image-1.png"]


def test_assembly_failure_is_wrapped(caplog):
    with caplog.at_level(logging.ERROR, logger="svgpack.package.archive"):
        with pytest.raises(ArchiveError) as exc_info:
            generate_archive([record("data:image/png;base64,***not-base64***")])

    assert "ZIP generation failed" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert caplog.records


def test_progress_callback_failure_is_wrapped():
    def broken(percent):
        raise RuntimeError("observer exploded")

    with pytest.raises(ArchiveError):
        generate_archive([record(PNG_DATA_URL)], broken)


def test_compression_level_is_configurable():
    payload = base64.b64encode(b"A" * 10_000).decode()
    image = record(f"data:image/bmp;base64,{payload}", format="image/bmp")

    stored = generate_archive([image], compression_level=0)
    deflated = generate_archive([image], compression_level=9)
    assert deflated.size < stored.size
