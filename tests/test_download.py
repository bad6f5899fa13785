from __future__ import annotations

import base64

import pytest

from svgpack.download import download_single_image, image_bytes, save_blob
from svgpack.extract import extract_images
from svgpack.package import generate_archive

from .conftest import GIF_B64, PNG_B64


def test_download_single_image_uses_filename_policy(tmp_path, mixed_svg):
    images = extract_images(mixed_svg)

    path = download_single_image(images[2], tmp_path)

    assert path == tmp_path / "image-3.gif"
    assert path.read_bytes() == base64.b64decode(GIF_B64)


def test_download_single_image_custom_name(tmp_path, mixed_svg):
    image = extract_images(mixed_svg)[0]
    path = download_single_image(image, tmp_path / "nested", "logo.png")

    assert path == tmp_path / "nested" / "logo.png"
    assert path.read_bytes() == image_bytes(image) == base64.b64decode(PNG_B64)


def test_save_blob(tmp_path, mixed_svg):
    blob = generate_archive(extract_images(mixed_svg))
    path = save_blob(blob, "images.zip", tmp_path)

    assert path.read_bytes() == blob.data
    assert save_blob(b"raw", "raw.bin", tmp_path).read_bytes() == b"raw"


def test_invalid_payload(tmp_path):
    from svgpack.extract import ImageRecord

    image = ImageRecord("data:image/png;base64,@@@@", "image/png", 0, 3, "x")
    with pytest.raises(ValueError):
        download_single_image(image, tmp_path)
