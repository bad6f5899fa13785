"""Base types for SVG image extraction."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass


DATA_IMAGE_PREFIX = "data:image/"


@dataclass(frozen=True)
class ImageRecord:
    """An image embedded in an SVG document as a base64 data URL."""

    data_url: str  # data:<mime>;base64,<payload>
    format: str  # MIME type, e.g. 'image/png'
    index: int  # position among embedded images, document order
    size: int  # estimated decoded size in bytes
    id: str

    @classmethod
    def from_data_url(cls, data_url: str, index: int, id: str) -> "ImageRecord":
        """
        Build a record from a data URL.

        The size is estimated from the payload length (3 bytes per 4 base64
        characters) without correcting for padding.

        Raises:
            ValueError: If the data URL is malformed
        """
        if not data_url.startswith(DATA_IMAGE_PREFIX):
            raise ValueError(f"Not an embedded image data URL: {data_url[:32]!r}")

        header, sep, _ = data_url.partition(";")
        if not sep:
            raise ValueError("Malformed data URL: missing ';' after MIME type")

        mime = header[len("data:"):]
        if mime == DATA_IMAGE_PREFIX[len("data:"):]:
            raise ValueError("Malformed data URL: empty image subtype")
        if "," in mime:
            raise ValueError("Malformed data URL: payload before parameters")

        return cls(
            data_url=data_url,
            format=mime,
            index=index,
            size=estimate_size(payload_of(data_url)),
            id=id,
        )

    @property
    def payload(self) -> str:
        """The base64 payload after the first comma."""
        return payload_of(self.data_url)

    def to_dict(self) -> dict[str, object]:
        return {
            "data_url": self.data_url,
            "format": self.format,
            "index": self.index,
            "size": self.size,
            "id": self.id,
        }


def payload_of(data_url: str | None) -> str:
    """Return the text after the first comma of a data URL, or ''."""
    if not data_url:
        return ""
    _, _, payload = data_url.partition(",")
    return payload


def estimate_size(payload: str) -> int:
    """Estimate decoded byte length from a base64 payload length."""
    return len(payload) * 3 // 4


def decode_payload(data_url: str | None) -> bytes:
    """
    Decode the base64 payload of a data URL.

    Whitespace inside the payload (line-wrapped base64) is ignored and
    missing padding is restored.

    Raises:
        ValueError: If the payload is not valid base64
    """
    payload = "".join(payload_of(data_url).split())
    payload += "=" * (-len(payload) % 4)
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
