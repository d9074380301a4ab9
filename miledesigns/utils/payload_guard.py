from __future__ import annotations

import base64
from dataclasses import dataclass

from miledesigns.core.settings import settings


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content_type: str | None
    data: bytes


class ImageRejected(ValueError):
    """Upload refused before it touches any draft. `reason` is 'unsupported' or 'too_large'."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


def max_image_bytes() -> int:
    return int(settings.UPLOAD_MAX_MB) * 1024 * 1024


def image_to_data_url(upload: ImageUpload) -> str:
    """
    Validates MIME type (image/*) and size (<= UPLOAD_MAX_MB) and returns
    an embeddable data URL for the image.
    """
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    if not content_type.startswith("image/"):
        raise ImageRejected("unsupported", f"{upload.filename or 'File'} is not an image")
    size = len(upload.data)
    limit = max_image_bytes()
    if size > limit:
        raise ImageRejected(
            "too_large",
            f"{upload.filename or 'Image'} is {size / (1024 * 1024):.1f}MB, limit is {settings.UPLOAD_MAX_MB}MB",
        )
    encoded = base64.b64encode(upload.data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
