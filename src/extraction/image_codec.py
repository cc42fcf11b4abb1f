# src/extraction/image_codec.py — v1
"""Turn an uploaded image into the base64 payload sent to the vision model.

The codec does not police the allow-list: an unsupported subtype is passed
through and the provider rejects it, which surfaces as a provider error.
SUPPORTED_SUBTYPES is exported for callers that want to hint the user early.
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path

from glucolens.core.errors import MissingInputError
from glucolens.core.models import EncodedImagePayload, UploadedImage

logger = logging.getLogger(__name__)

SUPPORTED_SUBTYPES: tuple[str, ...] = ("jpeg", "png", "gif", "webp")

FALLBACK_MEDIA_TYPE = "application/octet-stream"

_MIME_MAP: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
}


def encode(image: UploadedImage | None) -> EncodedImagePayload:
    """Encode an upload as base64 text plus its declared media subtype.

    Raises:
        MissingInputError: If no image or an empty image is supplied.
    """
    if image is None or not image.content:
        raise MissingInputError()

    subtype = media_subtype(image.media_type)
    data = base64.b64encode(image.content).decode("ascii")
    logger.debug("Encoded image: subtype=%s, bytes=%d", subtype, image.size)
    return EncodedImagePayload(data=data, subtype=subtype)


def media_subtype(media_type: str) -> str:
    """Return the part of a MIME type after the slash ("jpeg" for "image/jpeg").

    Parameters are dropped; the case is kept as declared.
    """
    essence = media_type.split(";", 1)[0].strip()
    return essence.split("/", 1)[1] if "/" in essence else essence


def is_supported(subtype: str) -> bool:
    return subtype.lower() in SUPPORTED_SUBTYPES


def guess_media_type(filename: str | Path | None) -> str:
    """Media type from a file extension, for uploads that declare none."""
    if not filename:
        return FALLBACK_MEDIA_TYPE
    return _MIME_MAP.get(Path(filename).suffix.lower(), FALLBACK_MEDIA_TYPE)


def resolve_media_type(declared: str | None, filename: str | Path | None) -> str:
    """Declared content type wins; fall back to the extension otherwise."""
    if declared and declared.strip() and declared.strip() != FALLBACK_MEDIA_TYPE:
        return declared.strip()
    return guess_media_type(filename)


def load_image(path: str | Path) -> UploadedImage:
    """Read an image file from disk into an UploadedImage."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Image file not found: {file_path}")
    return UploadedImage(
        content=file_path.read_bytes(),
        media_type=guess_media_type(file_path),
        filename=file_path.name,
    )
