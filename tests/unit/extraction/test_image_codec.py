# tests/unit/extraction/test_image_codec.py — v1
"""Tests for extraction/image_codec.py — base64 payload and media subtype."""

from __future__ import annotations

import base64

import pytest

from glucolens.core.errors import MissingInputError
from glucolens.core.models import UploadedImage
from glucolens.extraction.image_codec import (
    FALLBACK_MEDIA_TYPE,
    SUPPORTED_SUBTYPES,
    encode,
    guess_media_type,
    is_supported,
    load_image,
    media_subtype,
    resolve_media_type,
)


class TestEncode:
    @pytest.mark.parametrize("subtype", ["jpeg", "png", "gif", "webp"])
    def test_subtype_matches_declared(self, subtype):
        image = UploadedImage(content=b"\x00\x01\x02", media_type=f"image/{subtype}")
        payload = encode(image)
        assert payload.subtype == subtype
        assert payload.media_type == f"image/{subtype}"

    def test_base64_of_content(self, fake_jpeg):
        payload = encode(fake_jpeg)
        assert base64.b64decode(payload.data) == fake_jpeg.content

    def test_deterministic(self, fake_jpeg):
        assert encode(fake_jpeg) == encode(fake_jpeg)

    def test_none_raises_missing_input(self):
        with pytest.raises(MissingInputError):
            encode(None)

    def test_empty_content_raises_missing_input(self):
        with pytest.raises(MissingInputError):
            encode(UploadedImage(content=b"", media_type="image/png"))

    def test_unsupported_subtype_passes_through(self):
        payload = encode(UploadedImage(content=b"BM", media_type="image/bmp"))
        assert payload.subtype == "bmp"


class TestMediaSubtype:
    def test_strips_parameters(self):
        assert media_subtype("image/png; charset=binary") == "png"

    def test_keeps_declared_case(self):
        assert media_subtype("image/JPEG") == "JPEG"
        assert encode(UploadedImage(content=b"\xff\xd8", media_type="image/JPEG")).subtype == "JPEG"

    def test_no_slash(self):
        assert media_subtype("jpeg") == "jpeg"


class TestMediaTypeGuessing:
    def test_extension_map(self):
        assert guess_media_type("curve.JPG") == "image/jpeg"
        assert guess_media_type("curve.webp") == "image/webp"

    def test_unknown_extension(self):
        assert guess_media_type("curve.tiff") == FALLBACK_MEDIA_TYPE

    def test_no_filename(self):
        assert guess_media_type(None) == FALLBACK_MEDIA_TYPE

    def test_declared_wins(self):
        assert resolve_media_type("image/gif", "curve.png") == "image/gif"

    def test_octet_stream_falls_back_to_extension(self):
        assert resolve_media_type("application/octet-stream", "curve.png") == "image/png"

    def test_missing_declared_type(self):
        assert resolve_media_type(None, "curve.gif") == "image/gif"


class TestSupported:
    def test_allow_list(self):
        assert SUPPORTED_SUBTYPES == ("jpeg", "png", "gif", "webp")
        assert is_supported("PNG")
        assert not is_supported("bmp")


class TestLoadImage:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "curve.png"
        path.write_bytes(b"\x89PNG_FAKE")
        image = load_image(path)
        assert image.content == b"\x89PNG_FAKE"
        assert image.media_type == "image/png"
        assert image.filename == "curve.png"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "nope.png")
