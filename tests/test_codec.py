"""Tests for the Pillow WebP codec."""

import io

import pytest
from PIL import Image, UnidentifiedImageError

from webp_optimizer.core.codec import PillowWebPCodec
from webp_optimizer.testing import create_test_image


@pytest.fixture
def codec():
    return PillowWebPCodec()


def test_decode_returns_loaded_image(codec):
    image = codec.decode(create_test_image(120, 80))
    assert image.size == (120, 80)
    assert image.format == "JPEG"


def test_decode_rejects_non_image(codec):
    with pytest.raises(UnidentifiedImageError):
        codec.decode(b"This is not an image")


def test_decode_rejects_truncated_image(codec):
    data = create_test_image(200, 200, format="PNG")
    with pytest.raises((OSError, SyntaxError)):
        codec.decode(data[: len(data) // 2])


def test_encode_produces_webp(codec):
    encoded = codec.encode(codec.decode(create_test_image(64, 48)), 75)
    assert encoded[:4] == b"RIFF"
    assert encoded[8:12] == b"WEBP"


@pytest.mark.parametrize(
    "mode, format",
    [("RGB", "JPEG"), ("RGB", "PNG"), ("RGBA", "PNG"), ("L", "PNG")],
)
def test_round_trip_preserves_dimensions(codec, mode, format):
    source = create_test_image(150, 90, mode=mode, format=format)
    encoded = codec.encode(codec.decode(source), 75)
    decoded = codec.decode(encoded)
    assert decoded.size == (150, 90)
    assert decoded.format == "WEBP"


@pytest.mark.parametrize("quality", [0, 100])
def test_quality_extremes_produce_decodable_output(codec, quality):
    encoded = codec.encode(codec.decode(create_test_image(200, 150)), quality)
    assert len(encoded) > 0
    assert codec.decode(encoded).size == (200, 150)


def test_transparency_survives_encoding(codec):
    buffer = io.BytesIO()
    Image.new("RGBA", (32, 32), (0, 128, 255, 0)).save(buffer, format="PNG")
    source = buffer.getvalue()
    decoded = codec.decode(codec.encode(codec.decode(source), 75))
    assert decoded.mode == "RGBA"


def test_palette_image_is_encodable(codec):
    buffer = io.BytesIO()
    Image.new("P", (40, 30)).save(buffer, format="GIF")
    decoded = codec.decode(codec.encode(codec.decode(buffer.getvalue()), 75))
    assert decoded.size == (40, 30)
