"""Pillow-backed image codec producing WebP."""

import io

from PIL import Image

from .image_utils import to_webp_mode


class PillowWebPCodec:
    """Decode any Pillow-supported image and encode it as lossy WebP."""

    format = "WEBP"

    def __init__(self, method: int = 4):
        # Pillow's WebP speed/size trade-off, 0 (fast) to 6 (slow).
        self.method = method

    def decode(self, data: bytes) -> Image.Image:
        """Decode bytes into a fully loaded image.

        Raises PIL.UnidentifiedImageError for unknown formats and OSError
        for truncated or corrupt data.
        """
        image = Image.open(io.BytesIO(data))
        image.load()
        return image

    def encode(self, image: Image.Image, quality: int) -> bytes:
        """Encode an image as WebP at the given quality (0-100)."""
        output_stream = io.BytesIO()
        to_webp_mode(image).save(
            output_stream, format=self.format, quality=quality, method=self.method
        )
        encoded = output_stream.getvalue()
        if not encoded:
            raise ValueError("WebP encoder produced no output")
        return encoded
