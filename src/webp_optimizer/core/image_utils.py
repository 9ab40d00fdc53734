"""Image and key utilities for the webp optimizer."""

from typing import Any, Dict

from PIL import Image

from .models import DEFAULT_DERIVATIVE_PREFIX, WEBP_EXTENSION

# Modes the WebP encoder accepts as-is.
WEBP_NATIVE_MODES = ("RGB", "RGBA")


def basename(key: str) -> str:
    """
    Return the last '/'-separated segment of an S3 key.

    A key without '/' is its own basename; a key ending in '/' has an
    empty basename.
    """
    return key.split("/")[-1]


def derive_key(
    source_key: str,
    prefix: str = DEFAULT_DERIVATIVE_PREFIX,
    extension: str = WEBP_EXTENSION,
) -> str:
    """
    Calculate the derivative S3 key for a source key.

    Args:
        source_key: Key of the source object
        prefix: Derivative prefix (defaults to "optimized")
        extension: Target extension appended after the full basename

    Returns:
        Derived key, e.g. "uploads/2024/photo.png" -> "optimized/photo.png.webp"
    """
    return f"{prefix}/{basename(source_key)}.{extension}"


def has_transparency(img: Image.Image) -> bool:
    """Check whether an image carries alpha or a transparent palette entry."""
    if img.mode in ("RGBA", "LA", "PA") or img.mode.endswith("a"):
        return True
    return "transparency" in img.info


def to_webp_mode(img: Image.Image) -> Image.Image:
    """Convert an image to RGB or RGBA so the WebP encoder can store it."""
    if img.mode in WEBP_NATIVE_MODES:
        return img
    if has_transparency(img):
        return img.convert("RGBA")
    if img.mode.startswith("I"):
        # 16/32-bit integer modes do not convert to RGB directly.
        return img.convert("L").convert("RGB")
    return img.convert("RGB")


def describe_image(img: Image.Image) -> Dict[str, Any]:
    """Basic image information for logging."""
    return {
        "width": img.width,
        "height": img.height,
        "format": img.format or "unknown",
        "mode": img.mode,
    }
