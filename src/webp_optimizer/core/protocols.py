"""Protocol definitions for dependency injection and testability."""

from typing import Any, Dict, Optional, Protocol

from PIL import Image


class S3ClientProtocol(Protocol):
    """Protocol for the S3 client operations the blob store needs."""

    def get_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        """Get object from S3."""
        ...

    def put_object(
        self, Bucket: str, Key: str, Body: bytes, ContentType: str
    ) -> Dict[str, Any]:
        """Put object to S3."""
        ...


class BlobStoreProtocol(Protocol):
    """Fetch and store object bytes by (container, key)."""

    def get(self, container: str, key: str) -> bytes:
        ...

    def put(self, container: str, key: str, data: bytes, content_type: str) -> None:
        ...


class ImageCodecProtocol(Protocol):
    """Decode image bytes to pixels and encode pixels to the target format."""

    def decode(self, data: bytes) -> Image.Image:
        ...

    def encode(self, image: Image.Image, quality: int) -> bytes:
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log error message."""
        ...
