"""Event-driven WebP transcoder for S3 object-created notifications."""

__version__ = "0.1.0"
