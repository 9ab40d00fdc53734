"""Core utilities and shared components for the webp optimizer."""

from .image_utils import basename, derive_key
from .logging_config import get_logger, setup_logger
from .exceptions import (
    WebpOptimizerError,
    ConfigurationError,
    MalformedRecord,
    BlobStoreError,
    TranscodeStep,
    TranscodeError,
    FetchFailed,
    DecodeFailed,
    EncodeFailed,
    StoreFailed,
)
from .models import (
    BatchResult,
    OutcomeStatus,
    Record,
    RecordOutcome,
    TranscodeConfig,
)
from .events import extract_records
from .services import BatchOrchestrator, ImageTranscoder

__all__ = [
    "TranscodeConfig",
    "Record",
    "RecordOutcome",
    "OutcomeStatus",
    "BatchResult",
    "basename",
    "derive_key",
    "extract_records",
    "ImageTranscoder",
    "BatchOrchestrator",
    "setup_logger",
    "get_logger",
    "WebpOptimizerError",
    "ConfigurationError",
    "MalformedRecord",
    "BlobStoreError",
    "TranscodeStep",
    "TranscodeError",
    "FetchFailed",
    "DecodeFailed",
    "EncodeFailed",
    "StoreFailed",
]
