"""Custom exceptions for the webp optimizer."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class WebpOptimizerError(Exception):
    """Base exception for all webp optimizer errors."""


class ConfigurationError(WebpOptimizerError):
    """Error raised for invalid configuration options."""


class MalformedRecord(WebpOptimizerError):
    """Error raised when a notification batch cannot be parsed into records.

    This is batch-fatal: the upstream event itself is invalid.
    """


class BlobStoreError(WebpOptimizerError):
    """Error raised for S3 related failures."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class TranscodeStep(str, Enum):
    """The sub-operations of a single record's transcode."""

    FETCH = "fetch"
    DECODE = "decode"
    ENCODE = "encode"
    STORE = "store"


class TranscodeError(WebpOptimizerError):
    """Per-record failure tagged with the step that failed."""

    step: TranscodeStep

    def __init__(
        self,
        container: str,
        source_key: str,
        cause: Optional[BaseException] = None,
    ):
        self.container = container
        self.source_key = source_key
        self.cause = cause
        super().__init__(
            f"{self.step.value} failed for s3://{container}/{source_key}: {cause}"
        )

    @property
    def reason(self) -> str:
        """Short cause description used in skip outcomes."""
        return str(self.cause) if self.cause is not None else self.step.value


class FetchFailed(TranscodeError):
    step = TranscodeStep.FETCH


class DecodeFailed(TranscodeError):
    step = TranscodeStep.DECODE


class EncodeFailed(TranscodeError):
    step = TranscodeStep.ENCODE


class StoreFailed(TranscodeError):
    step = TranscodeStep.STORE


STEP_ERRORS = {
    TranscodeStep.FETCH: FetchFailed,
    TranscodeStep.DECODE: DecodeFailed,
    TranscodeStep.ENCODE: EncodeFailed,
    TranscodeStep.STORE: StoreFailed,
}
