"""Shared data models for the webp optimizer."""

import os
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError, TranscodeStep

DEFAULT_QUALITY = 75
DEFAULT_DERIVATIVE_PREFIX = "optimized"
WEBP_EXTENSION = "webp"
WEBP_CONTENT_TYPE = "image/webp"

_TRUE_VALUES = ("1", "true", "yes", "on")


class TranscodeConfig(BaseModel):
    """Configuration for a transcoding run."""

    quality: int = Field(DEFAULT_QUALITY, ge=0, le=100)
    derivative_prefix: str = DEFAULT_DERIVATIVE_PREFIX
    target_extension: str = WEBP_EXTENSION
    content_type: str = WEBP_CONTENT_TYPE
    max_workers: int = Field(1, ge=1)
    unquote_keys: bool = True
    debug: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> "TranscodeConfig":
        """
        Build a config from environment variables.

        Environment Variables:
            WEBP_QUALITY: Encoder quality, 0-100 (default 75)
            DERIVATIVE_PREFIX: Key prefix for derivatives (default "optimized")
            MAX_WORKERS: Records processed concurrently (default 1)
            UNQUOTE_KEYS: URL-decode event keys before use (default true)
            DEBUG: Enable debug logging

        Keyword overrides that are not None take precedence over the environment.
        """
        values: Dict[str, Any] = {}
        env_map = {
            "quality": "WEBP_QUALITY",
            "derivative_prefix": "DERIVATIVE_PREFIX",
            "max_workers": "MAX_WORKERS",
        }
        for field_name, env_name in env_map.items():
            raw = os.getenv(env_name)
            if raw:
                values[field_name] = raw

        unquote = os.getenv("UNQUOTE_KEYS")
        if unquote:
            values["unquote_keys"] = unquote.lower() in _TRUE_VALUES
        debug = os.getenv("DEBUG")
        if debug:
            values["debug"] = debug.lower() in _TRUE_VALUES

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e


class Record(BaseModel):
    """One created object named by a notification."""

    container: str
    source_key: str

    @property
    def uri(self) -> str:
        return f"s3://{self.container}/{self.source_key}"


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"


class RecordOutcome(BaseModel):
    """Result of processing a single record."""

    status: OutcomeStatus
    container: str
    source_key: str
    derived_key: str = ""
    step: Optional[TranscodeStep] = None
    reason: str = ""
    processing_time: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    @classmethod
    def success(
        cls, record: Record, derived_key: str, processing_time: float = 0.0
    ) -> "RecordOutcome":
        return cls(
            status=OutcomeStatus.SUCCESS,
            container=record.container,
            source_key=record.source_key,
            derived_key=derived_key,
            processing_time=processing_time,
        )

    @classmethod
    def skipped(
        cls,
        record: Record,
        reason: str,
        step: Optional[TranscodeStep] = None,
        processing_time: float = 0.0,
    ) -> "RecordOutcome":
        return cls(
            status=OutcomeStatus.SKIPPED,
            container=record.container,
            source_key=record.source_key,
            step=step,
            reason=reason,
            processing_time=processing_time,
        )


class BatchResult(BaseModel):
    """Ordered per-record outcomes plus the batch-fatal flag."""

    outcomes: List[RecordOutcome] = Field(default_factory=list)
    fatal: bool = False
    error: str = ""
    processing_time: float = 0.0

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def skipped(self) -> int:
        return self.total - self.succeeded

    def to_summary(self) -> Dict[str, Any]:
        """Render the result as the JSON-able invocation response."""
        return {
            "status": "failed" if self.fatal else "ok",
            "error": self.error,
            "total": self.total,
            "succeeded": self.succeeded,
            "skipped": self.skipped,
            "processing_time": self.processing_time,
            "outcomes": [outcome.model_dump(mode="json") for outcome in self.outcomes],
        }
