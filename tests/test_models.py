"""Tests for core data models."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from webp_optimizer.core.exceptions import ConfigurationError, TranscodeStep
from webp_optimizer.core.models import (
    BatchResult,
    OutcomeStatus,
    Record,
    RecordOutcome,
    TranscodeConfig,
)


class TestTranscodeConfig:
    """Tests for TranscodeConfig."""

    def test_defaults(self):
        """Test the default encode and key settings."""
        config = TranscodeConfig()
        assert config.quality == 75
        assert config.derivative_prefix == "optimized"
        assert config.target_extension == "webp"
        assert config.content_type == "image/webp"
        assert config.max_workers == 1
        assert config.unquote_keys is True
        assert config.debug is False

    @pytest.mark.parametrize("quality", [0, 100])
    def test_quality_bounds_accepted(self, quality):
        assert TranscodeConfig(quality=quality).quality == quality

    @pytest.mark.parametrize("quality", [-1, 101])
    def test_quality_out_of_range_rejected(self, quality):
        with pytest.raises(ValidationError):
            TranscodeConfig(quality=quality)

    def test_max_workers_must_be_positive(self):
        with pytest.raises(ValidationError):
            TranscodeConfig(max_workers=0)

    def test_from_env_reads_variables(self):
        env = {
            "WEBP_QUALITY": "60",
            "DERIVATIVE_PREFIX": "thumbs",
            "MAX_WORKERS": "4",
            "UNQUOTE_KEYS": "false",
            "DEBUG": "true",
        }
        with patch.dict(os.environ, env):
            config = TranscodeConfig.from_env()
        assert config.quality == 60
        assert config.derivative_prefix == "thumbs"
        assert config.max_workers == 4
        assert config.unquote_keys is False
        assert config.debug is True

    def test_from_env_overrides_win(self):
        with patch.dict(os.environ, {"WEBP_QUALITY": "60"}):
            config = TranscodeConfig.from_env(quality=90, derivative_prefix=None)
        assert config.quality == 90
        assert config.derivative_prefix == "optimized"

    def test_from_env_invalid_value_raises_configuration_error(self):
        with patch.dict(os.environ, {"WEBP_QUALITY": "loud"}):
            with pytest.raises(ConfigurationError, match="Invalid configuration"):
                TranscodeConfig.from_env()


class TestRecordOutcome:
    """Tests for RecordOutcome constructors."""

    def test_success(self):
        record = Record(container="bucket", source_key="a/b.png")
        outcome = RecordOutcome.success(record, "optimized/b.png.webp", 0.5)
        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.succeeded is True
        assert outcome.derived_key == "optimized/b.png.webp"
        assert outcome.step is None
        assert outcome.reason == ""

    def test_skipped(self):
        record = Record(container="bucket", source_key="a/b.png")
        outcome = RecordOutcome.skipped(record, "boom", step=TranscodeStep.DECODE)
        assert outcome.status is OutcomeStatus.SKIPPED
        assert outcome.succeeded is False
        assert outcome.step is TranscodeStep.DECODE
        assert outcome.reason == "boom"
        assert outcome.derived_key == ""

    def test_record_uri(self):
        assert Record(container="b", source_key="k/x.jpg").uri == "s3://b/k/x.jpg"


class TestBatchResult:
    """Tests for BatchResult aggregation."""

    def _outcomes(self):
        record = Record(container="bucket", source_key="x.jpg")
        return [
            RecordOutcome.success(record, "optimized/x.jpg.webp"),
            RecordOutcome.skipped(record, "not found", step=TranscodeStep.FETCH),
            RecordOutcome.success(record, "optimized/x.jpg.webp"),
        ]

    def test_counts(self):
        result = BatchResult(outcomes=self._outcomes())
        assert result.total == 3
        assert result.succeeded == 2
        assert result.skipped == 1
        assert result.fatal is False

    def test_empty_result(self):
        result = BatchResult()
        assert result.total == 0
        assert result.succeeded == 0
        assert result.skipped == 0

    def test_to_summary(self):
        summary = BatchResult(outcomes=self._outcomes()).to_summary()
        assert summary["status"] == "ok"
        assert summary["total"] == 3
        assert summary["skipped"] == 1
        assert summary["outcomes"][1]["status"] == "skipped"
        assert summary["outcomes"][1]["step"] == "fetch"

    def test_fatal_summary(self):
        summary = BatchResult(fatal=True, error="Record 0: object key is missing").to_summary()
        assert summary["status"] == "failed"
        assert summary["error"] == "Record 0: object key is missing"
        assert summary["outcomes"] == []
