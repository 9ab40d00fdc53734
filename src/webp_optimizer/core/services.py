"""Service implementations for the transcoding pipeline."""

import time
from typing import Any, Callable, List, Mapping, Optional

from .error_handling import BatchOperationContextManager, transcode_step
from .events import extract_records
from .exceptions import MalformedRecord, TranscodeError, TranscodeStep
from .image_utils import derive_key, describe_image
from .models import BatchResult, Record, RecordOutcome, TranscodeConfig
from .observability import LogContext, MetricsCollector, PerformanceMetrics
from .protocols import BlobStoreProtocol, ImageCodecProtocol, LoggerProtocol

ProcessRecordsFunction = Callable[
    ["ImageTranscoder", List[Record], TranscodeConfig], List[RecordOutcome]
]


class ImageTranscoder:
    """Fetch, decode, encode and store the derivative of a single record."""

    def __init__(
        self,
        blob_store: BlobStoreProtocol,
        codec: ImageCodecProtocol,
        config: TranscodeConfig,
        logger: LoggerProtocol,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self._blob_store = blob_store
        self._codec = codec
        self._config = config
        self._logger = logger
        self._metrics_collector = metrics_collector

    @property
    def config(self) -> TranscodeConfig:
        return self._config

    def derive_key(self, source_key: str) -> str:
        return derive_key(
            source_key,
            prefix=self._config.derivative_prefix,
            extension=self._config.target_extension,
        )

    def transcode(
        self, container: str, source_key: str, log_context: Optional[LogContext] = None
    ) -> str:
        """
        Run fetch -> decode -> encode -> store for one object.

        Returns:
            The derived key the artifact was written to

        Raises:
            TranscodeError: Tagged with the first step that failed
        """
        log_context = log_context or LogContext(component="image_transcoder")

        with transcode_step(TranscodeStep.FETCH, container, source_key):
            self._logger.debug("Fetching source", log_context.with_operation("fetch"))
            raw = self._blob_store.get(container, source_key)

        with transcode_step(TranscodeStep.DECODE, container, source_key):
            image = self._codec.decode(raw)
            self._logger.debug(
                "Decoded source",
                log_context.with_operation("decode"),
                source_bytes=len(raw),
                **describe_image(image),
            )
        del raw

        with transcode_step(TranscodeStep.ENCODE, container, source_key):
            artifact = self._codec.encode(image, self._config.quality)
            self._logger.debug(
                "Encoded artifact",
                log_context.with_operation("encode"),
                quality=self._config.quality,
                artifact_bytes=len(artifact),
            )

        derived_key = self.derive_key(source_key)
        with transcode_step(TranscodeStep.STORE, container, source_key):
            self._logger.debug(
                "Storing artifact",
                log_context.with_operation("store"),
                derived_key=derived_key,
            )
            self._blob_store.put(
                container, derived_key, artifact, self._config.content_type
            )

        return derived_key

    def process(self, record: Record) -> RecordOutcome:
        """Transcode one record, turning any step failure into a skip."""
        start_time = time.time()
        log_context = LogContext(
            correlation_id=f"img_{record.source_key}_{int(start_time * 1000)}",
            operation="process_record",
            component="image_transcoder",
        ).with_metadata(container=record.container, source_key=record.source_key)

        try:
            derived_key = self.transcode(
                record.container, record.source_key, log_context
            )
        except TranscodeError as e:
            outcome = RecordOutcome.skipped(
                record,
                reason=e.reason,
                step=e.step,
                processing_time=time.time() - start_time,
            )
            self._logger.warning(
                "Skipping record",
                log_context.with_metadata(step=e.step.value, error=e.reason),
            )
        else:
            outcome = RecordOutcome.success(
                record, derived_key, processing_time=time.time() - start_time
            )
            self._logger.info(
                "Stored derivative",
                log_context.with_metadata(derived_key=derived_key),
                processing_time_ms=outcome.processing_time * 1000,
            )

        if self._metrics_collector:
            self._metrics_collector.record_metric(
                PerformanceMetrics(
                    operation="transcode_record",
                    start_time=start_time,
                    end_time=start_time + outcome.processing_time,
                    success=outcome.succeeded,
                    error_message=outcome.reason or None,
                    metadata={"source_key": record.source_key},
                )
            )

        return outcome


class BatchOrchestrator:
    """Run a notification batch through the transcoder.

    Extraction failures are batch-fatal; per-record failures are recorded
    as skips and never abort sibling records.
    """

    def __init__(
        self,
        transcoder: ImageTranscoder,
        logger: LoggerProtocol,
        process_records: Optional[ProcessRecordsFunction] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        if process_records is None:
            from ..processors import select_processor

            process_records = select_processor(transcoder.config)
        self._transcoder = transcoder
        self._logger = logger
        self._process_records = process_records
        self._metrics_collector = metrics_collector

    @property
    def transcoder(self) -> ImageTranscoder:
        return self._transcoder

    def process(self, event: Mapping[str, Any]) -> BatchResult:
        """Process one notification batch."""
        start_time = time.time()
        config = self._transcoder.config
        log_context = LogContext(operation="process_batch", component="batch_orchestrator")

        try:
            records = extract_records(event, unquote_keys=config.unquote_keys)
        except MalformedRecord as e:
            self._logger.error(
                "Rejecting malformed notification batch",
                log_context.with_metadata(error=str(e)),
            )
            return BatchResult(
                fatal=True, error=str(e), processing_time=time.time() - start_time
            )

        if not records:
            self._logger.info("No records to process", log_context)
            return BatchResult(processing_time=time.time() - start_time)

        self._logger.info(
            f"Processing {len(records)} record(s)",
            log_context,
            quality=config.quality,
            max_workers=config.max_workers,
        )

        try:
            with BatchOperationContextManager("Transcode batch") as batch_errors:
                outcomes = self._process_records(self._transcoder, records, config)
                for record, outcome in zip(records, outcomes):
                    if not outcome.succeeded:
                        batch_errors.add_error(
                            f"{outcome.step.value if outcome.step else 'unknown'}: {outcome.reason}",
                            record.uri,
                        )

            result = BatchResult(
                outcomes=outcomes, processing_time=time.time() - start_time
            )
            self._logger.info(
                "Batch complete",
                log_context,
                total=result.total,
                succeeded=result.succeeded,
                skipped=result.skipped,
            )
            if self._metrics_collector:
                summary = self._metrics_collector.get_summary("transcode_record")
                if summary:
                    self._logger.debug("Transcode metrics", log_context, **summary)
        finally:
            # Metrics are per batch; the orchestrator is reused across invocations.
            if self._metrics_collector:
                self._metrics_collector.clear_metrics()

        return result
