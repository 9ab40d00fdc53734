"""Factory classes for creating configured service instances."""

from typing import TYPE_CHECKING, Any, Optional

import boto3

from .codec import PillowWebPCodec
from .models import TranscodeConfig
from .observability import MetricsCollector, StructuredLogger
from .protocols import ImageCodecProtocol, LoggerProtocol, S3ClientProtocol
from .services import BatchOrchestrator, ImageTranscoder
from .storage import S3BlobStore

if TYPE_CHECKING:
    from mypy_boto3_s3.client import S3Client


class S3ClientFactory:
    """Factory for creating S3 client instances."""

    @staticmethod
    def create_s3_client(**kwargs: Any) -> "S3Client":
        """Create S3 client with optional configuration."""
        session = boto3.Session()
        return session.client("s3", **kwargs)


class PipelineFactory:
    """Factory for creating the complete transcoding pipeline."""

    @staticmethod
    def create_orchestrator(
        s3_client: Optional[S3ClientProtocol] = None,
        config: Optional[TranscodeConfig] = None,
        logger: Optional[LoggerProtocol] = None,
        codec: Optional[ImageCodecProtocol] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> BatchOrchestrator:
        """Create a fully configured orchestrator.

        Dependencies not provided are built from defaults: a boto3 client,
        the environment config, a structured logger and the Pillow codec.
        """
        if s3_client is None:
            s3_client = S3ClientFactory.create_s3_client()

        if config is None:
            config = TranscodeConfig.from_env()

        if logger is None:
            logger = StructuredLogger(
                "webp-optimizer", level="DEBUG" if config.debug else None
            )

        if codec is None:
            codec = PillowWebPCodec()

        if metrics_collector is None:
            metrics_collector = MetricsCollector()

        transcoder = ImageTranscoder(
            blob_store=S3BlobStore(s3_client),
            codec=codec,
            config=config,
            logger=logger,
            metrics_collector=metrics_collector,
        )
        return BatchOrchestrator(
            transcoder=transcoder,
            logger=logger,
            metrics_collector=metrics_collector,
        )
