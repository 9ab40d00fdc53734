"""AWS Lambda entry point."""

from functools import lru_cache
from typing import Any, Dict

from .core.exceptions import MalformedRecord
from .core.factories import PipelineFactory
from .core.logging_config import get_logger
from .core.services import BatchOrchestrator


@lru_cache()
def get_orchestrator() -> BatchOrchestrator:
    """Build the orchestrator once per process and reuse it on warm starts."""
    return PipelineFactory.create_orchestrator()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Transcode every image named by an S3 notification batch.

    Individual images that fail are skipped and reported in the response.
    A batch that cannot be parsed raises, so the platform marks the whole
    invocation as failed.
    """
    logger = get_logger("webp-optimizer.handler")
    request_id = getattr(context, "aws_request_id", "local")
    logger.info(f"[{request_id}] Received notification batch")

    result = get_orchestrator().process(event)
    if result.fatal:
        logger.error(f"[{request_id}] Notification batch rejected: {result.error}")
        raise MalformedRecord(result.error)

    return result.to_summary()
