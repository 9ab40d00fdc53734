"""Multithreaded processor implementation - uses a bounded thread pool."""

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, List

from ..core.models import Record, RecordOutcome, TranscodeConfig
from .serial import process_one

if TYPE_CHECKING:
    from ..core.services import ImageTranscoder


def process_records(
    transcoder: "ImageTranscoder", records: List[Record], config: TranscodeConfig
) -> List[RecordOutcome]:
    """
    Process records on a thread pool bounded by ``config.max_workers``.

    Fetch and store block on the network, so threads overlap even though
    decode and encode are CPU-bound. The shared S3 client is thread-safe
    for these calls.

    Returns:
        One `RecordOutcome` per record, in arrival order.
    """
    if not records:
        return []

    max_workers = min(config.max_workers, len(records))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(process_one, transcoder, record) for record in records]
        # Collect by submission index, not completion order.
        return [future.result() for future in futures]
