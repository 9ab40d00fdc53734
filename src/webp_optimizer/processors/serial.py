"""Serial processor implementation - processes records one by one."""

from typing import TYPE_CHECKING, List

from ..core.models import Record, RecordOutcome, TranscodeConfig

if TYPE_CHECKING:
    from ..core.services import ImageTranscoder


def process_one(transcoder: "ImageTranscoder", record: Record) -> RecordOutcome:
    """Process a single record; unexpected errors become a skip too."""
    try:
        return transcoder.process(record)
    except Exception as e:
        # process() handles step failures; anything else must not stop siblings.
        return RecordOutcome.skipped(record, reason=f"unexpected error: {e}")


def process_records(
    transcoder: "ImageTranscoder", records: List[Record], config: TranscodeConfig
) -> List[RecordOutcome]:
    """
    Processes records serially, in arrival order, in the current thread.

    Args:
        transcoder: The `ImageTranscoder` that owns the per-record error boundary.
        records: Records in arrival order.
        config: `TranscodeConfig` for the batch (unused by this strategy).

    Returns:
        One `RecordOutcome` per record, in the same order.
    """
    return [process_one(transcoder, record) for record in records]
