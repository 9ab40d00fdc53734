"""Record processors with different concurrency strategies."""

from .serial import process_records as serial_process_records
from .multithread import process_records as multithread_process_records


def select_processor(config):
    """Pick the serial processor for one worker, the thread pool otherwise."""
    if config.max_workers > 1:
        return multithread_process_records
    return serial_process_records


__all__ = [
    "serial_process_records",
    "multithread_process_records",
    "select_processor",
]
