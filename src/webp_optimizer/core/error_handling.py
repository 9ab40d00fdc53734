# src/webp_optimizer/core/error_handling.py

import functools
import logging
from contextlib import contextmanager
from typing import Iterator

from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import STEP_ERRORS, BlobStoreError, TranscodeError, TranscodeStep


def with_error_handling(func):
    """
    A decorator that turns boto3/botocore failures into BlobStoreError.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__ + '.' + func.__name__)
        try:
            return func(*args, **kwargs)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code')
            logger.error(f"S3 operation '{func.__name__}' failed with {code}: {e}")
            raise BlobStoreError(f"S3 operation {func.__name__} failed: {e}", code=code) from e
        except BotoCoreError as e:
            logger.error(f"S3 operation '{func.__name__}' failed: {e}")
            raise BlobStoreError(f"S3 operation {func.__name__} failed: {e}") from e
    return wrapper


@contextmanager
def transcode_step(step: TranscodeStep, container: str, source_key: str) -> Iterator[None]:
    """
    Map any exception raised inside the block to the step's TranscodeError.

    Args:
        step: The sub-operation being run.
        container: Bucket of the record being processed.
        source_key: Key of the record being processed.
    """
    try:
        yield
    except TranscodeError:
        raise
    except Exception as e:
        raise STEP_ERRORS[step](container, source_key, cause=e) from e


class BatchOperationContextManager:
    """
    Context manager for batch operations to collect and summarize errors.
    """
    def __init__(self, operation_name="Batch Operation"):
        self.operation_name = operation_name
        self.errors = []
        self.logger = logging.getLogger(self.__class__.__module__ + '.' + self.__class__.__name__)

    def __enter__(self):
        self.logger.info(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                item_identifier = error_detail.get('item', 'Unknown item')
                error_message = error_detail.get('error', 'Unknown error')
                self.logger.error(
                    f"  Error {i+1}/{len(self.errors)} for item '{item_identifier}': {error_message}"
                )
        elif exc_type:
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb)
            )
        else:
            self.logger.info(f"{self.operation_name} completed successfully.")

        # Exceptions not reported through add_error still propagate.
        return False

    def add_error(self, error_message: str, item_identifier: str = "Unknown item"):
        """
        Report an error for a specific item within the 'with' block.

        Args:
            error_message (str): The error message or exception string.
            item_identifier (str): A string identifying the item that failed (e.g. an S3 URI).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}")
