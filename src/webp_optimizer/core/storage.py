"""S3-backed blob store."""

from .error_handling import with_error_handling
from .logging_config import get_logger
from .protocols import S3ClientProtocol


class S3BlobStore:
    """Blob store over a boto3 S3 client.

    The client is shared read-only across records and worker threads.
    """

    def __init__(self, s3_client: S3ClientProtocol):
        self._s3_client = s3_client
        self._logger = get_logger("webp-optimizer.storage")

    @with_error_handling
    def get(self, container: str, key: str) -> bytes:
        self._logger.debug(f"Downloading s3://{container}/{key}")
        response = self._s3_client.get_object(Bucket=container, Key=key)
        return response["Body"].read()

    @with_error_handling
    def put(self, container: str, key: str, data: bytes, content_type: str) -> None:
        self._logger.debug(
            f"Uploading {len(data)} bytes to s3://{container}/{key} ({content_type})"
        )
        self._s3_client.put_object(
            Bucket=container, Key=key, Body=data, ContentType=content_type
        )
