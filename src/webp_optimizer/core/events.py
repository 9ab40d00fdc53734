"""Decoding of S3 object-created notifications into records."""

from typing import Any, List, Mapping, Optional
from urllib.parse import unquote_plus

from pydantic import BaseModel, Field, ValidationError

from .exceptions import MalformedRecord
from .models import Record


class S3Bucket(BaseModel):
    name: Optional[str] = None


class S3Object(BaseModel):
    key: Optional[str] = None


class S3Entity(BaseModel):
    bucket: S3Bucket = Field(default_factory=S3Bucket)
    object: S3Object = Field(default_factory=S3Object)


class S3EventRecord(BaseModel):
    """The parts of an S3 event record the pipeline reads."""

    s3: S3Entity = Field(default_factory=S3Entity)


class S3Event(BaseModel):
    Records: List[S3EventRecord]


def extract_records(event: Mapping[str, Any], unquote_keys: bool = True) -> List[Record]:
    """
    Parse a notification batch into an ordered list of records.

    Args:
        event: S3 event payload ({"Records": [...]})
        unquote_keys: URL-decode object keys as S3 delivers them encoded

    Returns:
        Records in arrival order

    Raises:
        MalformedRecord: If the payload or any entry lacks a bucket name or key
    """
    try:
        parsed = S3Event.model_validate(event)
    except ValidationError as e:
        raise MalformedRecord(f"Invalid notification batch: {e}") from e

    records = []
    for index, entry in enumerate(parsed.Records):
        container = entry.s3.bucket.name
        if not container:
            raise MalformedRecord(f"Record {index}: bucket name is missing")

        key = entry.s3.object.key
        if key and unquote_keys:
            key = unquote_plus(key)
        if not key:
            raise MalformedRecord(f"Record {index}: object key is missing")

        records.append(Record(container=container, source_key=key))

    return records
