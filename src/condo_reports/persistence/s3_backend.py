"""S3 artifact store for generated documents."""

from __future__ import annotations

import logging
from typing import Any

from condo_reports.exceptions import PersistenceError

log = logging.getLogger(__name__)


class S3ArtifactStore:
    """Stores artifacts as objects in an S3 bucket.

    ``put_object`` is a single atomic write: the object is either fully
    visible under its key or absent.
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "reports/",
        region: str = "us-east-1",
        client: Any = None,
    ) -> None:
        if client is None:
            try:
                import boto3 as _boto3
            except ImportError as e:
                raise ImportError(
                    "boto3 is required for S3 persistence. "
                    "Install with: pip install condo-reports[s3]"
                ) from e
            client = _boto3.client("s3", region_name=region)

        self._bucket = bucket
        self._prefix = prefix
        self._s3 = client

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        full_key = self._full_key(key)
        try:
            self._s3.put_object(Bucket=self._bucket, Key=full_key, Body=data, ContentType=content_type)
        except Exception as exc:
            raise PersistenceError(f"Failed to upload s3://{self._bucket}/{full_key}: {exc}") from exc
        log.debug("Saved %s to s3://%s/%s", key, self._bucket, full_key)
        return f"s3://{self._bucket}/{full_key}"

    def load(self, key: str) -> bytes:
        try:
            response = self._s3.get_object(Bucket=self._bucket, Key=self._full_key(key))
        except self._s3.exceptions.NoSuchKey:
            raise KeyError(f"Not found in S3: {key}")
        return response["Body"].read()

    def exists(self, key: str) -> bool:
        try:
            self._s3.head_object(Bucket=self._bucket, Key=self._full_key(key))
            return True
        except Exception:
            return False

    def delete(self, key: str) -> None:
        self._s3.delete_object(Bucket=self._bucket, Key=self._full_key(key))

    def list_keys(self, prefix: str = "") -> list[str]:
        response = self._s3.list_objects_v2(Bucket=self._bucket, Prefix=f"{self._prefix}{prefix}")
        keys = []
        for obj in response.get("Contents", []):
            key = obj["Key"]
            if key.startswith(self._prefix):
                key = key[len(self._prefix):]
            keys.append(key)
        return sorted(keys)
