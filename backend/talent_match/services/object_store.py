from __future__ import annotations

import re
import secrets
import time
from pathlib import Path
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from talent_match.config import Settings
from talent_match.errors import ObjectStoreUnavailable


class CVObjectStore:
    """Stores CV blobs in one bucket of an S3-compatible object store (MinIO in deployment)."""

    def __init__(self, client: Any, bucket: str, region: str = "us-east-1") -> None:
        self.client = client
        self.bucket = bucket
        self.region = region

    @classmethod
    def from_settings(cls, settings: Settings) -> "CVObjectStore":
        client = boto3.client(
            "s3",
            endpoint_url=settings.object_store_url,
            aws_access_key_id=settings.minio_access_key,
            aws_secret_access_key=settings.minio_secret_key,
            region_name=settings.minio_region,
            config=Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
                retries={"total_max_attempts": 1},
            ),
        )
        return cls(client, settings.minio_bucket, region=settings.minio_region)

    def ensure_bucket(self) -> bool:
        """Create the bucket if missing. Failures are logged, never raised."""
        try:
            if self._bucket_exists():
                return True
            params: dict[str, Any] = {"Bucket": self.bucket}
            if self.region and self.region != "us-east-1":
                params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
            self.client.create_bucket(**params)
            logger.info(f"Bucket {self.bucket!r} created")
            return True
        except (BotoCoreError, ClientError) as exc:
            logger.error(f"Object store bucket error for {self.bucket!r}: {exc}")
            return False

    def upload(self, filename: str, data: bytes, content_type: str = "application/pdf") -> str:
        key = self.make_key(filename)
        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        except (BotoCoreError, ClientError) as exc:
            raise ObjectStoreUnavailable(f"Could not store {filename!r}: {exc}") from exc
        logger.info(f"Stored CV as {key} ({len(data)} bytes)")
        return key

    def download(self, key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read()
        except (BotoCoreError, ClientError) as exc:
            raise ObjectStoreUnavailable(f"Could not read {key!r}: {exc}") from exc

    @staticmethod
    def make_key(filename: str) -> str:
        safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", Path(filename or "cv.pdf").name) or "cv.pdf"
        return f"cv-{int(time.time() * 1000)}-{secrets.token_hex(4)}-{safe_name}"

    def _bucket_exists(self) -> bool:
        try:
            self.client.head_bucket(Bucket=self.bucket)
            return True
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in {"404", "NoSuchBucket", "NotFound"}:
                return False
            raise
