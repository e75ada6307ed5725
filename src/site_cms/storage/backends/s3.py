from __future__ import annotations

import logging
from typing import Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from ..base import FileNotFoundError, StorageBackend, StorageError, validate_key

logger = logging.getLogger(__name__)

_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class S3Backend(StorageBackend):
    """S3-compatible object storage (AWS S3, DigitalOcean Spaces, MinIO, R2)."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        public_base_url: Optional[str] = None,
    ):
        self.bucket = bucket
        self.region = region
        self.endpoint = endpoint
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self._session = aioboto3.Session(
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
        )

    def _client(self):
        return self._session.client("s3", endpoint_url=self.endpoint)

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        if self.endpoint:
            return f"{self.endpoint.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        metadata: Optional[dict[str, str]] = None,
    ) -> str:
        validate_key(key)
        async with self._client() as s3:
            try:
                await s3.put_object(
                    Bucket=self.bucket,
                    Key=key,
                    Body=data,
                    ContentType=content_type,
                    Metadata={k: str(v) for k, v in (metadata or {}).items()},
                )
            except (ClientError, BotoCoreError) as exc:
                raise StorageError(f"S3 upload failed for {key}: {exc}") from exc
        return self.public_url(key)

    async def get(self, key: str) -> bytes:
        validate_key(key)
        async with self._client() as s3:
            try:
                response = await s3.get_object(Bucket=self.bucket, Key=key)
            except ClientError as exc:
                if exc.response.get("Error", {}).get("Code") in _MISSING_CODES:
                    raise FileNotFoundError(f"File not found: {key}") from exc
                raise StorageError(f"S3 download failed for {key}: {exc}") from exc
            except BotoCoreError as exc:
                raise StorageError(f"S3 download failed for {key}: {exc}") from exc
            async with response["Body"] as stream:
                return await stream.read()

    async def exists(self, key: str) -> bool:
        validate_key(key)
        async with self._client() as s3:
            try:
                await s3.head_object(Bucket=self.bucket, Key=key)
            except ClientError as exc:
                if exc.response.get("Error", {}).get("Code") in _MISSING_CODES:
                    return False
                raise StorageError(f"S3 head failed for {key}: {exc}") from exc
            except BotoCoreError as exc:
                raise StorageError(f"S3 head failed for {key}: {exc}") from exc
        return True

    async def delete(self, key: str) -> bool:
        # S3 deletes are idempotent; check first so callers can tell a miss
        if not await self.exists(key):
            return False
        async with self._client() as s3:
            try:
                await s3.delete_object(Bucket=self.bucket, Key=key)
            except (ClientError, BotoCoreError) as exc:
                raise StorageError(f"S3 delete failed for {key}: {exc}") from exc
        return True

    async def get_url(self, key: str) -> str:
        if not await self.exists(key):
            raise FileNotFoundError(f"File not found: {key}")
        return self.public_url(key)
