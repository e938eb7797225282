"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Mapping
import os
from typing import IO, Any, Protocol

import boto3
from boto3.s3.transfer import TransferConfig
from botocore.config import Config

from core.utils.constants import (
    DEFAULT_AWS_REGION,
    DEFAULT_UPLOAD_TIMEOUT_SECONDS,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_CDN_BASE_URL,
    ENV_IMAGE_S3_BUCKET_NAME,
    ENV_IMAGE_UPLOAD_TIMEOUT_SECONDS,
    UPLOAD_CHUNK_SIZE,
    UPLOAD_CONNECT_TIMEOUT_SECONDS,
)


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (uploader-facing)."""

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
    ) -> None: ...

    def upload_stream(
        self,
        *,
        key: str,
        stream: IO[bytes],
        content_type: str,
    ) -> None: ...

    def head_object(self, *, key: str) -> Mapping[str, Any]: ...

    def object_url(self, key: str) -> str: ...


def upload_timeout_seconds() -> int:
    """Upper bound on a single provider wait, from the environment."""
    raw = os.getenv(ENV_IMAGE_UPLOAD_TIMEOUT_SECONDS)
    if not raw:
        return DEFAULT_UPLOAD_TIMEOUT_SECONDS

    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{ENV_IMAGE_UPLOAD_TIMEOUT_SECONDS} must be an integer") from exc

    if value < 1:
        raise RuntimeError(f"{ENV_IMAGE_UPLOAD_TIMEOUT_SECONDS} must be positive")
    return value


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps a boto3 S3 client (built from the environment unless injected)
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(
        self,
        *,
        client: Any | None = None,
        bucket: str | None = None,
        cdn_base_url: str | None = None,
    ) -> None:
        """Create S3 client from environment configuration unless one is injected."""
        bucket_name = bucket or os.getenv(ENV_IMAGE_S3_BUCKET_NAME)
        if not bucket_name:
            raise RuntimeError(f"{ENV_IMAGE_S3_BUCKET_NAME} environment variable is not set")

        self._bucket = bucket_name
        self._endpoint_url = os.getenv(ENV_AWS_ENDPOINT_URL)
        self._region = os.getenv(ENV_AWS_REGION) or DEFAULT_AWS_REGION
        self._cdn_base_url = cdn_base_url or os.getenv(ENV_IMAGE_CDN_BASE_URL)

        if client is None:
            timeout = upload_timeout_seconds()
            client = boto3.client(
                "s3",
                endpoint_url=self._endpoint_url,
                region_name=self._region,
                config=Config(
                    connect_timeout=min(UPLOAD_CONNECT_TIMEOUT_SECONDS, timeout),
                    read_timeout=timeout,
                    retries={"total_max_attempts": 1},
                ),
            )

        self._client = client
        self._transfer_config = TransferConfig(
            multipart_threshold=UPLOAD_CHUNK_SIZE,
            multipart_chunksize=UPLOAD_CHUNK_SIZE,
            use_threads=False,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
    ) -> None:
        """Store a fully buffered object in S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    def upload_stream(
        self,
        *,
        key: str,
        stream: IO[bytes],
        content_type: str,
    ) -> None:
        """Pipe a readable stream to S3 through the managed transfer.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.upload_fileobj(
            stream,
            self._bucket,
            key,
            ExtraArgs={"ContentType": content_type},
            Config=self._transfer_config,
        )

    def head_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object headers from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        response: Mapping[str, Any] = self._client.head_object(
            Bucket=self._bucket,
            Key=key,
        )
        return response

    def object_url(self, key: str) -> str:
        """Public URL under which the object is served."""
        if self._cdn_base_url:
            return f"{self._cdn_base_url.rstrip('/')}/{key}"

        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{key}"

        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"
