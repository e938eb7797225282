"""S3-backed implementation of ImageUploader."""

import io
import uuid
from typing import IO

from aws_lambda_powertools import Logger
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    ReadTimeoutError,
)

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    MissingPayloadError,
    UploadProviderError,
    UploadTimeoutError,
)
from core.models.upload import BinaryPayload, is_empty_buffer
from core.repositories.storage_repository import ImageUploader
from core.utils.constants import (
    DEFAULT_IMAGE_CONTENT_TYPE,
    IMAGE_KEY_PREFIX,
    UPLOAD_PEEK_SIZE,
    extension_for,
)
from core.utils.mime import sniff_mime_type

logger = Logger(UTC=True)


class _PrefixedStream(io.RawIOBase):
    """Replays already-read leading bytes before delegating to the source stream."""

    def __init__(self, head: bytes, source: IO[bytes]) -> None:
        super().__init__()
        self._head = head
        self._source = source

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[no-untyped-def]
        if self._head:
            size = min(len(buffer), len(self._head))
            buffer[:size] = self._head[:size]
            self._head = self._head[size:]
            return size

        data = self._source.read(len(buffer))
        if not data:
            return 0
        size = len(data)
        buffer[:size] = data
        return size


class S3ImageUploader(ImageUploader):
    """Image hosting backed by Amazon S3 (optionally served through a CDN).

    Buffers are sent with a single PUT; streams are piped through the
    managed transfer without being read into memory. Every upload is
    confirmed with a HEAD request before its URL is returned.
    """

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create the uploader using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def upload(
        self,
        payload: BinaryPayload | None,
        *,
        content_type: str | None = None,
        key: str | None = None,
    ) -> str:
        """Upload an image and return its canonical URL."""
        if is_empty_buffer(payload):
            raise MissingPayloadError()

        if isinstance(payload, (bytes, bytearray, memoryview)):
            body = bytes(payload)
            head = body[:UPLOAD_PEEK_SIZE]
            stream: IO[bytes] | None = None
        else:
            # Peek the first bytes to reject empty streams and sniff the type
            head = payload.read(UPLOAD_PEEK_SIZE)  # type: ignore[union-attr]
            if not isinstance(head, (bytes, bytearray)):
                raise TypeError("Image stream must be opened in binary mode")
            if not head:
                raise MissingPayloadError(message="Image stream is empty")
            head = bytes(head)
            body = b""
            stream = _PrefixedStream(head, payload)  # type: ignore[arg-type]

        mime_type = sniff_mime_type(head) or content_type or DEFAULT_IMAGE_CONTENT_TYPE
        key = key or f"{IMAGE_KEY_PREFIX}/{uuid.uuid4().hex}.{extension_for(mime_type)}"

        logger.debug(
            "Uploading image",
            extra={
                "key": key,
                "mime_type": mime_type,
                "streamed": stream is not None,
                "size": None if stream is not None else len(body),
            },
        )

        try:
            if stream is None:
                self._s3.put_object(key=key, body=body, content_type=mime_type)
            else:
                self._s3.upload_stream(key=key, stream=stream, content_type=mime_type)

            self._confirm(key)

        except (ConnectTimeoutError, ReadTimeoutError) as exc:
            logger.error("Image upload timed out", extra={"key": key})
            raise UploadTimeoutError(details={"key": key}) from exc

        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            logger.error("S3 rejected image upload", extra={"key": key, "code": code})
            raise UploadProviderError(
                message=f"Image upload rejected by storage provider ({code})",
                details={"key": key, "code": code},
            ) from exc

        except (S3UploadFailedError, BotoCoreError) as exc:
            logger.error("S3 upload failed", extra={"key": key, "error": str(exc)})
            raise UploadProviderError(
                message=f"Image upload failed: {exc}",
                details={"key": key},
            ) from exc

        finally:
            if stream is not None:
                stream.close()

        url = self._s3.object_url(key)
        logger.info("Image uploaded successfully", extra={"key": key, "url": url})
        return url

    def _confirm(self, key: str) -> None:
        """Ensure the object exists before reporting success."""
        try:
            self._s3.head_object(key=key)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in ("404", "NoSuchKey", "NotFound"):
                raise UploadProviderError(
                    message="Image was not found in storage after upload",
                    details={"key": key},
                ) from exc
            raise
