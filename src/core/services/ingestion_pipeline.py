"""Image ingestion: validate an inbound payload, host it, return its URL.

The pipeline stops at the URL. Persisting a catalog record is the caller's
second step, so a record is only ever written once its image is durable.
An upload whose follow-up persist fails leaves an unreferenced image behind;
that orphan is logged by the caller and not cleaned up.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_image_uploader import S3ImageUploader
from core.models.errors import (
    MissingPayloadError,
    NoImageError,
    UploadError,
    UploadFailedError,
    UploadTimeoutError,
)
from core.models.upload import BinaryPayload, ContentMeta, UploadRequest, is_empty_buffer
from core.repositories.storage_repository import ImageUploader

logger = Logger(UTC=True)


class IngestionPipeline:
    """Validate → upload → URL.

    Failure states are terminal and raised as ``IngestError`` subclasses:
    - ``NoImageError``: nothing to upload, the uploader was never called
      (or reported the stream empty before contacting the provider)
    - ``UploadFailedError``: the uploader failed; ``cause`` keeps its message
    """

    def __init__(self, uploader: ImageUploader | None = None) -> None:
        self._uploader: ImageUploader = uploader or S3ImageUploader()

    def ingest(
        self,
        payload: BinaryPayload | None,
        meta: ContentMeta | None = None,
    ) -> str:
        """Host ``payload`` and return the URL it is served under.

        Stream payloads are closed before this method returns.

        Raises:
            NoImageError: If no payload is present
            UploadFailedError: If the upload adapter fails
        """
        meta = meta or ContentMeta()

        # Step 1: Validate
        if is_empty_buffer(payload):
            logger.warning("Ingestion rejected: no image", extra={"file_name": meta.file_name})
            raise NoImageError()

        request = UploadRequest(payload=payload, content_type=meta.content_type)

        # Step 2: Upload
        try:
            url = self._uploader.upload(
                request.payload,
                content_type=request.content_type,
                key=request.key,
            )

        except MissingPayloadError as exc:
            logger.warning("Ingestion rejected: empty image stream", extra={"file_name": meta.file_name})
            raise NoImageError() from exc

        except UploadError as exc:
            logger.error(
                "Ingestion failed during upload",
                extra={
                    "file_name": meta.file_name,
                    "error_code": exc.error_code,
                    "cause": exc.message,
                },
            )
            raise UploadFailedError(
                cause=exc.message,
                timed_out=isinstance(exc, UploadTimeoutError),
            ) from exc

        finally:
            if request.is_stream:
                request.payload.close()

        # Step 3: Success
        logger.info("Image ingested", extra={"file_name": meta.file_name, "url": url})
        return url
