"""Business logic for standalone image uploads.

The image is hosted and its URL returned; no catalog record is touched.
"""

from aws_lambda_powertools import Logger

from core.models.upload import ContentMeta
from core.services.ingestion_pipeline import IngestionPipeline
from core.utils.request_body import UploadedFile

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for image-only uploads."""

    def __init__(self, pipeline: IngestionPipeline | None = None) -> None:
        self.pipeline = pipeline or IngestionPipeline()

    def upload_image(self, image: UploadedFile | None) -> str:
        """Host ``image`` and return its URL.

        Raises:
            NoImageError: If no image (or an empty one) was sent
            UploadFailedError: If the image could not be hosted
        """
        if image is None:
            return self.pipeline.ingest(None)

        return self.pipeline.ingest(
            image.content,
            ContentMeta(content_type=image.content_type, file_name=image.file_name),
        )
