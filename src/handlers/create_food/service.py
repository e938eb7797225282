"""Business logic for creating catalog items.

The image is ingested first and the record is written only once the image
URL exists. If the write fails after a successful upload the hosted image is
left unreferenced; the orphan is logged with its URL and not removed.
"""

from aws_lambda_powertools import Logger

from core.models.errors import NoImageError, StoreError
from core.models.food import FoodFields, FoodItem
from core.models.upload import ContentMeta
from core.services.catalog_writer import CatalogWriter
from core.services.ingestion_pipeline import IngestionPipeline
from core.utils.request_body import UploadedFile

logger = Logger(UTC=True)


class CreateService:
    """Application service responsible for creating food items.

    This service orchestrates:
    - Image ingestion (binary to hosted URL)
    - Persisting the catalog record with that URL
    """

    def __init__(
        self,
        pipeline: IngestionPipeline | None = None,
        writer: CatalogWriter | None = None,
    ) -> None:
        self.pipeline = pipeline or IngestionPipeline()
        self.writer = writer or CatalogWriter()

    def create_food(self, fields: FoodFields, image: UploadedFile | None) -> FoodItem:
        """Ingest ``image`` and persist a new item referencing it.

        Raises:
            NoImageError: If no image was sent
            UploadFailedError: If the image could not be hosted
            StoreError: If the record could not be written
        """
        if image is None:
            logger.warning("Create rejected: image file missing", extra={"food_name": fields.name})
            raise NoImageError()

        image_url = self.pipeline.ingest(
            image.content,
            ContentMeta(content_type=image.content_type, file_name=image.file_name),
        )

        try:
            return self.writer.create(fields, image_url)
        except StoreError:
            logger.error(
                "Food item not persisted; uploaded image is orphaned",
                extra={"food_name": fields.name, "image_url": image_url},
            )
            raise
