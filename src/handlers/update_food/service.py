"""Business logic for replacing catalog items."""

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError, StoreError
from core.models.food import FoodFields, FoodItem
from core.models.upload import ContentMeta
from core.services.catalog_writer import CatalogWriter
from core.services.ingestion_pipeline import IngestionPipeline
from core.utils.constants import ERROR_CODE_FOOD_NOT_FOUND
from core.utils.request_body import UploadedFile

logger = Logger(UTC=True)


class UpdateService:
    """Application service responsible for updating food items.

    The image URL of the replacement is resolved in this order:
    1. A new image file, which re-enters the ingestion pipeline
    2. An explicit ``imageUrl`` from the request
    3. The URL already stored on the item
    """

    def __init__(
        self,
        pipeline: IngestionPipeline | None = None,
        writer: CatalogWriter | None = None,
    ) -> None:
        self.pipeline = pipeline or IngestionPipeline()
        self.writer = writer or CatalogWriter()

    def update_food(
        self,
        food_id: str,
        fields: FoodFields,
        *,
        image: UploadedFile | None = None,
        image_url: str | None = None,
        favorite: bool | None = None,
    ) -> FoodItem:
        """Replace the stored state of ``food_id``.

        Raises:
            NotFoundError: If the item does not exist
            NoImageError: If a new image part was sent empty
            UploadFailedError: If a new image could not be hosted
            StoreError: If the record could not be written
        """
        logger.debug("Starting food update", extra={"food_id": food_id})

        existing = self.writer.fetch(food_id)
        if existing is None:
            logger.warning("Food item not found", extra={"food_id": food_id})
            raise NotFoundError(
                message="Food item not found",
                error_code=ERROR_CODE_FOOD_NOT_FOUND,
                details={"food_id": food_id},
            )

        ingested = image is not None
        if image is not None:
            resolved_url: str | None = self.pipeline.ingest(
                image.content,
                ContentMeta(content_type=image.content_type, file_name=image.file_name),
            )
        else:
            resolved_url = image_url or existing.image_url

        try:
            return self.writer.replace(
                food_id,
                fields,
                image_url=resolved_url,
                favorite=existing.favorite if favorite is None else favorite,
                created_at=existing.created_at,
            )
        except StoreError:
            if ingested:
                logger.error(
                    "Food item not updated; uploaded image is orphaned",
                    extra={"food_id": food_id, "image_url": resolved_url},
                )
            raise
