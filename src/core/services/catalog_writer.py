"""Persistence of catalog items composed from request fields and an image URL.

Every mutation is a single conditional write, so a reader never observes a
partially written item.
"""

import uuid

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_catalog import DynamoDBCatalog
from core.models.errors import ValidationError
from core.models.food import FoodFields, FoodItem
from core.repositories.catalog_repository import CatalogRepository
from core.utils.constants import FOOD_ID_PREFIX
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class CatalogWriter:
    """Application service that writes catalog items.

    This service orchestrates:
    - Identifier and timestamp assignment on create
    - Composition of fields and image URL into a ``FoodItem``
    - A single conditional write to the catalog repository
    """

    def __init__(self, repository: CatalogRepository | None = None) -> None:
        self.repository: CatalogRepository = repository or DynamoDBCatalog()

    @staticmethod
    def generate_food_id() -> str:
        """Generate a unique food identifier."""
        return f"{FOOD_ID_PREFIX}{uuid.uuid4().hex}"

    def create(self, fields: FoodFields, image_url: str) -> FoodItem:
        """Persist a new catalog item carrying ``image_url``.

        Args:
            fields: Normalized name, price, tags, origins and cook time
            image_url: URL returned by a successful ingestion

        Returns:
            The stored item

        Raises:
            ValidationError: If ``image_url`` is blank
            StoreError: If the write fails
        """
        if not image_url or not image_url.strip():
            raise ValidationError(message="Image URL is required to create a food item")

        food = FoodItem(
            food_id=self.generate_food_id(),
            name=fields.name,
            price=fields.price,
            tags=list(dict.fromkeys(fields.tags)),
            origins=list(fields.origins),
            cook_time=fields.cook_time,
            image_url=image_url,
            created_at=utc_now_iso(),
        )

        logger.debug("Creating food item", extra={"food_id": food.food_id})
        self.repository.create_item(item=food.to_item())

        logger.info("Food item created", extra={"food_id": food.food_id, "image_url": image_url})
        return food

    def replace(
        self,
        food_id: str,
        fields: FoodFields,
        *,
        image_url: str | None,
        favorite: bool,
        created_at: str,
    ) -> FoodItem:
        """Overwrite an existing item with a complete new state.

        The stored document depends only on the arguments, so repeating the
        same call leaves the same state behind.

        Raises:
            NotFoundError: If ``food_id`` does not exist
            StoreError: If the write fails
        """
        food = FoodItem(
            food_id=food_id,
            name=fields.name,
            price=fields.price,
            tags=list(dict.fromkeys(fields.tags)),
            origins=list(fields.origins),
            cook_time=fields.cook_time,
            image_url=image_url,
            favorite=favorite,
            created_at=created_at,
        )

        self.repository.replace_item(item=food.to_item())

        logger.info("Food item replaced", extra={"food_id": food_id})
        return food

    def fetch(self, food_id: str) -> FoodItem | None:
        """Return the stored item, or None if it does not exist."""
        item = self.repository.fetch_item(food_id=food_id)
        if item is None:
            return None
        return FoodItem.from_item(item)
