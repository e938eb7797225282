"""Business logic for single food retrieval."""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_catalog import DynamoDBCatalog
from core.models.errors import NotFoundError
from core.models.food import FoodItem
from core.repositories.catalog_repository import CatalogRepository
from core.utils.constants import ERROR_CODE_FOOD_NOT_FOUND

logger = Logger(UTC=True)


class GetService:
    """Application service responsible for reading one food item."""

    def __init__(self, repository: CatalogRepository | None = None) -> None:
        self.repository: CatalogRepository = repository or DynamoDBCatalog()

    def get_food(self, food_id: str) -> FoodItem:
        """Return the food item with ``food_id``.

        Raises:
            NotFoundError: If the item does not exist
            StoreError: If the read fails
        """
        item = self.repository.fetch_item(food_id=food_id)

        if item is None:
            logger.warning("Food item not found", extra={"food_id": food_id})
            raise NotFoundError(
                message="Food item not found",
                error_code=ERROR_CODE_FOOD_NOT_FOUND,
                details={"food_id": food_id},
            )

        return FoodItem.from_item(item)
