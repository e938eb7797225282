"""Business logic for food deletion.

Only the catalog record is removed. The hosted image stays where it is;
image URLs may be shared or cached by clients.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_catalog import DynamoDBCatalog
from core.repositories.catalog_repository import CatalogRepository

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting food items."""

    def __init__(self, repository: CatalogRepository | None = None) -> None:
        self.repository: CatalogRepository = repository or DynamoDBCatalog()

    def delete_food(self, food_id: str) -> None:
        """Delete a food item.

        Raises:
            NotFoundError: If the item does not exist; nothing is changed
            StoreError: If the delete fails
        """
        logger.debug("Starting food deletion", extra={"food_id": food_id})

        self.repository.remove_item(food_id=food_id)

        logger.info("Food item deleted", extra={"food_id": food_id})
