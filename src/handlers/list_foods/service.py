"""Business logic for listing and searching catalog items."""

from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from core.filters.name_contains_filter import NameContainsFilter
from core.infrastructure.aws.dynamodb_catalog import DynamoDBCatalog
from core.models.food import FoodItem
from core.repositories.catalog_repository import CatalogRepository
from core.utils.constants import SEARCH_RESULT_LIMIT

logger = Logger(UTC=True)


class ListService:
    """Application service for catalog collection reads.

    Items are returned oldest first. Stored items that no longer satisfy
    the model are skipped with a warning instead of failing the request.
    """

    def __init__(self, repository: CatalogRepository | None = None) -> None:
        self.repository: CatalogRepository = repository or DynamoDBCatalog()

    def list_foods(self) -> list[FoodItem]:
        return self._to_models(self.repository.scan_items())

    def search_foods(self, search_term: str, *, limit: int = SEARCH_RESULT_LIMIT) -> list[FoodItem]:
        """Case-insensitive substring match on name, capped at ``limit``."""
        items = self._sorted(self.repository.scan_items())
        matches = NameContainsFilter.apply(items, search_term, field_name="name")

        logger.debug(
            "Search completed",
            extra={"search_term": search_term, "matches": len(matches), "limit": limit},
        )
        # Malformed items are dropped before the cap is applied
        return self._to_models(matches)[:limit]

    def foods_with_tag(self, tag: str) -> list[FoodItem]:
        return self._to_models(self.repository.items_with_tag(tag=tag))

    @staticmethod
    def _sorted(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return sorted(items, key=lambda item: str(item.get("created_at") or ""))

    def _to_models(self, items: list[dict[str, Any]]) -> list[FoodItem]:
        foods: list[FoodItem] = []

        for item in self._sorted(items):
            try:
                foods.append(FoodItem.from_item(item))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed item",
                    extra={"food_id": item.get("food_id"), "errors": exc.errors()},
                )

        return foods
