"""Business logic for tag aggregation."""

from collections import Counter

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_catalog import DynamoDBCatalog
from core.models.food import TagCount
from core.repositories.catalog_repository import CatalogRepository
from core.utils.constants import ALL_TAGS_NAME

logger = Logger(UTC=True)


class TagService:
    """Application service that counts catalog items per tag."""

    def __init__(self, repository: CatalogRepository | None = None) -> None:
        self.repository: CatalogRepository = repository or DynamoDBCatalog()

    def list_tags(self) -> list[TagCount]:
        """Return tag counts with the synthetic "All" entry first.

        The remaining entries are ordered by count descending, then by name.

        Raises:
            StoreError: If the catalog cannot be read
        """
        items = self.repository.scan_items()
        total = len(items)

        counts: Counter[str] = Counter()
        for item in items:
            tags = item.get("tags") or []
            counts.update(set(tag for tag in tags if isinstance(tag, str)))

        ordered = sorted(counts.items(), key=lambda entry: (-entry[1], entry[0]))
        tags = [TagCount(name=ALL_TAGS_NAME, count=total)]
        tags.extend(TagCount(name=name, count=count) for name, count in ordered)

        logger.debug("Tags aggregated", extra={"distinct_tags": len(ordered), "total": total})
        return tags
