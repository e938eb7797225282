"""DynamoDB-backed implementation of CatalogRepository."""

from typing import Any

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Attr, ConditionBase
from botocore.exceptions import ClientError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import DynamoDBError, NotFoundError
from core.repositories.catalog_repository import CatalogRepository
from core.utils.constants import (
    ERROR_CODE_FOOD_CREATE_FAILED,
    ERROR_CODE_FOOD_DELETE_FAILED,
    ERROR_CODE_FOOD_FETCH_FAILED,
    ERROR_CODE_FOOD_NOT_FOUND,
    ERROR_CODE_FOOD_SCAN_FAILED,
    ERROR_CODE_FOOD_UPDATE_FAILED,
)

Item = dict[str, Any]

logger = Logger(UTC=True)


def _is_conditional_failure(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


class DynamoDBCatalog(CatalogRepository):
    """DynamoDB-backed catalog storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        """Initialize with DynamoDB adapter."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    def create_item(self, *, item: Item) -> None:
        food_id = item.get("food_id")
        if not food_id or not isinstance(food_id, str) or not food_id.strip():
            raise ValueError("item must contain non-empty 'food_id' (string)")

        logger.debug("Creating catalog item", extra={"food_id": food_id})

        try:
            self._db.put_item(
                item=item,
                condition_expression="attribute_not_exists(food_id)",
            )
            logger.info("Catalog item created", extra={"food_id": food_id})

        except ClientError as exc:
            logger.error("DynamoDB put_item failed", extra={"food_id": food_id})
            raise DynamoDBError(
                message="Unable to save food item at this time",
                error_code=ERROR_CODE_FOOD_CREATE_FAILED,
                details={"food_id": food_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error creating catalog item")
            raise DynamoDBError(
                message="Unable to save food item at this time",
                error_code=ERROR_CODE_FOOD_CREATE_FAILED,
                details={"food_id": food_id},
            ) from exc

    def replace_item(self, *, item: Item) -> None:
        food_id = item.get("food_id")
        if not food_id or not isinstance(food_id, str) or not food_id.strip():
            raise ValueError("item must contain non-empty 'food_id' (string)")

        logger.debug("Replacing catalog item", extra={"food_id": food_id})

        try:
            self._db.put_item(
                item=item,
                condition_expression="attribute_exists(food_id)",
            )
            logger.info("Catalog item replaced", extra={"food_id": food_id})

        except ClientError as exc:
            if _is_conditional_failure(exc):
                raise NotFoundError(
                    message="Food item not found",
                    error_code=ERROR_CODE_FOOD_NOT_FOUND,
                    details={"food_id": food_id},
                ) from exc

            logger.error("DynamoDB put_item failed", extra={"food_id": food_id})
            raise DynamoDBError(
                message="Unable to update food item at this time",
                error_code=ERROR_CODE_FOOD_UPDATE_FAILED,
                details={"food_id": food_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error replacing catalog item")
            raise DynamoDBError(
                message="Unable to update food item at this time",
                error_code=ERROR_CODE_FOOD_UPDATE_FAILED,
                details={"food_id": food_id},
            ) from exc

    def fetch_item(self, *, food_id: str) -> Item | None:
        logger.debug("Fetching catalog item", extra={"food_id": food_id})

        try:
            response = self._db.get_item(key={"food_id": food_id})
            item = response.get("Item")

            if item is None:
                return None

            if not isinstance(item, dict):
                raise DynamoDBError(
                    message="Invalid food item format",
                    error_code=ERROR_CODE_FOOD_FETCH_FAILED,
                    details={"food_id": food_id},
                )

            return item

        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"food_id": food_id})
            raise DynamoDBError(
                message="Unable to retrieve food item",
                error_code=ERROR_CODE_FOOD_FETCH_FAILED,
                details={"food_id": food_id},
            ) from exc

        except DynamoDBError:
            raise

        except Exception as exc:
            logger.exception("Unexpected error fetching catalog item")
            raise DynamoDBError(
                message="Unable to retrieve food item",
                error_code=ERROR_CODE_FOOD_FETCH_FAILED,
                details={"food_id": food_id},
            ) from exc

    def remove_item(self, *, food_id: str) -> None:
        logger.debug("Removing catalog item", extra={"food_id": food_id})

        try:
            self._db.delete_item(
                key={"food_id": food_id},
                condition_expression="attribute_exists(food_id)",
            )
            logger.info("Catalog item removed", extra={"food_id": food_id})

        except ClientError as exc:
            if _is_conditional_failure(exc):
                raise NotFoundError(
                    message="Food item not found",
                    error_code=ERROR_CODE_FOOD_NOT_FOUND,
                    details={"food_id": food_id},
                ) from exc

            logger.error("DynamoDB delete_item failed", extra={"food_id": food_id})
            raise DynamoDBError(
                message="Unable to delete food item",
                error_code=ERROR_CODE_FOOD_DELETE_FAILED,
                details={"food_id": food_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error removing catalog item")
            raise DynamoDBError(
                message="Unable to delete food item",
                error_code=ERROR_CODE_FOOD_DELETE_FAILED,
                details={"food_id": food_id},
            ) from exc

    def scan_items(self) -> list[Item]:
        return self._scan()

    def items_with_tag(self, *, tag: str) -> list[Item]:
        return self._scan(filter_expression=Attr("tags").contains(tag))

    def _scan(self, *, filter_expression: ConditionBase | None = None) -> list[Item]:
        """Scan the whole table, following pagination."""
        scan_kwargs: dict[str, Any] = {}
        if filter_expression is not None:
            scan_kwargs["FilterExpression"] = filter_expression

        items: list[Item] = []

        try:
            while True:
                response = self._db.scan(**scan_kwargs)
                page_items = response.get("Items", [])

                if not isinstance(page_items, list):
                    raise DynamoDBError(
                        message="Invalid scan response from DynamoDB",
                        error_code=ERROR_CODE_FOOD_SCAN_FAILED,
                    )

                items.extend(page_items)

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_evaluated_key

            logger.debug("Catalog scanned", extra={"count": len(items)})
            return items

        except ClientError as exc:
            logger.error("DynamoDB scan failed")
            raise DynamoDBError(
                message="Unable to list food items",
                error_code=ERROR_CODE_FOOD_SCAN_FAILED,
            ) from exc
