"""Thin DynamoDB adapter wrapping boto3 table operations."""

import os
from typing import Any, Protocol, cast

import boto3

from core.utils.constants import (
    DEFAULT_AWS_REGION,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_FOOD_CATALOG_TABLE_NAME,
)


class DynamoDBTable(Protocol):
    """Minimal DynamoDB Table protocol."""

    def put_item(self, *, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, Key: dict[str, Any]) -> dict[str, Any]: ...
    def delete_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def scan(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Minimal DynamoDB adapter protocol (repository-facing)."""

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]: ...

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...

    def delete_item(
        self,
        *,
        key: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]: ...

    def scan(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps a boto3 DynamoDB table (built from the environment unless injected)
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, table: Any | None = None) -> None:
        """Initialize DynamoDB table from environment unless one is injected."""
        if table is None:
            table_name = os.getenv(ENV_FOOD_CATALOG_TABLE_NAME)
            if not table_name:
                raise RuntimeError(
                    f"{ENV_FOOD_CATALOG_TABLE_NAME} environment variable is not set"
                )

            dynamodb = boto3.resource(
                "dynamodb",
                endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
                region_name=os.getenv(ENV_AWS_REGION) or DEFAULT_AWS_REGION,
            )
            table = dynamodb.Table(table_name)

        self.table: DynamoDBTable = cast(DynamoDBTable, table)

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]:
        """Insert or replace an item.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Item": item}

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression

        return self.table.put_item(**kwargs)

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        """Retrieve item by key.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self.table.get_item(Key=key)

    def delete_item(
        self,
        *,
        key: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]:
        """Delete item by key.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Key": key}

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression

        return self.table.delete_item(**kwargs)

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        """Execute a table scan.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self.table.scan(**kwargs)
