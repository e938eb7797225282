"""
Pytest configuration and fixtures for food catalog tests.
Provides AWS mocking, DynamoDB and S3 fixtures with proper cleanup.
"""

import os

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("FOOD_CATALOG_TABLE_NAME", "food-catalog-test")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "food-images-test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "FoodCatalogTests")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "food-catalog")

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws


@pytest.fixture(autouse=True)
def clean_optional_env(monkeypatch):
    """Optional settings must not leak in from the developer's shell."""
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("IMAGE_CDN_BASE_URL", raising=False)
    monkeypatch.delenv("IMAGE_UPLOAD_TIMEOUT_SECONDS", raising=False)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def dynamodb_table(dynamodb_resource):
    """Create the catalog table inside the moto context."""
    table = dynamodb_resource.create_table(
        TableName=os.getenv("FOOD_CATALOG_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "food_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "food_id", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def dynamodb_put_item(dynamodb_table) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """
    Helper to insert a single item into DynamoDB.

    Usage:
        item = dynamodb_put_item(make_food_item(food_id="food_..."))
    """

    def _put(item: dict[str, Any]) -> dict[str, Any]:
        dynamodb_table.put_item(Item=item)
        return item

    return _put


@pytest.fixture
def dynamodb_put_multiple_items(
    dynamodb_table,
) -> Callable[[list[dict[str, Any]]], list[dict[str, Any]]]:
    def _put(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        with dynamodb_table.batch_writer() as batch:
            for item in items:
                batch.put_item(Item=item)
        return items

    return _put


@pytest.fixture
def dynamodb_get_item(dynamodb_table) -> Callable[[str], dict[str, Any] | None]:
    def _get(food_id: str) -> dict[str, Any] | None:
        response: dict[str, Any] = dynamodb_table.get_item(Key={"food_id": food_id})
        item: dict[str, Any] | None = response.get("Item")
        return item

    return _get


@pytest.fixture
def dynamodb_scan_all(dynamodb_table) -> Callable[[], list[dict[str, Any]]]:
    def _scan() -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = dynamodb_table.scan().get("Items", [])
        return sorted(items, key=lambda item: item["food_id"])

    return _scan


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the image bucket inside the moto context."""
    bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")

    try:
        s3_client.create_bucket(Bucket=bucket_name)
    except ClientError as e:
        if e.response["Error"]["Code"] != "BucketAlreadyOwnedByYou":
            raise

    return s3_client


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], dict[str, Any]]:
    """
    Helper to read an object from S3.

    Usage:
        obj = s3_get_object("foods/abc.png")
        obj["Body"], obj["ContentType"]
    """

    def _get(key: str) -> dict[str, Any]:
        response: dict[str, Any] = s3_client.get_object(
            Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"),
            Key=key,
        )
        return {"Body": response["Body"].read(), "ContentType": response.get("ContentType")}

    return _get


@pytest.fixture
def s3_list_keys(s3_client) -> Callable[[], list[str]]:
    def _list() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"))
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _list


def make_food_item(
    *,
    food_id: str,
    name: str = "Pizza",
    price: str = "10",
    tags: list[str] | None = None,
    origins: list[str] | None = None,
    cook_time: str = "10-20",
    image_url: str = "https://cdn.example/pizza.png",
    favorite: bool = False,
    created_at: str = "2024-01-01T10:00:00+00:00",
) -> dict[str, Any]:
    """Storage representation of a catalog item."""
    return {
        "food_id": food_id,
        "name": name,
        "price": Decimal(price),
        "tags": tags if tags is not None else [],
        "origins": origins if origins is not None else ["Italy"],
        "cook_time": cook_time,
        "image_url": image_url,
        "favorite": favorite,
        "created_at": created_at,
    }


@pytest.fixture
def food_item_factory() -> Callable[..., dict[str, Any]]:
    return make_food_item


@pytest.fixture
def sample_food_items() -> list[dict[str, Any]]:
    """Three stored items with tags {a: 2, b: 1, c: 1}."""
    return [
        make_food_item(
            food_id="food_" + "1" * 32,
            name="Spicy Ramen",
            tags=["a", "b"],
            created_at="2024-01-01T10:00:00+00:00",
        ),
        make_food_item(
            food_id="food_" + "2" * 32,
            name="Pizza",
            tags=["a"],
            created_at="2024-01-02T10:00:00+00:00",
        ),
        make_food_item(
            food_id="food_" + "3" * 32,
            name="spicy wings",
            tags=["c"],
            created_at="2024-01-03T10:00:00+00:00",
        ),
    ]


@pytest.fixture
def dynamodb_with_foods(
    dynamodb_put_multiple_items,
    sample_food_items,
) -> list[dict[str, Any]]:
    """DynamoDB table pre-populated with the sample items."""
    items: list[dict[str, Any]] = dynamodb_put_multiple_items(sample_food_items)
    return items


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    import base64

    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Leading bytes of a JPEG file."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
