"""
Fixtures for E2E tests against the Food API deployed on LocalStack.

Tests are skipped when no deployed API can be found.
"""

import base64
import logging
import os

import boto3
from botocore.exceptions import BotoCoreError, ClientError
import pytest
import requests

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

S3_IMAGE_BUCKET_NAME = "food-catalog-images-snd"
DYNAMODB_TABLE_NAME = "food-catalog-snd"
ENDPOINT_BASE_URL = "http://localhost:4566"
ADMIN_TOKEN = os.getenv("E2E_ADMIN_TOKEN", "admin-token")
TIMEOUT_SECONDS = 30


class E2EAPIClient:
    """Wrapper for making HTTP requests to the API"""

    def __init__(self, endpoint, headers):
        self.endpoint = endpoint
        self.headers = headers

    def _headers(self, headers):
        h = self.headers.copy()
        if headers:
            h.update(headers)
        return h

    def post_form(self, path, data, files=None, headers=None):
        """Make multipart POST request"""
        url = f"{self.endpoint}{path}"
        return requests.post(url, data=data, files=files, headers=self._headers(headers), timeout=TIMEOUT_SECONDS)

    def put(self, path, data, headers=None):
        """Make JSON PUT request"""
        url = f"{self.endpoint}{path}"
        return requests.put(url, json=data, headers=self._headers(headers), timeout=TIMEOUT_SECONDS)

    def get(self, path, headers=None):
        """Make GET request"""
        url = f"{self.endpoint}{path}"
        return requests.get(url, headers=self._headers(headers), timeout=TIMEOUT_SECONDS)

    def delete(self, path, headers=None):
        """Make DELETE request"""
        url = f"{self.endpoint}{path}"
        return requests.delete(url, headers=self._headers(headers), timeout=TIMEOUT_SECONDS)


# ============================================================================
# API Details Fixture
# ============================================================================


@pytest.fixture(scope="session")
def api_details():
    """Get API Gateway details from LocalStack"""
    try:
        apigateway = boto3.client("apigateway", endpoint_url=ENDPOINT_BASE_URL)

        apis = apigateway.get_rest_apis()
        api = next(api for api in apis["items"] if "food-catalog" in api["name"])
        api_id = api["id"]

        endpoint = f"{ENDPOINT_BASE_URL}/restapis/{api_id}/snd/_user_request_/api"

        return {"api_id": api_id, "endpoint": endpoint, "stage": "snd"}
    except (BotoCoreError, ClientError, StopIteration) as e:
        logger.warning(f"Could not get API details from LocalStack: {e}")
        pytest.skip(f"Could not get API details from LocalStack: {e}")


# ============================================================================
# API Client Fixtures
# ============================================================================


@pytest.fixture
def api_client(api_details):
    """Client without credentials, for public routes"""
    return E2EAPIClient(api_details["endpoint"], {})


@pytest.fixture
def admin_client(api_details):
    """Client carrying the admin bearer token"""
    return E2EAPIClient(api_details["endpoint"], {"Authorization": f"Bearer {ADMIN_TOKEN}"})


@pytest.fixture(scope="function", autouse=True)
def cleanup_storage_after_each_test(request):
    """Clean S3 and DynamoDB to prevent test data leakage."""
    request.getfixturevalue("api_details")
    _cleanup_s3()
    _cleanup_dynamodb()


def _cleanup_s3():
    """Clean all objects from S3 bucket"""
    logger.info("Cleaning S3 bucket: %s", S3_IMAGE_BUCKET_NAME)

    s3_client = boto3.client("s3", endpoint_url=ENDPOINT_BASE_URL)

    try:
        response = s3_client.list_objects_v2(Bucket=S3_IMAGE_BUCKET_NAME)
        objects = response.get("Contents", [])

        for obj in objects:
            s3_client.delete_object(Bucket=S3_IMAGE_BUCKET_NAME, Key=obj["Key"])

        logger.info("Deleted %d objects from S3 bucket", len(objects))

    except ClientError as err:
        logger.error("Failed to cleanup S3 bucket: %s", S3_IMAGE_BUCKET_NAME, exc_info=err)


def _cleanup_dynamodb():
    """Delete all items from the catalog table."""
    logger.info("Cleaning DynamoDB table: %s", DYNAMODB_TABLE_NAME)

    table = boto3.resource("dynamodb", endpoint_url=ENDPOINT_BASE_URL).Table(DYNAMODB_TABLE_NAME)

    try:
        deleted = 0
        start_key = None

        while True:
            scan_kwargs = {"ProjectionExpression": "food_id"}
            if start_key:
                scan_kwargs["ExclusiveStartKey"] = start_key

            response = table.scan(**scan_kwargs)

            for item in response.get("Items", []):
                table.delete_item(Key={"food_id": item["food_id"]})
                deleted += 1

            start_key = response.get("LastEvaluatedKey")
            if not start_key:
                break

        logger.info("Deleted %d items from DynamoDB table", deleted)

    except ClientError as err:
        logger.error("Failed to cleanup DynamoDB table: %s", DYNAMODB_TABLE_NAME, exc_info=err)


# ============================================================================
# Sample Data
# ============================================================================

SAMPLE_PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="


@pytest.fixture
def taco_form() -> dict:
    return {
        "name": "Taco",
        "price": "4.5",
        "tags": "",
        "origins": "Mexico",
        "cookTime": "10-20",
    }


@pytest.fixture
def taco_image() -> dict:
    return {"image": ("taco.png", base64.b64decode(SAMPLE_PNG_BASE64), "image/png")}
