"""Global constants used throughout the application.

This module centralizes error codes, limits, and environment variable names
shared by the catalog handlers, the ingestion pipeline, and the AWS adapters.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_FOOD_ID = "INVALID_FOOD_ID"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_FOOD_NOT_FOUND = "FOOD_NOT_FOUND"

# Upload Errors
ERROR_CODE_UPLOAD_FAILED = "UPLOAD_FAILED"
ERROR_CODE_UPLOAD_MISSING_PAYLOAD = "UPLOAD_MISSING_PAYLOAD"
ERROR_CODE_UPLOAD_PROVIDER_ERROR = "UPLOAD_PROVIDER_ERROR"
ERROR_CODE_UPLOAD_TIMEOUT = "UPLOAD_TIMEOUT"

# Ingestion Errors
ERROR_CODE_INGEST_FAILED = "INGEST_FAILED"
ERROR_CODE_NO_IMAGE = "NO_IMAGE"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"

# Store / DynamoDB Errors
ERROR_CODE_STORE = "STORE_ERROR"
ERROR_CODE_DYNAMODB = "DYNAMODB_ERROR"
ERROR_CODE_FOOD_CREATE_FAILED = "FOOD_CREATE_FAILED"
ERROR_CODE_FOOD_UPDATE_FAILED = "FOOD_UPDATE_FAILED"
ERROR_CODE_FOOD_FETCH_FAILED = "FOOD_FETCH_FAILED"
ERROR_CODE_FOOD_DELETE_FAILED = "FOOD_DELETE_FAILED"
ERROR_CODE_FOOD_SCAN_FAILED = "FOOD_SCAN_FAILED"


# ============================================================================
# Image Upload Constraints
# ============================================================================

MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB in bytes

DEFAULT_UPLOAD_TIMEOUT_SECONDS = 60
UPLOAD_CONNECT_TIMEOUT_SECONDS = 10

# Managed transfer settings for streamed payloads
UPLOAD_CHUNK_SIZE = 8 * 1024 * 1024
UPLOAD_PEEK_SIZE = 16

IMAGE_KEY_PREFIX = "foods"
DEFAULT_IMAGE_CONTENT_TYPE = "application/octet-stream"

MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
    "image/svg+xml": ("svg",),
}


# ============================================================================
# Catalog Constraints
# ============================================================================

FOOD_ID_PREFIX = "food_"
FOOD_ID_PATTERN = r"^food_[0-9a-f]{32}$"
MAX_TAGS = 20
TAG_MAX_LENGTH = 50
NAME_MAX_LENGTH = 200

SEARCH_RESULT_LIMIT = 20
ALL_TAGS_NAME = "All"

# Multipart / form field carrying the image binary
IMAGE_FIELD_NAME = "image"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_CDN_BASE_URL = "IMAGE_CDN_BASE_URL"
ENV_IMAGE_UPLOAD_TIMEOUT_SECONDS = "IMAGE_UPLOAD_TIMEOUT_SECONDS"
ENV_FOOD_CATALOG_TABLE_NAME = "FOOD_CATALOG_TABLE_NAME"
DEFAULT_AWS_REGION = "us-east-1"


# ============================================================================
# Helper Functions
# ============================================================================


def get_max_image_size_mb() -> int:
    """Get maximum image size in megabytes."""
    return MAX_IMAGE_SIZE // (1024 * 1024)


def extension_for(mime_type: str) -> str:
    """Return the preferred file extension for a MIME type ("bin" if unknown)."""
    extensions = MIME_TYPE_EXTENSION_MAP.get(mime_type)
    return extensions[0] if extensions else "bin"
