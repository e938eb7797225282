"""Custom exception classes for the food catalog service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_DYNAMODB,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    ERROR_CODE_INGEST_FAILED,
    ERROR_CODE_NO_IMAGE,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORE,
    ERROR_CODE_UPLOAD_FAILED,
    ERROR_CODE_UPLOAD_MISSING_PAYLOAD,
    ERROR_CODE_UPLOAD_PROVIDER_ERROR,
    ERROR_CODE_UPLOAD_TIMEOUT,
    ERROR_CODE_VALIDATION_FAILED,
)


class CatalogServiceError(Exception):
    """
    Base exception for all catalog service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(CatalogServiceError):
    """Raised when request validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class NotFoundError(CatalogServiceError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class StoreError(CatalogServiceError):
    """Raised when the document store fails unexpectedly."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class DynamoDBError(StoreError):
    """Raised when a DynamoDB operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_DYNAMODB,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# ============================================================================
# Upload adapter errors
# ============================================================================


class UploadError(CatalogServiceError):
    """Raised by the upload adapter when an image cannot be hosted."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UPLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class MissingPayloadError(UploadError):
    """Raised before any remote call when the payload is empty or absent."""

    def __init__(
        self,
        *,
        message: str = "No image payload provided",
        error_code: str = ERROR_CODE_UPLOAD_MISSING_PAYLOAD,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class UploadProviderError(UploadError):
    """Raised for transport failures and provider-side rejections."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UPLOAD_PROVIDER_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class UploadTimeoutError(UploadError):
    """Raised when the provider does not answer within the configured bound."""

    def __init__(
        self,
        *,
        message: str = "Image upload timed out",
        error_code: str = ERROR_CODE_UPLOAD_TIMEOUT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# ============================================================================
# Ingestion pipeline errors
# ============================================================================


class IngestError(CatalogServiceError):
    """Raised by the ingestion pipeline."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INGEST_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class NoImageError(IngestError):
    """Raised when an ingestion is requested without an image."""

    def __init__(
        self,
        *,
        message: str = "Image file is required",
        error_code: str = ERROR_CODE_NO_IMAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class UploadFailedError(IngestError):
    """Raised when the upload adapter fails; the adapter's message is kept as `cause`."""

    cause: str
    timed_out: bool

    def __init__(
        self,
        *,
        cause: str,
        timed_out: bool = False,
        message: str = "Error uploading image",
        error_code: str = ERROR_CODE_IMAGE_UPLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.cause = cause
        self.timed_out = timed_out
        super().__init__(
            message=message,
            error_code=error_code,
            details={"cause": cause, **(details or {})},
        )
