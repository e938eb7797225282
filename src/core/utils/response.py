"""
HTTP responses for the Food API Lambda handlers.

Single items and acknowledgements are JSON objects, collections are bare
JSON arrays and failures share one error envelope::

    {"error": "<CODE>", "message": "...", "timestamp": "...", "details": {...}}
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.models.errors import (
    CatalogServiceError,
    IngestError,
    NotFoundError,
    UploadTimeoutError,
    ValidationError,
)
from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]
JsonBody = JsonDict | list[Any]

# First match wins; anything unlisted is a server-side failure.
ERROR_STATUSES: tuple[tuple[type[CatalogServiceError], HTTPStatus], ...] = (
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (ValidationError, HTTPStatus.BAD_REQUEST),
    (IngestError, HTTPStatus.BAD_REQUEST),
    (UploadTimeoutError, HTTPStatus.GATEWAY_TIMEOUT),
)


def status_for(exc: CatalogServiceError) -> HTTPStatus:
    for error_type, status in ERROR_STATUSES:
        if isinstance(exc, error_type):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


class ResponseBuilder:
    """Factory for API Gateway proxy responses."""

    CORS: dict[str, str] = {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }

    @classmethod
    def headers(cls, cors_origin: str | None = None) -> dict[str, str]:
        headers = {"Content-Type": DEFAULT_CONTENT_TYPE, **cls.CORS}
        if cors_origin:
            headers["Access-Control-Allow-Origin"] = cors_origin
        return headers

    @classmethod
    def _response(
        cls,
        status: HTTPStatus,
        body: JsonBody,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        # request_id only rides along on object bodies; arrays stay bare
        if isinstance(body, dict) and request_id:
            body = {**body, "request_id": request_id}

        return {
            "statusCode": status.value,
            "headers": cls.headers(cors_origin),
            "body": json.dumps(body),
        }

    @classmethod
    def ok(cls, body: JsonBody, *, request_id: str | None = None, cors_origin: str | None = None) -> JsonDict:
        return cls._response(HTTPStatus.OK, body, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def created(cls, body: JsonDict, *, request_id: str | None = None, cors_origin: str | None = None) -> JsonDict:
        return cls._response(HTTPStatus.CREATED, body, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def preflight(cls, cors_origin: str | None = None) -> JsonDict:
        """Empty 204 answering a CORS OPTIONS request."""
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": cls.headers(cors_origin),
            "body": "",
        }

    @classmethod
    def error(
        cls,
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | list[Any] | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }
        if details:
            payload["details"] = details

        return cls._response(status, payload, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def from_error(
        cls,
        exc: CatalogServiceError,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Map a catalog error to its status; details are only exposed on 4xx."""
        status = status_for(exc)
        return cls.error(
            status=status,
            message=exc.message,
            error=exc.error_code,
            details=exc.details if status < HTTPStatus.INTERNAL_SERVER_ERROR else None,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @classmethod
    def bad_request(cls, message: str, *, error: str | None = None, details: Any = None, **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.BAD_REQUEST, message=message, error=error, details=details, **kwargs)

    @classmethod
    def validation_error(cls, *, message: str, details: Any = None, **kwargs: Any) -> JsonDict:
        """400 carrying field-level validation details."""
        return cls.bad_request(message, error=ERROR_CODE_VALIDATION_FAILED, details=details, **kwargs)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.UNAUTHORIZED, message=message, **kwargs)

    @classmethod
    def forbidden(cls, message: str = "Forbidden", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.FORBIDDEN, message=message, **kwargs)

    @classmethod
    def not_found(cls, message: str = "Food item not found.", *, error: str | None = None, **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.NOT_FOUND, message=message, error=error, **kwargs)

    @classmethod
    def internal_error(
        cls, message: str = "Internal server error", *, error: str | None = None, **kwargs: Any
    ) -> JsonDict:
        return cls.error(status=HTTPStatus.INTERNAL_SERVER_ERROR, message=message, error=error, **kwargs)
