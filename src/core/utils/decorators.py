"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import CatalogServiceError, StoreError, UploadError
from core.utils.response import ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]


def _get_user_friendly_message(exc: Exception) -> str:
    """
    Convert technical exception messages into user-friendly ones.

    Preserves specific validation messages while making generic errors friendly.
    """
    exc_str = str(exc)

    friendly_prefixes = (
        "Invalid",
        "Missing",
        "Required",
        "Must",
        "Cannot",
        "Unable to",
        "Failed to",
        "Image",
        "Food",
        "Price",
    )

    if exc_str and any(exc_str.startswith(prefix) for prefix in friendly_prefixes):
        return exc_str

    if isinstance(exc, ValueError):
        return "The provided data is invalid. Please check your input and try again."

    if isinstance(exc, (KeyError, AttributeError)):
        return "A required field is missing. Please ensure all required fields are provided."

    if isinstance(exc, TypeError):
        return "The data format is incorrect. Please check the request format."

    return "We encountered an issue processing your request. Please try again."


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """Log error with consistent structure and full context."""
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Centralized exception handling and error responses
    - Request ID tracking and structured logging

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok([])
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.preflight(cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except CatalogServiceError as exc:
            _log_error(
                "Unhandled domain error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception" if isinstance(exc, (StoreError, UploadError)) else "warning",
            )
            return ResponseBuilder.from_error(
                exc,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        # Client errors (4xx) - Bad Request
        except (
            ValueError,
            KeyError,
            TypeError,
            AttributeError,
        ) as exc:
            _log_error(
                "Validation error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                _get_user_friendly_message(exc),
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except PermissionError as exc:
            _log_error(
                "Permission denied in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.forbidden(
                "You don't have permission to perform this action.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except TimeoutError as exc:
            _log_error(
                "Request timeout",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.error(
                message="The request took too long to process. Please try again.",
                status=HTTPStatus.GATEWAY_TIMEOUT,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        # Catch-all for unexpected errors
        except Exception as exc:
            _log_error(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.internal_error(
                "We're experiencing technical difficulties. Please try again in a few moments.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper


def is_admin(event: dict[str, Any]) -> bool:
    """Read the admin capability set by the upstream authorizer."""
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    flag = authorizer.get("isAdmin")

    # Lambda authorizer context values arrive as strings
    if isinstance(flag, str):
        return flag.strip().lower() == "true"

    return flag is True


def admin_required(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """Reject callers the authorizer did not flag as admin with 401."""

    @wraps(func)
    def wrapper(event: dict[str, Any], context: Any) -> JsonDict:
        if not is_admin(event):
            logger.warning(
                "Admin capability missing",
                extra={
                    "handler": func.__name__,
                    "request_id": getattr(context, "aws_request_id", None),
                },
            )
            return ResponseBuilder.unauthorized(
                "Unauthorized",
                request_id=getattr(context, "aws_request_id", None),
            )

        return func(event, context)

    return wrapper
