"""
Lambda handlers for catalog collection reads: all items, name search and tag filter.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import StoreError
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .service import ListService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


def _log_request(message: str, event: dict[str, Any], context: LambdaContext) -> None:
    logger.info(
        message,
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "path_params": event.get("pathParameters"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )


def _path_param(event: dict[str, Any], name: str) -> str:
    return ((event.get("pathParameters") or {}).get(name) or "").strip()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Return every catalog item as a JSON array."""
    _log_request("Received food list request", event, context)

    try:
        foods = ListService().list_foods()
    except StoreError as exc:
        logger.exception("Error listing foods")
        return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

    return ResponseBuilder.ok([food.to_response() for food in foods])


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def search_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Return up to 20 items whose name contains ``searchTerm`` (case-insensitive)."""
    _log_request("Received food search request", event, context)

    search_term = _path_param(event, "searchTerm")
    if not search_term:
        return ResponseBuilder.bad_request("Missing search term")

    try:
        foods = ListService().search_foods(search_term)
    except StoreError as exc:
        logger.exception("Error searching foods", extra={"search_term": search_term})
        return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

    return ResponseBuilder.ok([food.to_response() for food in foods])


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def tag_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Return the items carrying ``tag``."""
    _log_request("Received food tag request", event, context)

    tag = _path_param(event, "tag")
    if not tag:
        return ResponseBuilder.bad_request("Missing tag")

    try:
        foods = ListService().foods_with_tag(tag)
    except StoreError as exc:
        logger.exception("Error listing foods by tag", extra={"tag": tag})
        return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

    return ResponseBuilder.ok([food.to_response() for food in foods])
