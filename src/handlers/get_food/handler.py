"""
Lambda handler responsible for food item retrieval.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import NotFoundError, StoreError
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Return one food document by its ``foodId`` path parameter."""
    logger.info(
        "Received food get request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    food_id = ((event.get("pathParameters") or {}).get("foodId") or "").strip()
    if not food_id:
        return ResponseBuilder.bad_request("Missing food id")

    service = GetService()

    try:
        food = service.get_food(food_id)

    except NotFoundError as exc:
        logger.warning("Food item not found", extra={"food_id": food_id})
        return ResponseBuilder.not_found("Food item not found.", error=exc.error_code)

    except StoreError as exc:
        logger.exception("Get food failed", extra={"food_id": food_id})
        return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

    return ResponseBuilder.ok(food.to_response())
