"""
Lambda handler responsible for updating a food item.
"""

import re
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import IngestError, NotFoundError, StoreError, ValidationError
from core.utils.constants import ERROR_CODE_INVALID_FOOD_ID, FOOD_ID_PATTERN
from core.utils.decorators import admin_required, api_gateway_handler
from core.utils.request_body import parse_request_body
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import UpdateFoodRequest
from .service import UpdateService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@admin_required
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle food update requests.

    The body carries the item ``id`` plus its complete new state. The update
    is a full replacement, so repeating a request leaves the same document.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        200 with the stored food document
    """
    logger.info(
        "Received food update request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    try:
        body = parse_request_body(event)
    except ValidationError as exc:
        logger.warning("Unreadable request body", extra={"error": exc.message})
        return ResponseBuilder.bad_request(exc.message, error=exc.error_code, details=exc.details)

    food_id = body.fields.get("id")
    if not isinstance(food_id, str) or not re.fullmatch(FOOD_ID_PATTERN, food_id.strip()):
        logger.warning("Invalid food id", extra={"food_id": food_id})
        return ResponseBuilder.bad_request("Invalid food id", error=ERROR_CODE_INVALID_FOOD_ID)

    try:
        request = validate_request(UpdateFoodRequest, body.fields)
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.validation_error(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors([err for err in exc.errors()])},
        )

    service = UpdateService()

    try:
        food = service.update_food(
            request.food_id,
            request.to_fields(),
            image=body.image,
            image_url=request.image_url,
            favorite=request.favorite,
        )

    except NotFoundError as exc:
        logger.warning("Food item not found during update", extra={"food_id": request.food_id})
        return ResponseBuilder.not_found(exc.message, error=exc.error_code)

    except IngestError as exc:
        logger.warning(
            "Image ingestion failed during update",
            extra={"food_id": request.food_id, "error_code": exc.error_code},
        )
        return ResponseBuilder.bad_request(exc.message, error=exc.error_code, details=exc.details)

    except StoreError as exc:
        logger.exception("Food item could not be updated", extra={"food_id": request.food_id})
        return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

    return ResponseBuilder.ok(food.to_response())
