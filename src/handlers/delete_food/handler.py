"""
Lambda handler responsible for deleting a food item.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import NotFoundError, StoreError
from core.utils.decorators import admin_required, api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteFoodRequest, DeleteFoodResponse
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@admin_required
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle food deletion requests.

    This function:
    - Extracts the food identifier from API Gateway path parameters
    - Delegates deletion to the service layer
    - Translates domain errors into HTTP responses

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received food delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            DeleteFoodRequest,
            {"food_id": path_params.get("foodId")},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request payload",
            details={"errors": sanitize_validation_errors([err for err in exc.errors()])},
        )

    service = DeleteService()

    try:
        service.delete_food(request.food_id)

    except NotFoundError as exc:
        logger.warning(
            "Food item not found during delete",
            extra={"food_id": request.food_id},
        )
        return ResponseBuilder.not_found("Food item not found.", error=exc.error_code)

    except StoreError as exc:
        logger.exception(
            "Deletion failed",
            extra={"food_id": request.food_id},
        )
        return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

    response = DeleteFoodResponse(message="Food item deleted successfully.")

    return ResponseBuilder.ok(response.model_dump())
