"""
Lambda handler responsible for creating a food item with its image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import IngestError, StoreError, ValidationError
from core.utils.decorators import admin_required, api_gateway_handler
from core.utils.request_body import parse_request_body
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import CreateFoodRequest
from .service import CreateService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@admin_required
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle food creation requests.

    The body is ``multipart/form-data`` with an ``image`` file part and the
    text fields ``name``, ``price``, ``tags``, ``origins`` and ``cookTime``.
    A JSON body carrying the image as a Base64 string is accepted as well.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        201 with the created food document
    """
    logger.info(
        "Received food create request",
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

    try:
        request = validate_request(CreateFoodRequest, body.fields)
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.validation_error(
            message="Missing or invalid fields: name, price, origins and cookTime are required",
            details={"errors": sanitize_validation_errors([err for err in exc.errors()])},
        )

    service = CreateService()

    try:
        food = service.create_food(request.to_fields(), body.image)

    except IngestError as exc:
        logger.warning(
            "Image ingestion failed during create",
            extra={"error_code": exc.error_code, "details": exc.details},
        )
        return ResponseBuilder.bad_request(exc.message, error=exc.error_code, details=exc.details)

    except StoreError as exc:
        logger.exception("Food item could not be saved")
        return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

    return ResponseBuilder.created(food.to_response())
