"""
Lambda handler responsible for standalone image upload.
"""

from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import NoImageError, UploadFailedError, ValidationError
from core.utils.decorators import admin_required, api_gateway_handler
from core.utils.request_body import parse_request_body
from core.utils.response import ResponseBuilder

from .models import ImageUploadResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@admin_required
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests.

    Expects a ``multipart/form-data`` body with an ``image`` file part (or a
    JSON body with ``image`` as a Base64 string) and returns the hosted URL.

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        200 with ``{"imageUrl": ...}``; 400 without an image; 500 when the
        upload fails, 504 when it timed out
    """
    logger.info(
        "Received image upload request",
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
        image_url = UploadService().upload_image(body.image)

    except NoImageError as exc:
        return ResponseBuilder.bad_request(exc.message, error=exc.error_code)

    except UploadFailedError as exc:
        logger.exception(
            "Image upload failed",
            extra={"cause": exc.cause, "timed_out": exc.timed_out},
        )
        return ResponseBuilder.error(
            status=HTTPStatus.GATEWAY_TIMEOUT if exc.timed_out else HTTPStatus.INTERNAL_SERVER_ERROR,
            error=exc.error_code,
            message=exc.message,
            details=exc.details,
        )

    response = ImageUploadResponse(image_url=image_url)

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
