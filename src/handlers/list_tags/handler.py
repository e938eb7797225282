"""
Lambda handler returning per-tag item counts.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import StoreError
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .service import TagService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle tag listing requests.

    Returns:
        200 with ``[{"name": "All", "count": N}, {"name": <tag>, "count": n}, ...]``
    """
    logger.info(
        "Received tag list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    try:
        tags = TagService().list_tags()
    except StoreError as exc:
        logger.exception("Error aggregating tags")
        return ResponseBuilder.internal_error(exc.message, error=exc.error_code)

    return ResponseBuilder.ok([tag.model_dump() for tag in tags])
